from lsprotocol.types import (
    COMPLETION_ITEM_RESOLVE,
    INITIALIZE,
    TEXT_DOCUMENT_COMPLETION,
    TEXT_DOCUMENT_HOVER,
    CompletionItem,
    CompletionList,
    CompletionOptions,
    CompletionParams,
    HoverParams,
    InitializeParams,
    LogMessageParams,
    MessageType,
)

from restxls import __version__
from restxls.catalog.catalog import (
    HoverDocTable,
    VocabularyCatalog,
    load_hover_docs,
    load_vocabulary,
)
from restxls.lsp.capabilities.capabilities import CapabilityManager
from restxls.lsp.restx_language_server import RestxLanguageServer

TRIGGER_CHARACTERS = [".", ":", "@", "$", " "]


def create_server(
    catalog: VocabularyCatalog | None = None,
    hover_docs: HoverDocTable | None = None,
) -> RestxLanguageServer:
    """
    Creates and returns a configured Language Server instance.

    The vocabulary catalog and hover docs are loaded here, once, and shared
    read-only by every request for the lifetime of the process.

    The LanguageServer class from pygls handles:
    - JSON-RPC communication with clients (editors)
    - Request/response lifecycle
    - Document synchronization (ls.workspace.text_documents)
    """
    if catalog is None:
        catalog = load_vocabulary()
    if hover_docs is None:
        hover_docs = load_hover_docs()

    server = RestxLanguageServer("restxls", __version__, catalog, hover_docs)
    server.capability_manager = CapabilityManager(server)

    @server.feature(INITIALIZE)
    def initialize(ls: RestxLanguageServer, params: InitializeParams):
        """Report what vocabulary the server is serving."""
        ls.window_log_message(
            LogMessageParams(
                MessageType.Info,
                f"RESTx vocabulary loaded: {len(ls.catalog)} completion entries, "
                f"{len(ls.hover_docs)} hover docs",
            )
        )

    @server.feature(
        TEXT_DOCUMENT_COMPLETION,
        CompletionOptions(
            trigger_characters=TRIGGER_CHARACTERS,
            resolve_provider=True,
        ),
    )
    async def completion(ls: RestxLanguageServer, params: CompletionParams):
        if ls.capability_manager:
            return await ls.capability_manager.handle_completion(params)
        return CompletionList(is_incomplete=False, items=[])

    @server.feature(COMPLETION_ITEM_RESOLVE)
    async def completion_resolve(ls: RestxLanguageServer, item: CompletionItem):
        if ls.capability_manager:
            return await ls.capability_manager.resolve_completion(item)
        return item

    @server.feature(TEXT_DOCUMENT_HOVER)
    async def hover(ls: RestxLanguageServer, params: HoverParams):
        if ls.capability_manager:
            return await ls.capability_manager.handle_hover(params)
        return None

    return server
