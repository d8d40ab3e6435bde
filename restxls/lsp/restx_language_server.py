from __future__ import annotations

from pygls.lsp.server import LanguageServer
from pygls.workspace.text_document import TextDocument

from restxls.catalog.catalog import HoverDocTable, VocabularyCatalog
from restxls.lsp.capabilities.capabilities import CapabilityManager


class RestxLanguageServer(LanguageServer):
    """
    Custom Language Server with RESTx-specific attributes.

    Attributes:
        catalog: Vocabulary offered by completion (read-only)
        hover_docs: Token documentation shown on hover (read-only)
        capability_manager: Dispatches completion/hover requests to plugins
    """

    def __init__(
        self,
        name: str,
        version: str,
        catalog: VocabularyCatalog,
        hover_docs: HoverDocTable,
    ):
        super().__init__(name, version)

        self.catalog = catalog
        self.hover_docs = hover_docs
        self.capability_manager: CapabilityManager | None = None

    def get_open_document(self, uri: str) -> TextDocument | None:
        """Get a document the client has opened, or None if it is unknown."""
        if uri not in self.workspace.text_documents:
            return None
        return self.workspace.get_text_document(uri)
