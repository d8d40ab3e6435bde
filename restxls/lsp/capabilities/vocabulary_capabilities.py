"""
Vocabulary-related LSP capabilities.

Provides completion and hover for the static RESTx vocabulary. Both work
on the full text of an open document and the cursor offset; documents the
client never opened get no completions and no hover.
"""

from lsprotocol.types import (
    CompletionList,
    CompletionParams,
    Hover,
    HoverParams,
)

from restxls.context.hover_token import HoverTokenExtractor
from restxls.context.trigger_context import TriggerContextClassifier
from restxls.lsp.capabilities.capabilities import (
    CompletionCapability,
    HoverCapability,
)
from restxls.lsp.restx_language_server import RestxLanguageServer


class VocabularyCompletionCapability(CompletionCapability):
    """Provides keyword, type, annotation, etc. completions by line context."""

    def __init__(self, server: RestxLanguageServer) -> None:
        super().__init__(server)
        self.classifier = TriggerContextClassifier(self.catalog)

    @property
    def name(self) -> str:
        return "vocabulary_completion"

    @property
    def description(self) -> str:
        return "Suggest RESTx vocabulary relevant to the text before the cursor"

    async def can_handle(self, params: CompletionParams) -> bool:
        """Check that the document is open in the editor."""
        return self.server.get_open_document(params.text_document.uri) is not None

    async def complete(self, params: CompletionParams) -> CompletionList:
        """Provide the entries selected by the cursor's line prefix."""
        doc = self.server.get_open_document(params.text_document.uri)
        if doc is None:
            return CompletionList(is_incomplete=False, items=[])

        offset = doc.offset_at_position(params.position)
        entries = self.classifier.entries_at(doc.source, offset)

        return CompletionList(
            is_incomplete=False,
            items=[entry.to_completion_item() for entry in entries],
        )


class VocabularyHoverCapability(HoverCapability):
    """Shows documentation for RESTx keywords, types and variables."""

    def __init__(self, server: RestxLanguageServer) -> None:
        super().__init__(server)
        self.extractor = HoverTokenExtractor(self.hover_docs)

    @property
    def name(self) -> str:
        return "vocabulary_hover"

    @property
    def description(self) -> str:
        return "Show documentation for the RESTx token under the cursor"

    async def can_handle(self, params: HoverParams) -> bool:
        return self.server.get_open_document(params.text_document.uri) is not None

    async def hover(self, params: HoverParams) -> Hover | None:
        doc = self.server.get_open_document(params.text_document.uri)
        if doc is None:
            return None

        offset = doc.offset_at_position(params.position)
        return self.extractor.hover_at(doc.source, offset)
