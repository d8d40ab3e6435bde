from __future__ import annotations

from unittest.mock import Mock

import pytest
from lsprotocol.types import (
    CompletionItem,
    CompletionList,
    CompletionParams,
    Hover,
    HoverParams,
    LogMessageParams,
    MarkupContent,
    MarkupKind,
    MessageType,
    Position,
    TextDocumentIdentifier,
)

from restxls.catalog.catalog import load_hover_docs, load_vocabulary
from restxls.lsp.capabilities.capabilities import (
    CapabilityManager,
    CompletionCapability,
    HoverCapability,
)
from restxls.lsp.capabilities.vocabulary_capabilities import (
    VocabularyCompletionCapability,
    VocabularyHoverCapability,
)


class StaticCompletion(CompletionCapability):
    def __init__(self, server, labels, handles=True):
        super().__init__(server)
        self.labels = labels
        self.handles = handles

    @property
    def name(self) -> str:
        return "static_completion"

    @property
    def description(self) -> str:
        return "Fixed completion items"

    async def can_handle(self, params: CompletionParams) -> bool:
        return self.handles

    async def complete(self, params: CompletionParams) -> CompletionList:
        return CompletionList(
            is_incomplete=False,
            items=[CompletionItem(label=label) for label in self.labels],
        )


class FailingCompletion(StaticCompletion):
    @property
    def name(self) -> str:
        return "failing_completion"

    async def complete(self, params: CompletionParams) -> CompletionList:
        raise RuntimeError("boom")


class StaticHover(HoverCapability):
    def __init__(self, server, value):
        super().__init__(server)
        self.value = value

    @property
    def name(self) -> str:
        return "static_hover"

    @property
    def description(self) -> str:
        return "Fixed hover"

    async def can_handle(self, params: HoverParams) -> bool:
        return True

    async def hover(self, params: HoverParams) -> Hover | None:
        if self.value is None:
            return None
        return Hover(
            contents=MarkupContent(kind=MarkupKind.Markdown, value=self.value)
        )


@pytest.fixture
def server():
    server = Mock()
    server.catalog = load_vocabulary()
    server.hover_docs = load_hover_docs()
    server.window_log_message = Mock()
    return server


@pytest.fixture
def completion_params():
    return CompletionParams(
        text_document=TextDocumentIdentifier(uri="file:///api.restx"),
        position=Position(line=0, character=0),
    )


@pytest.fixture
def hover_params():
    return HoverParams(
        text_document=TextDocumentIdentifier(uri="file:///api.restx"),
        position=Position(line=0, character=0),
    )


def test_default_capabilities(server):
    manager = CapabilityManager(server)

    assert isinstance(
        manager.get_capability("vocabulary_completion"),
        VocabularyCompletionCapability,
    )
    assert isinstance(
        manager.get_capability("vocabulary_hover"), VocabularyHoverCapability
    )
    assert manager.get_capability("missing") is None


def test_get_capabilities_by_type(server):
    manager = CapabilityManager(server)

    completions = manager.get_capabilities_by_type(CompletionCapability)
    hovers = manager.get_capabilities_by_type(HoverCapability)

    assert [c.name for c in completions] == ["vocabulary_completion"]
    assert [c.name for c in hovers] == ["vocabulary_hover"]


@pytest.mark.asyncio
async def test_completion_aggregates_in_order(server, completion_params):
    manager = CapabilityManager(
        server,
        {
            "first": StaticCompletion(server, ["a", "b"]),
            "skipped": StaticCompletion(server, ["x"], handles=False),
            "second": StaticCompletion(server, ["c"]),
        },
    )

    result = await manager.handle_completion(completion_params)

    assert [item.label for item in result.items] == ["a", "b", "c"]
    assert result.is_incomplete is False


@pytest.mark.asyncio
async def test_completion_error_isolation(server, completion_params):
    manager = CapabilityManager(
        server,
        {
            "failing": FailingCompletion(server, []),
            "working": StaticCompletion(server, ["ok"]),
        },
    )

    result = await manager.handle_completion(completion_params)

    assert [item.label for item in result.items] == ["ok"]
    call_args = server.window_log_message.call_args[0][0]
    assert isinstance(call_args, LogMessageParams)
    assert call_args.type == MessageType.Error
    assert "failing_completion" in call_args.message
    assert "RuntimeError: boom" in call_args.message


@pytest.mark.asyncio
async def test_completion_without_capabilities(server, completion_params):
    manager = CapabilityManager(server, {})

    result = await manager.handle_completion(completion_params)

    assert result.items == []


@pytest.mark.asyncio
async def test_resolve_completion_is_identity(server):
    manager = CapabilityManager(server)
    item = CompletionItem(label="@cron", detail="Cron schedule")

    resolved = await manager.resolve_completion(item)

    assert resolved == CompletionItem(label="@cron", detail="Cron schedule")


@pytest.mark.asyncio
async def test_hover_first_result_wins(server, hover_params):
    manager = CapabilityManager(
        server,
        {
            "empty": StaticHover(server, None),
            "first": StaticHover(server, "first"),
            "second": StaticHover(server, "second"),
        },
    )

    result = await manager.handle_hover(hover_params)

    assert result.contents.value == "first"


@pytest.mark.asyncio
async def test_hover_none_when_nothing_matches(server, hover_params):
    manager = CapabilityManager(server, {"empty": StaticHover(server, None)})

    assert await manager.handle_hover(hover_params) is None
