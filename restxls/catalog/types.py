from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from lsprotocol.types import (
    CompletionItem,
    CompletionItemKind,
    InsertTextFormat,
    MarkupContent,
    MarkupKind,
)


class Category(Enum):
    """Vocabulary categories, declared in full-union presentation order."""

    KEYWORDS = "keywords"
    HTTP_METHODS = "httpMethods"
    TYPES = "types"
    MODIFIERS = "modifiers"
    ANNOTATIONS = "annotations"
    BUILTIN_FUNCTIONS = "builtinFunctions"
    DB_OPERATIONS = "dbOperations"
    MAGIC_VARIABLES = "magicVariables"
    AUTH_TYPES = "authTypes"


class EntryKind(Enum):
    """Kind of a vocabulary entry, as named in the vocabulary file."""

    KEYWORD = "keyword"
    METHOD = "method"
    TYPE = "type"
    MODIFIER = "modifier"
    FUNCTION = "function"
    VARIABLE = "variable"
    ENUM = "enum"
    TEXT = "text"

    @classmethod
    def from_name(cls, name: str) -> EntryKind:
        """Look up a kind by name; unrecognised names fall back to TEXT."""
        try:
            return cls(name)
        except ValueError:
            return cls.TEXT

    def to_lsp(self) -> CompletionItemKind:
        return _LSP_KINDS[self]


_LSP_KINDS: dict[EntryKind, CompletionItemKind] = {
    EntryKind.KEYWORD: CompletionItemKind.Keyword,
    EntryKind.METHOD: CompletionItemKind.Method,
    EntryKind.TYPE: CompletionItemKind.TypeParameter,
    EntryKind.MODIFIER: CompletionItemKind.Keyword,
    EntryKind.FUNCTION: CompletionItemKind.Function,
    EntryKind.VARIABLE: CompletionItemKind.Variable,
    EntryKind.ENUM: CompletionItemKind.EnumMember,
    EntryKind.TEXT: CompletionItemKind.Text,
}


@dataclass(frozen=True)
class CompletionEntry:
    """
    One suggestable item of the RESTx vocabulary.

    Entries are built once when the catalog is loaded and never change.
    `insert_text` is an optional snippet template using `${n:placeholder}`
    tab stops.
    """

    label: str
    kind: EntryKind
    detail: str
    documentation: str
    insert_text: str | None = None

    def to_completion_item(self) -> CompletionItem:
        """Convert to the LSP wire representation."""
        return CompletionItem(
            label=self.label,
            kind=self.kind.to_lsp(),
            detail=self.detail,
            documentation=MarkupContent(
                kind=MarkupKind.Markdown, value=self.documentation
            ),
            insert_text=self.insert_text,
            insert_text_format=(
                InsertTextFormat.Snippet if self.insert_text else None
            ),
        )
