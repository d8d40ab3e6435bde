"""
Hover token extraction.

Isolates the identifier-like token under the cursor and looks it up in the
hover doc table. Only the space character delimits words; tabs, newlines
and braces do not, so a token next to them is cut out by the
letter/`$`/`@` scan instead.
"""

from __future__ import annotations

import re

from lsprotocol.types import Hover, MarkupContent, MarkupKind

from restxls.catalog.catalog import HoverDocTable

TOKEN_PATTERN = re.compile(r"[A-Za-z$@]*")


def word_span(text: str, offset: int) -> str:
    """Get the space-delimited span around the cursor, stripped."""
    word_start = text.rfind(" ", 0, offset + 1) + 1
    word_end = text.find(" ", offset)
    if word_end == -1:
        word_end = len(text)

    return text[max(0, word_start):word_end].strip()


def extract_token(text: str, offset: int) -> str:
    """
    Extract the hover token at the cursor.

    Args:
        text: Full document text
        offset: Cursor offset into `text`

    Returns:
        The leading run of letters, `$` and `@` of the word at the cursor.
        Empty when the cursor sits on a space or punctuation.
    """
    match = TOKEN_PATTERN.match(word_span(text, offset))
    return match.group(0) if match else ""


def build_hover(documentation: str | None) -> Hover | None:
    """Wrap documentation as markdown hover content."""
    if not documentation:
        return None

    return Hover(
        contents=MarkupContent(kind=MarkupKind.Markdown, value=documentation)
    )


class HoverTokenExtractor:
    """Resolves a cursor position to hover documentation."""

    def __init__(self, hover_docs: HoverDocTable) -> None:
        self.hover_docs = hover_docs

    def documentation_at(self, text: str, offset: int) -> str | None:
        return self.hover_docs.lookup(extract_token(text, offset))

    def hover_at(self, text: str, offset: int) -> Hover | None:
        return build_hover(self.documentation_at(text, offset))
