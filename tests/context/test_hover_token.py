"""
Tests for restxls/context/hover_token.py

Covers space-delimited word isolation, the letter/$/@ token scan, hover
doc lookup and hover assembly.
"""
from __future__ import annotations

import pytest
from lsprotocol.types import Hover, MarkupKind

from restxls.catalog.catalog import HoverDocTable, load_hover_docs
from restxls.context.hover_token import (
    HoverTokenExtractor,
    build_hover,
    extract_token,
    word_span,
)

TYPE_DOC = (
    "Defines a custom type.\n\n"
    "```restx\n"
    "type User {\n"
    "  id: uuid\n"
    "  name: str\n"
    "}\n"
    "```"
)


@pytest.fixture(scope="module")
def extractor() -> HoverTokenExtractor:
    return HoverTokenExtractor(load_hover_docs())


class TestExtractToken:

    @pytest.mark.parametrize("offset", [0, 1, 2, 3])
    def test_inside_first_word(self, offset):
        assert extract_token("type User { id: uuid }", offset) == "type"

    def test_cursor_at_word_end(self):
        # A cursor on the space after "type" sees nothing
        assert extract_token("type User", 4) == ""
        assert extract_token("type User", 3) == "type"

    def test_middle_word(self):
        assert extract_token("type User { id: uuid }", 6) == "User"

    def test_stops_at_punctuation(self):
        assert extract_token("id: uuid", 1) == "id"

    def test_stops_at_paren(self):
        assert extract_token("  user -> db.users.findById(id)", 10) == "db"

    def test_dollar_prefix_kept(self):
        assert extract_token("authorize: $auth.role", 13) == "$auth"

    def test_at_prefix_kept(self):
        assert extract_token("  email: str @unique", 15) == "@unique"

    def test_cursor_on_space(self):
        assert extract_token("type  User", 5) == ""

    def test_digits_end_token(self):
        assert extract_token("api Shop 1.0.0", 10) == ""

    def test_newline_is_not_a_boundary(self):
        # Only spaces delimit words: "{\nGET" is one span starting with "{"
        text = "type User {\nGET /users"
        assert word_span(text, 13) == "{\nGET"
        assert extract_token(text, 13) == ""

    def test_token_after_newline_and_indent(self):
        # The last space before the cursor is part of the indent
        text = "table users {\n  pk"
        assert extract_token(text, len(text) - 1) == "pk"

    def test_end_of_text(self):
        assert extract_token("auth: bearer", 12) == "bearer"

    def test_empty_text(self):
        assert extract_token("", 0) == ""


class TestHoverTokenExtractor:

    def test_type_documentation_unchanged(self, extractor):
        doc = extractor.documentation_at("type User { id: uuid }", 2)
        assert doc == TYPE_DOC

    def test_http_method(self, extractor):
        doc = extractor.documentation_at("GET /users/:id -> User", 1)
        assert doc == "HTTP GET method - retrieves a resource"

    def test_magic_variable(self, extractor):
        doc = extractor.documentation_at("  api_key: $env.stripe_key", 12)
        assert doc == "Environment variables - Access via $env.variable_name"

    def test_whitespace_has_no_hover(self, extractor):
        assert extractor.hover_at("type  User", 5) is None

    def test_unknown_token_has_no_hover(self, extractor):
        assert extractor.hover_at("type User { id: uuid }", 6) is None

    def test_hover_is_markdown(self, extractor):
        hover = extractor.hover_at("  id: uuid pk", 11)
        assert isinstance(hover, Hover)
        assert hover.contents.kind == MarkupKind.Markdown
        assert hover.contents.value == "Primary key - Marks column as primary key"

    def test_custom_table(self):
        extractor = HoverTokenExtractor(HoverDocTable({"Shop": "The shop API"}))
        assert extractor.documentation_at("api Shop 1.0.0", 5) == "The shop API"


class TestBuildHover:

    def test_none(self):
        assert build_hover(None) is None

    def test_empty(self):
        assert build_hover("") is None

    def test_value_not_altered(self):
        hover = build_hover("**bold** <tag>")
        assert hover.contents.value == "**bold** <tag>"
