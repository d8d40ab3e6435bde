"""
Trigger context classification for completion.

Looks only at the text of the current line up to the cursor and decides
which vocabulary categories are relevant there. This is lexical, not a
parse: the rules below are regex checks on the line prefix, evaluated top
to bottom, and the first one that matches wins.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass

from restxls.catalog.catalog import VocabularyCatalog
from restxls.catalog.types import Category, CompletionEntry

CategorySelection = tuple[Category, ...]

ALL_CATEGORIES: CategorySelection = tuple(Category)
LINE_START_CATEGORIES: CategorySelection = (
    Category.HTTP_METHODS,
    Category.KEYWORDS,
)

DB_TABLE_PATTERN = re.compile(r"db\.\w+\.$", re.ASCII)
AUTH_COLON_PATTERN = re.compile(r"auth:\s*$")
COLON_PATTERN = re.compile(r":\s*$")


@dataclass(frozen=True)
class TriggerRule:
    """A line-prefix predicate and the categories it selects."""

    name: str
    matches: Callable[[str], bool]
    selection: CategorySelection


def _is_type_position(prefix: str) -> bool:
    # Any "auth" on the line suppresses types, not only an `auth:` key.
    return bool(COLON_PATTERN.search(prefix)) and "auth" not in prefix


TRIGGER_RULES: tuple[TriggerRule, ...] = (
    TriggerRule(
        "annotation",
        lambda prefix: prefix.endswith("@"),
        (Category.ANNOTATIONS,),
    ),
    TriggerRule(
        "magic_variable",
        lambda prefix: prefix.endswith("$"),
        (Category.MAGIC_VARIABLES,),
    ),
    TriggerRule(
        "db_operation",
        lambda prefix: bool(DB_TABLE_PATTERN.search(prefix)),
        (Category.DB_OPERATIONS,),
    ),
    TriggerRule(
        "auth_type",
        lambda prefix: bool(AUTH_COLON_PATTERN.search(prefix)),
        (Category.AUTH_TYPES,),
    ),
    TriggerRule("type", _is_type_position, (Category.TYPES,)),
    TriggerRule(
        "line_start",
        lambda prefix: prefix.strip() == "",
        LINE_START_CATEGORIES,
    ),
    TriggerRule("fallback", lambda prefix: True, ALL_CATEGORIES),
)


def line_prefix(text: str, offset: int) -> str:
    """
    Get the current line's text from its start up to the cursor.

    Args:
        text: Full document text
        offset: Cursor offset into `text`

    Returns:
        Everything after the last newline before the cursor, up to the
        cursor itself.
    """
    line_start = text.rfind("\n", 0, max(offset, 0)) + 1
    return text[line_start:offset]


def match_rule(
    prefix: str, rules: tuple[TriggerRule, ...] = TRIGGER_RULES
) -> TriggerRule:
    """Return the first rule whose predicate accepts the prefix."""
    for rule in rules:
        if rule.matches(prefix):
            return rule

    # Only reachable with a custom rule list lacking a catch-all
    return TRIGGER_RULES[-1]


def classify(text: str, offset: int) -> CategorySelection:
    """Select the vocabulary categories relevant at the cursor."""
    return match_rule(line_prefix(text, offset)).selection


class TriggerContextClassifier:
    """Resolves a cursor position to catalog entries."""

    def __init__(
        self,
        catalog: VocabularyCatalog,
        rules: tuple[TriggerRule, ...] = TRIGGER_RULES,
    ) -> None:
        self.catalog = catalog
        self.rules = rules

    def classify(self, text: str, offset: int) -> CategorySelection:
        return match_rule(line_prefix(text, offset), self.rules).selection

    def entries_at(self, text: str, offset: int) -> list[CompletionEntry]:
        """
        Get the catalog entries for the cursor's syntactic position.

        Entries are not filtered by what has been typed so far; narrowing by
        prefix is left to the editor.
        """
        return self.catalog.select(self.classify(text, offset))
