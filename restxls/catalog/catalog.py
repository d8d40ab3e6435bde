"""
Vocabulary Catalog and Hover Doc Table.

Both tables are read from YAML files bundled with the package (or supplied
on the command line) exactly once, when the server is created, and are
shared read-only by every request afterwards.

Design Principles:
1. Immutable after load (tuples and read-only mappings)
2. Explicitly constructed and passed by reference, never module globals
3. Validated on load (a malformed file fails startup, not a request)
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, Sequence
from pathlib import Path
from types import MappingProxyType

import yaml

from restxls.catalog.types import Category, CompletionEntry, EntryKind

DATA_DIR = Path(__file__).parent / "data"
DEFAULT_VOCABULARY_PATH = DATA_DIR / "vocabulary.yaml"
DEFAULT_HOVER_DOCS_PATH = DATA_DIR / "hover_docs.yaml"


class CatalogError(Exception):
    """Raised when a vocabulary or hover docs file is malformed."""


class VocabularyCatalog:
    """
    Completion entries grouped into the nine RESTx categories.

    Labels are unique within a category but may repeat across categories
    (`unique` is a modifier, `@unique` an annotation).

    Usage:
        catalog = load_vocabulary()
        catalog.entries(Category.ANNOTATIONS)
        catalog.select((Category.HTTP_METHODS, Category.KEYWORDS))
    """

    def __init__(
        self, categories: Mapping[Category, Iterable[CompletionEntry]]
    ) -> None:
        tables: dict[Category, tuple[CompletionEntry, ...]] = {}
        for category in Category:
            if category not in categories:
                raise CatalogError(f"Missing category: {category.value}")

            entries = tuple(categories[category])
            seen: set[str] = set()
            for entry in entries:
                if entry.label in seen:
                    raise CatalogError(
                        f"Duplicate label {entry.label!r} in category "
                        f"{category.value}"
                    )
                seen.add(entry.label)

            tables[category] = entries

        self._categories = MappingProxyType(tables)

    @property
    def categories(self) -> Mapping[Category, tuple[CompletionEntry, ...]]:
        return self._categories

    def entries(self, category: Category) -> tuple[CompletionEntry, ...]:
        """Get the entries of one category in presentation order."""
        return self._categories[category]

    def select(self, selection: Sequence[Category]) -> list[CompletionEntry]:
        """Concatenate the entries of the selected categories, in order."""
        result: list[CompletionEntry] = []
        for category in selection:
            result.extend(self._categories[category])
        return result

    def labels(self, category: Category) -> list[str]:
        return [entry.label for entry in self._categories[category]]

    def __len__(self) -> int:
        return sum(len(entries) for entries in self._categories.values())


class HoverDocTable(Mapping[str, str]):
    """Read-only mapping from a literal token to its markdown documentation."""

    def __init__(self, docs: Mapping[str, str]) -> None:
        self._docs = MappingProxyType(dict(docs))

    def __getitem__(self, token: str) -> str:
        return self._docs[token]

    def __iter__(self) -> Iterator[str]:
        return iter(self._docs)

    def __len__(self) -> int:
        return len(self._docs)

    def lookup(self, token: str) -> str | None:
        """Get the documentation for a token, or None if it has none."""
        if not token:
            return None
        return self._docs.get(token)


def _read_yaml_mapping(path: Path) -> dict:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise CatalogError(f"Cannot read {path}: {e}") from e

    if not isinstance(data, dict):
        raise CatalogError(f"{path} must contain a mapping at the top level")

    return data


def _parse_entry(raw: object, category: str, path: Path) -> CompletionEntry:
    if not isinstance(raw, dict):
        raise CatalogError(f"{path}: entry in {category} is not a mapping")

    missing = [key for key in ("label", "kind", "detail") if key not in raw]
    if missing:
        raise CatalogError(
            f"{path}: entry in {category} is missing {', '.join(missing)}"
        )

    insert_text = raw.get("insert_text")
    return CompletionEntry(
        label=str(raw["label"]),
        kind=EntryKind.from_name(str(raw["kind"])),
        detail=str(raw["detail"]),
        documentation=str(raw.get("documentation", "")),
        insert_text=str(insert_text) if insert_text is not None else None,
    )


def load_vocabulary(path: Path | None = None) -> VocabularyCatalog:
    """
    Build a VocabularyCatalog from a YAML vocabulary file.

    Args:
        path: Vocabulary file. Defaults to the bundled RESTx vocabulary.

    Raises:
        CatalogError: If the file is unreadable, a category is missing or
            unknown, or a label repeats within a category.
    """
    path = path or DEFAULT_VOCABULARY_PATH
    data = _read_yaml_mapping(path)

    known = {category.value: category for category in Category}
    categories: dict[Category, list[CompletionEntry]] = {}
    for name, raw_entries in data.items():
        category = known.get(name)
        if category is None:
            raise CatalogError(f"{path}: unknown category {name!r}")
        if not isinstance(raw_entries, list):
            raise CatalogError(f"{path}: category {name} must be a list")

        categories[category] = [
            _parse_entry(raw, name, path) for raw in raw_entries
        ]

    return VocabularyCatalog(categories)


def load_hover_docs(path: Path | None = None) -> HoverDocTable:
    """Build a HoverDocTable from a YAML file of `token: markdown` pairs."""
    path = path or DEFAULT_HOVER_DOCS_PATH
    data = _read_yaml_mapping(path)

    for token, doc in data.items():
        if not isinstance(doc, str):
            raise CatalogError(f"{path}: documentation for {token!r} is not text")

    return HoverDocTable({str(token): doc for token, doc in data.items()})
