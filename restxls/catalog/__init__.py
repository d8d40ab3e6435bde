from restxls.catalog.catalog import (
    CatalogError,
    HoverDocTable,
    VocabularyCatalog,
    load_hover_docs,
    load_vocabulary,
)
from restxls.catalog.types import Category, CompletionEntry, EntryKind

__all__ = [
    "CatalogError",
    "Category",
    "CompletionEntry",
    "EntryKind",
    "HoverDocTable",
    "VocabularyCatalog",
    "load_hover_docs",
    "load_vocabulary",
]
