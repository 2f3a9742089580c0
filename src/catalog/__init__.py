"""Catalog package holding the translation catalog and its summary models."""

from .schema import CatalogSummary, Reference
from .translations import TranslationCatalog, entry_key, merge_entries

__all__ = [
    "CatalogSummary",
    "Reference",
    "TranslationCatalog",
    "entry_key",
    "merge_entries",
]
