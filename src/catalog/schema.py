"""Pydantic models describing catalog references and summaries."""
from __future__ import annotations

from typing import TYPE_CHECKING, Dict, Optional, Set, Tuple

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:  # pragma: no cover
    from .translations import TranslationCatalog


class Reference(BaseModel):
    """A source location (relative path, optional line) of a translatable string."""

    model_config = ConfigDict(frozen=True)

    path: str
    line: Optional[int] = Field(default=None, ge=0)

    @classmethod
    def from_occurrence(cls, occurrence: Tuple[str, str]) -> "Reference":
        """Build a reference from a polib ``(path, line)`` occurrence tuple."""

        path, line = occurrence
        line = str(line).strip() if line is not None else ""
        return cls(path=path, line=int(line) if line.isdigit() else None)

    def as_occurrence(self) -> Tuple[str, str]:
        return self.path, "" if self.line is None else str(self.line)

    def __str__(self) -> str:
        return self.path if self.line is None else f"{self.path}:{self.line}"


class CatalogSummary(BaseModel):
    """Aggregate summary information of a translation catalog."""

    total_entries: int
    plural_entries: int
    contextual_entries: int
    total_references: int
    referenced_files: int
    contexts: Dict[str, int]

    @classmethod
    def from_catalog(cls, catalog: "TranslationCatalog") -> "CatalogSummary":
        plural = 0
        references = 0
        files: Set[str] = set()
        contexts: Dict[str, int] = {}
        for entry in catalog:
            if entry.msgid_plural:
                plural += 1
            entry_references = catalog.references(entry)
            references += len(entry_references)
            files.update(reference.path for reference in entry_references)
            if entry.msgctxt is not None:
                contexts[entry.msgctxt] = contexts.get(entry.msgctxt, 0) + 1
        return cls(
            total_entries=len(catalog),
            plural_entries=plural,
            contextual_entries=sum(contexts.values()),
            total_references=references,
            referenced_files=len(files),
            contexts=contexts,
        )
