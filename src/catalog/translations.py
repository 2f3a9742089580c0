"""Ordered gettext catalog keyed by ``(context, msgid)`` built on :mod:`polib`."""
from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Tuple, Union

import polib

from utils.logging import get_logger

from .schema import Reference

LOGGER = get_logger(__name__)

EntryKey = Tuple[Optional[str], str]


def entry_key(entry: polib.POEntry) -> EntryKey:
    """Return the linguistic identity of ``entry``: its context and singular text."""

    return entry.msgctxt, entry.msgid


class TranslationCatalog:
    """Translation entries unique by ``(context, msgid)`` in insertion order.

    Entries are plain :class:`polib.POEntry` objects stored in a
    :class:`polib.POFile`, so the catalog can be saved as a ``.pot`` template
    at any time. Re-inserting an existing key merges into the stored entry.
    """

    def __init__(self, pofile: Optional[polib.POFile] = None) -> None:
        self.pofile = pofile if pofile is not None else polib.POFile()
        self._index: Dict[EntryKey, polib.POEntry] = {}
        for entry in self.pofile:
            if entry.obsolete:
                continue
            self._index.setdefault(entry_key(entry), entry)

    @classmethod
    def load(cls, path: Union[str, Path]) -> "TranslationCatalog":
        """Parse a ``.po``/``.pot`` file into a catalog."""

        return cls(polib.pofile(str(path)))

    def save(self, path: Union[str, Path]) -> None:
        LOGGER.info("Writing %d entries to %s", len(self), path)
        Path(path).parent.mkdir(parents=True, exist_ok=True)
        self.pofile.save(str(path))

    def pot_header(self, project: str = "PROJECT VERSION") -> None:
        """Fill in the standard template header fields that are not yet set.

        ``POT-Creation-Date`` is always refreshed, also for a loaded template.
        """

        now = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M%z")
        defaults = {
            "Project-Id-Version": project,
            "MIME-Version": "1.0",
            "Content-Type": "text/plain; charset=UTF-8",
            "Content-Transfer-Encoding": "8bit",
        }
        for key, value in defaults.items():
            self.pofile.metadata.setdefault(key, value)
        self.pofile.metadata["POT-Creation-Date"] = now

    def __len__(self) -> int:
        return len(self._index)

    def __iter__(self) -> Iterator[polib.POEntry]:
        return (entry for entry in self.pofile if not entry.obsolete)

    def __contains__(self, key: object) -> bool:
        return key in self._index

    def __str__(self) -> str:
        return str(self.pofile)

    def find(self, context: Optional[str], msgid: str) -> Optional[polib.POEntry]:
        return self._index.get((context, msgid))

    def insert(self, context: Optional[str], msgid: str, plural: Optional[str] = None) -> polib.POEntry:
        """Return the entry for ``(context, msgid)``, creating it if needed."""

        entry = self.find(context, msgid)
        if entry is None:
            entry = polib.POEntry(msgid=msgid, msgctxt=context)
            if plural:
                entry.msgid_plural = plural
                entry.msgstr_plural = {0: "", 1: ""}
            self._append(entry)
        elif plural and not entry.msgid_plural:
            entry.msgid_plural = plural
            entry.msgstr_plural = {0: "", 1: ""}
        return entry

    def add_entry(self, entry: polib.POEntry) -> polib.POEntry:
        """Append ``entry`` or merge it into the stored entry with the same key."""

        existing = self._index.get(entry_key(entry))
        if existing is None:
            self._append(entry)
            return entry
        merge_entries(existing, entry)
        return existing

    def merge(self, entries: Iterable[polib.POEntry]) -> int:
        """Merge ``entries`` in order; return how many new keys were appended."""

        added = 0
        for entry in entries:
            if self.add_entry(entry) is entry:
                added += 1
        return added

    def references(self, entry: polib.POEntry) -> List[Reference]:
        return [Reference.from_occurrence(occurrence) for occurrence in entry.occurrences]

    def rewrite_references(self, prefix: str) -> None:
        """Prepend ``prefix + "/"`` to every reference path; no-op for an empty prefix."""

        if not prefix:
            return
        for entry in self:
            entry.occurrences = [
                Reference(path=f"{prefix}/{reference.path}", line=reference.line).as_occurrence()
                for reference in self.references(entry)
            ]

    def _append(self, entry: polib.POEntry) -> None:
        self.pofile.append(entry)
        self._index[entry_key(entry)] = entry


def merge_entries(target: polib.POEntry, source: polib.POEntry) -> None:
    """Merge references, plural text, comments and flags of ``source`` into ``target``."""

    target.occurrences.extend(source.occurrences)
    if source.msgid_plural and not target.msgid_plural:
        target.msgid_plural = source.msgid_plural
        target.msgstr_plural = dict(source.msgstr_plural) or {0: "", 1: ""}
    if source.comment:
        lines = target.comment.splitlines() if target.comment else []
        for line in source.comment.splitlines():
            if line not in lines:
                lines.append(line)
        target.comment = "\n".join(lines)
    for flag in source.flags:
        if flag not in target.flags:
            target.flags.append(flag)
