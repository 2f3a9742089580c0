"""Extract translatable strings from block type templates."""
from __future__ import annotations

import os
import re
from typing import Dict, List

from catalog import Reference, TranslationCatalog
from utils.logging import get_logger
from utils.paths import join_relative

from ..errors import DirectoryAccessError, UnsupportedOperationError
from ..live import LiveInstance
from ..scanner import is_regular_file
from .base import Parser

LOGGER = get_logger(__name__)

_HANDLE_DIRECTORY = re.compile(r"(?:^|/)blocks/[^/]+/templates/([^/]+)$")
_TEMPLATES_DIRECTORY = re.compile(r"(?:^|/)blocks/[^/]+/templates$")
_WORD_START = re.compile(r"(^|[ \t\r\n\f\v])([^ \t\r\n\f\v])")


def humanize_handle(handle: str) -> str:
    """Turn a handle into a label (``'hi_there'`` -> ``'Hi There'``)."""

    spaced = re.sub(r"[_\-/]", " ", handle)
    return _WORD_START.sub(lambda match: match.group(1) + match.group(2).upper(), spaced)


class BlockTemplatesParser(Parser):
    """One ``TemplateFileName`` entry per template handle found under ``blocks/*/templates``.

    A handle is either a directory directly inside a ``templates`` folder or
    the name of a source file there (``view.php`` -> ``view``).
    """

    name = "Block templates"
    can_parse_directory = True
    can_parse_live_instance = False

    def collect_template_handles(self, root: str, rel_path: str) -> Dict[str, List[str]]:
        """Map each handle to the paths (prefixed by ``rel_path``) that define it."""

        extension = self.config.source_extension
        handles: Dict[str, List[str]] = {}
        for child in self.scanner.scan(root):
            shown = join_relative(rel_path, child)
            match = _HANDLE_DIRECTORY.search(shown)
            if match:
                handles.setdefault(match.group(1), []).append(shown)
            elif _TEMPLATES_DIRECTORY.search(shown):
                for filename in self._template_files(f"{root}/{child}", extension):
                    handles.setdefault(filename[: -len(extension)], []).append(f"{shown}/{filename}")
        return handles

    def _extract_directory(self, catalog: TranslationCatalog, root: str, rel_path: str) -> None:
        handles = self.collect_template_handles(root, rel_path)
        for handle, references in handles.items():
            entry = catalog.insert(self.config.template_context, humanize_handle(handle))
            entry.occurrences.extend(Reference(path=reference).as_occurrence() for reference in references)
        LOGGER.debug("%s: %d template handles under %s", self.name, len(handles), root)

    def _extract_live_instance(self, catalog: TranslationCatalog, instance: LiveInstance) -> None:
        raise UnsupportedOperationError(f"{self.name} does not support parsing a running instance")

    @staticmethod
    def _template_files(directory: str, extension: str) -> List[str]:
        try:
            with os.scandir(directory) as iterator:
                entries = sorted(iterator, key=lambda entry: entry.name)
        except OSError as exc:
            raise DirectoryAccessError(directory, f"Unable to parse directory {directory}") from exc
        return [
            entry.name
            for entry in entries
            if not entry.name.startswith(".")
            and entry.name.endswith(extension)
            and len(entry.name) > len(extension)
            and is_regular_file(entry)
        ]
