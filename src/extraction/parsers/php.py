"""Extract translatable strings from PHP files (functions ``t()``, ``t2()`` and ``tc()``)."""
from __future__ import annotations

import os
from typing import List, Optional

from catalog import TranslationCatalog
from utils.commands import command_is_available
from utils.config import AppConfig
from utils.logging import get_logger
from utils.paths import join_relative

from ..errors import DirectoryAccessError, UnsupportedOperationError
from ..keywords import parse_keywords
from ..live import LiveInstance
from ..scanner import DirectoryScanner, is_regular_file
from .base import Parser
from .php_source import PhpSourceScanner
from .xgettext import XgettextRunner

LOGGER = get_logger(__name__)


class PhpParser(Parser):
    """Collect marker calls from every source file beneath a directory.

    xgettext does the extraction when it is installed (and not disabled in the
    configuration); the built-in :class:`PhpSourceScanner` is used otherwise.
    Once xgettext has been chosen its failures are raised, never retried with
    the built-in scanner.
    """

    name = "PHP Parser"
    can_parse_directory = True
    can_parse_live_instance = False

    def __init__(self, config: Optional[AppConfig] = None, scanner: Optional[DirectoryScanner] = None) -> None:
        super().__init__(config, scanner)
        self.keywords = parse_keywords(self.config.keywords)
        self.source_scanner = PhpSourceScanner(self.keywords, comment_tag=self.config.comment_tag)
        self.xgettext = XgettextRunner(
            self.keywords.values(),
            command=self.config.xgettext,
            language=self.config.source_language,
            comment_tag=self.config.comment_tag,
            temp_dir=self.config.temp_dir,
        )

    def uses_external_tool(self) -> bool:
        return self.config.use_external_tool and command_is_available(self.config.xgettext)

    def collect_source_files(self, root: str) -> List[str]:
        """Return the source files beneath ``root`` as paths relative to it."""

        extension = self.config.source_extension
        files: List[str] = []
        for child in ("",) + self.scanner.scan(root):
            directory = f"{root}/{child}" if child else root
            try:
                with os.scandir(directory) as iterator:
                    entries = sorted(iterator, key=lambda entry: entry.name)
            except OSError as exc:
                raise DirectoryAccessError(directory, f"Unable to parse directory {directory}") from exc
            for entry in entries:
                if entry.name.startswith(".") or not entry.name.endswith(extension):
                    continue
                if is_regular_file(entry):
                    files.append(join_relative(child, entry.name))
        return files

    def _extract_directory(self, catalog: TranslationCatalog, root: str, rel_path: str) -> None:
        files = self.collect_source_files(root)
        if not files:
            LOGGER.debug("No %s files beneath %s", self.config.source_extension, root)
            return
        if self.uses_external_tool():
            LOGGER.debug("Extracting %d files with %s", len(files), self.config.xgettext)
            extracted = self.xgettext.run(root, files)
        else:
            LOGGER.debug("Extracting %d files with the built-in scanner", len(files))
            extracted = self.source_scanner.extract_files(root, files)
        if not len(extracted):
            return
        extracted.rewrite_references(rel_path)
        added = catalog.merge(extracted)
        LOGGER.info("%s: %d strings in %d files under %s (%d new)", self.name, len(extracted), len(files), root, added)

    def _extract_live_instance(self, catalog: TranslationCatalog, instance: LiveInstance) -> None:
        raise UnsupportedOperationError(f"{self.name} does not support parsing a running instance")
