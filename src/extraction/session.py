"""A single extraction run: one scanner cache shared by all parsers."""
from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional, Union

from catalog import TranslationCatalog
from utils.config import AppConfig
from utils.logging import get_logger

from .live import LiveInstance
from .parsers.base import Parser
from .parsers.registry import get_all_parsers, select_parsers
from .scanner import DirectoryScanner

LOGGER = get_logger(__name__)


class ExtractionSession:
    """Run the registered parsers against one catalog.

    Directory structures are memoised for the lifetime of the session; call
    :meth:`clear` (or start a new session) before scanning a tree that may
    have changed.
    """

    def __init__(self, config: Optional[AppConfig] = None, parsers: Optional[Iterable[Parser]] = None) -> None:
        self.config = config or AppConfig()
        self.scanner = DirectoryScanner.from_config(self.config)
        if parsers is None:
            self.parsers = get_all_parsers(self.config, self.scanner)
        else:
            self.parsers = list(parsers)

    def extract_directory(
        self,
        root_dir: Union[str, Path],
        rel_path: Union[str, Path] = "",
        catalog: Optional[TranslationCatalog] = None,
    ) -> TranslationCatalog:
        if catalog is None:
            catalog = TranslationCatalog()
        for parser in select_parsers(self.parsers, directory=True):
            LOGGER.info("Running %s on %s", parser.name, root_dir)
            parser.extract_from_directory(catalog, root_dir, rel_path)
        return catalog

    def extract_live_instance(
        self,
        instance: Optional[LiveInstance],
        catalog: Optional[TranslationCatalog] = None,
    ) -> TranslationCatalog:
        if catalog is None:
            catalog = TranslationCatalog()
        for parser in select_parsers(self.parsers, live=True):
            LOGGER.info("Running %s on the running instance", parser.name)
            parser.extract_from_live_instance(catalog, instance)
        return catalog

    def clear(self) -> None:
        self.scanner.clear()
