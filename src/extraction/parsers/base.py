"""Base class for the translatable-string parsers."""
from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Union

from catalog import TranslationCatalog
from utils.config import AppConfig
from utils.logging import get_logger
from utils.paths import normalise_relative

from ..errors import LiveEnvironmentError, UnsupportedOperationError
from ..live import LiveInstance
from ..scanner import DirectoryScanner, ensure_readable_directory

LOGGER = get_logger(__name__)


class Parser(ABC):
    """Abstract base class for parsers feeding a :class:`TranslationCatalog`.

    Subclasses declare a display ``name`` and whether they can extract from a
    directory tree and/or from a running instance, and implement the matching
    ``_extract_*`` hook. The public entry points validate their input before
    the hook sees it, so a rejected call never touches the catalog.
    """

    name: str = ""
    can_parse_directory: bool = False
    can_parse_live_instance: bool = False

    def __init__(self, config: Optional[AppConfig] = None, scanner: Optional[DirectoryScanner] = None) -> None:
        self.config = config or AppConfig()
        self.scanner = scanner or DirectoryScanner.from_config(self.config)

    def extract_from_directory(
        self,
        catalog: Optional[TranslationCatalog],
        root_dir: Union[str, Path],
        rel_path: Union[str, Path] = "",
    ) -> TranslationCatalog:
        """Extract strings found beneath ``root_dir`` into ``catalog``.

        References are recorded relative to ``rel_path``; a new catalog is
        created when ``catalog`` is ``None``.
        """

        if not self.can_parse_directory:
            raise UnsupportedOperationError(f"{self.name} does not support parsing directories")
        root = ensure_readable_directory(root_dir)
        relative = normalise_relative(rel_path)
        if catalog is None:
            catalog = TranslationCatalog()
        LOGGER.debug("%s: parsing %s (references under %r)", self.name, root, relative)
        self._extract_directory(catalog, root, relative)
        return catalog

    def extract_from_live_instance(
        self,
        catalog: Optional[TranslationCatalog] = None,
        instance: Optional[LiveInstance] = None,
    ) -> TranslationCatalog:
        """Extract strings from the registries of a running instance."""

        if not self.can_parse_live_instance:
            raise UnsupportedOperationError(f"{self.name} does not support parsing a running instance")
        if instance is None or not instance.version:
            raise LiveEnvironmentError("Unable to determine the version of the running instance")
        if catalog is None:
            catalog = TranslationCatalog()
        LOGGER.debug("%s: parsing running instance %s", self.name, instance.version)
        self._extract_live_instance(catalog, instance)
        return catalog

    @abstractmethod
    def _extract_directory(self, catalog: TranslationCatalog, root: str, rel_path: str) -> None:
        """Add the strings found beneath the validated ``root`` to ``catalog``."""

    @abstractmethod
    def _extract_live_instance(self, catalog: TranslationCatalog, instance: LiveInstance) -> None:
        """Add the strings exposed by ``instance`` to ``catalog``."""
