"""Extract translatable display names from the registries of a running instance."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Iterable, Mapping, Optional, Tuple

from catalog import TranslationCatalog
from utils.config import AppConfig
from utils.logging import get_logger

from ..errors import UnsupportedOperationError
from ..live import LiveInstance
from ..scanner import DirectoryScanner
from .base import Parser

LOGGER = get_logger(__name__)


class DynamicItem(ABC):
    """Adapter feeding one kind of registered entity into the catalog."""

    context: str = ""

    @abstractmethod
    def is_available(self, instance: LiveInstance) -> bool:
        """Return ``True`` if ``instance`` exposes what this adapter reads."""

    @abstractmethod
    def parse(self, catalog: TranslationCatalog, instance: LiveInstance) -> None:
        """Insert the display names found in ``instance`` into ``catalog``."""

    @staticmethod
    def add_translation(catalog: TranslationCatalog, text: Any, context: Optional[str]) -> None:
        if isinstance(text, str) and text:
            catalog.insert(context, text)


class RegistryItem(DynamicItem):
    """Read ``attribute`` of every object listed by a named registry."""

    def __init__(self, registry: str, context: str, attribute: str = "name") -> None:
        self.registry = registry
        self.context = context
        self.attribute = attribute

    def is_available(self, instance: LiveInstance) -> bool:
        return instance.has_registry(self.registry)

    def parse(self, catalog: TranslationCatalog, instance: LiveInstance) -> None:
        for item in instance.list(self.registry):
            if isinstance(item, Mapping):
                value = item.get(self.attribute)
            else:
                value = getattr(item, self.attribute, None)
            self.add_translation(catalog, value, self.context)

    def __repr__(self) -> str:
        return f"RegistryItem({self.registry!r}, {self.context!r}, attribute={self.attribute!r})"


DYNAMIC_ITEMS: Tuple[DynamicItem, ...] = (
    RegistryItem("permission_access_entity_types", "PermissionAccessEntityTypeName"),
)


class DynamicItemParser(Parser):
    """Run every available :class:`DynamicItem` adapter against a running instance."""

    name = "Dynamic items"
    can_parse_directory = False
    can_parse_live_instance = True

    def __init__(
        self,
        config: Optional[AppConfig] = None,
        scanner: Optional[DirectoryScanner] = None,
        items: Optional[Iterable[DynamicItem]] = None,
    ) -> None:
        super().__init__(config, scanner)
        self.items = list(items) if items is not None else list(DYNAMIC_ITEMS)

    def _extract_directory(self, catalog: TranslationCatalog, root: str, rel_path: str) -> None:
        raise UnsupportedOperationError(f"{self.name} does not support parsing directories")

    def _extract_live_instance(self, catalog: TranslationCatalog, instance: LiveInstance) -> None:
        for item in self.items:
            if not item.is_available(instance):
                LOGGER.debug("Skipping %r: not available in %s", item, instance.version)
                continue
            item.parse(catalog, instance)
