"""In-process view of a running installation used by live-instance parsers."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List


@dataclass
class LiveInstance:
    """A running installation: its version string and its entity registries.

    ``registries`` maps a registry name to a callable returning the registered
    objects, e.g. ``{"permission_access_entity_types": EntityType.get_list}``.
    """

    version: str
    registries: Dict[str, Callable[[], Iterable[Any]]] = field(default_factory=dict)

    def has_registry(self, name: str) -> bool:
        return name in self.registries

    def list(self, name: str) -> List[Any]:
        return list(self.registries[name]())
