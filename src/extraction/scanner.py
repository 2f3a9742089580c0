"""Memoised, post-order directory structure scanning."""
from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING, Dict, FrozenSet, Iterable, List, Tuple, Union

from utils.logging import get_logger
from utils.paths import join_relative, normalise_path

from .errors import DirectoryAccessError

if TYPE_CHECKING:  # pragma: no cover
    from utils.config import AppConfig


LOGGER = get_logger(__name__)
DEFAULT_EXCLUDED_DIRS = ("vendor", "3rdparty")

CacheKey = Tuple[str, bool]


def ensure_readable_directory(path: Union[str, Path]) -> str:
    """Return ``path`` normalised, or raise :class:`DirectoryAccessError`."""

    if path is None or not os.fspath(path):
        raise DirectoryAccessError("", "Unable to find the directory ''")
    resolved = normalise_path(path)
    if not os.path.isdir(resolved):
        raise DirectoryAccessError(path, f"Unable to find the directory {path}")
    if not os.access(resolved, os.R_OK | os.X_OK):
        raise DirectoryAccessError(resolved, f"Directory not readable: {resolved}")
    return resolved


class DirectoryScanner:
    """Enumerate the subdirectories beneath a root and remember the result.

    Each directory's relative path is listed after the paths of all of its
    descendants. Entries whose name starts with ``.`` are always skipped;
    ``excluded_dirs`` (``vendor`` and ``3rdparty`` by default) are skipped when
    a scan asks for vendor exclusion. Results are cached per
    ``(normalised root, exclusion flag)`` until :meth:`clear` is called.
    """

    def __init__(
        self,
        excluded_dirs: Iterable[str] = DEFAULT_EXCLUDED_DIRS,
        follow_symlinks: bool = True,
    ) -> None:
        self.excluded_dirs = frozenset(excluded_dirs)
        self.follow_symlinks = follow_symlinks
        self._cache: Dict[CacheKey, Tuple[str, ...]] = {}

    @classmethod
    def from_config(cls, config: "AppConfig") -> "DirectoryScanner":
        return cls(config.excluded_dirs, follow_symlinks=config.follow_symlinks)

    def scan(self, root_dir: Union[str, Path], exclude_vendor_dirs: bool = True) -> Tuple[str, ...]:
        """Return the relative paths of every subdirectory beneath ``root_dir``."""

        root = ensure_readable_directory(root_dir)
        key = (root, bool(exclude_vendor_dirs))
        cached = self._cache.get(key)
        if cached is not None:
            LOGGER.debug("Directory structure of %s served from cache", root)
            return cached
        structure = tuple(self._scan_directory(root, "", key[1]))
        LOGGER.debug("Scanned %s: %d subdirectories", root, len(structure))
        self._cache[key] = structure
        return structure

    def clear(self) -> None:
        """Forget every memoised directory structure."""

        self._cache.clear()

    def __len__(self) -> int:
        return len(self._cache)

    def _scan_directory(
        self,
        root: str,
        relative: str,
        exclude_vendor_dirs: bool,
        ancestors: FrozenSet[str] = frozenset(),
    ) -> List[str]:
        directory = f"{root}/{relative}" if relative else root
        try:
            with os.scandir(directory) as iterator:
                entries = sorted(iterator, key=lambda entry: entry.name)
        except OSError as exc:
            LOGGER.warning("Unable to open directory %s: %s", directory, exc)
            raise DirectoryAccessError(directory, f"Unable to open directory {directory}") from exc

        real_directory = os.path.realpath(directory)
        ancestors = ancestors | {real_directory}
        result: List[str] = []
        for entry in entries:
            if entry.name.startswith("."):
                continue
            if exclude_vendor_dirs and entry.name in self.excluded_dirs:
                continue
            if not is_directory(entry, self.follow_symlinks):
                continue
            if entry.is_symlink() and os.path.realpath(entry.path) in ancestors:
                LOGGER.debug("Not following %s: it links back to one of its parents", entry.path)
                continue
            child = join_relative(relative, entry.name)
            result.extend(self._scan_directory(root, child, exclude_vendor_dirs, ancestors))
            result.append(child)
        return result


def is_directory(entry: "os.DirEntry[str]", follow_symlinks: bool = True) -> bool:
    """``entry.is_dir()`` that reports unresolvable entries (e.g. symlink loops) as not a directory."""

    try:
        return entry.is_dir(follow_symlinks=follow_symlinks)
    except OSError:
        return False


def is_regular_file(entry: "os.DirEntry[str]") -> bool:
    try:
        return entry.is_file()
    except OSError:
        return False
