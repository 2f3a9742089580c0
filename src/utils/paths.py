"""Path utility helpers."""
from __future__ import annotations

import os
import posixpath
from pathlib import Path
from typing import Optional, Union

PathLike = Union[str, Path]


def normalise_path(path: PathLike) -> str:
    """Return ``path`` as an absolute ``/``-separated string without trailing slash."""

    resolved = os.path.realpath(os.path.expanduser(os.fspath(path)))
    posix = resolved.replace(os.sep, "/")
    return posix.rstrip("/") or "/"


def normalise_relative(path: Optional[PathLike]) -> str:
    """Return a relative path with ``/`` separators and no surrounding slashes.

    ``""``, ``"."`` and ``Path("")`` all normalise to the empty string.
    """

    text = os.fspath(path) if path else ""
    text = text.replace("\\", "/").replace(os.sep, "/")
    if not text:
        return ""
    text = posixpath.normpath(text).strip("/")
    return "" if text == "." else text


def join_relative(prefix: str, child: str) -> str:
    if not prefix:
        return child
    if not child:
        return prefix
    return f"{prefix}/{child}"
