"""Helpers for locating external command-line tools."""
from __future__ import annotations

import shutil


def command_is_available(command: str) -> bool:
    """Return ``True`` if ``command`` can be found on ``PATH``."""

    return shutil.which(command) is not None
