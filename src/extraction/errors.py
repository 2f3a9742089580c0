"""Exceptions raised by the extraction engine."""
from __future__ import annotations

import os
from typing import Optional, Union


class ExtractionError(Exception):
    """Base exception for extraction failures."""


class DirectoryAccessError(ExtractionError):
    """Raised when a path is missing, is not a directory, or cannot be read."""

    def __init__(self, path: Union[str, "os.PathLike[str]"], message: Optional[str] = None) -> None:
        self.path = os.fspath(path)
        super().__init__(message or f"Unable to access directory {self.path}")


class LiveEnvironmentError(ExtractionError):
    """Raised when the running instance or its version cannot be determined."""


class UnsupportedOperationError(ExtractionError):
    """Raised when a parser is asked for an extraction mode it does not support."""


class ExtractionToolError(ExtractionError):
    """Raised when the external extraction tool fails; carries its captured output."""

    def __init__(self, message: str, output: str = "") -> None:
        self.output = output
        super().__init__(f"{message}: {output.strip()}" if output.strip() else message)


class TemporaryResourceError(ExtractionError):
    """Raised when a temporary file cannot be created or written."""
