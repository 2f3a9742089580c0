"""Extraction engine: directory scanning, parsers and extraction sessions."""

from .errors import (
    DirectoryAccessError,
    ExtractionError,
    ExtractionToolError,
    LiveEnvironmentError,
    TemporaryResourceError,
    UnsupportedOperationError,
)
from .keywords import Keyword, parse_keywords
from .live import LiveInstance
from .scanner import DirectoryScanner
from .session import ExtractionSession

__all__ = [
    "DirectoryAccessError",
    "ExtractionError",
    "ExtractionToolError",
    "LiveEnvironmentError",
    "TemporaryResourceError",
    "UnsupportedOperationError",
    "Keyword",
    "parse_keywords",
    "LiveInstance",
    "DirectoryScanner",
    "ExtractionSession",
]
