"""Utility helpers shared across the c5tl codebase."""

from .commands import command_is_available
from .config import AppConfig, load_config
from .logging import configure_logging, get_logger
from .paths import join_relative, normalise_path, normalise_relative

__all__ = [
    "AppConfig",
    "load_config",
    "command_is_available",
    "configure_logging",
    "get_logger",
    "join_relative",
    "normalise_path",
    "normalise_relative",
]
