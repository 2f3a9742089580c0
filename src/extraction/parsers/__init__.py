"""Parsers extracting translatable strings into a catalog."""

from .base import Parser
from .block_templates import BlockTemplatesParser, humanize_handle
from .dynamic import DYNAMIC_ITEMS, DynamicItem, DynamicItemParser, RegistryItem
from .php import PhpParser
from .php_source import PhpSourceScanner
from .registry import PARSER_CLASSES, get_all_parsers, select_parsers
from .xgettext import XgettextRunner

__all__ = [
    "Parser",
    "BlockTemplatesParser",
    "humanize_handle",
    "DYNAMIC_ITEMS",
    "DynamicItem",
    "DynamicItemParser",
    "RegistryItem",
    "PhpParser",
    "PhpSourceScanner",
    "PARSER_CLASSES",
    "get_all_parsers",
    "select_parsers",
    "XgettextRunner",
]
