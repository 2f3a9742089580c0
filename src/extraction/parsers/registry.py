"""Statically declared list of the available parsers."""
from __future__ import annotations

from typing import Iterable, List, Optional, Tuple, Type

from utils.config import AppConfig

from ..scanner import DirectoryScanner
from .base import Parser
from .block_templates import BlockTemplatesParser
from .dynamic import DynamicItemParser
from .php import PhpParser

PARSER_CLASSES: Tuple[Type[Parser], ...] = (PhpParser, BlockTemplatesParser, DynamicItemParser)


def get_all_parsers(config: Optional[AppConfig] = None, scanner: Optional[DirectoryScanner] = None) -> List[Parser]:
    """Instantiate every registered parser, sharing one directory scanner."""

    config = config or AppConfig()
    scanner = scanner or DirectoryScanner.from_config(config)
    return [parser_class(config=config, scanner=scanner) for parser_class in PARSER_CLASSES]


def select_parsers(parsers: Iterable[Parser], *, directory: bool = False, live: bool = False) -> List[Parser]:
    """Keep the parsers offering every requested capability."""

    return [
        parser
        for parser in parsers
        if (not directory or parser.can_parse_directory) and (not live or parser.can_parse_live_instance)
    ]
