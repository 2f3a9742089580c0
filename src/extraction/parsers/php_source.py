"""Built-in scanner for gettext marker calls in PHP source files.

Used when xgettext is not installed. Sources are parsed with the tree-sitter
PHP grammar, so text outside ``<?php ... ?>`` regions, comments and strings
never produce calls. A marker call is extracted when every argument its
:class:`~extraction.keywords.Keyword` needs is a constant string: a quoted
literal without interpolation, a heredoc/nowdoc, or several of those joined
with ``.``.

Context, singular and plural text match what xgettext produces. Line numbers
point at the first line of the singular argument, and comment capture only
looks at the closest tagged comment ending on the call's line or the line
before it.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, List, Mapping, Optional, Sequence

import tree_sitter_php
from tree_sitter import Language, Node, Parser

from catalog import Reference, TranslationCatalog
from utils.logging import get_logger

from ..errors import ExtractionError
from ..keywords import Keyword

LOGGER = get_logger(__name__)

PHP_LANGUAGE = Language(tree_sitter_php.language_php())

_DOUBLE_QUOTED_ESCAPE = re.compile(
    r"\\(?:(?P<simple>[nrtvef\\$\"])|(?P<octal>[0-7]{1,3})|x(?P<hex>[0-9A-Fa-f]{1,2})|u\{(?P<unicode>[0-9A-Fa-f]+)\})"
)
_SINGLE_QUOTED_ESCAPE = re.compile(r"\\([\\'])")
_HEREDOC = re.compile(
    r"<<<[ \t]*(?P<quote>[\"']?)(?P<label>[A-Za-z_]\w*)(?P=quote)\r?\n"
    r"(?:(?P<body>.*?)\r?\n)?(?P<indent>[ \t]*)(?P=label)$",
    re.DOTALL,
)
_SIMPLE_ESCAPES = {
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
    "e": "\x1b",
    "f": "\f",
    "\\": "\\",
    "$": "$",
    '"': '"',
}
# named nodes allowed inside a double-quoted string or heredoc without making it dynamic
_CONSTANT_STRING_PARTS = frozenset(
    {"string_content", "string_value", "escape_sequence", "heredoc_start", "heredoc_body", "heredoc_end",
     "nowdoc_body", "nowdoc_string"}
)


@dataclass
class ExtractedMessage:
    """One marker call found in source text."""

    singular: str
    line: int
    plural: Optional[str] = None
    context: Optional[str] = None
    comments: List[str] = field(default_factory=list)


def decode_string(literal: str) -> str:
    """Return the value of a quoted PHP string literal."""

    if literal[:1] in ("b", "B"):
        literal = literal[1:]
    body = literal[1:-1]
    if literal[0] == "'":
        return _SINGLE_QUOTED_ESCAPE.sub(r"\1", body)
    return _DOUBLE_QUOTED_ESCAPE.sub(_replace_escape, body)


def decode_heredoc(literal: str) -> Optional[str]:
    """Return the value of a heredoc or nowdoc, or ``None`` if it is malformed."""

    match = _HEREDOC.match(literal)
    if match is None:
        return None
    indent = match.group("indent")
    lines = (match.group("body") or "").split("\n")
    if indent:
        lines = [line[len(indent):] if line.startswith(indent) else line.lstrip(" \t") for line in lines]
    body = "\n".join(lines)
    if match.group("quote") == "'":
        return body
    return _DOUBLE_QUOTED_ESCAPE.sub(_replace_escape, body)


def _replace_escape(match: "re.Match[str]") -> str:
    if match.group("simple") is not None:
        return _SIMPLE_ESCAPES[match.group("simple")]
    if match.group("octal") is not None:
        return chr(int(match.group("octal"), 8) & 0xFF)
    if match.group("hex") is not None:
        return chr(int(match.group("hex"), 16))
    codepoint = int(match.group("unicode"), 16)
    return chr(codepoint) if codepoint <= 0x10FFFF else match.group()


def _comment_text(text: str) -> str:
    if text.startswith("/*"):
        body = text[2:-2] if text.endswith("*/") else text[2:]
        lines = [line.strip().lstrip("*").strip() for line in body.splitlines()]
        return "\n".join(line for line in lines if line)
    return text.lstrip("/#").strip()


def _text(node: Node) -> str:
    return node.text.decode("utf-8", errors="replace")


def _is_constant(node: Node) -> bool:
    return all(child.type in _CONSTANT_STRING_PARTS and _is_constant(child) for child in node.named_children)


def _literal(node: Optional[Node]) -> Optional[str]:
    """Return the value of a constant string expression, or ``None``."""

    if node is None:
        return None
    if node.type == "string":
        return decode_string(_text(node))
    if node.type == "encapsed_string":
        return decode_string(_text(node)) if _is_constant(node) else None
    if node.type in ("heredoc", "nowdoc"):
        return decode_heredoc(_text(node)) if _is_constant(node) else None
    if node.type == "binary_expression":
        operator = node.child_by_field_name("operator")
        if operator is None or _text(operator) != ".":
            return None
        left = _literal(node.child_by_field_name("left"))
        right = _literal(node.child_by_field_name("right"))
        if left is None or right is None:
            return None
        return left + right
    return None


def _call_arguments(call: Node) -> List[Optional[Node]]:
    """Return the expression of each positional argument; named or spread arguments map to ``None``."""

    arguments = call.child_by_field_name("arguments")
    if arguments is None:
        return []
    values: List[Optional[Node]] = []
    for argument in arguments.named_children:
        if argument.type == "comment":
            continue
        if argument.type != "argument":
            values.append(None)
            continue
        if argument.child_by_field_name("name") is not None:
            values.append(None)
            continue
        expressions = [child for child in argument.named_children if child.type != "comment"]
        expression = expressions[-1] if expressions else None
        values.append(None if expression is None or expression.type == "variadic_unpacking" else expression)
    return values


def _walk(root: Node) -> Iterator[Node]:
    """Yield the named nodes below ``root`` in document order."""

    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.named_children))


class PhpSourceScanner:
    """Find marker calls in PHP source using an explicit keyword mapping."""

    def __init__(self, keywords: Mapping[str, Keyword], comment_tag: Optional[str] = "i18n") -> None:
        self.keywords = dict(keywords)
        self.comment_tag = comment_tag
        self.parser = Parser(PHP_LANGUAGE)

    def scan(self, source: str) -> Iterator[ExtractedMessage]:
        tree = self.parser.parse(source.encode("utf-8"))
        pending: Optional[Node] = None
        for node in _walk(tree.root_node):
            if node.type == "comment":
                if self._is_tagged(node):
                    pending = node
                continue
            if node.type != "function_call_expression":
                continue
            keyword = self._keyword(node)
            if keyword is None:
                continue
            message = self._build(keyword, _call_arguments(node))
            if message is None:
                continue
            if pending is not None and node.start_point[0] + 1 - self._end_line(pending) <= 1:
                message.comments.append(_comment_text(_text(pending)))
                pending = None
            yield message

    def extract_files(self, root: str, files: Sequence[str]) -> TranslationCatalog:
        """Scan ``files`` (relative to ``root``) into a new catalog."""

        catalog = TranslationCatalog()
        for relative in files:
            path = Path(root) / relative
            try:
                source = path.read_text(encoding="utf-8", errors="ignore")
            except OSError as exc:
                raise ExtractionError(f"Unable to read {path}: {exc}") from exc
            for message in self.scan(source):
                entry = catalog.insert(message.context, message.singular, message.plural)
                entry.occurrences.append(Reference(path=relative, line=message.line).as_occurrence())
                for comment in message.comments:
                    lines = entry.comment.splitlines() if entry.comment else []
                    if comment not in lines:
                        entry.comment = "\n".join(lines + [comment])
        LOGGER.debug("Built-in scanner found %d strings in %d files", len(catalog), len(files))
        return catalog

    def _keyword(self, call: Node) -> Optional[Keyword]:
        function = call.child_by_field_name("function")
        if function is None or function.type != "name":
            return None
        return self.keywords.get(_text(function))

    def _is_tagged(self, node: Node) -> bool:
        return bool(self.comment_tag) and _comment_text(_text(node)).startswith(self.comment_tag)

    @staticmethod
    def _end_line(node: Node) -> int:
        return node.start_point[0] + 1 + _text(node).rstrip().count("\n")

    @staticmethod
    def _build(keyword: Keyword, arguments: List[Optional[Node]]) -> Optional[ExtractedMessage]:
        def argument(position: Optional[int]) -> Optional[Node]:
            if position is None or position > len(arguments):
                return None
            return arguments[position - 1]

        singular_node = argument(keyword.singular)
        singular = _literal(singular_node)
        if not singular:
            return None
        message = ExtractedMessage(singular=singular, line=singular_node.start_point[0] + 1)
        if keyword.plural is not None:
            message.plural = _literal(argument(keyword.plural))
            if message.plural is None:
                return None
        if keyword.context is not None:
            message.context = _literal(argument(keyword.context))
            if message.context is None:
                return None
        return message
