"""Marker-call descriptions shared by both extraction strategies.

A keyword uses the xgettext ``--keyword`` syntax: ``t:1`` takes the message
from the first argument, ``t2:1,2`` reads a singular/plural pair and
``tc:1c,2`` reads the context from the first argument and the message from the
second one. The same :class:`Keyword` values are handed to xgettext and to the
built-in source scanner so both recognise exactly the same call shapes.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

_SPEC_RE = re.compile(r"^(?P<name>[A-Za-z_]\w*)(?::(?P<args>[0-9c, ]+))?$")


@dataclass(frozen=True)
class Keyword:
    """A marker function and the 1-based positions of its translatable arguments."""

    name: str
    singular: int = 1
    plural: Optional[int] = None
    context: Optional[int] = None

    def __post_init__(self) -> None:
        positions = [pos for pos in (self.singular, self.plural, self.context) if pos is not None]
        if any(pos < 1 for pos in positions):
            raise ValueError(f"argument positions of {self.name!r} must be >= 1")
        if len(set(positions)) != len(positions):
            raise ValueError(f"argument positions of {self.name!r} must be distinct")

    @classmethod
    def parse(cls, spec: str) -> "Keyword":
        match = _SPEC_RE.match(spec.strip())
        if match is None:
            raise ValueError(f"Invalid keyword spec {spec!r}")
        name = match.group("name")
        if match.group("args") is None:
            return cls(name)
        positions: List[int] = []
        context: Optional[int] = None
        for part in match.group("args").split(","):
            part = part.strip()
            if part.endswith("c"):
                if context is not None:
                    raise ValueError(f"Keyword spec {spec!r} declares two contexts")
                context = _position(spec, part[:-1])
            else:
                positions.append(_position(spec, part))
        if not 1 <= len(positions) <= 2:
            raise ValueError(f"Keyword spec {spec!r} needs one or two message positions")
        plural = positions[1] if len(positions) == 2 else None
        return cls(name, singular=positions[0], plural=plural, context=context)

    def as_xgettext(self) -> str:
        """Render the keyword as an xgettext ``--keyword`` value."""

        parts = {self.singular: str(self.singular)}
        if self.plural is not None:
            parts[self.plural] = str(self.plural)
        if self.context is not None:
            parts[self.context] = f"{self.context}c"
        return f"{self.name}:{','.join(parts[pos] for pos in sorted(parts))}"

    def __str__(self) -> str:
        return self.as_xgettext()


def _position(spec: str, text: str) -> int:
    if not text.isdigit():
        raise ValueError(f"Invalid keyword spec {spec!r}")
    return int(text)


def parse_keywords(specs: Iterable[str]) -> Dict[str, Keyword]:
    """Parse keyword specs into a name -> :class:`Keyword` mapping."""

    keywords: Dict[str, Keyword] = {}
    for spec in specs:
        keyword = Keyword.parse(spec)
        if keyword.name in keywords:
            raise ValueError(f"Keyword {keyword.name!r} is declared twice")
        keywords[keyword.name] = keyword
    return keywords
