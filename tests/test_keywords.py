from __future__ import annotations

import pytest

from extraction import Keyword, parse_keywords


def test_parse_default_marker_specs() -> None:
    keywords = parse_keywords(["t:1", "t2:1,2", "tc:1c,2"])
    assert keywords["t"] == Keyword("t", singular=1)
    assert keywords["t2"] == Keyword("t2", singular=1, plural=2)
    assert keywords["tc"] == Keyword("tc", singular=2, context=1)


def test_keyword_renders_xgettext_syntax() -> None:
    assert Keyword.parse("tc:1c,2").as_xgettext() == "tc:1c,2"
    assert Keyword.parse("t2:1,2").as_xgettext() == "t2:1,2"
    assert Keyword.parse("gettext").as_xgettext() == "gettext:1"
    assert str(Keyword("dpgettext", singular=3, context=2)) == "dpgettext:2c,3"


@pytest.mark.parametrize("spec", ["", "t:", "t:0", "t:1,1", "t:1c", "t:1,2,3", "tc:1c,2c,3", "2t:1", "t:x"])
def test_invalid_specs_are_rejected(spec: str) -> None:
    with pytest.raises(ValueError):
        Keyword.parse(spec)


def test_duplicate_keyword_names_are_rejected() -> None:
    with pytest.raises(ValueError):
        parse_keywords(["t:1", "t:2"])
