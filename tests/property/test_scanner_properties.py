from __future__ import annotations

import tempfile
from pathlib import Path
from typing import List, Set

from hypothesis import given, settings, strategies as st

from extraction import DirectoryScanner
from extraction.parsers import humanize_handle

segment = st.text(alphabet="abcdefgh_", min_size=1, max_size=4)
relative_dir = st.lists(segment, min_size=1, max_size=4).map("/".join)


def _with_ancestors(paths: List[str]) -> Set[str]:
    expanded: Set[str] = set()
    for path in paths:
        parts = path.split("/")
        expanded.update("/".join(parts[: index + 1]) for index in range(len(parts)))
    return expanded


@settings(max_examples=40, deadline=None)
@given(st.lists(relative_dir, max_size=8))
def test_scan_lists_every_directory_once_after_its_descendants(paths: List[str]) -> None:
    with tempfile.TemporaryDirectory() as tmp:
        root = Path(tmp)
        for path in paths:
            (root / path).mkdir(parents=True, exist_ok=True)
        structure = DirectoryScanner().scan(root)

    assert len(structure) == len(set(structure))
    assert set(structure) == _with_ancestors(paths)
    position = {path: index for index, path in enumerate(structure)}
    for path in structure:
        if "/" in path:
            assert position[path] < position[path.rsplit("/", 1)[0]]


@given(st.text(alphabet="abcXYZ_-/ ", max_size=20))
def test_humanize_handle_only_respaces_and_capitalises(handle: str) -> None:
    label = humanize_handle(handle)
    assert len(label) == len(handle)
    assert not set(label) & set("_-/")
    assert label.lower() == handle.lower().replace("_", " ").replace("-", " ").replace("/", " ")
    words = [word for word in label.split(" ") if word]
    assert all(word[0] == word[0].upper() for word in words)
