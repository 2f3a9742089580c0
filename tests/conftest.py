from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable, Iterable, Mapping

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
for candidate in (PROJECT_ROOT / "src", PROJECT_ROOT):
    if str(candidate) not in sys.path:
        sys.path.insert(0, str(candidate))

from utils.config import AppConfig  # noqa: E402


def build_tree(root: Path, directories: Iterable[str] = (), files: Mapping[str, str] | None = None) -> Path:
    for directory in directories:
        (root / directory).mkdir(parents=True, exist_ok=True)
    for name, content in (files or {}).items():
        path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return root


@pytest.fixture
def make_tree(tmp_path: Path) -> Callable[..., Path]:
    def _make(directories: Iterable[str] = (), files: Mapping[str, str] | None = None, name: str = "tree") -> Path:
        return build_tree(tmp_path / name, directories, files)

    (tmp_path / "tree").mkdir()
    return _make


@pytest.fixture
def builtin_config() -> AppConfig:
    return AppConfig(use_external_tool=False)
