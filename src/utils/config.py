"""Configuration helpers for c5tl."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import BaseModel, Field, field_validator


class AppConfig(BaseModel):
    """Application level configuration."""

    source_extension: str = ".php"
    source_language: str = "PHP"
    keywords: List[str] = Field(default_factory=lambda: ["t:1", "t2:1,2", "tc:1c,2"])
    comment_tag: str = "i18n"
    excluded_dirs: List[str] = Field(default_factory=lambda: ["vendor", "3rdparty"])
    follow_symlinks: bool = True
    xgettext: str = "xgettext"
    use_external_tool: bool = True
    temp_dir: Optional[Path] = None
    template_context: str = "TemplateFileName"

    @field_validator("source_extension")
    @classmethod
    def validate_extension(cls, value: str) -> str:
        value = value.strip()
        if not value or value == ".":
            raise ValueError("source_extension must not be empty")
        return value if value.startswith(".") else f".{value}"

    @field_validator("keywords")
    @classmethod
    def validate_keywords(cls, value: List[str]) -> List[str]:
        if not value:
            raise ValueError("at least one keyword is required")
        return value


def load_config(path: Optional[Path]) -> AppConfig:
    """Load configuration from a YAML file, falling back to defaults."""

    data: Dict[str, Any] = {}
    if path is not None and path.exists():
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    return AppConfig(**data)
