"""Configuration objects and constants for the importer."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

DEFAULT_CONTENT_ROOT = Path("src/content/posts")
DEFAULT_API_BASE = "https://api.openai.com/v1"
DEFAULT_MODEL_ID = "gpt-4o-mini"
DEFAULT_TAG = "Youmind"
DEFAULT_CATEGORY = "Imported"


@dataclass
class ImportConfig:
    """Settings threaded through every stage of an import run."""

    content_root: Path
    pub_date: Optional[str] = None
    overwrite: bool = False
    request_timeout: Optional[float] = 30.0
    api_key: Optional[str] = None
    api_base: str = DEFAULT_API_BASE
    model: str = DEFAULT_MODEL_ID
    default_tag: str = DEFAULT_TAG
    category: str = DEFAULT_CATEGORY

    @property
    def summary_enabled(self) -> bool:
        return bool(self.api_key)

    @classmethod
    def from_env(cls, content_root: Path, **overrides: Any) -> "ImportConfig":
        """Build a config from OPENAI_* environment variables plus overrides."""
        values: dict[str, Any] = {
            "api_key": os.getenv("OPENAI_API_KEY") or None,
            "api_base": os.getenv("OPENAI_BASE_URL") or DEFAULT_API_BASE,
            "model": os.getenv("OPENAI_MODEL") or DEFAULT_MODEL_ID,
        }
        values.update(overrides)
        return cls(content_root=content_root, **values)
