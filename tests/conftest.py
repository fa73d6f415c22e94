"""Shared fixtures for importer tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from post_importer.config import ImportConfig


@pytest.fixture(autouse=True)
def _no_api_key(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("OPENAI_API_KEY", "OPENAI_BASE_URL", "OPENAI_MODEL"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def config(tmp_path: Path) -> ImportConfig:
    return ImportConfig(content_root=tmp_path / "posts", pub_date="2024-01-01")
