"""Exceptions raised by the importer."""

from __future__ import annotations

from pathlib import Path


class ImporterError(Exception):
    """Base class for importer failures."""


class SlugCollisionError(ImporterError):
    """The target post already exists and overwriting was not requested."""

    def __init__(self, slug: str, output_path: Path) -> None:
        super().__init__(
            f"Post '{slug}' already exists at {output_path}; use --overwrite to replace it"
        )
        self.slug = slug
        self.output_path = output_path


class ClipboardError(ImporterError):
    """The system clipboard could not be read."""
