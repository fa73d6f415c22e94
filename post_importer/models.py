"""Data models used throughout the import pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

CLIPBOARD_DOCUMENT_NAME = "temp_clipboard_import.md"


@dataclass
class SourceDocument:
    """Raw markdown content plus where it came from."""

    content: str
    name: str
    path: Optional[Path] = None
    source_dir: Optional[Path] = None

    @classmethod
    def from_clipboard(cls, content: str) -> "SourceDocument":
        return cls(content=content, name=CLIPBOARD_DOCUMENT_NAME)

    @property
    def label(self) -> str:
        return str(self.path) if self.path else self.name


@dataclass(frozen=True)
class ImageReference:
    """One `![alt](target "title")` occurrence found while scanning a document."""

    snippet: str
    alt: str
    target: str
    title: Optional[str]
    start: int
    end: int

    @property
    def is_remote(self) -> bool:
        return self.target.startswith(("http://", "https://"))


@dataclass(frozen=True)
class RelocatedImage:
    """Image reference whose file now lives inside the post directory."""

    reference: ImageReference
    filename: str

    @property
    def markdown(self) -> str:
        title = f' "{self.reference.title}"' if self.reference.title else ""
        return f"![{self.reference.alt}](./{self.filename}{title})"


@dataclass
class FrontmatterRecord:
    """Metadata header synthesized for documents that lack one."""

    title: str
    description: str
    pub_date: str
    category: str
    tags: List[str] = field(default_factory=list)


@dataclass
class ImportResult:
    """Outcome of importing a single document."""

    source: str
    slug: str
    output_path: Path
    images_relocated: int
    images_failed: int
    frontmatter_added: bool
