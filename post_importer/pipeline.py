"""High-level orchestration for turning source documents into posts."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Iterable, List, Optional, Union

import requests

from .config import ImportConfig
from .errors import SlugCollisionError
from .extract import extract_title
from .frontmatter import apply_frontmatter, has_frontmatter
from .images import find_image_references, relocate_images, rewrite_images
from .models import ImportResult, SourceDocument
from .summarizer import RemoteSummarizer
from .utils import is_generic_slug, slugify

logger = logging.getLogger("post_importer")

POST_FILENAME = "index.md"
FALLBACK_SLUG = "untitled"


def derive_slug(document: SourceDocument) -> str:
    """Slug from the filename, or from the content title for generic filenames."""
    slug = slugify(document.name)
    if not slug or is_generic_slug(slug):
        slug = slugify(extract_title(document.content))
    return slug or FALLBACK_SLUG


def load_document(path: Path, source_dir: Optional[Path] = None) -> SourceDocument:
    return SourceDocument(
        content=path.read_text(encoding="utf-8-sig"),
        name=path.name,
        path=path,
        source_dir=source_dir,
    )


def collect_markdown_files(directory: Path) -> List[Path]:
    """List ``*.md`` files directly inside ``directory``, sorted by name."""
    return sorted(
        entry for entry in directory.iterdir() if entry.is_file() and entry.suffix == ".md"
    )


def prepare_post_dir(config: ImportConfig, slug: str) -> Path:
    """Create the post directory, refusing to clobber an existing post."""
    post_dir = config.content_root / slug
    output_path = post_dir / POST_FILENAME
    if output_path.exists() and not config.overwrite:
        raise SlugCollisionError(slug, output_path)
    if output_path.exists():
        logger.warning("Overwriting existing post %s", output_path)
    post_dir.mkdir(parents=True, exist_ok=True)
    return post_dir


async def import_document(
    document: SourceDocument,
    config: ImportConfig,
    summarizer: Optional[RemoteSummarizer] = None,
    session: Optional[requests.Session] = None,
) -> ImportResult:
    """Run one document through slugging, image relocation and frontmatter synthesis."""
    logger.info("Processing %s", document.label)
    slug = derive_slug(document)
    post_dir = prepare_post_dir(config, slug)

    references = find_image_references(document.content)
    relocated, failed = await relocate_images(
        references,
        post_dir,
        source_dir=document.source_dir,
        session=session,
        timeout=config.request_timeout,
    )
    content = rewrite_images(document.content, relocated)
    if references:
        logger.info(
            "Relocated %d of %d image(s) for %s", len(relocated), len(references), slug
        )

    frontmatter_added = not has_frontmatter(content)
    if frontmatter_added:
        title = extract_title(content)
        content = await asyncio.to_thread(
            apply_frontmatter, content, title, config, summarizer
        )

    output_path = post_dir / POST_FILENAME
    output_path.write_text(content, encoding="utf-8")
    logger.info("Saved post to %s", output_path)
    return ImportResult(
        source=document.label,
        slug=slug,
        output_path=output_path,
        images_relocated=len(relocated),
        images_failed=failed,
        frontmatter_added=frontmatter_added,
    )


async def run_import(
    sources: Iterable[Union[SourceDocument, Path]],
    config: ImportConfig,
    source_dir: Optional[Path] = None,
    summarizer: Optional[RemoteSummarizer] = None,
    session: Optional[requests.Session] = None,
) -> List[ImportResult]:
    """Import documents one after another; a failing document does not stop the run.

    Paths are read lazily, so an unreadable file is skipped like any other
    failure. Local images of a path resolve against ``source_dir`` when given,
    otherwise against the file's own directory.
    """
    results: List[ImportResult] = []
    for source in sources:
        label = source.label if isinstance(source, SourceDocument) else str(source)
        try:
            if isinstance(source, SourceDocument):
                document = source
            else:
                document = load_document(source, source_dir or source.parent)
            result = await import_document(document, config, summarizer, session)
        except Exception:  # pylint: disable=broad-except
            logger.exception("Failed to process %s", label)
            continue
        results.append(result)
    return results
