"""Image discovery, relocation and link rewriting."""

from __future__ import annotations

import asyncio
import logging
import re
import shutil
import uuid
from pathlib import Path, PurePosixPath
from typing import Dict, List, Optional, Tuple
from urllib.parse import unquote, urlparse

import requests
from filetype import guess

from .models import ImageReference, RelocatedImage

logger = logging.getLogger("post_importer")

IMAGE_PATTERN = re.compile(r'!\[(.*?)\]\((.*?)(?:\s+"(.*?)")?\)')
DEFAULT_EXTENSION = ".jpg"


def find_image_references(content: str) -> List[ImageReference]:
    """Scan markdown for image syntax and return the matches in document order."""
    return [
        ImageReference(
            snippet=match.group(0),
            alt=match.group(1),
            target=match.group(2).strip(),
            title=match.group(3),
            start=match.start(),
            end=match.end(),
        )
        for match in IMAGE_PATTERN.finditer(content)
    ]


def detect_image_extension(data: bytes) -> Optional[str]:
    """Detect image type using filetype; returns a dotted lowercase extension."""
    kind = guess(data)
    if kind and kind.mime.startswith("image/"):
        ext = kind.extension.lower()
        if ext == "jpeg":
            ext = "jpg"
        return f".{ext}"
    return None


def url_extension(url: str) -> str:
    return PurePosixPath(urlparse(url).path).suffix.lower()


def download_image(
    session: requests.Session,
    url: str,
    post_dir: Path,
    timeout: Optional[float] = None,
) -> str:
    """Fetch ``url`` into ``post_dir`` under a random name and return that name."""
    resp = session.get(url, timeout=timeout)
    resp.raise_for_status()
    data = resp.content

    extension = url_extension(url) or detect_image_extension(data) or DEFAULT_EXTENSION
    filename = f"img-{uuid.uuid4().hex[:8]}{extension}"
    (post_dir / filename).write_bytes(data)
    return filename


async def _fetch_remote(
    session: requests.Session,
    url: str,
    post_dir: Path,
    timeout: Optional[float],
) -> Optional[str]:
    logger.info("Downloading image %s", url[:80])
    try:
        return await asyncio.to_thread(download_image, session, url, post_dir, timeout)
    except requests.RequestException as exc:
        logger.warning("Failed to fetch image %s: %s", url, exc)
    except OSError as exc:
        logger.warning("Failed to write image %s: %s", url, exc)
    return None


def resolve_local_image(reference: ImageReference, source_dir: Path) -> Path:
    return (source_dir / unquote(reference.target)).resolve()


def copy_local_image(source: Path, post_dir: Path) -> str:
    """Copy an image next to the post, keeping its base filename."""
    destination = post_dir / source.name
    shutil.copyfile(source, destination)
    return destination.name


async def relocate_images(
    references: List[ImageReference],
    post_dir: Path,
    source_dir: Optional[Path] = None,
    session: Optional[requests.Session] = None,
    timeout: Optional[float] = None,
) -> Tuple[List[RelocatedImage], int]:
    """Move every referenced image into ``post_dir``.

    Remote images are fetched concurrently and the whole batch is awaited before
    returning. Local images are copied as they are encountered, and only when the
    document's source directory is known. Returns the successfully relocated
    images and the number of occurrences that failed.
    """
    relocated: List[RelocatedImage] = []
    failed = 0
    pending: Dict[str, List[ImageReference]] = {}
    tasks: Dict[str, "asyncio.Task[Optional[str]]"] = {}
    copied: Dict[str, Path] = {}

    for reference in references:
        if reference.is_remote:
            if reference.target not in tasks:
                if session is None:
                    session = requests.Session()
                tasks[reference.target] = asyncio.create_task(
                    _fetch_remote(session, reference.target, post_dir, timeout)
                )
            pending.setdefault(reference.target, []).append(reference)
            continue

        if source_dir is None:
            logger.debug("Skipping local image %s: source directory unknown", reference.target)
            continue
        try:
            source = resolve_local_image(reference, source_dir)
            previous = copied.get(source.name)
            if previous is not None and previous != source:
                logger.warning(
                    "Image %s replaces %s in %s: both are named %s",
                    source,
                    previous,
                    post_dir,
                    source.name,
                )
            filename = copy_local_image(source, post_dir)
            copied[filename] = source
        except (OSError, ValueError) as exc:
            logger.warning("Failed to copy image %s: %s", reference.target, exc)
            failed += 1
            continue
        relocated.append(RelocatedImage(reference=reference, filename=filename))

    if tasks:
        urls = list(tasks)
        filenames = await asyncio.gather(*(tasks[url] for url in urls))
        for url, filename in zip(urls, filenames):
            if filename is None:
                failed += len(pending[url])
                continue
            relocated.extend(
                RelocatedImage(reference=reference, filename=filename)
                for reference in pending[url]
            )

    relocated.sort(key=lambda image: image.reference.start)
    return relocated, failed


def rewrite_images(content: str, relocated: List[RelocatedImage]) -> str:
    """Build a new document with each relocated occurrence pointing at its local copy.

    Replacement works on match offsets, so repeated snippets are rewritten
    individually and occurrences that failed stay untouched.
    """
    if not relocated:
        return content
    parts: List[str] = []
    cursor = 0
    for image in sorted(relocated, key=lambda item: item.reference.start):
        parts.append(content[cursor : image.reference.start])
        parts.append(image.markdown)
        cursor = image.reference.end
    parts.append(content[cursor:])
    return "".join(parts)
