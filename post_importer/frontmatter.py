"""Frontmatter synthesis for imported posts."""

from __future__ import annotations

import datetime as dt
import json
import logging
from typing import Optional

from .config import ImportConfig
from .extract import MAX_SUMMARY_CHARS, extract_summary
from .models import FrontmatterRecord
from .summarizer import RemoteSummarizer
from .utils import truncate

logger = logging.getLogger("post_importer")

FRONTMATTER_DELIMITER = "---"
BYTE_ORDER_MARK = "\ufeff"


def has_frontmatter(content: str) -> bool:
    return content.lstrip().lstrip(BYTE_ORDER_MARK).lstrip().startswith(FRONTMATTER_DELIMITER)


def _quote(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def today() -> str:
    return dt.date.today().isoformat()


def describe(
    title: str,
    content: str,
    summarizer: Optional[RemoteSummarizer] = None,
) -> str:
    """Pick a description: remote summary, then the first paragraph, then the title."""
    if summarizer is not None:
        summary = summarizer.summarize(content)
        if summary:
            logger.debug("Using remote summary for '%s'", title)
            return summary
        logger.info("Remote summary unavailable for '%s'; using local excerpt", title)

    local = extract_summary(content)
    if local:
        if summarizer is None:
            return truncate(local, MAX_SUMMARY_CHARS)
        return local
    return title


def build_frontmatter(record: FrontmatterRecord) -> str:
    """Render the metadata block, including the trailing blank line."""
    lines = [
        FRONTMATTER_DELIMITER,
        f"title: {_quote(record.title)}",
        f"description: {_quote(record.description)}",
        f"pubDate: {_quote(record.pub_date)}",
        f"category: {_quote(record.category)}",
        f"tags: {json.dumps(record.tags, ensure_ascii=False)}",
        FRONTMATTER_DELIMITER,
    ]
    return "\n".join(lines) + "\n\n"


def apply_frontmatter(
    content: str,
    title: str,
    config: ImportConfig,
    summarizer: Optional[RemoteSummarizer] = None,
) -> str:
    """Prefix a synthesized metadata block unless the document already has one."""
    if has_frontmatter(content):
        return content
    record = FrontmatterRecord(
        title=title,
        description=describe(title, content, summarizer),
        pub_date=config.pub_date or today(),
        category=config.category,
        tags=[config.default_tag],
    )
    return build_frontmatter(record) + content
