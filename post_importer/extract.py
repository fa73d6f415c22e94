"""Plain-text heuristics for pulling a title and an excerpt out of markdown."""

from __future__ import annotations

import re
from typing import List

from bs4 import BeautifulSoup

UNTITLED = "Untitled Post"
MAX_TITLE_CHARS = 50
MIN_SUMMARY_CHARS = 20
MAX_SUMMARY_CHARS = 160

_HEADING_RE = re.compile(r"^#\s+(.*)$", re.MULTILINE)
_IMAGE_RE = re.compile(r"!\[.*?\]\(.*?\)")
_BOLD_RE = re.compile(r"(\*\*|__)(.*?)\1", re.DOTALL)
_STAR_ITALIC_RE = re.compile(r"\*(.+?)\*")
_UNDERSCORE_ITALIC_RE = re.compile(r"(?<!\w)_(.+?)_(?!\w)")
_BLOCKQUOTE_RE = re.compile(r"^\s*>\s?", re.MULTILINE)
_LINK_RE = re.compile(r"\[([^\]]*)\]\([^)]*\)")
_PARAGRAPH_SPLIT_RE = re.compile(r"\n\s*\n")


def extract_title(content: str) -> str:
    """Return the first H1, else the first non-image line, else a placeholder."""
    match = _HEADING_RE.search(content)
    if match and match.group(1).strip():
        return match.group(1).strip()

    for line in content.splitlines():
        line = line.strip()
        if line and not line.startswith("!"):
            return line[:MAX_TITLE_CHARS]
    return UNTITLED


def _strip_html(text: str) -> str:
    if "<" not in text:
        return text
    return BeautifulSoup(text, "html.parser").get_text()


def _plain_blocks(content: str) -> List[str]:
    text = _HEADING_RE.sub("", content, count=1)
    text = _IMAGE_RE.sub("", text)
    text = _strip_html(text)
    text = _BOLD_RE.sub(r"\2", text)
    text = _STAR_ITALIC_RE.sub(r"\1", text)
    text = _UNDERSCORE_ITALIC_RE.sub(r"\1", text)
    text = _BLOCKQUOTE_RE.sub("", text)
    text = _LINK_RE.sub(r"\1", text)
    return [" ".join(block.split()) for block in _PARAGRAPH_SPLIT_RE.split(text)]


def extract_summary(content: str) -> str:
    """Return the first paragraph long enough to serve as a description.

    Emphasis and links are unwrapped to their text, images and HTML tags are
    dropped. Blocks that open a frontmatter section are ignored. Returns an
    empty string when nothing qualifies.
    """
    for block in _plain_blocks(content):
        if len(block) > MIN_SUMMARY_CHARS and not block.startswith("---"):
            return block
    return ""
