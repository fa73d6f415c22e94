"""Utility helpers for slug derivation and string trimming."""

from __future__ import annotations

import re

DATE_PREFIX_PATTERN = re.compile(r"^[0-9]{4}-[0-9]{2}-[0-9]{2}-")
SLUG_PATTERN = re.compile(r"[^a-z0-9一-龥]+")
MARKDOWN_SUFFIX_PATTERN = re.compile(r"\.md$")

GENERIC_SLUGS = frozenset({"draft", "temp", "input", "temp-clipboard-import"})


def slugify(value: str) -> str:
    """Turn a filename or title into a lowercase, hyphen-delimited path segment.

    ASCII letters, digits and common CJK ideographs survive; every other run of
    characters collapses into a single hyphen. The result can be empty.
    """
    normalized = value.lower()
    normalized = MARKDOWN_SUFFIX_PATTERN.sub("", normalized)
    normalized = DATE_PREFIX_PATTERN.sub("", normalized)
    return SLUG_PATTERN.sub("-", normalized).strip("-")


def is_generic_slug(slug: str) -> bool:
    return slug in GENERIC_SLUGS


def truncate(value: str, max_chars: int, marker: str = "...") -> str:
    """Cut ``value`` to at most ``max_chars`` characters, ending with ``marker``."""
    value = value.strip()
    if len(value) <= max_chars:
        return value
    return value[: max_chars - len(marker)].rstrip() + marker
