"""Fake HTTP objects shared by the importer tests."""

from __future__ import annotations

from unittest.mock import MagicMock

import requests


def make_response(content: bytes = b"image-bytes", status: int = 200) -> MagicMock:
    """Build a fake ``requests.Response`` for a session mock."""
    resp = MagicMock()
    resp.status_code = status
    resp.content = content
    if status >= 400:
        resp.raise_for_status.side_effect = requests.HTTPError(f"{status} error")
    return resp


def make_session(routes: dict) -> MagicMock:
    """Session whose ``get`` answers from ``routes``; exceptions are raised."""
    session = MagicMock(spec=requests.Session)

    def _get(url, timeout=None):
        outcome = routes[url]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    session.get.side_effect = _get
    return session
