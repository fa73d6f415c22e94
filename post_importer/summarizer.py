"""Optional remote summaries from an OpenAI-compatible chat completions endpoint."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import requests

from .config import ImportConfig

logger = logging.getLogger("post_importer")

MAX_INPUT_CHARS = 3000
SUMMARY_TEMPERATURE = 0.3
SUMMARY_MAX_TOKENS = 120

SYSTEM_PROMPT = (
    "You write descriptions for blog posts. Summarize the article in one short sentence "
    "of at most 30 words, in the same language as the article. "
    "Reply with the sentence only, without quotes or a preamble."
)


class RemoteSummarizer:
    """Single-shot client; every failure is reported as ``None``."""

    def __init__(
        self,
        api_key: str,
        api_base: str,
        model: str,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.api_key = api_key
        self.api_base = api_base.rstrip("/")
        self.model = model
        self.timeout = timeout
        self._session = session or requests.Session()

    @classmethod
    def from_config(
        cls,
        config: ImportConfig,
        session: Optional[requests.Session] = None,
    ) -> Optional["RemoteSummarizer"]:
        """Return a summarizer, or ``None`` when no API key is configured."""
        if not config.summary_enabled:
            return None
        return cls(
            config.api_key or "",
            config.api_base,
            config.model,
            timeout=config.request_timeout,
            session=session,
        )

    @property
    def endpoint(self) -> str:
        return f"{self.api_base}/chat/completions"

    def _build_payload(self, content: str) -> Dict[str, Any]:
        messages: List[Dict[str, str]] = [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": content[:MAX_INPUT_CHARS]},
        ]
        return {
            "model": self.model,
            "messages": messages,
            "temperature": SUMMARY_TEMPERATURE,
            "max_tokens": SUMMARY_MAX_TOKENS,
        }

    def summarize(self, content: str) -> Optional[str]:
        """Ask the endpoint for a one-sentence summary of ``content``."""
        try:
            resp = self._session.post(
                self.endpoint,
                json=self._build_payload(content),
                headers={"Authorization": f"Bearer {self.api_key}"},
                timeout=self.timeout,
            )
            resp.raise_for_status()
            summary = resp.json()["choices"][0]["message"]["content"]
        except requests.RequestException as exc:
            logger.warning("Summary request to %s failed: %s", self.endpoint, exc)
            return None
        except (ValueError, KeyError, IndexError, TypeError) as exc:
            logger.warning("Unexpected summary response from %s: %s", self.endpoint, exc)
            return None

        if not isinstance(summary, str) or not summary.strip():
            logger.warning("Summary response from %s was empty", self.endpoint)
            return None
        return summary.strip().strip('"').strip()
