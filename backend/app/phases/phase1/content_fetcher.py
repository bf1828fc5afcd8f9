"""
Phase 1, Task 1.1: Content Fetch.

Firecrawl scrape client. Uses FIRECRAWL_API_KEY. Reuses a single requests.Session for performance.

Asks Firecrawl for a markdown rendering of the page; the markdown is what the
extractor reads.
"""

import logging
from typing import Optional

import requests

from app.errors import FetchError

logger = logging.getLogger(__name__)

NO_MARKDOWN_MESSAGE = "Failed to scrape content from URL (No markdown returned)"

# Reuse session for connection pooling and lower latency
_session: Optional[requests.Session] = None


def _get_session() -> requests.Session:
    global _session
    if _session is None:
        _session = requests.Session()
    return _session


class ContentFetcher:
    """Fetches a page as markdown via the Firecrawl scrape endpoint."""

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.firecrawl.dev",
        timeout: Optional[float] = 60.0,
        session: Optional[requests.Session] = None,
    ):
        if not api_key:
            raise ValueError("FIRECRAWL_API_KEY environment variable is required")
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = session

    def render(self, url: str) -> dict:
        """Raw Firecrawl call. Returns the `data` object of the scrape response."""
        session = self._session or _get_session()
        response = session.post(
            f"{self.base_url}/v1/scrape",
            json={"url": url, "formats": ["markdown"]},
            headers={
                "Authorization": f"Bearer {self.api_key}",
                "Content-Type": "application/json",
            },
            timeout=self.timeout,
        )
        response.raise_for_status()
        body = response.json()
        if not body.get("success", True):
            raise RuntimeError(body.get("error") or "scrape reported success=false")
        data = body.get("data")
        return data if isinstance(data, dict) else {}

    def fetch(self, url: str) -> str:
        if not url or not url.strip():
            raise FetchError("URL is required")

        logger.info("Starting scrape for: %s", url)
        try:
            data = self.render(url)
        except Exception as e:
            logger.error("Firecrawl error for %s: %s", url, e)
            raise FetchError(f"Firecrawl failed: {e}") from e

        markdown = data.get("markdown")
        if not isinstance(markdown, str) or not markdown.strip():
            logger.error("Scrape response missing markdown for %s (keys: %s)", url, sorted(data))
            raise FetchError(NO_MARKDOWN_MESSAGE)

        logger.info("Scrape successful, length: %d", len(markdown))
        return markdown
