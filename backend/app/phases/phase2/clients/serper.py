"""
Serper Search API client. Uses SERPER_API_KEY. Reuses a single requests.Session for performance.
"""

from typing import Optional

import requests

SERPER_SEARCH_URL = "https://google.serper.dev/search"

# Reuse session for connection pooling and lower latency
_session: Optional[requests.Session] = None


def _get_session() -> requests.Session:
    global _session
    if _session is None:
        _session = requests.Session()
    return _session


def search_serper(
    query: str,
    api_key: str,
    country: str = "jp",
    language: str = "ja",
    timeout: Optional[float] = 10.0,
    session: Optional[requests.Session] = None,
) -> list[dict]:
    """
    One Serper search. Returns the raw `organic` entries in provider order.

    Raises requests.exceptions.RequestException on transport errors and
    non-2xx statuses, ValueError on a body that is not JSON.
    """
    if not api_key:
        raise ValueError("SERPER_API_KEY environment variable is required")

    request_data = {"q": query, "gl": country, "hl": language}
    headers = {"X-API-KEY": api_key, "Content-Type": "application/json"}

    response = (session or _get_session()).post(
        SERPER_SEARCH_URL,
        json=request_data,
        headers=headers,
        timeout=timeout,
    )
    response.raise_for_status()
    data = response.json()
    organic = data.get("organic") if isinstance(data, dict) else None
    return [item for item in organic or [] if isinstance(item, dict)]
