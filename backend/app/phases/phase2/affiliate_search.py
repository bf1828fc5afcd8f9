"""
Phase 2: Affiliate search.

Looks up the extracted service name on Serper with Japanese affiliate-program
keywords, keeps provider relevance order and returns at most `max_results`
candidates. Never raises: a missing key or a failed call comes back as an
AffiliateSearchOutcome with status skipped/failed.
"""

import logging
from typing import Callable, Optional

import requests

from app.phases.phase2.clients import search_serper
from app.phases.phase2.schemas import AffiliateCandidate, AffiliateSearchOutcome, SearchStatus

logger = logging.getLogger(__name__)

# "affiliate" + "ASP" (affiliate service provider), biases results toward affiliate networks
AFFILIATE_KEYWORDS = "アフィリエイト ASP"
MAX_AFFILIATE_RESULTS = 5


def build_affiliate_query(service_name: str) -> str:
    return f"{service_name.strip()} {AFFILIATE_KEYWORDS}"


def _to_candidate(item: dict) -> AffiliateCandidate:
    return AffiliateCandidate(
        title=str(item.get("title") or ""),
        link=str(item.get("link") or ""),
        snippet=str(item.get("snippet") or ""),
    )


class AffiliateSearcher:
    def __init__(
        self,
        api_key: str = "",
        country: str = "jp",
        language: str = "ja",
        max_results: int = MAX_AFFILIATE_RESULTS,
        timeout: Optional[float] = 10.0,
        search_fn: Callable[..., list[dict]] = search_serper,
    ):
        self.api_key = api_key
        self.country = country
        self.language = language
        self.max_results = max_results
        self.timeout = timeout
        self._search_fn = search_fn

    def search(self, service_name: str) -> AffiliateSearchOutcome:
        if not self.api_key:
            return AffiliateSearchOutcome(status=SearchStatus.SKIPPED, error="SERPER_API_KEY not set")

        query = build_affiliate_query(service_name)
        try:
            organic = self._search_fn(
                query,
                api_key=self.api_key,
                country=self.country,
                language=self.language,
                timeout=self.timeout,
            )
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else "?"
            return AffiliateSearchOutcome(
                status=SearchStatus.FAILED, query=query, error=f"HTTP {status}: {e}"
            )
        except Exception as e:
            return AffiliateSearchOutcome(status=SearchStatus.FAILED, query=query, error=str(e))

        candidates = [_to_candidate(item) for item in organic][: self.max_results]
        logger.debug("Serper returned %d organic results for %r", len(organic), query)
        return AffiliateSearchOutcome(status=SearchStatus.OK, query=query, candidates=candidates)
