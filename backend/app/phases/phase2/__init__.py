"""Phase 2: Affiliate Enrichment."""

from .affiliate_search import AffiliateSearcher, build_affiliate_query
from .clients import search_serper
from .schemas import AffiliateCandidate, AffiliateSearchOutcome, AnalysisResult, SearchStatus

__all__ = [
    "AffiliateSearcher",
    "build_affiliate_query",
    "search_serper",
    "AffiliateCandidate",
    "AffiliateSearchOutcome",
    "AnalysisResult",
    "SearchStatus",
]
