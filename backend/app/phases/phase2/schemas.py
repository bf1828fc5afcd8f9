from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from app.phases.phase1.schemas import ExtractedListing


class AffiliateCandidate(BaseModel):
    title: str = ""
    link: str = ""
    snippet: str = ""


class SearchStatus(str, Enum):
    OK = "ok"
    SKIPPED = "skipped"
    FAILED = "failed"


class AffiliateSearchOutcome(BaseModel):
    """Enrichment result; `skipped` and `failed` both mean no candidates, for different reasons."""

    status: SearchStatus
    query: Optional[str] = None
    candidates: list[AffiliateCandidate] = Field(default_factory=list)
    error: Optional[str] = None


class AnalysisResult(ExtractedListing):
    affiliate_info: list[AffiliateCandidate] = Field(default_factory=list)
