"""
Analysis pipeline: fetch → extract → enrich, or the mock payload when keys are missing.

build_pipeline(settings) picks the strategy from the credential flags once per
call; AnalysisPipeline.run(url) returns a PipelineOutcome in state `done` or
`errored`. Only fetch and extraction errors reach `errored`; enrichment
failures are logged and mapped to an empty affiliate_info.
"""

import logging
import time
from enum import Enum
from typing import Callable, Optional, Protocol

from pydantic import BaseModel, Field

from app.config import Configuration, Settings
from app.errors import ExtractionError, FetchError
from app.phases.phase1 import ContentFetcher, ExtractedListing, StructuredExtractor, get_generator
from app.phases.phase2 import (
    AffiliateCandidate,
    AffiliateSearcher,
    AffiliateSearchOutcome,
    AnalysisResult,
    SearchStatus,
)

logger = logging.getLogger(__name__)


class PipelineState(str, Enum):
    IDLE = "idle"
    FETCHING = "fetching"
    EXTRACTING = "extracting"
    ENRICHING = "enriching"
    DONE = "done"
    ERRORED = "errored"


class PipelineOutcome(BaseModel):
    state: PipelineState
    result: Optional[AnalysisResult] = None
    error: Optional[str] = None
    history: list[PipelineState] = Field(default_factory=list)
    enrichment: Optional[AffiliateSearchOutcome] = None

    @property
    def ok(self) -> bool:
        return self.state == PipelineState.DONE


class AnalysisStrategy(Protocol):
    def run(self, url: str, history: list[PipelineState]) -> PipelineOutcome: ...


MOCK_RESULT = AnalysisResult(
    service_name="Mock Service (Gemini Example)",
    reward="1,000 Points (1,000 JPY)",
    conditions=[
        "New registration",
        "Complete profile within 7 days",
        "Exchange at least 300 points",
    ],
    denial_conditions=[
        "Duplicate registration",
        "False information",
        "Past registration history",
    ],
    affiliate_info=[
        AffiliateCandidate(
            title="A8.net: Mock Service Affiliate Program",
            link="https://www.a8.net/",
            snippet="High reward campaign for new users. Join the Mock Service affiliate program on A8.net.",
        ),
        AffiliateCandidate(
            title="ValueCommerce: Mock Service Promotion",
            link="https://www.valuecommerce.ne.jp/",
            snippet="Promote Mock Service and earn rewards. Special terms apply for top affiliates.",
        ),
    ],
)


class MockAnalysis:
    """Fixed payload after a simulated delay; lets the API be exercised without keys."""

    def __init__(self, delay_seconds: float = 2.0, sleep: Optional[Callable[[float], None]] = None):
        self.delay_seconds = delay_seconds
        self._sleep = sleep or time.sleep

    def run(self, url: str, history: list[PipelineState]) -> PipelineOutcome:
        logger.info("Missing API keys, returning mock data for %s", url)
        self._sleep(self.delay_seconds)
        history.append(PipelineState.DONE)
        return PipelineOutcome(state=PipelineState.DONE, result=MOCK_RESULT.model_copy(deep=True), history=history)


class LiveAnalysis:
    def __init__(
        self,
        fetcher: ContentFetcher,
        extractor: StructuredExtractor,
        searcher: AffiliateSearcher,
    ):
        self.fetcher = fetcher
        self.extractor = extractor
        self.searcher = searcher

    def _errored(self, history: list[PipelineState], message: str) -> PipelineOutcome:
        history.append(PipelineState.ERRORED)
        return PipelineOutcome(state=PipelineState.ERRORED, error=message, history=history)

    def _enrich(self, listing: ExtractedListing) -> AffiliateSearchOutcome:
        outcome = self.searcher.search(listing.service_name)
        if outcome.status == SearchStatus.FAILED:
            logger.warning("Affiliate search failed for %r: %s", outcome.query, outcome.error)
        elif outcome.status == SearchStatus.SKIPPED:
            logger.info("Affiliate search skipped: %s", outcome.error)
        elif not outcome.candidates:
            logger.info("Affiliate search returned no results for %r", outcome.query)
        return outcome

    def run(self, url: str, history: list[PipelineState]) -> PipelineOutcome:
        history.append(PipelineState.FETCHING)
        try:
            markdown = self.fetcher.fetch(url)
        except FetchError as e:
            return self._errored(history, e.message)

        history.append(PipelineState.EXTRACTING)
        try:
            listing = self.extractor.extract(markdown)
        except ExtractionError as e:
            return self._errored(history, e.message)

        history.append(PipelineState.ENRICHING)
        enrichment = self._enrich(listing)
        affiliate_info = enrichment.candidates if enrichment.status == SearchStatus.OK else []

        history.append(PipelineState.DONE)
        return PipelineOutcome(
            state=PipelineState.DONE,
            result=AnalysisResult(**dict(listing), affiliate_info=affiliate_info),
            history=history,
            enrichment=enrichment,
        )


class AnalysisPipeline:
    def __init__(self, configuration: Configuration, strategy: AnalysisStrategy):
        self.configuration = configuration
        self.strategy = strategy

    def run(self, url: str) -> PipelineOutcome:
        history = [PipelineState.IDLE]
        outcome = self.strategy.run(url, history)
        logger.info(
            "Pipeline for %s (%s mode, search %s) finished in %s (%s)",
            url,
            "mock" if self.configuration.mock_mode else "live",
            "on" if self.configuration.has_search_key else "off",
            outcome.state.value,
            " -> ".join(s.value for s in outcome.history),
        )
        if outcome.error:
            logger.error("Pipeline error: %s", outcome.error)
        return outcome


def build_pipeline(settings: Settings, sleep: Optional[Callable[[float], None]] = None) -> AnalysisPipeline:
    """Read credential presence from settings and wire the matching strategy."""
    configuration = settings.configuration()
    if configuration.mock_mode:
        return AnalysisPipeline(configuration, MockAnalysis(settings.mock_delay_seconds, sleep=sleep))

    strategy = LiveAnalysis(
        fetcher=ContentFetcher(
            settings.firecrawl_api_key,
            base_url=settings.firecrawl_base_url,
            timeout=settings.firecrawl_timeout_seconds,
        ),
        extractor=StructuredExtractor(get_generator(settings)),
        searcher=AffiliateSearcher(
            api_key=settings.serper_api_key if configuration.has_search_key else "",
            country=settings.search_country,
            language=settings.search_language,
            max_results=settings.max_affiliate_results,
            timeout=settings.serper_timeout_seconds,
        ),
    )
    return AnalysisPipeline(configuration, strategy)
