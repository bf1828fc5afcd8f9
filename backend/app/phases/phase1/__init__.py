"""Phase 1: Content Extraction."""

from .content_fetcher import ContentFetcher
from .llm_utils import GeminiGenerator, OpenAIGenerator, get_generator, parse_llm_response, strip_code_fences
from .schemas import ExtractedListing
from .structured_extraction import StructuredExtractor, build_extraction_prompt, parse_listing

__all__ = [
    "ContentFetcher",
    "GeminiGenerator",
    "OpenAIGenerator",
    "get_generator",
    "parse_llm_response",
    "strip_code_fences",
    "ExtractedListing",
    "StructuredExtractor",
    "build_extraction_prompt",
    "parse_listing",
]
