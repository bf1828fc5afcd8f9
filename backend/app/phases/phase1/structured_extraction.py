"""
Phase 1, Task 1.2: Structured Extraction.

- Embed the listing schema and the full page markdown in one prompt
- Ask the model for JSON only
- Strip code fences, parse, and validate against ExtractedListing
"""

import json
import logging

from pydantic import ValidationError as SchemaValidationError

from app.errors import ExtractionError

from .llm_utils import TextGenerator, parse_llm_response, strip_code_fences
from .schemas import ExtractedListing

logger = logging.getLogger(__name__)

EXTRACTION_PROMPT_TEMPLATE = """
You are an expert at extracting structured data from point site descriptions.
Analyze the following markdown content and extract the data into a JSON object.

Required JSON structure:
{{
  "service_name": "The name of the service or product being promoted",
  "reward": "The point reward or percentage",
  "conditions": ["List of strings describing requirements"],
  "denial_conditions": ["List of strings describing what invalidates the reward"]
}}

Markdown Content:
{markdown}
"""


def build_extraction_prompt(markdown: str) -> str:
    """The markdown goes in verbatim: no truncation, no chunking."""
    return EXTRACTION_PROMPT_TEMPLATE.format(markdown=markdown)


def _format_schema_errors(exc: SchemaValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err["loc"]) or "<root>"
        parts.append(f"{loc}: {err['msg']}")
    return "; ".join(parts)


def parse_listing(raw: str) -> ExtractedListing:
    """Turn raw model text into a validated ExtractedListing or raise ExtractionError."""
    if not strip_code_fences(raw or ""):
        raise ExtractionError("Failed to analyze content: model returned an empty response")

    try:
        data = parse_llm_response(raw)
    except json.JSONDecodeError as e:
        raise ExtractionError(f"Failed to parse model response as JSON: {e}") from e

    if not isinstance(data, dict):
        raise ExtractionError(
            f"Model response has the wrong shape: expected a JSON object, got {type(data).__name__}"
        )

    try:
        return ExtractedListing.model_validate(data)
    except SchemaValidationError as e:
        raise ExtractionError(f"Model response failed schema validation: {_format_schema_errors(e)}") from e


class StructuredExtractor:
    """Stateless: each extract() call is one prompt and one model call."""

    def __init__(self, generator: TextGenerator):
        self.generator = generator

    def extract(self, text: str) -> ExtractedListing:
        prompt = build_extraction_prompt(text)
        try:
            raw = self.generator.generate(prompt)
        except Exception as e:
            logger.error("%s generation error: %s", self.generator.provider, e)
            raise ExtractionError(f"Failed to analyze content with {self.generator.provider}: {e}") from e

        try:
            listing = parse_listing(raw)
        except ExtractionError as e:
            logger.error("Extraction rejected: %s", e.message)
            raise

        logger.info(
            "Extracted listing for %r (%d conditions, %d denial conditions)",
            listing.service_name,
            len(listing.conditions),
            len(listing.denial_conditions),
        )
        return listing
