"""Shared LLM helpers for Phase 1 (Gemini / OpenAI generators, JSON parsing)."""

import json
import re
from typing import Any, Protocol

from google import genai
from openai import OpenAI

from app.config import Settings

_LEADING_FENCE = re.compile(r"^```[ \t]*[\w+-]*[ \t]*\n?")
_TRAILING_FENCE = re.compile(r"\n?[ \t]*```$")


class TextGenerator(Protocol):
    """Anything that turns a prompt into a JSON-shaped text response."""

    provider: str

    def generate(self, prompt: str) -> str: ...


class GeminiGenerator:
    provider = "Gemini"

    def __init__(self, api_key: str, model: str):
        if not api_key:
            raise ValueError("GEMINI_API_KEY environment variable is required")
        self._client = genai.Client(api_key=api_key)
        self._model = model

    def generate(self, prompt: str) -> str:
        response = self._client.models.generate_content(
            model=self._model,
            contents=prompt,
            config={"response_mime_type": "application/json"},
        )
        return response.text or ""


class OpenAIGenerator:
    provider = "OpenAI"

    def __init__(self, api_key: str, model: str):
        if not api_key:
            raise ValueError("OPENAI_API_KEY environment variable is required")
        self._client = OpenAI(api_key=api_key)
        self._model = model

    def generate(self, prompt: str) -> str:
        response = self._client.chat.completions.create(
            model=self._model,
            messages=[{"role": "user", "content": prompt}],
            response_format={"type": "json_object"},
            temperature=0.1,
        )
        return response.choices[0].message.content or ""


def get_generator(settings: Settings) -> TextGenerator:
    if settings.llm_provider.lower() == "openai":
        return OpenAIGenerator(settings.openai_api_key, settings.openai_model_extraction)
    return GeminiGenerator(settings.gemini_api_key, settings.model_extraction)


def strip_code_fences(content: str) -> str:
    """Remove a leading ```lang / ``` fence and a trailing ``` fence, either or both."""
    text = content.strip()
    text = _LEADING_FENCE.sub("", text, count=1)
    text = _TRAILING_FENCE.sub("", text, count=1)
    return text.strip()


def parse_llm_response(content: str) -> Any:
    """Parse JSON from LLM response, stripping markdown code blocks if present."""
    return json.loads(strip_code_fences(content))
