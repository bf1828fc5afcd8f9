"""Pytest fixtures shared across the pipeline tests."""

import json
from unittest.mock import MagicMock

import pytest
import requests

from app.config import Settings
from app.phases.phase1.schemas import ExtractedListing


class FakeGenerator:
    """Records prompts and replays a canned response (or raises)."""

    provider = "Gemini"

    def __init__(self, response: str = "", error: Exception | None = None):
        self.response = response
        self.error = error
        self.prompts: list[str] = []

    def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.response


def make_http_response(status_code: int = 200, body=None) -> MagicMock:
    """requests.Response stand-in; raise_for_status raises HTTPError for non-2xx."""
    resp = MagicMock()
    resp.status_code = status_code
    resp.json.return_value = body if body is not None else {}
    if status_code >= 400:
        resp.raise_for_status.side_effect = requests.exceptions.HTTPError(
            f"{status_code} Error", response=resp
        )
    else:
        resp.raise_for_status.return_value = None
    return resp


@pytest.fixture
def listing_dict():
    return {
        "service_name": "楽天カード",
        "reward": "12,000pt (12,000円)",
        "conditions": ["新規カード発行", "発行後30日以内に1回以上利用", "ポイントサイト経由で申込"],
        "denial_conditions": ["過去に同カードを発行済み", "申込情報の不備"],
    }


@pytest.fixture
def llm_response_json(listing_dict):
    """Minimal valid JSON string as returned by the model."""
    return json.dumps(listing_dict, ensure_ascii=False, indent=2)


@pytest.fixture
def llm_response_with_markdown(llm_response_json):
    """Model response wrapped in a markdown code block."""
    return "```json\n" + llm_response_json + "\n```"


@pytest.fixture
def listing(listing_dict):
    return ExtractedListing(**listing_dict)


@pytest.fixture
def page_markdown():
    return (
        "# 楽天カード 新規発行で12,000pt\n\n"
        "## 獲得条件\n- 新規カード発行\n- 発行後30日以内に1回以上利用\n\n"
        "## 却下条件\n- 過去に同カードを発行済み\n"
    )


@pytest.fixture
def serper_organic():
    return [
        {
            "title": f"ASP {i}: 楽天カード アフィリエイト",
            "link": f"https://asp{i}.example.jp/",
            "snippet": f"snippet {i}",
            "position": i,
        }
        for i in range(1, 9)
    ]


@pytest.fixture
def settings_no_keys():
    return Settings(
        _env_file=None,
        firecrawl_api_key="",
        gemini_api_key="",
        openai_api_key="",
        serper_api_key="",
    )


@pytest.fixture
def settings_all_keys():
    return Settings(
        _env_file=None,
        firecrawl_api_key="fc-test",
        gemini_api_key="gm-test",
        openai_api_key="",
        serper_api_key="sp-test",
        llm_provider="gemini",
    )


@pytest.fixture
def make_generator():
    return FakeGenerator


@pytest.fixture
def http_response():
    return make_http_response
