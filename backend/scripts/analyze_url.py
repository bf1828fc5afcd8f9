"""
Run one analysis end to end: fetch → extract → affiliate search.

Run from backend with:
  python scripts/analyze_url.py "https://hapitas.jp/..."

Uses FIRECRAWL_API_KEY, GEMINI_API_KEY (or OPENAI_API_KEY with LLM_PROVIDER=openai)
and SERPER_API_KEY from env (or .env). Without the first two it prints the mock payload.
"""

import json
import logging
import os
import sys

try:
    from dotenv import load_dotenv
    load_dotenv()
except ImportError:
    pass

# Add backend root so "app" is importable from scripts/ or from backend/
_backend_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _backend_root not in sys.path:
    sys.path.insert(0, _backend_root)

from app.config import Settings
from app.pipeline import build_pipeline


def _section(title: str) -> None:
    print()
    print("=" * 80)
    print(f"  {title}")
    print("=" * 80)


def main() -> None:
    if len(sys.argv) < 2 or not sys.argv[1].strip():
        print("Usage: python scripts/analyze_url.py <url>")
        sys.exit(2)
    url = sys.argv[1].strip()

    settings = Settings()
    logging.basicConfig(level=settings.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")
    configuration = settings.configuration()

    _section("Configuration")
    print(f"  Fetch key:      {'yes' if configuration.has_fetch_key else 'no'}")
    print(f"  Generation key: {'yes' if configuration.has_generation_key else 'no'} ({settings.llm_provider})")
    print(f"  Search key:     {'yes' if configuration.has_search_key else 'no'}")
    print(f"  Mock mode:      {configuration.mock_mode}")

    outcome = build_pipeline(settings).run(url)

    _section("Pipeline")
    print("  " + " -> ".join(s.value for s in outcome.history))
    if outcome.enrichment is not None:
        print(f"  Enrichment: {outcome.enrichment.status.value}"
              + (f" ({outcome.enrichment.error})" if outcome.enrichment.error else ""))

    if not outcome.ok:
        _section("Error")
        print(f"  {outcome.error}")
        sys.exit(1)

    _section("Result")
    print(json.dumps(outcome.result.model_dump(), ensure_ascii=False, indent=2))


if __name__ == "__main__":
    main()
