"""
Point-Affi Hunter API — analyze a points-site campaign page and look up affiliate programs.
"""

import logging
from typing import Optional

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from app.config import Settings
from app.errors import ValidationError
from app.phases.phase2.schemas import AnalysisResult
from app.pipeline import build_pipeline

logger = logging.getLogger(__name__)

app = FastAPI(title="Point-Affi Hunter", version="0.1.0")


class AnalysisRequest(BaseModel):
    url: Optional[str] = None


class ErrorResponse(BaseModel):
    error: str


logging.basicConfig(
    level=Settings().log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


def get_settings() -> Settings:
    """Credentials are read per call so key changes in `.env` take effect without a restart."""
    return Settings()


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


def _require_url(body: AnalysisRequest) -> str:
    url = (body.url or "").strip()
    if not url:
        raise ValidationError("URL is required")
    return url


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    logger.info("Rejected malformed request body: %s", exc.errors())
    return _error(400, "URL is required")


@app.get("/health")
def health():
    return {"status": "ok"}


@app.post(
    "/api/analyze",
    response_model=AnalysisResult,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def analyze(body: AnalysisRequest, settings: Settings = Depends(get_settings)):
    """
    Fetch → extract → enrich for one points-site URL.

    Returns: service_name, reward, conditions, denial_conditions, affiliate_info.
    """
    try:
        url = _require_url(body)
    except ValidationError as e:
        return _error(400, e.message)

    try:
        outcome = build_pipeline(settings).run(url)
    except Exception as e:
        logger.exception("API Error")
        return _error(500, str(e) or "Internal Server Error")

    if not outcome.ok:
        return _error(500, outcome.error or "Internal Server Error")
    return outcome.result
