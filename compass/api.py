#!/usr/bin/env python3
"""
compass.api — Political Compass API server (compass-v2)

Serves the ideology catalogue and a deterministic analysis endpoint.
The POST /analyze endpoint performs bounded, validated computation over one
submitted answer set. Nothing is persisted.

Endpoints:
    GET  /                  → API metadata
    GET  /ideologies        → Ideology catalogue (labels, summaries, colors)
    POST /analyze           → Classify one answer set
    GET  /health            → Liveness probe
    GET  /ready             → Readiness probe (question bank loaded?)

Environment variables:
    ENV                 — "dev" or "prod" (default: "prod")
    ALLOWED_ORIGINS     — Comma-separated CORS origins (default: none)
    ENABLE_DOCS         — "1" to force-enable /docs in prod
    REQUIRE_DATA        — "1" to hard-fail startup if the question bank cannot load
    REDIS_URL           — Optional Redis URL for distributed rate limiting
    RATE_LIMIT_ENABLED  — "0" to disable rate limiting (default: enabled)
    QUESTION_BANK_PATH  — Question bank JSON (default: bundled sample bank)

Requires: fastapi, uvicorn, slowapi
"""

from __future__ import annotations

import json
import logging
import os
import sys
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from typing import Any

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.middleware.gzip import GZipMiddleware

from compass.analysis import AnalysisRequest, analyze
from compass.constants import RESULTS_VERSION
from compass.hashing import compute_result_hash
from compass.ideologies import (
    IDEOLOGY_BUNDLES,
    PRIMARY_LABELS,
    SECONDARY_ONLY_LABELS,
    get_summary,
)
from compass.questions import QuestionBankError, load_question_bank
from compass.security import (
    BodySizeLimitMiddleware,
    HardeningHeadersMiddleware,
    RequestContextMiddleware,
    record_analysis_outcome,
)
from compass.summary import axis_breakdown, related_ideologies, share_text


# ---------------------------------------------------------------------------
# Logging configuration — structured JSON to stdout
# ---------------------------------------------------------------------------

_log_level = logging.DEBUG if os.getenv("ENV", "prod") == "dev" else logging.INFO
logging.basicConfig(
    level=_log_level,
    format="%(message)s",
    stream=sys.stdout,
)
logger = logging.getLogger("compass.api")


# ---------------------------------------------------------------------------
# Environment
# ---------------------------------------------------------------------------

ENV = os.getenv("ENV", "prod").lower().strip()
ALLOWED_ORIGINS_RAW = os.getenv("ALLOWED_ORIGINS", "").strip()
ENABLE_DOCS = os.getenv("ENABLE_DOCS", "").strip() == "1"
REQUIRE_DATA = os.getenv("REQUIRE_DATA", "").strip() == "1"
REDIS_URL = os.getenv("REDIS_URL", "").strip() or None
RATE_LIMIT_ENABLED = os.getenv("RATE_LIMIT_ENABLED", "1").strip() != "0"


# ---------------------------------------------------------------------------
# Rate limiter
# ---------------------------------------------------------------------------

limiter = Limiter(
    key_func=get_remote_address,
    default_limits=["120/minute"],
    storage_uri=REDIS_URL if REDIS_URL else "memory://",
    strategy="fixed-window",
    enabled=RATE_LIMIT_ENABLED,
)


# ---------------------------------------------------------------------------
# App construction
# ---------------------------------------------------------------------------

def _build_docs_kwargs() -> dict[str, Any]:
    """Determine docs/redoc/openapi URL availability."""
    if ENV == "prod" and not ENABLE_DOCS:
        return {"docs_url": None, "redoc_url": None, "openapi_url": None}
    return {"docs_url": "/docs", "redoc_url": "/redoc"}


def _question_bank_status() -> dict[str, Any]:
    """Try to load the configured bank. Never raises."""
    try:
        bank = load_question_bank()
    except (FileNotFoundError, QuestionBankError) as exc:
        return {"loaded": False, "questions": 0, "error": type(exc).__name__}
    return {"loaded": True, "questions": len(bank), "error": None}


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Startup: load and validate the question bank.

    If REQUIRE_DATA=1 and the bank is missing or invalid, exit immediately.
    """
    logger.info(json.dumps({
        "event": "startup",
        "env": ENV,
        "require_data": REQUIRE_DATA,
        "cors_origins": len(_CORS_ORIGINS),
        "docs_enabled": ENABLE_DOCS or ENV == "dev",
        "rate_limit_backend": "redis" if REDIS_URL else "memory",
        "rate_limit_enabled": RATE_LIMIT_ENABLED,
    }))

    status = _question_bank_status()
    if not status["loaded"]:
        if REQUIRE_DATA:
            logger.error(json.dumps({
                "event": "startup_abort",
                "reason": "REQUIRE_DATA=1 but question bank could not be loaded",
                "error": status["error"],
            }))
            sys.exit(1)
        logger.warning(json.dumps({
            "event": "startup_degraded",
            "reason": "Question bank could not be loaded; score derivation unavailable",
            "error": status["error"],
        }))

    yield

    logger.info(json.dumps({"event": "shutdown"}))


app = FastAPI(
    title="Political Compass API",
    description="Ideology scoring and classification — API compass-v2",
    version="2.0.0",
    lifespan=_lifespan,
    **_build_docs_kwargs(),
)

app.state.limiter = limiter


# ---------------------------------------------------------------------------
# CORS — strict allow-list, extended by ALLOWED_ORIGINS
# ---------------------------------------------------------------------------

DEV_ORIGINS: list[str] = [
    "http://localhost:3000",
]

_CORS_ORIGINS: list[str] = list(DEV_ORIGINS)

if ALLOWED_ORIGINS_RAW:
    for _o in ALLOWED_ORIGINS_RAW.split(","):
        _o = _o.strip()
        if _o and _o not in _CORS_ORIGINS:
            _CORS_ORIGINS.append(_o)

app.add_middleware(
    CORSMiddleware,
    allow_origins=_CORS_ORIGINS,
    allow_credentials=False,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID"],
    max_age=3600,
)

logger.info("CORS configured for: %s", _CORS_ORIGINS)


# Starlette runs middleware in reverse registration order.
# Execution order (outermost first): GZip → RequestContext → BodySizeLimit → HardeningHeaders → CORS
app.add_middleware(HardeningHeadersMiddleware, enable_hsts=(ENV == "prod"))
app.add_middleware(BodySizeLimitMiddleware)
app.add_middleware(RequestContextMiddleware)
app.add_middleware(GZipMiddleware, minimum_size=500)


# ---------------------------------------------------------------------------
# Error handlers — never leak internals
# ---------------------------------------------------------------------------

@app.exception_handler(RateLimitExceeded)
async def _rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    return JSONResponse(
        status_code=429,
        content={"detail": "Rate limit exceeded. Try again later."},
        headers={"Retry-After": "60"},
    )


@app.exception_handler(Exception)
async def _global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    request_id = getattr(request.state, "request_id", "unknown")
    logger.error(json.dumps({
        "event": "unhandled_exception",
        "exception_type": type(exc).__name__,
        "request_id": request_id,
        "path": request.url.path,
    }))
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error."},
    )


def _invalid_input(message: str, details: Any) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={
            "error": "INVALID_ANALYSIS_INPUT",
            "message": message,
            "details": details,
        },
    )


def _computation_failed(status_code: int = 500, error: str = "ANALYSIS_COMPUTATION_FAILED") -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": error, "message": "Internal analysis error."},
    )


# ---------------------------------------------------------------------------
# Read endpoints
# ---------------------------------------------------------------------------

@app.get("/")
@limiter.limit("60/minute")
async def root(request: Request) -> dict:
    """API metadata."""
    return {
        "name": "Political Compass API",
        "version": RESULTS_VERSION,
        "ideologies": len(PRIMARY_LABELS) + len(SECONDARY_ONLY_LABELS),
        "endpoints": ["/ideologies", "/analyze", "/health", "/ready"],
    }


@app.get("/health", include_in_schema=False)
async def health(request: Request) -> JSONResponse:
    """Liveness probe. Always 200. No I/O."""
    return JSONResponse(
        status_code=200,
        content={"status": "ok", "version": RESULTS_VERSION},
    )


@app.get("/ready")
@limiter.limit("60/minute")
async def ready(request: Request) -> JSONResponse:
    """Readiness probe. Always 200; readiness is the 'ready' field."""
    status = _question_bank_status()
    body = {
        "ready": status["loaded"],
        "status": "healthy" if status["loaded"] else "degraded",
        "version": RESULTS_VERSION,
        "question_bank_loaded": status["loaded"],
        "question_count": status["questions"],
        "timestamp": datetime.now(UTC).isoformat(),
    }
    return JSONResponse(status_code=200, content=body)


@app.get("/ideologies")
@limiter.limit("60/minute")
async def list_ideologies(request: Request) -> dict:
    """Every label a profile can mention, primaries first."""
    entries = []
    for label in PRIMARY_LABELS:
        entries.append({
            "name": label,
            "kind": "primary",
            "description": get_summary(label),
            "color": IDEOLOGY_BUNDLES[label].color,
        })
    for label in SECONDARY_ONLY_LABELS:
        entries.append({
            "name": label,
            "kind": "secondary",
            "description": get_summary(label),
            "color": None,
        })
    return {"ideologies": entries}


# ---------------------------------------------------------------------------
# POST /analyze — classify one answer set
#
# Error contract:
#   400 → INVALID_ANALYSIS_INPUT (body is not JSON / fails validation)
#   503 → QUESTION_BANK_UNAVAILABLE (derivation needed, bank missing)
#   500 → ANALYSIS_COMPUTATION_FAILED (output sanitization / internal)
#   405 → GET on /analyze
# ---------------------------------------------------------------------------

@app.get("/analyze", include_in_schema=False)
async def analyze_get(request: Request) -> JSONResponse:
    """GET /analyze → 405 Method Not Allowed."""
    return JSONResponse(
        status_code=405,
        content={"error": "METHOD_NOT_ALLOWED", "message": "Use POST."},
        headers={"Allow": "POST, OPTIONS"},
    )


@app.post("/analyze")
@limiter.limit("60/minute")
async def analyze_endpoint(request: Request) -> JSONResponse:
    """Deterministic ideology analysis of one submitted answer set."""
    request_id: str = getattr(request.state, "request_id", "unknown")

    try:
        raw_body = await request.json()
    except Exception:
        record_analysis_outcome(request, error="INVALID_ANALYSIS_INPUT", reason="json")
        return _invalid_input("Request body is not valid JSON.", {"parse_error": "Could not decode JSON."})

    if not isinstance(raw_body, dict):
        record_analysis_outcome(request, error="INVALID_ANALYSIS_INPUT", reason="not_object")
        return _invalid_input("Request body must be a JSON object.", {})

    try:
        req = AnalysisRequest.model_validate(raw_body)
    except ValidationError as exc:
        record_analysis_outcome(request, error="INVALID_ANALYSIS_INPUT", reason="validation")
        detail_items = [
            {
                "field": ".".join(str(p) for p in e.get("loc", [])),
                "message": e.get("msg", "Validation failed"),
            }
            for e in exc.errors()
        ]
        return _invalid_input(
            "Request validation failed.",
            detail_items[0] if len(detail_items) == 1 else detail_items,
        )

    try:
        result = analyze(req)
    except (FileNotFoundError, QuestionBankError) as exc:
        logger.error(json.dumps({
            "event": "analysis_question_bank_unavailable",
            "request_id": request_id,
            "error_type": type(exc).__name__,
        }))
        record_analysis_outcome(request, error="QUESTION_BANK_UNAVAILABLE", answers=len(req.answers))
        return _computation_failed(503, "QUESTION_BANK_UNAVAILABLE")
    except Exception as exc:
        logger.error(json.dumps({
            "event": "analysis_computation_failed",
            "request_id": request_id,
            "answer_count": len(req.answers),
            "error_type": type(exc).__name__,
            "error": str(exc),
        }))
        record_analysis_outcome(request, error="ANALYSIS_COMPUTATION_FAILED", answers=len(req.answers))
        return _computation_failed()

    response_body = {
        "economic": result.economic,
        "social": result.social,
        "categoryTallies": {
            focus: tally.to_dict() for focus, tally in result.category_tallies.items()
        },
        "profile": result.profile.to_dict(),
        "breakdown": axis_breakdown(result.economic, result.social),
        "relatedIdeologies": related_ideologies(result.profile),
        "shareText": share_text(result.profile, result.economic, result.social),
        "resultHash": compute_result_hash(result.economic, result.social, result.profile),
        "version": RESULTS_VERSION,
        "request_id": request_id,
    }

    record_analysis_outcome(
        request,
        primary=result.profile.primary_ideology,
        answers=len(req.answers),
        derived=req.economic_score is None or req.social_score is None,
    )
    return JSONResponse(status_code=200, content=response_body)


# ---------------------------------------------------------------------------
# Entry point (development only)
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    import uvicorn

    os.environ.setdefault("ENV", "dev")
    uvicorn.run(app, host="0.0.0.0", port=8000)  # noqa: S104
