"""
compass.security — HTTP hardening and access logging for the compass API.

Provides:
    - RequestContextMiddleware: request id, latency, and one JSON access-log
      line per request. When /analyze ran, the line carries its outcome
      (primary label and answer count, or the error code).
    - HardeningHeadersMiddleware: browser hardening headers plus a cache
      policy chosen per path (catalogue vs per-respondent results).
    - BodySizeLimitMiddleware: 413 for bodies larger than the biggest
      answer set the service accepts.

The analyze handler reports its outcome with record_analysis_outcome();
the access log is the single place it is written out.
"""

from __future__ import annotations

import ipaddress
import json
import logging
import re
import secrets
import time
from typing import Any

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from compass.constants import FOCUS_NAMES

logger = logging.getLogger("compass.security")


# ---------------------------------------------------------------------------
# Body size — derived from the largest answer set
# ---------------------------------------------------------------------------

MAX_ANSWER_ENTRIES = 1_024
# '"1023": 4, ' with generous whitespace
ANSWER_ENTRY_BYTES = 24
# '"ecoSocialistFocus": {"stronglyAgree": 99, ...}' per focus
TALLY_ENTRY_BYTES = 160
ENVELOPE_BYTES = 4_096


def body_limit_for(answer_entries: int) -> int:
    """Largest acceptable /analyze body for ``answer_entries`` answers."""
    return (
        ENVELOPE_BYTES
        + answer_entries * ANSWER_ENTRY_BYTES
        + len(FOCUS_NAMES) * TALLY_ENTRY_BYTES
    )


MAX_BODY_BYTES = body_limit_for(MAX_ANSWER_ENTRIES)


class BodySizeLimitMiddleware(BaseHTTPMiddleware):
    """Reject a declared Content-Length above the answer-set ceiling."""

    def __init__(self, app: Any, *, max_body_bytes: int = MAX_BODY_BYTES) -> None:
        super().__init__(app)
        self.max_body_bytes = max_body_bytes

    async def dispatch(self, request: Request, call_next: Any) -> Response:
        declared = request.headers.get("content-length", "")
        if declared.isascii() and declared.isdigit() and int(declared) > self.max_body_bytes:
            record_analysis_outcome(request, error="BODY_TOO_LARGE", declared_bytes=int(declared))
            return JSONResponse(
                status_code=413,
                content={
                    "error": "BODY_TOO_LARGE",
                    "message": f"Request body exceeds {self.max_body_bytes} bytes.",
                },
            )
        return await call_next(request)


# ---------------------------------------------------------------------------
# Response headers and cache policy
# ---------------------------------------------------------------------------

CATALOGUE_CACHE = "public, max-age=3600"
RESPONDENT_CACHE = "private, no-store"
PROBE_CACHE = "no-store"

CACHE_POLICIES: dict[str, str] = {
    "/": CATALOGUE_CACHE,
    "/ideologies": CATALOGUE_CACHE,
    "/analyze": RESPONDENT_CACHE,
    "/health": PROBE_CACHE,
    "/ready": PROBE_CACHE,
}
DEFAULT_CACHE = "no-cache"

_HARDENING_HEADERS: dict[str, str] = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "no-referrer",
    "Content-Security-Policy": "default-src 'none'; frame-ancestors 'none'",
    "Cross-Origin-Resource-Policy": "same-site",
}
_HSTS = "max-age=31536000; includeSubDomains"


def cache_policy_for(path: str) -> str:
    return CACHE_POLICIES.get(path.rstrip("/") or "/", DEFAULT_CACHE)


class HardeningHeadersMiddleware(BaseHTTPMiddleware):
    """Add hardening headers and the path's cache policy to every response.

    Answer sets and their classification are per-respondent data, so
    /analyze responses are never stored by shared caches. The ideology
    catalogue only changes with a deploy.
    """

    def __init__(self, app: Any, *, enable_hsts: bool = False) -> None:
        super().__init__(app)
        self.enable_hsts = enable_hsts

    async def dispatch(self, request: Request, call_next: Any) -> Response:
        response = await call_next(request)
        response.headers.update(_HARDENING_HEADERS)
        if self.enable_hsts:
            response.headers["Strict-Transport-Security"] = _HSTS
        response.headers["Cache-Control"] = cache_policy_for(request.url.path)
        return response


# ---------------------------------------------------------------------------
# Request context and access log
# ---------------------------------------------------------------------------

_CLIENT_REQUEST_ID = re.compile(r"[A-Za-z0-9._-]{1,64}")


def request_id_from(request: Request) -> str:
    """Client-supplied X-Request-ID when well-formed, else a fresh one."""
    supplied = request.headers.get("x-request-id", "")
    if _CLIENT_REQUEST_ID.fullmatch(supplied):
        return supplied
    return secrets.token_hex(8)


def client_network(host: str | None) -> str:
    """Client address widened to its /16 (IPv4) or /48 (IPv6) network."""
    if not host:
        return "unknown"
    try:
        address = ipaddress.ip_address(host)
    except ValueError:
        return "unknown"
    prefix = 16 if address.version == 4 else 48
    return str(ipaddress.ip_network(f"{address}/{prefix}", strict=False))


def record_analysis_outcome(request: Request, **outcome: Any) -> None:
    """Attach the /analyze result summary to the request's access-log line."""
    request.state.analysis_outcome = outcome


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Assign the request id, time the request, write the access log."""

    async def dispatch(self, request: Request, call_next: Any) -> Response:
        request_id = request_id_from(request)
        request.state.request_id = request_id
        started = time.monotonic()
        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id

        entry: dict[str, Any] = {
            "event": "http_request",
            "method": request.method,
            "path": request.url.path,
            "status": response.status_code,
            "latency_ms": round((time.monotonic() - started) * 1000, 1),
            "client_net": client_network(request.client.host if request.client else None),
            "request_id": request_id,
        }
        outcome = getattr(request.state, "analysis_outcome", None)
        if outcome is not None:
            entry["analysis"] = outcome

        if response.status_code >= 500:
            level = logging.ERROR
        elif response.status_code >= 400:
            level = logging.WARNING
        else:
            level = logging.INFO
        logger.log(level, json.dumps(entry))
        return response
