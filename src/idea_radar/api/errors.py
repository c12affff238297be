"""Mapping von Domain-Fehlern auf HTTP-Status und Nutzer-Meldungen."""

from __future__ import annotations

import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from idea_radar.api.schemas import fail
from idea_radar.domain.exceptions import (
    InputValidationError,
    NotFoundError,
    UnauthorizedError,
)

logger = logging.getLogger(__name__)

TIMEOUT_MESSAGE = "Request timeout. Please try again."
RATE_LIMIT_MESSAGE = "Rate limit exceeded. Please try again later."
GENERIC_MESSAGE = "Request failed. Please try again."


def map_error(exc: Exception) -> tuple[int, str]:
    """(Status, Meldung) fuer eine Exception.

    Typen zuerst (404/400/401), danach Substrings der Message:
    "timeout"/"abort" -> 504, "rate"/"quota" -> 429, sonst 500.
    """
    if isinstance(exc, NotFoundError):
        return 404, str(exc)
    if isinstance(exc, InputValidationError):
        return 400, str(exc)
    if isinstance(exc, UnauthorizedError):
        return 401, "Unauthorized"

    message = str(exc).lower()
    if "timeout" in message or "abort" in message:
        return 504, TIMEOUT_MESSAGE
    if "rate" in message or "quota" in message:
        return 429, RATE_LIMIT_MESSAGE
    return 500, GENERIC_MESSAGE


async def handle_domain_error(request: Request, exc: Exception) -> JSONResponse:
    status, message = map_error(exc)
    if status >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    else:
        logger.info("%s %s -> %d: %s", request.method, request.url.path, status, exc)
    return JSONResponse(status_code=status, content=fail(message))


async def handle_request_validation(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Ungueltiger Body -> 400 im API-Umschlag statt FastAPI-422."""
    errors = exc.errors()
    first = errors[0] if errors else {}
    location = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
    message = f"Invalid request: {location} {first.get('msg', '')}".strip()
    return JSONResponse(status_code=400, content=fail(message))
