"""FastAPI-Dependencies: Service-Container und Bearer-Pruefung."""

from __future__ import annotations

from fastapi import Header, Request

from idea_radar.container import ServiceContainer
from idea_radar.domain.exceptions import UnauthorizedError


def get_container(request: Request) -> ServiceContainer:
    return request.app.state.container


def require_cron_secret(
    request: Request, authorization: str | None = Header(default=None)
) -> None:
    """Bearer-Token gegen CRON_SECRET pruefen; leeres Secret = keine Pruefung."""
    secret = get_container(request).settings.cron_secret
    if secret and authorization != f"Bearer {secret}":
        raise UnauthorizedError("Invalid or missing bearer token")
