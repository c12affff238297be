"""GET-Endpoints fuer Health und Status."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends

from idea_radar.api.deps import get_container
from idea_radar.container import ServiceContainer
from idea_radar.use_cases._helpers import utc_now

router = APIRouter(tags=["Data"])
logger = logging.getLogger(__name__)


@router.get("/health")
async def health_check(
    container: ServiceContainer = Depends(get_container),
) -> dict[str, Any]:
    """Service Health Check mit Store- und Key-Status."""
    settings = container.settings
    return {
        "status": "healthy",
        "timestamp": utc_now().isoformat(),
        "data_sources": {
            "store_db": {"path": container.store.db_path},
            "gemini_api": "configured" if settings.gemini_configured else "not_configured",
            "google_trends": "public_access",
            "background_jobs": container.jobs.pending,
        },
    }
