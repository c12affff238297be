"""Trend-Endpoints: Liste, Zufallstopic, manuelle und Cron-Sammlung."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from idea_radar.api.deps import get_container, require_cron_secret
from idea_radar.api.schemas import ok
from idea_radar.container import ServiceContainer
from idea_radar.domain.templates import SUPPORTED_REGIONS
from idea_radar.use_cases._helpers import utc_now

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Trends"])


@router.get("/api/trends")
async def list_trends(
    category: str | None = Query(None),
    limit: int = Query(10),
    container: ServiceContainer = Depends(get_container),
) -> dict[str, Any]:
    topics = await container.trends.get_topics(category, limit)
    collected_at = topics[0].collected_at if topics else utc_now()
    return ok({
        "topics": [t.to_json_dict() for t in topics],
        "total": len(topics),
        "collectedAt": collected_at.isoformat(),
    })


@router.get("/api/trends/random")
async def random_trend(
    category: str | None = Query(None),
    container: ServiceContainer = Depends(get_container),
) -> dict[str, Any]:
    topic = await container.trends.get_random_topic(category)
    return ok({
        "topic": topic.to_json_dict(),
        "collectedAt": topic.collected_at.isoformat(),
    })


@router.post("/api/trends/collect", dependencies=[Depends(require_cron_secret)])
async def collect_trends(
    container: ServiceContainer = Depends(get_container),
) -> JSONResponse:
    """Sammlung im Hintergrund starten, sofort 202 mit PENDING-Job."""
    job = container.trends.create_job("PENDING")

    async def _run() -> None:
        collection = await container.trends.collect_trends()
        logger.info("Collection job %s completed: %d topics", job.id, len(collection.topics))

    container.jobs.spawn(_run(), name=f"trends-collect-{job.id}")
    return JSONResponse(status_code=202, content=ok(job))


@router.get("/api/cron/trends", dependencies=[Depends(require_cron_secret)])
async def cron_trends(
    container: ServiceContainer = Depends(get_container),
) -> dict[str, Any]:
    """Alle Regionen synchron sammeln (Cron-Trigger)."""
    count = await container.trends.collect_all_regions(SUPPORTED_REGIONS)
    return ok({
        "collected": count,
        "regions": list(SUPPORTED_REGIONS),
        "timestamp": utc_now().isoformat(),
    })
