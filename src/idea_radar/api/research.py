"""POST /api/research - Marktrecherche zu einem Thema."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends

from idea_radar.api.deps import get_container
from idea_radar.api.schemas import QUERY_MAX_LENGTH, QUERY_MIN_LENGTH, ResearchBody, ok
from idea_radar.container import ServiceContainer
from idea_radar.domain.exceptions import InputValidationError
from idea_radar.domain.models import ResearchRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Research"])


@router.post("/research")
async def research(
    body: ResearchBody, container: ServiceContainer = Depends(get_container)
) -> dict[str, Any]:
    query = body.query.strip()
    if not query:
        raise InputValidationError("Invalid query: query is required")
    if not QUERY_MIN_LENGTH <= len(query) <= QUERY_MAX_LENGTH:
        raise InputValidationError(
            f"Invalid query: must be between {QUERY_MIN_LENGTH} "
            f"and {QUERY_MAX_LENGTH} characters"
        )

    result = await container.research.research(
        ResearchRequest(query=query, domain=body.domain)
    )
    return ok(result)
