"""Ideation-Endpoints: Ideen generieren, Sessions lesen, Resources."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from idea_radar.api.deps import get_container
from idea_radar.api.schemas import (
    GenerateIdeasBody,
    GenerateIdeasData,
    RegenerateBody,
    ok,
)
from idea_radar.container import ServiceContainer
from idea_radar.domain.exceptions import (
    InputValidationError,
    NotFoundError,
    SessionNotFoundError,
)
from idea_radar.domain.models import GenerationSession, GenerationStatus

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/ideation", tags=["Ideation"])


def _session_data(session: GenerationSession) -> dict[str, Any]:
    message = (
        "Idea generation completed"
        if session.status == GenerationStatus.COMPLETED
        else "Idea generation in progress"
    )
    return ok(GenerateIdeasData(session_id=session.id, status=session.status, message=message))


@router.post("/generate")
async def generate_ideas(
    body: GenerateIdeasBody, container: ServiceContainer = Depends(get_container)
) -> dict[str, Any]:
    if not body.original_query.strip():
        raise InputValidationError("originalQuery is required")
    session = await container.ideation.generate_ideas(
        body.research_result, body.original_query, body.feedback
    )
    return _session_data(session)


@router.get("/sessions/{session_id}")
async def get_session(
    session_id: str, container: ServiceContainer = Depends(get_container)
) -> dict[str, Any]:
    session = await container.ideation.get_session(session_id)
    if session is None:
        raise SessionNotFoundError("Session not found")
    return ok(session)


@router.post("/sessions/{session_id}/regenerate")
async def regenerate(
    session_id: str,
    body: RegenerateBody,
    container: ServiceContainer = Depends(get_container),
) -> dict[str, Any]:
    if not body.feedback.strip():
        raise InputValidationError("feedback is required")
    session = await container.ideation.regenerate(session_id, body.feedback)
    return _session_data(session)


@router.post("/resources/{idea_id}")
async def generate_resources(
    idea_id: str, container: ServiceContainer = Depends(get_container)
) -> JSONResponse:
    """201 bei neu erzeugten, 200 bei bereits vorhandenen Resources."""
    existing = await container.resources.get_resources(idea_id)
    if existing is not None:
        return JSONResponse(status_code=200, content=ok(existing))
    resources = await container.resources.generate_resources(idea_id)
    return JSONResponse(status_code=201, content=ok(resources))


@router.get("/resources/{idea_id}")
async def get_resources(
    idea_id: str, container: ServiceContainer = Depends(get_container)
) -> dict[str, Any]:
    resources = await container.resources.get_resources(idea_id)
    if resources is None:
        raise NotFoundError("Resources not found. Generate them first.")
    return ok(resources)
