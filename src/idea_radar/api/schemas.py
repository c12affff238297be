"""Pydantic Request/Response Models fuer die API."""

from __future__ import annotations

from typing import Any

from idea_radar.domain.models import (
    CamelModel,
    GenerationStatus,
    ResearchDomain,
    ResearchResult,
)

QUERY_MIN_LENGTH = 2
QUERY_MAX_LENGTH = 500

# --- Request ---

class ResearchBody(CamelModel):
    """Laengenpruefung der Query erst nach Strip im Router (-> 400)."""

    query: str = ""
    domain: ResearchDomain | None = None


class GenerateIdeasBody(CamelModel):
    research_result: ResearchResult
    original_query: str
    feedback: str | None = None


class RegenerateBody(CamelModel):
    feedback: str = ""


# --- Response ---

class GenerateIdeasData(CamelModel):
    session_id: str
    status: GenerationStatus
    message: str


def ok(data: Any = None) -> dict[str, Any]:
    """Erfolgs-Umschlag ``{success, data}``; Domain-Modelle werden camelCase serialisiert."""
    if isinstance(data, CamelModel):
        data = data.to_json_dict()
    return {"success": True, "data": data}


def fail(message: str) -> dict[str, Any]:
    return {"success": False, "error": message}
