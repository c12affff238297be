"""Persistenz fuer Generation-Sessions und ihre Ideen."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from idea_radar.domain.exceptions import (
    InvalidSessionTransitionError,
    SessionNotFoundError,
)
from idea_radar.domain.models import AIAgentIdea, GenerationSession, GenerationStatus
from idea_radar.infrastructure.repositories.store import DocumentStore

logger = logging.getLogger(__name__)

_SESSIONS = "generation_sessions"
_IDEAS = "ai_agent_ideas"


class SessionRepository:
    """Sessions und Ideen; Statuswechsel folgen der State-Machine."""

    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    async def create(self, session: GenerationSession) -> GenerationSession:
        await self._store.insert(_SESSIONS, [session.model_dump(exclude={"ideas"})])
        return session

    async def transition(
        self,
        session_id: str,
        status: GenerationStatus,
        *,
        error_message: str | None = None,
        completed_at: datetime | None = None,
    ) -> None:
        """Status setzen; verbotene Wechsel -> InvalidSessionTransitionError."""
        row = await self._store.get_one(_SESSIONS, {"id": session_id})
        if row is None:
            raise SessionNotFoundError(f"Session not found: {session_id}")
        current = GenerationStatus(row["status"])
        if not current.can_transition_to(status):
            raise InvalidSessionTransitionError(
                f"Session {session_id}: {current.value} -> {status.value} not allowed"
            )

        patch: dict[str, Any] = {"status": status}
        if error_message is not None:
            patch["error_message"] = error_message
        if completed_at is not None:
            patch["completed_at"] = completed_at
        await self._store.update(_SESSIONS, {"id": session_id}, patch)
        logger.info("Session %s: %s -> %s", session_id, current.value, status.value)

    async def add_ideas(self, session_id: str, ideas: list[AIAgentIdea]) -> None:
        rows = [{**idea.model_dump(), "session_id": session_id} for idea in ideas]
        await self._store.insert(_IDEAS, rows)

    async def get(self, session_id: str) -> GenerationSession | None:
        """Session mit Ideen (nach created_at, dann Einfuegereihenfolge)."""
        row = await self._store.get_one(_SESSIONS, {"id": session_id})
        if row is None:
            return None
        idea_rows = await self._store.get_many(
            _IDEAS, {"session_id": session_id}, order_by="created_at"
        )
        return GenerationSession.model_validate({
            **row,
            "ideas": [AIAgentIdea.model_validate(r) for r in idea_rows],
        })

    async def get_idea(self, idea_id: str) -> AIAgentIdea | None:
        row = await self._store.get_one(_IDEAS, {"id": idea_id})
        return AIAgentIdea.model_validate(row) if row is not None else None
