"""Ideation: Session-Lebenszyklus PENDING -> GENERATING -> COMPLETED/FAILED."""

from __future__ import annotations

import logging

from idea_radar.domain.exceptions import (
    IdeationFailedError,
    ResearchNotFoundError,
    RetryExhaustedError,
    SessionNotFoundError,
)
from idea_radar.domain.models import (
    AIAgentIdea,
    GenerationSession,
    GenerationStatus,
    ResearchResult,
)
from idea_radar.domain.parsing import parse_ideas
from idea_radar.domain.ports import LanguageModel
from idea_radar.domain.prompts import build_ideation_prompt
from idea_radar.infrastructure.repositories.session_repo import SessionRepository
from idea_radar.infrastructure.retry import RetryExecutor, RetryPolicy
from idea_radar.use_cases._helpers import new_id, utc_now
from idea_radar.use_cases.research import ResearchService

logger = logging.getLogger(__name__)


class IdeationService:
    """Erzeugt Ideen-Sessions aus Research-Ergebnissen."""

    def __init__(
        self,
        model: LanguageModel,
        sessions: SessionRepository,
        research: ResearchService,
        retry: RetryExecutor,
        policy: RetryPolicy,
    ) -> None:
        self._model = model
        self._sessions = sessions
        self._research = research
        self._retry = retry
        self._policy = policy

    async def generate_ideas(
        self,
        research: ResearchResult,
        original_query: str,
        feedback: str | None = None,
    ) -> GenerationSession:
        """Neue Session anlegen und Ideen generieren.

        Jeder Fehler nach dem Anlegen setzt die Session auf FAILED (mit
        Fehlermeldung und completed_at) und wird dann weitergereicht.
        """
        feedback = feedback.strip() if feedback and feedback.strip() else None
        session = GenerationSession(
            id=new_id(),
            status=GenerationStatus.PENDING,
            query=original_query,
            feedback=feedback,
            created_at=utc_now(),
        )
        await self._sessions.create(session)

        try:
            await self._sessions.transition(session.id, GenerationStatus.GENERATING)
            prompt = build_ideation_prompt(research, original_query, feedback)
            try:
                raw = await self._retry.execute(
                    lambda: self._model.generate(prompt),
                    self._policy,
                    label="Idea generation",
                )
            except RetryExhaustedError as e:
                raise IdeationFailedError(str(e)) from e

            drafts = parse_ideas(raw)
            ideas = [
                AIAgentIdea(**draft.model_dump(), id=new_id(), created_at=utc_now())
                for draft in drafts
            ]
            await self._sessions.add_ideas(session.id, ideas)
            completed_at = utc_now()
            await self._sessions.transition(
                session.id, GenerationStatus.COMPLETED, completed_at=completed_at
            )
        except Exception as e:
            await self._mark_failed(session.id, e)
            raise

        logger.info("Session %s completed with %d ideas", session.id, len(ideas))
        return session.model_copy(update={
            "status": GenerationStatus.COMPLETED,
            "ideas": ideas,
            "completed_at": completed_at,
        })

    async def _mark_failed(self, session_id: str, error: Exception) -> None:
        message = str(error) or type(error).__name__
        try:
            await self._sessions.transition(
                session_id,
                GenerationStatus.FAILED,
                error_message=message,
                completed_at=utc_now(),
            )
        except Exception as e:
            # Urspruenglicher Fehler hat Vorrang
            logger.error("Could not mark session %s as FAILED: %s", session_id, e)
        logger.warning("Session %s failed: %s", session_id, message)

    async def regenerate(self, session_id: str, feedback: str) -> GenerationSession:
        """Neue Session mit Feedback; die alte bleibt unveraendert."""
        previous = await self._sessions.get(session_id)
        if previous is None:
            raise SessionNotFoundError(f"Session not found: {session_id}")

        research = await self._research.get_cached(previous.query)
        if research is None:
            raise ResearchNotFoundError("Research result not found for regeneration")

        return await self.generate_ideas(research, previous.query, feedback)

    async def get_session(self, session_id: str) -> GenerationSession | None:
        return await self._sessions.get(session_id)
