"""Implementation Resources: Agent-Config, Template, Quick-Start pro Idee."""

from __future__ import annotations

import logging

from idea_radar.domain.agent_config import build_fallback_config, render_agent_config
from idea_radar.domain.exceptions import IdeaNotFoundError, ParseError, RetryExhaustedError
from idea_radar.domain.models import (
    AgentConfig,
    AIAgentIdea,
    ImplementationResources,
)
from idea_radar.domain.parsing import parse_agent_config
from idea_radar.domain.ports import LanguageModel
from idea_radar.domain.prompts import build_config_prompt, build_customization_prompt
from idea_radar.domain.templates import QUICK_START_GUIDE, TEMPLATE_INFO
from idea_radar.infrastructure.repositories.cache_repo import CacheRepository
from idea_radar.infrastructure.repositories.session_repo import SessionRepository
from idea_radar.infrastructure.retry import RetryExecutor, RetryPolicy
from idea_radar.use_cases._helpers import new_id, utc_now

logger = logging.getLogger(__name__)


class ResourcesService:
    """Genau ein Resources-Paket pro Idee; Model-Fehler fallen auf Regeln zurueck."""

    def __init__(
        self,
        model: LanguageModel,
        sessions: SessionRepository,
        cache: CacheRepository,
        retry: RetryExecutor,
        policy: RetryPolicy,
        language: str = "en",
    ) -> None:
        self._model = model
        self._sessions = sessions
        self._cache = cache
        self._retry = retry
        self._policy = policy
        self._language = language

    async def get_resources(self, idea_id: str) -> ImplementationResources | None:
        entry = await self._cache.get(idea_id)
        if entry is None:
            return None
        return ImplementationResources.model_validate(entry.payload)

    async def _generate_config(self, idea: AIAgentIdea) -> AgentConfig:
        prompt = build_config_prompt(idea, self._language)
        try:
            raw = await self._retry.execute(
                lambda: self._model.generate(prompt),
                self._policy,
                label="Config generation",
            )
            return parse_agent_config(raw, idea, self._language)
        except (ParseError, RetryExhaustedError) as e:
            logger.warning("Config generation for %s fell back to rules: %s", idea.id, e)
            return build_fallback_config(idea, self._language)

    async def generate_resources(self, idea_id: str) -> ImplementationResources:
        """Resources zu einer Idee; vorhandene werden unveraendert zurueckgegeben."""
        idea = await self._sessions.get_idea(idea_id)
        if idea is None:
            raise IdeaNotFoundError(f"Idea not found: {idea_id}")

        existing = await self.get_resources(idea_id)
        if existing is not None:
            logger.info("Resources cache hit: %s", idea_id)
            return existing

        config = await self._generate_config(idea)
        config_json = render_agent_config(config)
        resources = ImplementationResources(
            id=new_id(),
            idea_id=idea.id,
            idea_title=idea.title,
            agent_config=config,
            agent_config_json=config_json,
            template=TEMPLATE_INFO,
            quick_start_guide=QUICK_START_GUIDE,
            customization_prompt=build_customization_prompt(config_json),
            generated_at=utc_now(),
        )

        # Resources laufen nie ab
        await self._cache.put(idea_id, resources.model_dump(mode="json"), ttl_seconds=None)
        logger.info("Resources generated for idea %s", idea_id)
        return resources
