"""Marktrecherche: Cache-Lookup, Model-Aufruf mit Retry, Parsing, Cache-Write."""

from __future__ import annotations

import logging

from pydantic import ValidationError

from idea_radar.domain.cache_keys import research_cache_key
from idea_radar.domain.exceptions import ResearchFailedError, RetryExhaustedError
from idea_radar.domain.models import ResearchRequest, ResearchResult
from idea_radar.domain.parsing import parse_research
from idea_radar.domain.ports import LanguageModel
from idea_radar.domain.prompts import build_research_prompt
from idea_radar.infrastructure.repositories.cache_repo import CacheRepository
from idea_radar.infrastructure.retry import RetryExecutor, RetryPolicy

logger = logging.getLogger(__name__)


class ResearchService:
    """Research-Ergebnisse pro normalisierter Query, gecacht mit TTL."""

    def __init__(
        self,
        model: LanguageModel,
        cache: CacheRepository,
        retry: RetryExecutor,
        policy: RetryPolicy,
        cache_ttl_seconds: int = 86400,
    ) -> None:
        self._model = model
        self._cache = cache
        self._retry = retry
        self._policy = policy
        self._ttl = cache_ttl_seconds

    async def purge_expired(self) -> int:
        return await self._cache.purge_expired()

    async def get_cached(self, query: str) -> ResearchResult | None:
        """Lebender Cache-Eintrag zur Query oder None."""
        key = research_cache_key(query)
        try:
            entry = await self._cache.get(key)
        except Exception as e:
            logger.warning("Research cache read failed (%s): %s", key, e)
            return None
        if entry is None:
            return None
        try:
            return ResearchResult.model_validate(entry.payload)
        except ValidationError as e:
            logger.warning("Research cache entry invalid (%s): %s", key, e)
            return None

    async def research(self, request: ResearchRequest) -> ResearchResult:
        """Research zu ``request.query``; Cache-Treffer ohne Model-Aufruf."""
        cached = await self.get_cached(request.query)
        if cached is not None:
            logger.info("Research cache hit: %r", request.query)
            return cached.model_copy(update={"cached": True})
        logger.info("Research cache miss: %r", request.query)

        prompt = build_research_prompt(request)
        try:
            raw = await self._retry.execute(
                lambda: self._model.generate(prompt),
                self._policy,
                label="Research",
            )
        except RetryExhaustedError as e:
            raise ResearchFailedError(str(e)) from e

        result = parse_research(request.query, raw)

        key = research_cache_key(request.query)
        try:
            await self._cache.put(key, result.model_dump(exclude={"cached"}), self._ttl)
        except Exception as e:
            logger.warning("Research cache write failed (%s): %s", key, e)
        return result
