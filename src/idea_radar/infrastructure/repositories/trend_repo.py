"""Persistenz fuer gesammelte Trending Topics."""

from __future__ import annotations

import logging
from datetime import datetime

from idea_radar.domain.models import TrendingTopic
from idea_radar.infrastructure.repositories.store import DocumentStore

logger = logging.getLogger(__name__)

_TOPICS = "trending_topics"


class TrendRepository:
    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    async def insert_batch(self, topics: list[TrendingTopic]) -> int:
        return await self._store.insert(_TOPICS, [t.model_dump() for t in topics])

    async def purge_older_than(self, cutoff: datetime) -> int:
        removed = await self._store.delete(_TOPICS, {"collected_at__lt": cutoff})
        if removed:
            logger.info("Purged %d trending topics older than %s", removed, cutoff.isoformat())
        return removed

    async def list_topics(
        self, category: str | None = None, limit: int | None = None
    ) -> list[TrendingTopic]:
        """Topics nach Rang aufsteigend, optional nach Kategorie gefiltert."""
        filters = {"category": category} if category else None
        rows = await self._store.get_many(_TOPICS, filters, order_by="rank", limit=limit)
        return [TrendingTopic.model_validate(r) for r in rows]

    async def count(self, category: str | None = None) -> int:
        return await self._store.count(_TOPICS, {"category": category} if category else None)
