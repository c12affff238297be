"""Trending Topics: Sammeln, Speichern und "Surprise me"-Auswahl."""

from __future__ import annotations

import asyncio
import logging
import random
from collections.abc import Sequence
from datetime import datetime, timedelta

from idea_radar.domain.exceptions import (
    InputValidationError,
    RetryExhaustedError,
    TrendsCollectionError,
)
from idea_radar.domain.models import (
    CollectionJob,
    JobStatus,
    TrendCollection,
    TrendingTopic,
)
from idea_radar.domain.ports import TrendsSource
from idea_radar.domain.templates import (
    CATEGORY_CODES,
    FALLBACK_TOPIC_ID,
    FALLBACK_TOPICS,
    SUPPORTED_REGIONS,
)
from idea_radar.domain.trend_normalization import normalize_daily_trends
from idea_radar.infrastructure.repositories.trend_repo import TrendRepository
from idea_radar.infrastructure.retry import RetryExecutor, RetryPolicy
from idea_radar.use_cases._helpers import new_id, utc_now

logger = logging.getLogger(__name__)

MIN_LIMIT = 1
MAX_LIMIT = 50
REGION_PAUSE_SECONDS = 0.5


class TrendsService:
    """Sammelt Daily Trends ueber eine TrendsSource und liest sie wieder aus."""

    def __init__(
        self,
        source: TrendsSource,
        repo: TrendRepository,
        retry: RetryExecutor,
        policy: RetryPolicy | None = None,
        *,
        region: str = "KR",
        max_topics: int = 20,
        collection_interval_seconds: int = 3600,
        rng: random.Random | None = None,
    ) -> None:
        self._source = source
        self._repo = repo
        self._retry = retry
        self._policy = policy or RetryPolicy(max_retries=2, base_delay_ms=1000)
        self._region = region
        self._max_topics = max_topics
        self._interval = timedelta(seconds=collection_interval_seconds)
        self._rng = rng or random.Random()

    async def collect_trends(
        self, category: str | None = None, region: str | None = None
    ) -> TrendCollection:
        """Trends einer Region holen, alte Topics entfernen, Batch speichern."""
        if category is not None and category not in CATEGORY_CODES:
            raise InputValidationError(f"Unknown category: {category}")
        region = region or self._region
        category_code = CATEGORY_CODES[category] if category else None

        try:
            document = await self._retry.execute(
                lambda: self._source.fetch_daily(region, category_code),
                self._policy,
                label="Collection",
            )
        except RetryExhaustedError as e:
            raise TrendsCollectionError(str(e)) from e

        collected_at = utc_now()
        topics = normalize_daily_trends(
            document,
            collected_at=collected_at,
            category=category,
            region=region,
            max_topics=self._max_topics,
        )

        await self._repo.purge_older_than(collected_at - self._interval)
        await self._repo.insert_batch(topics)
        logger.info("Collected %d trending topics (region=%s, category=%s)",
                    len(topics), region, category)

        return TrendCollection(
            topics=topics,
            region=region,
            collected_at=collected_at,
            expires_at=collected_at + self._interval,
        )

    async def collect_all_regions(
        self,
        regions: Sequence[str] = SUPPORTED_REGIONS,
        *,
        pause_seconds: float = REGION_PAUSE_SECONDS,
    ) -> int:
        """Alle Regionen nacheinander; fehlschlagende Regionen werden uebersprungen."""
        total = 0
        for i, region in enumerate(regions):
            if i > 0 and pause_seconds > 0:
                await asyncio.sleep(pause_seconds)
            try:
                collection = await self.collect_trends(region=region)
            except TrendsCollectionError as e:
                logger.warning("Trend collection for %s skipped: %s", region, e)
                continue
            total += len(collection.topics)
        logger.info("Total topics collected: %d", total)
        return total

    async def get_topics(
        self, category: str | None = None, limit: int = 10
    ) -> list[TrendingTopic]:
        limit = max(MIN_LIMIT, min(MAX_LIMIT, limit))
        return await self._repo.list_topics(category, limit)

    async def get_random_topic(self, category: str | None = None) -> TrendingTopic:
        """Zufaelliges gespeichertes Topic, bei leerem Store ein Fallback-Topic."""
        topics = await self._repo.list_topics(category)
        if topics:
            return self._rng.choice(topics)
        logger.info("No stored trends, using fallback topic")
        return TrendingTopic(
            id=FALLBACK_TOPIC_ID,
            title=self._rng.choice(FALLBACK_TOPICS),
            rank=1,
            category=category,
            collected_at=utc_now(),
        )

    def create_job(
        self,
        status: JobStatus,
        topics_count: int = 0,
        error_message: str | None = None,
    ) -> CollectionJob:
        """Job-Beschreibung fuer Collection-Trigger (nicht persistiert)."""
        now: datetime = utc_now()
        return CollectionJob(
            id=new_id(),
            status=status,
            started_at=now,
            completed_at=now if status in ("COMPLETED", "FAILED") else None,
            topics_count=topics_count,
            error_message=error_message,
        )
