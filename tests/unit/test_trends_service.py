"""Unit-Tests fuer TrendsService (Sammeln, Zufallstopic, Limits, Jobs)."""

import random
from datetime import timedelta

import pytest
from fakes import FakeTrendsSource, daily_trends_document

from idea_radar.domain.exceptions import InputValidationError, TrendsCollectionError
from idea_radar.domain.models import TrendingTopic
from idea_radar.domain.templates import FALLBACK_TOPICS
from idea_radar.infrastructure.repositories.trend_repo import TrendRepository
from idea_radar.use_cases._helpers import utc_now
from idea_radar.use_cases.trends import TrendsService


def _service(source, store, retry, **kwargs) -> TrendsService:
    return TrendsService(source, TrendRepository(store), retry, **kwargs)


class TestCollectTrends:
    async def test_collects_and_stores(self, store, retry):
        source = FakeTrendsSource(daily_trends_document("Alpha", "Beta", "Gamma"))
        service = _service(source, store, retry, region="US")

        collection = await service.collect_trends()
        assert [t.title for t in collection.topics] == ["Alpha", "Beta", "Gamma"]
        assert [t.rank for t in collection.topics] == [1, 2, 3]
        assert collection.region == "US"
        assert collection.expires_at - collection.collected_at == timedelta(hours=1)
        assert source.calls == [("US", None)]

        stored = await service.get_topics()
        assert [t.title for t in stored] == ["Alpha", "Beta", "Gamma"]

    async def test_category_code_passed(self, store, retry):
        source = FakeTrendsSource(daily_trends_document("Stocks"))
        collection = await _service(source, store, retry).collect_trends("investment", "JP")
        assert source.calls == [("JP", 7)]
        assert collection.topics[0].category == "investment"

    async def test_unknown_category_rejected(self, store, retry):
        source = FakeTrendsSource(daily_trends_document("x"))
        with pytest.raises(InputValidationError):
            await _service(source, store, retry).collect_trends("gardening")
        assert source.calls == []

    async def test_max_topics_cap(self, store, retry):
        source = FakeTrendsSource(daily_trends_document(*[f"T{i}" for i in range(30)]))
        collection = await _service(source, store, retry, max_topics=20).collect_trends()
        assert len(collection.topics) == 20

    async def test_three_attempts_then_error(self, store, retry, sleep):
        source = FakeTrendsSource(RuntimeError("Network error"))
        with pytest.raises(TrendsCollectionError) as exc_info:
            await _service(source, store, retry).collect_trends()
        assert "Collection failed after 3 attempts" in str(exc_info.value)
        assert "Network error" in str(exc_info.value)
        assert len(source.calls) == 3
        assert sleep.delays == [1.0, 2.0]

    async def test_purges_old_topics(self, store, retry):
        repo = TrendRepository(store)
        old = TrendingTopic(
            id="old-1", title="Old news", rank=1, collected_at=utc_now() - timedelta(hours=3)
        )
        await repo.insert_batch([old])

        source = FakeTrendsSource(daily_trends_document("Fresh"))
        await _service(source, store, retry).collect_trends()
        titles = [t.title for t in await repo.list_topics()]
        assert titles == ["Fresh"]


class TestCollectAllRegions:
    async def test_failing_region_skipped(self, store, retry):
        class RegionSource(FakeTrendsSource):
            async def fetch_daily(self, region, category_code=None):
                self.calls.append((region, category_code))
                if region == "KR":
                    raise RuntimeError("blocked")
                return daily_trends_document("A", "B")

        source = RegionSource()
        service = _service(source, store, retry)
        total = await service.collect_all_regions(["US", "KR", "JP"], pause_seconds=0)
        assert total == 4
        assert [r for r, _ in source.calls] == ["US", "KR", "KR", "KR", "JP"]


class TestRandomTopic:
    async def test_empty_store_returns_fallback(self, store, retry):
        service = _service(FakeTrendsSource({}), store, retry)
        topic = await service.get_random_topic()
        assert topic.id == "default_topic"
        assert topic.rank == 1
        assert topic.title in FALLBACK_TOPICS

    async def test_picks_stored_topic(self, store, retry):
        source = FakeTrendsSource(daily_trends_document("Only one"))
        service = _service(source, store, retry, rng=random.Random(7))
        await service.collect_trends()
        topic = await service.get_random_topic()
        assert topic.title == "Only one"

    async def test_category_filter(self, store, retry):
        repo = TrendRepository(store)
        now = utc_now()
        await repo.insert_batch([
            TrendingTopic(id="a", title="Tuition", rank=1, category="education", collected_at=now),
            TrendingTopic(id="b", title="Bitcoin", rank=2, category="investment", collected_at=now),
        ])
        service = _service(FakeTrendsSource({}), store, retry)
        for _ in range(5):
            topic = await service.get_random_topic("investment")
            assert topic.title == "Bitcoin"


class TestGetTopics:
    @pytest.mark.parametrize(("limit", "expected"), [(0, 1), (-5, 1), (3, 3), (500, 50)])
    async def test_limit_clamped(self, store, retry, limit, expected):
        source = FakeTrendsSource(daily_trends_document(*[f"T{i}" for i in range(60)]))
        service = _service(source, store, retry, max_topics=60)
        await service.collect_trends()
        topics = await service.get_topics(limit=limit)
        assert len(topics) == expected
        assert [t.rank for t in topics] == sorted(t.rank for t in topics)


class TestCreateJob:
    def test_pending(self, store, retry):
        job = _service(FakeTrendsSource({}), store, retry).create_job("PENDING")
        assert job.status == "PENDING"
        assert job.started_at is not None
        assert job.completed_at is None
        assert job.topics_count == 0

    def test_completed(self, store, retry):
        job = _service(FakeTrendsSource({}), store, retry).create_job("COMPLETED", 25)
        assert job.topics_count == 25
        assert job.completed_at is not None

    def test_failed(self, store, retry):
        job = _service(FakeTrendsSource({}), store, retry).create_job("FAILED", 0, "Collection failed")
        assert job.error_message == "Collection failed"
        assert job.completed_at is not None
