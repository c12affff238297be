"""Composition Root: Clients, Repositories und Services einmal erzeugen."""

from __future__ import annotations

from dataclasses import dataclass

from idea_radar.config import Settings
from idea_radar.domain.ports import LanguageModel, TrendsSource
from idea_radar.infrastructure.adapters.gemini_adapter import GeminiAdapter
from idea_radar.infrastructure.adapters.trends_adapter import GoogleTrendsAdapter
from idea_radar.infrastructure.background import BackgroundJobs
from idea_radar.infrastructure.repositories.cache_repo import CacheRepository
from idea_radar.infrastructure.repositories.session_repo import SessionRepository
from idea_radar.infrastructure.repositories.store import DocumentStore
from idea_radar.infrastructure.repositories.trend_repo import TrendRepository
from idea_radar.infrastructure.retry import RetryExecutor, RetryPolicy
from idea_radar.use_cases.ideation import IdeationService
from idea_radar.use_cases.research import ResearchService
from idea_radar.use_cases.resources import ResourcesService
from idea_radar.use_cases.trends import TrendsService


@dataclass
class ServiceContainer:
    settings: Settings
    store: DocumentStore
    research: ResearchService
    ideation: IdeationService
    resources: ResourcesService
    trends: TrendsService
    jobs: BackgroundJobs

    @classmethod
    def build(
        cls,
        settings: Settings,
        *,
        model: LanguageModel | None = None,
        trends_source: TrendsSource | None = None,
        retry: RetryExecutor | None = None,
    ) -> ServiceContainer:
        """Alle Services aus den Settings; Model/Source/Retry fuer Tests injizierbar."""
        model = model or GeminiAdapter(settings.gemini_api_key, settings.gemini_model)
        trends_source = trends_source or GoogleTrendsAdapter()
        retry = retry or RetryExecutor()

        store = DocumentStore(settings.store_db_path)
        sessions = SessionRepository(store)

        research_policy = RetryPolicy(
            max_retries=2,
            base_delay_ms=settings.retry_base_delay_ms,
            timeout_ms=settings.research_timeout,
        )
        generation_policy = RetryPolicy(
            max_retries=2,
            base_delay_ms=settings.retry_base_delay_ms,
            timeout_ms=settings.generation_timeout,
        )

        research = ResearchService(
            model,
            CacheRepository(store, "research_cache"),
            retry,
            research_policy,
            cache_ttl_seconds=settings.research_cache_ttl,
        )
        ideation = IdeationService(model, sessions, research, retry, generation_policy)
        resources = ResourcesService(
            model,
            sessions,
            CacheRepository(store, "implementation_resources"),
            retry,
            generation_policy,
            language=settings.agent_language,
        )
        trends = TrendsService(
            trends_source,
            TrendRepository(store),
            retry,
            RetryPolicy(max_retries=2, base_delay_ms=settings.retry_base_delay_ms),
            region=settings.trends_region,
            max_topics=settings.trends_max_topics,
            collection_interval_seconds=settings.trends_collection_interval,
        )

        return cls(
            settings=settings,
            store=store,
            research=research,
            ideation=ideation,
            resources=resources,
            trends=trends,
            jobs=BackgroundJobs(),
        )
