"""Normalisierung des Google-Trends-Daily-Dokuments zu TrendingTopics."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any

from idea_radar.domain.models import TrendingTopic

MAX_RELATED_QUERIES = 5


def _title(search: dict[str, Any]) -> str | None:
    title = search.get("title")
    if isinstance(title, dict) and isinstance(title.get("query"), str):
        return title["query"]
    # Flaches Format: {"query": "..."}
    if isinstance(search.get("query"), str):
        return search["query"]
    return None


def _related(search: dict[str, Any]) -> list[str]:
    related = search.get("relatedQueries")
    if not isinstance(related, list):
        return []
    queries: list[str] = []
    for item in related:
        if isinstance(item, dict) and isinstance(item.get("query"), str):
            queries.append(item["query"])
        elif isinstance(item, str):
            queries.append(item)
        if len(queries) >= MAX_RELATED_QUERIES:
            break
    return queries


def normalize_daily_trends(
    document: dict[str, Any],
    *,
    collected_at: datetime,
    category: str | None = None,
    region: str | None = None,
    max_topics: int = 20,
) -> list[TrendingTopic]:
    """``default.trendingSearchesDays[].trendingSearches[]`` -> TrendingTopics.

    Rang nach Eingabereihenfolge ab 1, fortlaufend ueber alle Tage (eindeutig
    pro Batch). Eintraege ohne Titel werden uebersprungen.
    """
    default = document.get("default") if isinstance(document, dict) else None
    days = default.get("trendingSearchesDays") if isinstance(default, dict) else None
    if not isinstance(days, list):
        return []

    topics: list[TrendingTopic] = []
    for day in days:
        searches = day.get("trendingSearches") if isinstance(day, dict) else None
        if not isinstance(searches, list):
            continue
        for search in searches:
            if len(topics) >= max_topics:
                return topics
            if not isinstance(search, dict):
                continue
            title = _title(search)
            if not title:
                continue
            traffic = search.get("formattedTraffic")
            topics.append(TrendingTopic(
                id=str(uuid.uuid4()),
                title=title,
                rank=len(topics) + 1,
                category=category,
                region=region,
                related_queries=_related(search),
                traffic=traffic if isinstance(traffic, str) else None,
                collected_at=collected_at,
            ))
    return topics
