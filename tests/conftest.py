"""Gemeinsame Fixtures: Store auf tmp_path, Retry ohne Wartezeit, Research-Ergebnis."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

import pytest
from fakes import RecordingSleep

from idea_radar.domain.models import ResearchResult
from idea_radar.infrastructure.repositories.store import DocumentStore
from idea_radar.infrastructure.retry import RetryExecutor


@pytest.fixture()
def store(tmp_path: Path) -> DocumentStore:
    """Temp SQLite Document Store."""
    return DocumentStore(str(tmp_path / "store.db"))


@pytest.fixture()
def sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture()
def retry(sleep: RecordingSleep) -> RetryExecutor:
    return RetryExecutor(sleep=sleep)


@pytest.fixture()
def research_result() -> ResearchResult:
    return ResearchResult(
        query="AI in real estate",
        market_overview="PropTech is growing quickly.",
        trends=["AI valuation", "Smart buildings"],
        pain_points=["Slow paperwork"],
        existing_solutions=["Zillow"],
        gaps=["Lease automation"],
        opportunities=["Agent-based lease review"],
        sources=[{
            "title": "Report",
            "url": "https://example.com/report",
            "snippet": "Tenants want faster lease reviews.",
        }],
        created_at=datetime(2026, 10, 1, tzinfo=timezone.utc),
    )
