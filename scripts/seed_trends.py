"""
Beispiel-Trending-Topics in den lokalen Store schreiben.

Nuetzlich fuer lokale Entwicklung ohne Zugriff auf Google Trends
("Surprise me" liefert dann echte gespeicherte Topics).

Ausfuehrung: python scripts/seed_trends.py [--category real_estate]
"""

from __future__ import annotations

import argparse
import asyncio
import sys
import uuid
from pathlib import Path

# Sicherstellen dass src/ im Python-Path liegt
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from idea_radar.config import Settings  # noqa: E402
from idea_radar.domain.models import TrendingTopic  # noqa: E402
from idea_radar.infrastructure.repositories.store import DocumentStore  # noqa: E402
from idea_radar.infrastructure.repositories.trend_repo import TrendRepository  # noqa: E402
from idea_radar.use_cases._helpers import utc_now  # noqa: E402

SAMPLE_TOPICS = [
    "AI Agents",
    "Real Estate Technology",
    "PropTech Startups",
    "Smart Home Automation",
    "Property Management AI",
    "Virtual Property Tours",
    "Mortgage Rate Trends",
    "Commercial Real Estate",
    "Rental Market Analysis",
    "Home Buying Assistant",
    "Real Estate CRM",
    "Property Valuation AI",
    "Tenant Screening AI",
    "Lease Management Software",
]


async def main(db_path: str, category: str | None) -> None:
    repo = TrendRepository(DocumentStore(db_path))
    now = utc_now()
    topics = [
        TrendingTopic(
            id=str(uuid.uuid4()),
            title=title,
            rank=i + 1,
            category=category,
            collected_at=now,
        )
        for i, title in enumerate(SAMPLE_TOPICS)
    ]
    inserted = await repo.insert_batch(topics)
    print(f"Seeded {inserted} trending topics into {db_path}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed sample trending topics")
    parser.add_argument(
        "--db",
        default=None,
        help="Store DB path (default: STORE_DB_PATH from settings)",
    )
    parser.add_argument(
        "--category",
        default="real_estate",
        help="Category for the seeded topics (default: real_estate)",
    )
    args = parser.parse_args()
    asyncio.run(main(args.db or Settings().store_db_path, args.category or None))
