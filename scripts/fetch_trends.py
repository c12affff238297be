"""
Google Trends abrufen und (optional) im lokalen Store speichern.

Ohne --save werden die normalisierten Topics nur ausgegeben.

Ausfuehrung: python scripts/fetch_trends.py --region US [--all-regions] [--save]
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

# Sicherstellen dass src/ im Python-Path liegt
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from idea_radar.config import Settings  # noqa: E402
from idea_radar.container import ServiceContainer  # noqa: E402
from idea_radar.domain.templates import CATEGORY_CODES, SUPPORTED_REGIONS  # noqa: E402
from idea_radar.domain.trend_normalization import normalize_daily_trends  # noqa: E402
from idea_radar.infrastructure.adapters.trends_adapter import GoogleTrendsAdapter  # noqa: E402
from idea_radar.use_cases._helpers import utc_now  # noqa: E402


async def preview(region: str, category: str | None, max_topics: int) -> None:
    code = CATEGORY_CODES[category] if category else None
    document = await GoogleTrendsAdapter().fetch_daily(region, code)
    topics = normalize_daily_trends(
        document,
        collected_at=utc_now(),
        category=category,
        region=region,
        max_topics=max_topics,
    )
    print(f"\n{region}: {len(topics)} topics")
    for topic in topics:
        traffic = f" ({topic.traffic})" if topic.traffic else ""
        print(f"  {topic.rank:>2}. {topic.title}{traffic}")


async def main(args: argparse.Namespace) -> None:
    settings = Settings()
    if not args.save:
        regions = SUPPORTED_REGIONS if args.all_regions else (args.region,)
        for region in regions:
            await preview(region, args.category, settings.trends_max_topics)
        return

    container = ServiceContainer.build(settings)
    if args.all_regions:
        total = await container.trends.collect_all_regions()
        print(f"Saved {total} topics from {len(SUPPORTED_REGIONS)} regions")
    else:
        collection = await container.trends.collect_trends(args.category, args.region)
        print(f"Saved {len(collection.topics)} topics for {collection.region}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Fetch Google daily trends")
    parser.add_argument("--region", default="US", help="Region code (default: US)")
    parser.add_argument(
        "--category",
        choices=sorted(CATEGORY_CODES),
        default=None,
        help="Optional category filter",
    )
    parser.add_argument(
        "--all-regions",
        action="store_true",
        help=f"Fetch all supported regions ({', '.join(SUPPORTED_REGIONS)})",
    )
    parser.add_argument(
        "--save",
        action="store_true",
        help="Store topics via TrendsService instead of printing only",
    )
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    asyncio.run(main(parser.parse_args()))
