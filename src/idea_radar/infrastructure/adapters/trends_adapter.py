"""Google Trends Daily-Trends Adapter (TrendsSource-Implementierung)."""

from __future__ import annotations

import json
import logging
import time
from typing import Any

import httpx

logger = logging.getLogger(__name__)

# Google stellt JSON-Antworten einen XSSI-Schutz voran
_XSSI_PREFIX = ")]}'"


class GoogleTrendsAdapter:
    """Async-Adapter fuer den (inoffiziellen) dailytrends-Endpoint."""

    BASE_URL = "https://trends.google.com/trends/api/dailytrends"
    TIMEOUT = 15.0

    def __init__(self, language: str = "en-US", tz_offset: int = 0) -> None:
        self._language = language
        self._tz_offset = tz_offset

    async def fetch_daily(
        self, region: str, category_code: int | None = None
    ) -> dict[str, Any]:
        """Daily-Trends-Dokument einer Region. Fehler werden weitergereicht."""
        params: dict[str, str | int] = {
            "hl": self._language,
            "tz": self._tz_offset,
            "geo": region,
            "ns": 15,
        }
        if category_code is not None:
            params["cat"] = category_code

        async with httpx.AsyncClient(timeout=self.TIMEOUT) as client:
            t0 = time.monotonic()
            resp = await client.get(self.BASE_URL, params=params)
            elapsed_ms = int((time.monotonic() - t0) * 1000)
            logger.info(
                "Google Trends geo=%s cat=%s -> %d (%dms)",
                region, category_code, resp.status_code, elapsed_ms,
            )
            resp.raise_for_status()

        return parse_trends_body(resp.text)


def parse_trends_body(body: str) -> dict[str, Any]:
    """Antworttext ohne XSSI-Praefix als JSON-Objekt."""
    text = body.lstrip()
    if text.startswith(_XSSI_PREFIX):
        text = text[len(_XSSI_PREFIX):].lstrip(",").lstrip()
    data = json.loads(text)
    if not isinstance(data, dict):
        raise ValueError("Unexpected Google Trends payload")
    return data
