"""TTL-Cache auf dem Document Store (Research-Ergebnisse, Resources)."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Any

from idea_radar.domain.models import CacheEntry
from idea_radar.infrastructure.repositories.store import DocumentStore

logger = logging.getLogger(__name__)


class CacheRepository:
    """Key-Value-Cache; ein abgelaufener Eintrag gilt als Miss."""

    def __init__(self, store: DocumentStore, table: str = "research_cache") -> None:
        self._store = store
        self._table = table

    async def get(self, key: str, now: datetime | None = None) -> CacheEntry | None:
        row = await self._store.get_one(self._table, {"key": key})
        if row is None:
            return None
        entry = CacheEntry.model_validate(row)
        if entry.is_expired(now or datetime.now(timezone.utc)):
            logger.info("Cache expired: %s", key)
            return None
        return entry

    async def put(
        self,
        key: str,
        payload: dict[str, Any],
        ttl_seconds: int | None = None,
        now: datetime | None = None,
    ) -> CacheEntry:
        """Eintrag schreiben (upsert). ``ttl_seconds=None``: laeuft nie ab."""
        created_at = now or datetime.now(timezone.utc)
        expires_at = (
            created_at + timedelta(seconds=ttl_seconds) if ttl_seconds is not None else None
        )
        entry = CacheEntry(
            key=key, payload=payload, created_at=created_at, expires_at=expires_at
        )
        await self._store.upsert(self._table, entry.model_dump())
        return entry

    async def delete(self, key: str) -> int:
        return await self._store.delete(self._table, {"key": key})

    async def purge_expired(self, now: datetime | None = None) -> int:
        """Abgelaufene Eintraege entfernen, gibt die Anzahl zurueck."""
        removed = await self._store.delete(
            self._table, {"expires_at__lte": now or datetime.now(timezone.utc)}
        )
        if removed:
            logger.info("Cache purge %s: %d entries", self._table, removed)
        return removed
