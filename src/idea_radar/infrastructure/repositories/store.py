"""Async SQLite Document Store (KeyValueStore).

Jede Tabelle hat das gleiche Schema: eine Zeile pro Dokument, JSON in
``doc``, eindeutiger ``key`` (Wert des Key-Felds der Tabelle). Filter laufen
ueber ``json_extract`` und unterstuetzen Django-artige Range-Suffixe
(``__lt``, ``__lte``, ``__gt``, ``__gte``).
"""

from __future__ import annotations

import json
import re
import sqlite3
from collections.abc import Mapping
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any

import aiosqlite

# Tabelle -> Feld, das als eindeutiger Key dient
TABLES: dict[str, str] = {
    "research_cache": "key",
    "generation_sessions": "id",
    "ai_agent_ideas": "id",
    "implementation_resources": "key",
    "trending_topics": "id",
}

_FIELD_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
_OPERATORS = {"lt": "<", "lte": "<=", "gt": ">", "gte": ">="}


def encode_value(value: Any) -> Any:
    """Datetimes als UTC-ISO mit fester Breite (sortierbar als String)."""
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc).isoformat(timespec="microseconds")
    if isinstance(value, Enum):
        return value.value
    return value


def _json_default(value: Any) -> Any:
    encoded = encode_value(value)
    if encoded is value:
        raise TypeError(f"Not JSON serializable: {type(value).__name__}")
    return encoded


def _dumps(doc: Mapping[str, Any]) -> str:
    return json.dumps(dict(doc), default=_json_default, ensure_ascii=False)


def _check_table(table: str) -> str:
    if table not in TABLES:
        raise ValueError(f"Unknown table: {table}")
    return table


def _check_field(field: str) -> str:
    if not _FIELD_RE.match(field):
        raise ValueError(f"Invalid field name: {field}")
    return field


def _where(filters: Mapping[str, Any] | None) -> tuple[str, list[Any]]:
    """Filter-Mapping -> (WHERE-Klausel, Parameter)."""
    if not filters:
        return "", []
    clauses: list[str] = []
    params: list[Any] = []
    for raw_field, value in filters.items():
        field, _, suffix = raw_field.partition("__")
        op = "="
        if suffix:
            if suffix not in _OPERATORS:
                raise ValueError(f"Unknown filter operator: {suffix}")
            op = _OPERATORS[suffix]
        expr = f"json_extract(doc, '$.{_check_field(field)}')"
        if value is None and op == "=":
            clauses.append(f"{expr} IS NULL")
            continue
        value = encode_value(value)
        if isinstance(value, bool):
            value = int(value)
        clauses.append(f"{expr} {op} ?")
        params.append(value)
    return " WHERE " + " AND ".join(clauses), params


class DocumentStore:
    """Async SQLite-Zugriff; Verbindung pro Aufruf wie in den Repositories."""

    def __init__(self, db_path: str) -> None:
        self._db_path = db_path
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        self._ensure_tables()

    @property
    def db_path(self) -> str:
        return self._db_path

    def _ensure_tables(self) -> None:
        """Create tables if they don't exist."""
        conn = sqlite3.connect(self._db_path)
        for table in TABLES:
            conn.execute(f"""
                CREATE TABLE IF NOT EXISTS {table} (
                    seq INTEGER PRIMARY KEY AUTOINCREMENT,
                    key TEXT NOT NULL UNIQUE,
                    doc TEXT NOT NULL
                )
            """)
        conn.commit()
        conn.close()

    def _key_of(self, table: str, row: Mapping[str, Any]) -> str:
        key_field = TABLES[_check_table(table)]
        key = row.get(key_field)
        if not isinstance(key, str) or not key:
            raise ValueError(f"Row for {table} needs a string '{key_field}'")
        return key

    async def get_one(
        self, table: str, filters: Mapping[str, Any] | None = None
    ) -> dict[str, Any] | None:
        rows = await self.get_many(table, filters, limit=1)
        return rows[0] if rows else None

    async def get_many(
        self,
        table: str,
        filters: Mapping[str, Any] | None = None,
        *,
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        """Dokumente nach Filter; Sortierung nach Feld, dann Einfuegereihenfolge."""
        where, params = _where(filters)
        sql = f"SELECT doc FROM {_check_table(table)}{where}"
        direction = "DESC" if descending else "ASC"
        if order_by:
            sql += (
                f" ORDER BY json_extract(doc, '$.{_check_field(order_by)}') {direction},"
                f" seq {direction}"
            )
        else:
            sql += " ORDER BY seq ASC"
        if limit is not None:
            sql += " LIMIT ?"
            params.append(limit)

        async with aiosqlite.connect(self._db_path) as db:
            cursor = await db.execute(sql, params)
            return [json.loads(row[0]) for row in await cursor.fetchall()]

    async def count(self, table: str, filters: Mapping[str, Any] | None = None) -> int:
        where, params = _where(filters)
        async with aiosqlite.connect(self._db_path) as db:
            cursor = await db.execute(
                f"SELECT COUNT(*) FROM {_check_table(table)}{where}", params
            )
            row = await cursor.fetchone()
            return int(row[0]) if row else 0

    async def insert(self, table: str, rows: list[Mapping[str, Any]]) -> int:
        """Neue Dokumente; doppelter Key -> sqlite3.IntegrityError."""
        if not rows:
            return 0
        values = [(self._key_of(table, row), _dumps(row)) for row in rows]
        async with aiosqlite.connect(self._db_path) as db:
            await db.executemany(
                f"INSERT INTO {_check_table(table)} (key, doc) VALUES (?, ?)", values
            )
            await db.commit()
        return len(values)

    async def upsert(self, table: str, row: Mapping[str, Any]) -> None:
        """Insert oder Ersetzen per Key (last write wins)."""
        key = self._key_of(table, row)
        async with aiosqlite.connect(self._db_path) as db:
            await db.execute(
                f"INSERT INTO {_check_table(table)} (key, doc) VALUES (?, ?) "
                "ON CONFLICT(key) DO UPDATE SET doc = excluded.doc",
                (key, _dumps(row)),
            )
            await db.commit()

    async def update(
        self, table: str, filters: Mapping[str, Any], patch: Mapping[str, Any]
    ) -> int:
        """Patch (flach) in alle passenden Dokumente mergen. Gibt Anzahl zurueck."""
        where, params = _where(filters)
        _check_table(table)
        async with aiosqlite.connect(self._db_path) as db:
            cursor = await db.execute(f"SELECT seq, doc FROM {table}{where}", params)
            rows = await cursor.fetchall()
            for seq, doc in rows:
                merged = {**json.loads(doc), **patch}
                await db.execute(
                    f"UPDATE {table} SET doc = ? WHERE seq = ?", (_dumps(merged), seq)
                )
            await db.commit()
        return len(rows)

    async def delete(self, table: str, filters: Mapping[str, Any] | None = None) -> int:
        where, params = _where(filters)
        async with aiosqlite.connect(self._db_path) as db:
            cursor = await db.execute(
                f"DELETE FROM {_check_table(table)}{where}", params
            )
            await db.commit()
            return cursor.rowcount
