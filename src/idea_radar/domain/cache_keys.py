"""Cache-Key-Ableitung fuer Research-Ergebnisse."""

from __future__ import annotations

import hashlib


def normalize_query(query: str) -> str:
    return query.strip().lower()


def research_cache_key(query: str) -> str:
    """``research_`` + SHA-256 der normalisierten Query (strip + lower).

    Einzige Ableitung, genutzt von Research und Regenerierung.
    """
    digest = hashlib.sha256(normalize_query(query).encode("utf-8")).hexdigest()
    return f"research_{digest}"
