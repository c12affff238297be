"""Ports: Schnittstellen zu Language Model und Trends-Quelle."""

from __future__ import annotations

from typing import Any, Protocol


class LanguageModel(Protocol):
    """Opake async Text-Completion."""

    async def generate(self, prompt: str) -> str: ...


class TrendsSource(Protocol):
    """Liefert das Daily-Trends-Dokument einer Region als JSON."""

    async def fetch_daily(
        self, region: str, category_code: int | None = None
    ) -> dict[str, Any]: ...
