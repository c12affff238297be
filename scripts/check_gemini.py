"""
Gemini-Konnektivitaetstest.

Sendet einen Research-Prompt an das konfigurierte Model und prueft, ob die
Antwort als Research-Ergebnis geparst werden kann. Liest den API Key aus
.env via Pydantic Settings.

Ausfuehrung: python scripts/check_gemini.py ["AI in real estate"]
"""

from __future__ import annotations

import asyncio
import sys
import time
from pathlib import Path

# Sicherstellen dass src/ im Python-Path liegt
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from idea_radar.config import Settings  # noqa: E402
from idea_radar.domain.exceptions import UpstreamError  # noqa: E402
from idea_radar.domain.models import ResearchRequest  # noqa: E402
from idea_radar.domain.parsing import parse_research  # noqa: E402
from idea_radar.domain.prompts import build_research_prompt  # noqa: E402
from idea_radar.infrastructure.adapters.gemini_adapter import GeminiAdapter  # noqa: E402


def _result(ok: bool, msg: str) -> None:
    status = "\033[92m[OK]\033[0m" if ok else "\033[91m[FAIL]\033[0m"
    print(f"  {status} {msg}")


async def main(query: str) -> int:
    settings = Settings()
    if not settings.gemini_api_key:
        _result(False, "GEMINI_API_KEY nicht konfiguriert")
        return 1

    print(f"  Model: {settings.gemini_model}")
    adapter = GeminiAdapter(settings.gemini_api_key, settings.gemini_model)
    prompt = build_research_prompt(ResearchRequest(query=query))

    t0 = time.monotonic()
    try:
        raw = await adapter.generate(prompt)
    except UpstreamError as e:
        _result(False, str(e))
        return 1
    ms = int((time.monotonic() - t0) * 1000)
    _result(True, f"Antwort: {len(raw)} Zeichen ({ms}ms)")

    result = parse_research(query, raw)
    parsed = bool(result.trends or result.opportunities)
    _result(parsed, f"Trends: {len(result.trends)}, Opportunities: {len(result.opportunities)}")
    print(f"\n  {result.market_overview[:200]}")
    return 0 if parsed else 1


if __name__ == "__main__":
    topic = sys.argv[1] if len(sys.argv) > 1 else "AI agents for small businesses"
    sys.exit(asyncio.run(main(topic)))
