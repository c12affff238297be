"""Parser fuer Model-Antworten: JSON-Extraktion, Validierung, Defaults.

Model-Ausgaben sind unzuverlaessig (Code-Fences, Fliesstext um das JSON,
falsche Typen). Jede Funktion liefert ein vollstaendig befuelltes Modell
oder wirft ``ParseError``. Einzige Ausnahme: ``parse_research`` degradiert
statt zu werfen.
"""

from __future__ import annotations

import json
import logging
import math
import re
from datetime import datetime, timezone
from typing import Any

from pydantic import ValidationError

from idea_radar.domain.agent_config import merge_agent_config
from idea_radar.domain.exceptions import ParseError
from idea_radar.domain.models import (
    AgentConfig,
    AIAgentIdea,
    IdeaDraft,
    ResearchResult,
    Source,
)

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"```(?:json)?\s*([\s\S]*?)```")
_AGENT_TYPES = ("single", "multi", "hierarchical")
_DEFAULT_SCORE = 5
_OVERVIEW_FALLBACK_CHARS = 500


# --- JSON-Extraktion ---

def _balanced_span(raw: str) -> str | None:
    """Erster balancierter Top-Level-Block ``{...}`` oder ``[...]``.

    Klammern in String-Literalen (inkl. Escapes) zaehlen nicht.
    """
    start = -1
    for i, ch in enumerate(raw):
        if ch in "{[":
            start = i
            break
    if start < 0:
        return None

    depth = 0
    in_string = False
    escaped = False
    for i in range(start, len(raw)):
        ch = raw[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch in "{[":
            depth += 1
        elif ch in "}]":
            depth -= 1
            if depth == 0:
                return raw[start:i + 1]
    return None


def extract_json_text(raw: str) -> str:
    """JSON-Kandidat aus einer Model-Antwort.

    Reihenfolge: Inhalt eines Code-Fence (```json oder ```), sonst erster
    balancierter ``{}``/``[]``-Block, sonst der Rohtext.
    """
    match = _FENCE_RE.search(raw)
    if match:
        return match.group(1).strip()
    span = _balanced_span(raw)
    if span is not None:
        return span
    return raw.strip()


def _load_json(raw: str) -> Any:
    try:
        return json.loads(extract_json_text(raw))
    except json.JSONDecodeError as e:
        raise ParseError(f"Invalid JSON in model response: {e}") from e


# --- Feld-Normalisierung ---

def string_list(value: Any) -> list[str]:
    """Nur String-Elemente behalten (Reihenfolge bleibt), sonst leere Liste."""
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str)]


def _text(value: Any, default: str = "") -> str:
    if isinstance(value, str) and value:
        return value
    return default


def clamp_score(value: Any) -> int:
    """Market-Fit-Score auf eine Ganzzahl in [1, 10].

    bool, nicht-numerische Werte und NaN ergeben 5. Numerische Strings
    ("7") zaehlen als Zahl. Rundung: .5 nach oben (weg von Null).
    """
    if isinstance(value, bool):
        return _DEFAULT_SCORE
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return _DEFAULT_SCORE
    if not isinstance(value, (int, float)):
        return _DEFAULT_SCORE
    if isinstance(value, float) and math.isnan(value):
        return _DEFAULT_SCORE
    # Erst clampen (faengt auch +-inf ab), dann runden
    clamped = min(10, max(1, value))
    return int(math.floor(clamped + 0.5))


def normalize_agent_type(value: Any) -> str:
    """Exakt single/multi/hierarchical (case-sensitive), sonst "single"."""
    if isinstance(value, str) and value in _AGENT_TYPES:
        return value
    return "single"


def _sources(value: Any) -> list[Source]:
    if not isinstance(value, list):
        return []
    sources: list[Source] = []
    for item in value:
        if not isinstance(item, dict):
            continue
        title = item.get("title")
        url = item.get("url")
        if not isinstance(title, str) or not isinstance(url, str):
            continue
        snippet = item.get("snippet")
        sources.append(Source(
            title=title,
            url=url,
            snippet=snippet if isinstance(snippet, str) else None,
        ))
    return sources


# --- Research ---

def parse_research(
    query: str, raw: str, created_at: datetime | None = None
) -> ResearchResult:
    """Research-Antwort parsen; bei Strukturfehlern degradiertes Ergebnis.

    Degradiert heisst: ``market_overview`` = erste 500 Zeichen des
    Rohtexts, alle Listen leer.
    """
    created_at = created_at or datetime.now(timezone.utc)
    try:
        data = _load_json(raw)
    except ParseError as e:
        logger.warning("Research response not parseable, degrading: %s", e)
        data = None

    if not isinstance(data, dict):
        return ResearchResult(
            query=query,
            market_overview=raw[:_OVERVIEW_FALLBACK_CHARS],
            created_at=created_at,
        )

    return ResearchResult(
        query=query,
        market_overview=_text(data.get("marketOverview")),
        trends=string_list(data.get("trends")),
        pain_points=string_list(data.get("painPoints")),
        existing_solutions=string_list(data.get("existingSolutions")),
        gaps=string_list(data.get("gaps")),
        opportunities=string_list(data.get("opportunities")),
        sources=_sources(data.get("sources")),
        created_at=created_at,
    )


# --- Ideation ---

def _architecture(value: Any) -> dict[str, Any]:
    arch = value if isinstance(value, dict) else {}
    return {
        "agent_type": normalize_agent_type(arch.get("agentType")),
        "core_capabilities": string_list(arch.get("coreCapabilities")),
        "data_sources": string_list(arch.get("dataSources")),
        "integration_points": string_list(arch.get("integrationPoints")),
        "tech_stack_suggestion": string_list(arch.get("techStackSuggestion")),
    }


def _revenue(value: Any) -> dict[str, Any]:
    revenue = value if isinstance(value, dict) else {}
    target_mrr = revenue.get("targetMrr")
    if isinstance(target_mrr, (int, float)) and not isinstance(target_mrr, bool):
        target_mrr = str(target_mrr)
    return {
        "model_type": _text(revenue.get("modelType"), "SaaS"),
        "pricing_strategy": _text(revenue.get("pricingStrategy"), "Subscription"),
        "target_mrr": target_mrr if isinstance(target_mrr, str) and target_mrr else None,
    }


def _idea_draft(item: dict[str, Any]) -> IdeaDraft:
    return IdeaDraft(
        title=_text(item.get("title"), "Untitled"),
        description=_text(item.get("description")),
        value_proposition=_text(item.get("valueProposition")),
        agent_architecture=_architecture(item.get("agentArchitecture")),
        target_audience=_text(item.get("targetAudience")),
        revenue_model=_revenue(item.get("revenueModel")),
        key_risks=string_list(item.get("keyRisks")),
        market_fit_score=clamp_score(item.get("marketFitScore")),
        implementation_hints=string_list(item.get("implementationHints")),
    )


def parse_ideas(raw: str) -> list[IdeaDraft]:
    """Ideen-Array parsen (auch ``{"ideas": [...]}``).

    Nicht-Objekt-Elemente werden uebersprungen. Kein Array oder keine
    einzige gueltige Idee -> ``ParseError``.
    """
    data = _load_json(raw)
    if isinstance(data, dict) and isinstance(data.get("ideas"), list):
        data = data["ideas"]
    if not isinstance(data, list):
        raise ParseError("Model response is not a JSON array of ideas")

    try:
        ideas = [_idea_draft(item) for item in data if isinstance(item, dict)]
    except ValidationError as e:
        raise ParseError(f"Invalid idea record: {e}") from e

    if not ideas:
        raise ParseError("Model response contains no ideas")
    return ideas


# --- Agent Config ---

def parse_agent_config(raw: str, idea: AIAgentIdea, language: str = "en") -> AgentConfig:
    """Config-Antwort parsen und sektionsweise mit Defaults mergen."""
    data = _load_json(raw)
    if not isinstance(data, dict):
        raise ParseError("Model response is not a JSON object")
    try:
        return merge_agent_config(data, idea, language)
    except ValidationError as e:
        raise ParseError(f"Invalid agent config: {e}") from e
