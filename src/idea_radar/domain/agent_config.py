"""Agent-Config: Defaults mergen, regelbasierter Fallback, JSON-Rendering."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ValidationError

from idea_radar.domain.models import (
    AgentConfig,
    AgentSection,
    AIAgentIdea,
    CapabilitiesSection,
    ConfigMeta,
    PromptsSection,
    UiSection,
)
from idea_radar.domain.templates import (
    DEFAULT_AGENT_CONFIG,
    FALLBACK_ACCENT_COLOR,
    FALLBACK_PRIMARY_COLOR,
)


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _section(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _merge_section(
    model: type[BaseModel], base: dict[str, Any], value: Any
) -> dict[str, Any]:
    """Keys einzeln uebernehmen; None oder ungueltiger Typ behaelt den Basiswert."""
    merged = dict(base)
    for key, item in _section(value).items():
        if item is None:
            continue
        try:
            model.model_validate({**merged, key: item})
        except ValidationError:
            continue
        merged[key] = item
    return merged


def merge_agent_config(
    parsed: dict[str, Any], idea: AIAgentIdea, language: str = "en"
) -> AgentConfig:
    """Shallow Merge pro Sektion: Basis sind Defaults plus Ideen-Werte.

    Gueltige Keys aus ``parsed`` ueberschreiben die Basis, fehlende oder
    nicht-Objekt-Sektionen werden komplett aus der Basis genommen.
    """
    defaults = DEFAULT_AGENT_CONFIG
    base_agent = {
        **defaults["agent"],
        "name": idea.title,
        "language": language,
    }
    base_ui = {
        **defaults["ui"],
        "title": idea.title,
        "description": idea.description,
    }

    examples = parsed.get("examples")
    if isinstance(examples, list):
        examples = [e for e in examples if isinstance(e, str)]
    if not examples:
        examples = list(defaults["examples"])

    return AgentConfig.model_validate({
        "meta": {
            **_merge_section(
                ConfigMeta,
                {"version": "1.0.0", "generatedAt": _now_iso()},
                parsed.get("meta"),
            ),
            # ideaId immer aus der Idee, nie vom Model
            "ideaId": idea.id,
        },
        "agent": _merge_section(AgentSection, base_agent, parsed.get("agent")),
        "prompts": _merge_section(
            PromptsSection, defaults["prompts"], parsed.get("prompts")
        ),
        "ui": _merge_section(UiSection, base_ui, parsed.get("ui")),
        "capabilities": _merge_section(
            CapabilitiesSection, defaults["capabilities"], parsed.get("capabilities")
        ),
        "examples": examples,
    })


def build_fallback_config(idea: AIAgentIdea, language: str = "en") -> AgentConfig:
    """Regelbasierte Config aus den Ideen-Attributen (kein Model-Aufruf)."""
    tech_stack = [t.lower() for t in idea.agent_architecture.tech_stack_suggestion]
    code_highlight = any("code" in t or "dev" in t for t in tech_stack)

    return AgentConfig.model_validate({
        "meta": {
            "version": "1.0.0",
            "ideaId": idea.id,
            "generatedAt": _now_iso(),
        },
        "agent": {
            "name": idea.title,
            "persona": f"{idea.description} {idea.value_proposition}",
            "tone": "friendly yet professional",
            "language": language,
        },
        "prompts": {
            "system": (
                f"You are {idea.title}. {idea.description} {idea.value_proposition} "
                "Answer user questions in a friendly and professional way."
            ),
            "welcome": f"Hi! I'm {idea.title}. How can I help you?",
            "placeholder": "Type your question...",
            "errorMessage": "Sorry, something went wrong. Please try again.",
        },
        "ui": {
            "title": idea.title,
            "subtitle": idea.value_proposition[:50],
            "description": idea.description,
            "primaryColor": FALLBACK_PRIMARY_COLOR,
            "accentColor": FALLBACK_ACCENT_COLOR,
        },
        "capabilities": {
            "streaming": True,
            "markdown": True,
            "codeHighlight": code_highlight,
            "maxTokens": 2048,
            "temperature": 0.7,
        },
        "examples": [
            f"What can {idea.title} do?",
            "How do I use it?",
            "What is the most used feature?",
        ],
    })


def render_agent_config(config: AgentConfig) -> str:
    """Kanonische JSON-Darstellung (indent=2, camelCase, ohne None-Felder)."""
    return json.dumps(config.to_json_dict(), indent=2, ensure_ascii=False)
