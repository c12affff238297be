"""Test-Doubles fuer LanguageModel, TrendsSource und asyncio.sleep."""

from __future__ import annotations

import json
from typing import Any


class ScriptedModel:
    """LanguageModel-Fake: gibt Antworten der Reihe nach zurueck.

    Exceptions in der Liste werden geworfen statt zurueckgegeben; die
    letzte Antwort wiederholt sich, wenn die Liste aufgebraucht ist.
    """

    def __init__(self, *responses: str | BaseException) -> None:
        self._responses = list(responses)
        self.prompts: list[str] = []

    @property
    def calls(self) -> int:
        return len(self.prompts)

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        index = min(len(self.prompts) - 1, len(self._responses) - 1)
        response = self._responses[index]
        if isinstance(response, BaseException):
            raise response
        return response


class FakeTrendsSource:
    """TrendsSource-Fake mit fester Antwort oder Fehlern."""

    def __init__(self, *responses: dict[str, Any] | BaseException) -> None:
        self._responses = list(responses)
        self.calls: list[tuple[str, int | None]] = []

    async def fetch_daily(
        self, region: str, category_code: int | None = None
    ) -> dict[str, Any]:
        self.calls.append((region, category_code))
        index = min(len(self.calls) - 1, len(self._responses) - 1)
        response = self._responses[index]
        if isinstance(response, BaseException):
            raise response
        return response


class RecordingSleep:
    """Ersatz fuer asyncio.sleep, merkt sich die Wartezeiten."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


def daily_trends_document(*titles: str) -> dict[str, Any]:
    """Minimales dailytrends-Dokument mit einem Tag."""
    return {
        "default": {
            "trendingSearchesDays": [{
                "date": "20261018",
                "trendingSearches": [
                    {
                        "title": {"query": title},
                        "formattedTraffic": "100K+",
                        "relatedQueries": [{"query": f"{title} news"}],
                    }
                    for title in titles
                ],
            }],
        },
    }


IDEA_PAYLOAD: dict[str, Any] = {
    "title": "LeaseBot",
    "description": "An agent that reviews lease contracts.",
    "valueProposition": "Saves hours of legal review.",
    "agentArchitecture": {
        "agentType": "multi",
        "coreCapabilities": ["contract parsing", "risk flagging"],
        "dataSources": ["lease PDFs"],
        "integrationPoints": ["DocuSign"],
        "techStackSuggestion": ["Python", "LangGraph"],
    },
    "targetAudience": "Property managers",
    "revenueModel": {
        "modelType": "SaaS",
        "pricingStrategy": "Per seat",
        "targetMrr": "$20K",
    },
    "keyRisks": ["Legal liability"],
    "marketFitScore": 8,
    "implementationHints": ["Start with residential leases"],
}

RESEARCH_PAYLOAD: dict[str, Any] = {
    "marketOverview": "Lease management is fragmented.",
    "trends": ["AI contract review", 42, "Remote leasing"],
    "painPoints": ["Manual review"],
    "existingSolutions": ["DocuSign CLM"],
    "gaps": ["SMB landlords"],
    "opportunities": ["Lease review agent"],
    "sources": [{"title": "Report", "url": "https://example.com", "snippet": "..."}],
}

CONFIG_PAYLOAD: dict[str, Any] = {
    "agent": {"name": "LeaseBot Pro", "persona": "A meticulous lease analyst.", "tone": "precise"},
    "prompts": {"system": "You review leases.", "welcome": "Upload your lease."},
    "ui": {"subtitle": "Leases, decoded", "primaryColor": "#1E3A8A"},
    "capabilities": {"temperature": 0.3},
    "examples": ["Is this clause standard?", "What is the notice period?"],
}


def ideas_json(*ideas: dict[str, Any]) -> str:
    return json.dumps(list(ideas) or [IDEA_PAYLOAD])
