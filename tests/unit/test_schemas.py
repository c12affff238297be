"""Unit-Tests fuer Domain-Modelle, API-Schemas und Fehler-Mapping."""

from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from idea_radar.api.errors import map_error
from idea_radar.api.schemas import GenerateIdeasBody, ok
from idea_radar.domain.exceptions import (
    IdeaNotFoundError,
    IdeationFailedError,
    InputValidationError,
    ResearchFailedError,
    UnauthorizedError,
    UpstreamTimeoutError,
)
from idea_radar.domain.models import CacheEntry, IdeaDraft, ResearchRequest, Source

NOW = datetime(2026, 10, 18, tzinfo=timezone.utc)


class TestModels:
    def test_camel_case_aliases(self):
        source = Source(title="t", url="u")
        assert source.to_json_dict() == {"title": "t", "url": "u"}
        draft = IdeaDraft(value_proposition="v")
        data = draft.to_json_dict()
        assert data["valueProposition"] == "v"
        assert data["agentArchitecture"]["agentType"] == "single"
        assert data["revenueModel"]["modelType"] == "SaaS"

    def test_populate_by_alias(self):
        draft = IdeaDraft.model_validate({"marketFitScore": 9, "targetAudience": "SMBs"})
        assert draft.market_fit_score == 9
        assert draft.target_audience == "SMBs"

    @pytest.mark.parametrize("score", [0, 11])
    def test_score_bounds_enforced(self, score):
        with pytest.raises(ValidationError):
            IdeaDraft(market_fit_score=score)

    def test_research_domain_literal(self):
        with pytest.raises(ValidationError):
            ResearchRequest(query="q", domain="gardening")

    def test_cache_entry_expiry(self):
        entry = CacheEntry(key="k", payload={}, created_at=NOW, expires_at=NOW + timedelta(seconds=10))
        assert not entry.is_expired(NOW)
        assert entry.is_expired(NOW + timedelta(seconds=10))
        forever = CacheEntry(key="k", payload={}, created_at=NOW)
        assert not forever.is_expired(NOW + timedelta(days=3650))


class TestSchemas:
    def test_generate_body_camel_case(self):
        body = GenerateIdeasBody.model_validate({
            "researchResult": {"query": "q", "createdAt": NOW.isoformat()},
            "originalQuery": "q",
        })
        assert body.research_result.query == "q"
        assert body.feedback is None

    def test_ok_envelope_serializes_models(self):
        assert ok(Source(title="t", url="u")) == {"success": True, "data": {"title": "t", "url": "u"}}
        assert ok({"a": 1}) == {"success": True, "data": {"a": 1}}


class TestErrorMapping:
    @pytest.mark.parametrize(
        ("error", "status"),
        [
            (IdeaNotFoundError("Idea not found"), 404),
            (InputValidationError("bad"), 400),
            (UnauthorizedError("no"), 401),
            (UpstreamTimeoutError("Research timeout after 60000ms"), 504),
            (ResearchFailedError("Research failed after 3 attempts: request abort"), 504),
            (ResearchFailedError("Research failed after 3 attempts: rate limit"), 429),
            (IdeationFailedError("Idea generation failed: quota exceeded"), 429),
            (ResearchFailedError("Research failed after 3 attempts: boom"), 500),
        ],
    )
    def test_status(self, error, status):
        assert map_error(error)[0] == status

    def test_messages(self):
        assert map_error(UpstreamTimeoutError("timeout"))[1] == "Request timeout. Please try again."
        assert map_error(ResearchFailedError("quota"))[1] == "Rate limit exceeded. Please try again later."
