"""Unit-Tests fuer die Prompt-Templates."""

from datetime import datetime, timezone

from idea_radar.domain.models import AIAgentIdea, ResearchRequest
from idea_radar.domain.prompts import (
    build_config_prompt,
    build_customization_prompt,
    build_ideation_prompt,
    build_research_prompt,
)


def _idea() -> AIAgentIdea:
    return AIAgentIdea(
        id="idea-1",
        title="LeaseBot",
        description="Reviews leases.",
        value_proposition="Saves time.",
        agent_architecture={"agent_type": "multi", "tech_stack_suggestion": ["Python"]},
        target_audience="Landlords",
        revenue_model={"model_type": "API", "pricing_strategy": "Per call"},
        key_risks=["Liability"],
        market_fit_score=7,
        implementation_hints=["Start small"],
        created_at=datetime(2026, 10, 1, tzinfo=timezone.utc),
    )


class TestResearchPrompt:
    def test_contains_query_and_json_directive(self):
        prompt = build_research_prompt(ResearchRequest(query="vertical farming"))
        assert "vertical farming" in prompt
        assert "marketOverview" in prompt
        assert "Respond ONLY with valid JSON" in prompt

    def test_domain_focus_only_when_given(self):
        with_domain = build_research_prompt(ResearchRequest(query="x y", domain="health"))
        without = build_research_prompt(ResearchRequest(query="x y"))
        assert "Focus on the health domain." in with_domain
        assert "Focus on the" not in without

    def test_deterministic(self):
        request = ResearchRequest(query="robots")
        assert build_research_prompt(request) == build_research_prompt(request)


class TestIdeationPrompt:
    def test_embeds_research_fields(self, research_result):
        prompt = build_ideation_prompt(research_result, "AI in real estate")
        assert "PropTech is growing quickly." in prompt
        assert "AI valuation, Smart buildings" in prompt
        assert "Lease automation" in prompt
        assert "https://example.com/report" in prompt
        assert "Report (https://example.com/report): Tenants want faster lease reviews." in prompt
        assert "agentType" in prompt

    def test_feedback_section_only_when_non_blank(self, research_result):
        plain = build_ideation_prompt(research_result, "q")
        blank = build_ideation_prompt(research_result, "q", "   ")
        with_feedback = build_ideation_prompt(research_result, "q", "  more B2B  ")
        assert plain == blank
        assert "User Feedback for Regeneration" not in plain
        assert "User Feedback for Regeneration" in with_feedback
        assert "more B2B" in with_feedback


class TestConfigPrompt:
    def test_embeds_idea_attributes(self):
        prompt = build_config_prompt(_idea())
        assert 'ideaId "idea-1"' in prompt
        assert "LeaseBot" in prompt
        assert "Agent Type: multi" in prompt
        assert "API - Per call" in prompt
        assert "Market Fit Score: 7/10" in prompt

    def test_language_is_configurable(self):
        prompt = build_config_prompt(_idea(), language="de")
        assert 'language: "de"' in prompt


def test_customization_prompt_embeds_config_json():
    prompt = build_customization_prompt('{\n  "a": 1\n}')
    assert '{\n  "a": 1\n}' in prompt
    assert "{CONFIG_JSON}" not in prompt
