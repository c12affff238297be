"""Prompt-Templates fuer Research, Ideation und Config-Generierung.

Reine Funktionen ohne I/O: gleiche Eingabe ergibt exakt den gleichen Prompt.
Jeder Prompt enthaelt alle strukturierten Eingabefelder, eine
Schema-Beschreibung und die Anweisung, nur JSON zu liefern.
"""

from __future__ import annotations

from idea_radar.domain.models import AIAgentIdea, ResearchRequest, ResearchResult
from idea_radar.domain.templates import CUSTOMIZATION_PROMPT_TEMPLATE

_RESEARCH_SCHEMA = """{
  "marketOverview": "string",
  "trends": ["trend1", "trend2", ...],
  "painPoints": ["pain1", "pain2", ...],
  "existingSolutions": ["solution1", "solution2", ...],
  "gaps": ["gap1", "gap2", ...],
  "opportunities": ["opportunity1", "opportunity2", ...],
  "sources": [{"title": "string", "url": "string", "snippet": "string"}, ...]
}"""

_IDEAS_SCHEMA = """[
  {
    "title": "string",
    "description": "string",
    "valueProposition": "string",
    "agentArchitecture": {
      "agentType": "single" | "multi" | "hierarchical",
      "coreCapabilities": ["string"],
      "dataSources": ["string"],
      "integrationPoints": ["string"],
      "techStackSuggestion": ["string"]
    },
    "targetAudience": "string",
    "revenueModel": {
      "modelType": "string",
      "pricingStrategy": "string",
      "targetMrr": "string"
    },
    "keyRisks": ["string"],
    "marketFitScore": number,
    "implementationHints": ["string"]
  }
]"""


def _join(items: list[str]) -> str:
    return ", ".join(items)


def build_research_prompt(request: ResearchRequest) -> str:
    """Marktrecherche-Prompt fuer ein Thema (optional mit Domain-Fokus)."""
    domain_context = f"Focus on the {request.domain} domain." if request.domain else ""

    return f"""You are a market research analyst. Conduct comprehensive research on the following topic and provide structured insights.

Topic: {request.query}
{domain_context}

Please analyze and provide:

1. **Market Overview**: Brief overview of the current market landscape
2. **Key Trends**: List 3-5 major trends in this space
3. **Pain Points**: List 3-5 key problems or pain points users/customers face
4. **Existing Solutions**: List 3-5 existing solutions or competitors in this space
5. **Market Gaps**: List 2-4 gaps or unmet needs in the market
6. **Opportunities**: List 3-5 potential business opportunities
7. **Sources**: List any relevant sources, reports, or references

Format your response as JSON with the following structure:
{_RESEARCH_SCHEMA}

Respond ONLY with valid JSON, no additional text."""


def build_ideation_prompt(
    research: ResearchResult, query: str, feedback: str | None = None
) -> str:
    """Ideation-Prompt aus einem Research-Ergebnis.

    Der Feedback-Abschnitt wird nur angehaengt, wenn ``feedback`` nach
    Strip nicht leer ist.
    """
    feedback_section = ""
    if feedback and feedback.strip():
        feedback_section = (
            "\nUser Feedback for Regeneration:\n"
            f"{feedback.strip()}\n"
            "Please generate different ideas from the previous generation "
            "that address this feedback.\n"
        )

    sources = "; ".join(
        f"{s.title} ({s.url}): {s.snippet}" if s.snippet else f"{s.title} ({s.url})"
        for s in research.sources
    )

    return f"""You are an AI agent business strategist. Based on the market research below, generate 3-5 AI agent project ideas.

CRITICAL CONSTRAINT: Every idea MUST be an AI agent-based solution. Think of products that use autonomous AI agents to solve problems.

Market Research:
- Query: {query}
- Market Overview: {research.market_overview}
- Key Trends: {_join(research.trends)}
- Pain Points: {_join(research.pain_points)}
- Existing Solutions: {_join(research.existing_solutions)}
- Market Gaps: {_join(research.gaps)}
- Opportunities: {_join(research.opportunities)}
- Sources: {sources}
{feedback_section}
For each idea, provide:
1. Title (catchy product name for an AI agent product)
2. Description (2-3 sentences about what the AI agent does)
3. Value Proposition (why users need this AI agent)
4. Agent Architecture:
   - Agent Type: single (one agent), multi (multiple collaborating agents), or hierarchical (manager-worker agents)
   - Core Capabilities: what the agent can do
   - Data Sources: what data the agent uses
   - Integration Points: external systems it connects to
   - Tech Stack Suggestion: recommended technologies
5. Target Audience (who will use this)
6. Revenue Model:
   - Model Type: SaaS, API, Freemium, etc.
   - Pricing Strategy: how to charge
   - Target MRR: realistic monthly recurring revenue goal
7. Key Risks (2-3 main risks)
8. Market Fit Score (integer 1-10)
9. Implementation Hints (MVP recommendations)

Output as JSON array with this structure:
{_IDEAS_SCHEMA}

Respond ONLY with valid JSON array, no additional text."""


def build_config_prompt(idea: AIAgentIdea, language: str = "en") -> str:
    """Prompt fuer agent-config.json auf Basis aller Ideen-Attribute."""
    arch = idea.agent_architecture
    revenue = idea.revenue_model
    target_mrr = f" (target MRR {revenue.target_mrr})" if revenue.target_mrr else ""

    return f"""You are generating a configuration file for an AI agent application.

Based on the following AI agent idea, create an agent-config.json file.

IDEA DETAILS:
- Title: {idea.title}
- Description: {idea.description}
- Value Proposition: {idea.value_proposition}
- Target Audience: {idea.target_audience}
- Agent Type: {arch.agent_type}
- Core Capabilities: {_join(arch.core_capabilities)}
- Data Sources: {_join(arch.data_sources)}
- Integration Points: {_join(arch.integration_points)}
- Tech Stack: {_join(arch.tech_stack_suggestion)}
- Revenue Model: {revenue.model_type} - {revenue.pricing_strategy}{target_mrr}
- Key Risks: {_join(idea.key_risks)}
- Market Fit Score: {idea.market_fit_score}/10
- Implementation Hints: {_join(idea.implementation_hints)}

Generate a JSON configuration with:

1. meta: version "1.0.0", ideaId "{idea.id}"
2. agent:
   - name: A catchy name for this AI agent
   - persona: A detailed description of the AI's personality and expertise (2-3 sentences)
   - tone: The communication style
   - language: "{language}"
3. prompts:
   - system: A detailed system prompt (3-5 sentences) that defines the AI's role, expertise, constraints, and how it should respond
   - welcome: A friendly greeting message that introduces the agent
   - placeholder: Input field placeholder
   - errorMessage: Error message shown to the user
4. ui:
   - title: The agent's name
   - subtitle: A catchy tagline
   - description: Brief description
   - primaryColor: A hex color that matches the industry/brand
   - accentColor: A complementary hex color
5. capabilities:
   - streaming: true
   - markdown: true
   - codeHighlight: based on whether the agent deals with code
   - maxTokens: 2048
   - temperature: 0.7 (adjust based on whether creativity or accuracy is more important)
6. examples: 3-5 example questions users might ask this specific agent

IMPORTANT:
- The persona and system prompt should be specific to the domain and target audience
- All user-facing text (welcome, placeholder, examples) must be in language "{language}"
- Choose professional, industry-appropriate colors

Output ONLY valid JSON, no additional text or markdown code blocks."""


def build_customization_prompt(config_json: str) -> str:
    """Prompt zum Weiterbearbeiten der Config in einem externen Chat-Tool."""
    return CUSTOMIZATION_PROMPT_TEMPLATE.replace("{CONFIG_JSON}", config_json)
