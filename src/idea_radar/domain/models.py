"""Domain-Modelle fuer Research, Ideation, Resources und Trends.

Framework-unabhaengig (nur Pydantic fuer Serialisierung). In Python
snake_case, an der JSON-Grenze camelCase (Alias-Generator).
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

ResearchDomain = Literal["investment", "education", "real_estate", "technology", "health"]
AgentType = Literal["single", "multi", "hierarchical"]
JobStatus = Literal["PENDING", "RUNNING", "COMPLETED", "FAILED"]


class CamelModel(BaseModel):
    """Basis: camelCase-Aliase, Konstruktion auch per Feldname."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_json_dict(self) -> dict[str, Any]:
        """JSON-kompatibles Dict mit camelCase-Keys (HTTP-Antworten)."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# --- Research ---

class ResearchRequest(CamelModel):
    """Anfrage fuer eine Marktrecherche."""

    query: str
    domain: ResearchDomain | None = None


class Source(CamelModel):
    title: str
    url: str
    snippet: str | None = None


class ResearchResult(CamelModel):
    """Marktrecherche zu einem Thema. Unveraenderlich nach Erzeugung."""

    query: str
    market_overview: str = ""
    trends: list[str] = []
    pain_points: list[str] = []
    existing_solutions: list[str] = []
    gaps: list[str] = []
    opportunities: list[str] = []
    sources: list[Source] = []
    created_at: datetime
    cached: bool | None = None


class CacheEntry(CamelModel):
    """Gespeichertes Ergebnis; ``expires_at=None`` laeuft nie ab."""

    key: str
    payload: dict[str, Any]
    created_at: datetime
    expires_at: datetime | None = None

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at is not None and self.expires_at <= now


# --- Ideation ---

class GenerationStatus(str, Enum):
    PENDING = "PENDING"
    GENERATING = "GENERATING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"

    @property
    def is_terminal(self) -> bool:
        return self in (GenerationStatus.COMPLETED, GenerationStatus.FAILED)

    def can_transition_to(self, target: GenerationStatus) -> bool:
        return target in _ALLOWED_TRANSITIONS[self]


_ALLOWED_TRANSITIONS: dict[GenerationStatus, frozenset[GenerationStatus]] = {
    GenerationStatus.PENDING: frozenset({GenerationStatus.GENERATING, GenerationStatus.FAILED}),
    GenerationStatus.GENERATING: frozenset({GenerationStatus.COMPLETED, GenerationStatus.FAILED}),
    GenerationStatus.COMPLETED: frozenset(),
    GenerationStatus.FAILED: frozenset(),
}


class AgentArchitecture(CamelModel):
    agent_type: AgentType = "single"
    core_capabilities: list[str] = []
    data_sources: list[str] = []
    integration_points: list[str] = []
    tech_stack_suggestion: list[str] = []


class RevenueModel(CamelModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, protected_namespaces=()
    )

    model_type: str = "SaaS"
    pricing_strategy: str = "Subscription"
    target_mrr: str | None = None


class IdeaDraft(CamelModel):
    """Geparste Idee vor Vergabe von ID und Zeitstempel."""

    title: str = "Untitled"
    description: str = ""
    value_proposition: str = ""
    agent_architecture: AgentArchitecture = Field(default_factory=AgentArchitecture)
    target_audience: str = ""
    revenue_model: RevenueModel = Field(default_factory=RevenueModel)
    key_risks: list[str] = []
    market_fit_score: int = Field(5, ge=1, le=10)
    implementation_hints: list[str] = []


class AIAgentIdea(IdeaDraft):
    """Persistierte Idee, gehoert zu genau einer GenerationSession."""

    id: str
    created_at: datetime


class GenerationSession(CamelModel):
    """Ein Ideation-Durchlauf mit eigenem Lebenszyklus."""

    id: str
    status: GenerationStatus = GenerationStatus.PENDING
    query: str
    ideas: list[AIAgentIdea] = []
    feedback: str | None = None
    error_message: str | None = None
    created_at: datetime
    completed_at: datetime | None = None


# --- Agent Config / Resources ---

class ConfigMeta(CamelModel):
    version: str = "1.0.0"
    idea_id: str | None = None
    generated_at: str | None = None


class AgentSection(CamelModel):
    name: str
    persona: str
    tone: str
    language: str


class PromptsSection(CamelModel):
    system: str
    welcome: str
    placeholder: str
    error_message: str


class UiSection(CamelModel):
    title: str
    subtitle: str
    description: str
    primary_color: str
    accent_color: str
    logo: str | None = None


class CapabilitiesSection(CamelModel):
    streaming: bool
    markdown: bool
    code_highlight: bool
    max_tokens: int
    temperature: float


class AgentConfig(CamelModel):
    """agent-config.json fuer die gescaffoldete Chat-Anwendung."""

    meta: ConfigMeta
    agent: AgentSection
    prompts: PromptsSection
    ui: UiSection
    capabilities: CapabilitiesSection
    examples: list[str]


class EnvVariable(CamelModel):
    key: str
    description: str
    example: str
    required: bool = True
    source: str | None = None


class TemplateFile(CamelModel):
    path: str
    filename: str
    language: str
    description: str
    content: str


class TemplateInfo(CamelModel):
    setup_commands: list[str] = []
    env_variables: list[EnvVariable] = []
    files: list[TemplateFile] = []


class QuickStartStep(CamelModel):
    order: int
    title: str
    description: str
    command: str | None = None
    notes: list[str] = []


class ImplementationResources(CamelModel):
    """Umsetzungspaket zu genau einer Idee."""

    id: str
    idea_id: str
    idea_title: str
    agent_config: AgentConfig
    agent_config_json: str
    template: TemplateInfo
    quick_start_guide: list[QuickStartStep]
    customization_prompt: str
    generated_at: datetime


# --- Trends ---

class TrendingTopic(CamelModel):
    id: str
    title: str
    rank: int = Field(..., ge=1)
    category: str | None = None
    region: str | None = None
    related_queries: list[str] = []
    traffic: str | None = None
    collected_at: datetime


class TrendCollection(CamelModel):
    topics: list[TrendingTopic]
    region: str
    collected_at: datetime
    expires_at: datetime


class CollectionJob(CamelModel):
    id: str
    status: JobStatus
    started_at: datetime | None = None
    completed_at: datetime | None = None
    topics_count: int = 0
    error_message: str | None = None
