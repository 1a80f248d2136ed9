"""Pydantic models for the project brief (questionnaire answers)."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class BriefModel(BaseModel):
    """Base for brief models: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class Styling(BriefModel):
    tailwind: bool = True
    shadcn: bool = True
    other: Optional[str] = None


class Backend(BriefModel):
    use_vercel: bool = True
    db: str = "none"
    auth: str = "none"


class AIAgentToggles(BriefModel):
    qa: bool = False
    architecture: bool = False
    ide_optimization: bool = False


class AISettings(BriefModel):
    vercel_ai_sdk: bool = Field(default=False, alias="vercelAISDK")
    app_models: Optional[List[str]] = None
    agents: AIAgentToggles = Field(default_factory=AIAgentToggles)
    copilot: str = "none"


class Testing(BriefModel):
    enabled: bool = False
    unit: str = "none"
    e2e: str = "none"


class PRDAgentSelection(BriefModel):
    """
    Which worker agents take part in a run.

    Only agents switched on explicitly run. A brief without any selection
    (``prd_agents`` is None) runs all eight.
    """
    market_analyst: bool = False
    scope_planner: bool = False
    nextjs_architect: bool = False
    ai_designer: bool = False
    data_api_designer: bool = False
    security_officer: bool = False
    performance_engineer: bool = False
    quality_lead: bool = False


class Brief(BriefModel):
    """
    Structured project brief read by the swarm.

    Values are taken as given; only the fields the swarm needs for branching
    (AI SDK usage, testing, database/auth choices, copilot) are consulted.
    """
    idea: str
    framework: str = "nextjs_app"
    wants_next_structure: bool = True
    styling: Styling = Field(default_factory=Styling)
    backend: Backend = Field(default_factory=Backend)
    ai: AISettings = Field(default_factory=AISettings)
    prd_agents: Optional[PRDAgentSelection] = None
    testing: Testing = Field(default_factory=Testing)
    constraints: Optional[str] = None
    model: Optional[str] = None
    doc_generation_model: Optional[str] = None

    @property
    def framework_label(self) -> str:
        """Human-readable framework name."""
        return "Next.js 15 (App Router)" if self.framework == "nextjs_app" else self.framework

    @property
    def styling_label(self) -> str:
        parts = [
            "Tailwind CSS v4" if self.styling.tailwind else None,
            "shadcn/ui" if self.styling.shadcn else None,
            self.styling.other,
        ]
        return ", ".join(p for p in parts if p) or "basic CSS"

    @property
    def app_models_label(self) -> str:
        return ", ".join(self.ai.app_models) if self.ai.app_models else "TBD"


class GenerateRequest(BaseModel):
    """Request body for a generation run."""
    answers: Brief
    user_id: Optional[str] = Field(default=None, alias="userId")

    model_config = ConfigDict(populate_by_name=True)


class GeneratedFile(BaseModel):
    name: str
    content: str


class GenerationMetadata(BaseModel):
    summary: str
    agent_count: int
    message_count: int
    sections_generated: int
    unscheduled_roles: List[str] = Field(default_factory=list)
    duration_seconds: float = 0.0


class GenerateResponse(BaseModel):
    ok: bool = True
    files: List[GeneratedFile]
    metadata: GenerationMetadata
