"""
Tool schemas offered to section agents.

Tools are schema-only declarations. The model may call them to structure its
intermediate reasoning; the provider loop answers every call with an inert
echo of the arguments (see ``prd_swarm.generation.echo_tool_call``).
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Literal, Mapping, Optional, Type

from pydantic import BaseModel, Field

from ..errors import ConfigurationError
from .types import AGENT_CAPABILITIES, Role, lookup


@dataclass(frozen=True)
class ToolSpec:
    """A callable tool as the model sees it."""
    name: str
    description: str
    parameters: Type[BaseModel]

    def to_openai(self) -> Dict[str, Any]:
        """OpenAI/litellm function-tool definition."""
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.parameters.model_json_schema(),
            },
        }


# Common inputs

class ResearchInput(BaseModel):
    section: str = Field(description="Name of the PRD section to research")
    focus: str = Field(description="Specific aspects to focus on")
    context: Optional[str] = Field(default=None, description="Additional context from previous agents")


class HandoffInput(BaseModel):
    to_agent: Literal[
        "orchestrator",
        "market-analyst",
        "scope-planner",
        "nextjs-architect",
        "ai-designer",
        "data-api-designer",
        "security-officer",
        "performance-engineer",
        "quality-lead",
    ] = Field(description="Target agent to hand off to")
    message: str = Field(description="Message for the target agent")
    artifacts: Optional[Dict[str, Any]] = Field(default=None, description="Data to pass to next agent")


class ValidateInput(BaseModel):
    section: str = Field(description="Section name to validate")
    content: str = Field(description="Content to validate")
    criteria: List[str] = Field(description="Validation criteria")


class MergeInput(BaseModel):
    sections: Dict[str, str] = Field(description="Map of section names to content")
    order: Optional[List[str]] = Field(default=None, description="Desired section order")


# Role-specific inputs

class CompetitorInput(BaseModel):
    product_category: str
    target_audience: str


class PersonaInput(BaseModel):
    audience: str
    pain_points: List[str]
    goals: List[str]


class JobStoryInput(BaseModel):
    persona: str
    situation: str
    motivation: str


class PrioritizeInput(BaseModel):
    features: List[str]
    framework: Literal["RICE", "MoSCoW"]


class RoutesInput(BaseModel):
    pages: List[str]
    rendering_preferences: Optional[str] = None


class CachingInput(BaseModel):
    routes: List[str]
    update_frequency: str


class AIToolInput(BaseModel):
    tool_name: str
    purpose: str
    inputs: List[str]


class ConversationInput(BaseModel):
    user_goal: str
    steps: List[str]


class DataModelInput(BaseModel):
    entities: List[str]
    relationships: Optional[List[str]] = None


class APISpecInput(BaseModel):
    resources: List[str]
    style: Literal["REST", "GraphQL", "tRPC"] = "REST"


class ThreatInput(BaseModel):
    features: List[str]
    data_types: List[str]


class AuthInput(BaseModel):
    user_roles: List[str]
    protected_resources: List[str]


class MetricsInput(BaseModel):
    page_types: List[str]
    target_audience: str


class ObservabilityInput(BaseModel):
    critical_paths: List[str]
    alert_thresholds: Optional[str] = None


class TestPlanInput(BaseModel):
    features: List[str]
    critical_paths: List[str]


class RolloutInput(BaseModel):
    environment: str
    strategy: Literal["blue-green", "canary", "rolling"]


TOOL_CATALOG: Mapping[str, ToolSpec] = {
    spec.name: spec
    for spec in (
        ToolSpec(
            "research",
            "Research and generate content for a specific PRD section. "
            "Use this to create detailed, well-researched content.",
            ResearchInput,
        ),
        ToolSpec(
            "handoff",
            "Hand off work to another agent. Use this when you've completed your work "
            "and another agent needs to continue.",
            HandoffInput,
        ),
        ToolSpec("validate", "Validate content for completeness, accuracy, and consistency.", ValidateInput),
        ToolSpec("merge", "Merge content from multiple sections into a coherent document.", MergeInput),
        ToolSpec("analyzeCompetitors", "Analyze competitive landscape for similar products.", CompetitorInput),
        ToolSpec("definePersonas", "Create detailed user personas based on research.", PersonaInput),
        ToolSpec("createJobStories", "Generate job stories in JTBD format.", JobStoryInput),
        ToolSpec("prioritizeFeatures", "Prioritize features using RICE or MoSCoW framework.", PrioritizeInput),
        ToolSpec("designRoutes", "Design Next.js route structure with rendering strategies.", RoutesInput),
        ToolSpec("planCaching", "Design caching and revalidation strategy.", CachingInput),
        ToolSpec("defineAITools", "Define AI SDK tools and their schemas.", AIToolInput),
        ToolSpec("designConversation", "Design conversation flow for AI interactions.", ConversationInput),
        ToolSpec("designDataModel", "Sketch entities and relationships for the data model.", DataModelInput),
        ToolSpec("specifyAPIs", "Outline API resources and the contract style.", APISpecInput),
        ToolSpec("assessThreats", "Perform threat modeling for the application.", ThreatInput),
        ToolSpec("designAuth", "Design authentication and authorization strategy.", AuthInput),
        ToolSpec("defineMetrics", "Define performance metrics and SLIs/SLOs.", MetricsInput),
        ToolSpec("planObservability", "Plan observability and monitoring setup.", ObservabilityInput),
        ToolSpec("createTestPlan", "Create comprehensive test plan.", TestPlanInput),
        ToolSpec("planRollout", "Plan deployment and rollout strategy.", RolloutInput),
    )
}


def tools_for(role: Role) -> Dict[str, ToolSpec]:
    """Tool schemas declared for a role in the capability registry."""
    return {name: TOOL_CATALOG[name] for name in lookup(role).tools}


def _check_registry_tools() -> None:
    for role, descriptor in AGENT_CAPABILITIES.items():
        unknown = [name for name in descriptor.tools if name not in TOOL_CATALOG]
        if unknown:
            raise ConfigurationError(f"{role.value} declares unknown tools: {unknown}")


_check_registry_tools()
