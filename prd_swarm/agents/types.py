"""
Type model and capability registry for the PRD swarm.

The registry is static data: it drives wave scheduling and the dependency
context each agent folds into its prompt. Nothing here dispatches at runtime.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

from ..errors import ConfigurationError


class Role(str, Enum):
    """Agent roles in the PRD generation swarm."""
    ORCHESTRATOR = "orchestrator"
    MARKET_ANALYST = "market-analyst"
    SCOPE_PLANNER = "scope-planner"
    NEXTJS_ARCHITECT = "nextjs-architect"
    AI_DESIGNER = "ai-designer"
    DATA_API_DESIGNER = "data-api-designer"
    SECURITY_OFFICER = "security-officer"
    PERFORMANCE_ENGINEER = "performance-engineer"
    QUALITY_LEAD = "quality-lead"


# Worker roles in canonical (editorial) order. Also the compilation order.
WORKER_ROLES: Tuple[Role, ...] = (
    Role.MARKET_ANALYST,
    Role.SCOPE_PLANNER,
    Role.NEXTJS_ARCHITECT,
    Role.AI_DESIGNER,
    Role.DATA_API_DESIGNER,
    Role.SECURITY_OFFICER,
    Role.PERFORMANCE_ENGINEER,
    Role.QUALITY_LEAD,
)

BROADCAST = "all"


class AgentStatus(str, Enum):
    """Lifecycle status of an agent within one run."""
    idle = "idle"
    thinking = "thinking"
    working = "working"
    completed = "completed"
    error = "error"


class MessageType(str, Enum):
    """Message types exchanged on the swarm log."""
    request = "request"
    response = "response"
    handoff = "handoff"
    error = "error"


class AgentState(BaseModel):
    """Per-role, per-run state."""
    role: Role
    status: AgentStatus = AgentStatus.idle
    current_task: Optional[str] = None
    output: Optional[str] = None
    artifacts: Optional[Dict[str, Any]] = None
    error: Optional[str] = None


class AgentMessage(BaseModel):
    """Immutable entry on the swarm message log."""
    model_config = ConfigDict(frozen=True)

    sender: Role
    recipient: Union[Role, str]
    type: MessageType
    content: str
    artifacts: Optional[Dict[str, Any]] = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass(frozen=True)
class CapabilityDescriptor:
    """Static description of what a role does and what it needs."""
    role: Role
    name: str
    description: str
    responsibilities: Tuple[str, ...]
    outputs: Tuple[str, ...]
    dependencies: Tuple[Role, ...]
    tools: Tuple[str, ...]


COMMON_TOOLS: Tuple[str, ...] = ("research", "handoff", "validate", "merge")


AGENT_CAPABILITIES: Mapping[Role, CapabilityDescriptor] = {
    Role.ORCHESTRATOR: CapabilityDescriptor(
        role=Role.ORCHESTRATOR,
        name="PRD Orchestrator",
        description="Editor-in-Chief that aligns the swarm and compiles the final PRD",
        responsibilities=(
            "Create PRD outline and structure",
            "Coordinate agent execution order",
            "Resolve conflicts between agents",
            "Enforce scope boundaries",
            "Compile final PRD document",
        ),
        outputs=("PRD outline", "Final PRD", "Conflict resolutions"),
        dependencies=(),
        tools=(),
    ),
    Role.MARKET_ANALYST: CapabilityDescriptor(
        role=Role.MARKET_ANALYST,
        name="Dev Market & Persona Analyst",
        description="Builds the who/why for a dev audience",
        responsibilities=(
            "Segment developer personas",
            "Map pains and jobs-to-be-done",
            "Competitive analysis",
            "Value proposition",
            "TAM/SAM/SOM estimates",
        ),
        outputs=("Personas", "Problem statement", "Value prop", "Competitive analysis", "Market sizing"),
        dependencies=(Role.ORCHESTRATOR,),
        tools=COMMON_TOOLS + ("analyzeCompetitors", "definePersonas"),
    ),
    Role.SCOPE_PLANNER: CapabilityDescriptor(
        role=Role.SCOPE_PLANNER,
        name="Use-Case & Scope Planner",
        description="Turns insights into prioritized work using JTBD methodology",
        responsibilities=(
            "Write job stories",
            "Define user journeys",
            "Set success criteria",
            "Prioritize with RICE/MoSCoW",
            "Define MVP vs v1/vNext",
            "Document anti-goals",
        ),
        outputs=("Job stories", "Feature list", "Acceptance criteria", "Priorities", "Risks"),
        dependencies=(Role.ORCHESTRATOR, Role.MARKET_ANALYST),
        tools=COMMON_TOOLS + ("createJobStories", "prioritizeFeatures"),
    ),
    Role.NEXTJS_ARCHITECT: CapabilityDescriptor(
        role=Role.NEXTJS_ARCHITECT,
        name="Next.js 15 System Architect",
        description="Owns the technical spine for Next.js applications",
        responsibilities=(
            "Choose rendering strategies per route",
            "Define Server Actions usage",
            "Select Edge vs Node runtimes",
            "Design folder topology",
            "Plan caching and invalidation",
            "Set bundling strategy",
            "Define env & secrets management",
        ),
        outputs=("Architecture diagram", "Route tree", "Performance budgets", "Dependency list"),
        dependencies=(Role.ORCHESTRATOR, Role.SCOPE_PLANNER),
        tools=COMMON_TOOLS + ("designRoutes", "planCaching"),
    ),
    Role.AI_DESIGNER: CapabilityDescriptor(
        role=Role.AI_DESIGNER,
        name="AI Interaction Designer",
        description="Designs AI features and agent UX with Vercel AI SDK",
        responsibilities=(
            "Define conversation patterns",
            "Design tool/command schemas",
            "Plan retrieval/memory approach",
            "Specify streaming UX",
            "Handle error states",
            "Set model policies",
            "Define token/latency budgets",
            "Create safety prompts",
            "Design eval goals",
        ),
        outputs=("Interaction flows", "Tool specs", "Eval goals", "Telemetry requirements"),
        dependencies=(Role.ORCHESTRATOR, Role.SCOPE_PLANNER, Role.NEXTJS_ARCHITECT),
        tools=COMMON_TOOLS + ("defineAITools", "designConversation"),
    ),
    Role.DATA_API_DESIGNER: CapabilityDescriptor(
        role=Role.DATA_API_DESIGNER,
        name="Data, API & Extensibility Designer",
        description="Specifies data contracts and future-proofing",
        responsibilities=(
            "Choose data stores",
            "Design migration approach",
            "Draft ERD/schema",
            "Specify API contracts",
            "Plan webhooks/events",
            "Define extension points",
            "Version APIs",
            "Multi-tenant considerations",
        ),
        outputs=("Data model", "API spec", "Versioning policy", "Multi-tenant plan"),
        dependencies=(Role.ORCHESTRATOR, Role.SCOPE_PLANNER, Role.NEXTJS_ARCHITECT),
        tools=COMMON_TOOLS + ("designDataModel", "specifyAPIs"),
    ),
    Role.SECURITY_OFFICER: CapabilityDescriptor(
        role=Role.SECURITY_OFFICER,
        name="Security, Privacy & Trust Officer",
        description="Prevents security incidents and ensures compliance",
        responsibilities=(
            "Design AuthN/AuthZ",
            "Plan session strategy",
            "Create threat model",
            "Handle secrets & key rotation",
            "Implement rate limiting",
            "Setup audit logging",
            "Address AI-specific risks",
            "Ensure GDPR/PII compliance",
        ),
        outputs=("Security requirements", "Threat model", "Compliance notes", "Incident playbook"),
        dependencies=(Role.ORCHESTRATOR, Role.NEXTJS_ARCHITECT, Role.AI_DESIGNER, Role.DATA_API_DESIGNER),
        tools=COMMON_TOOLS + ("assessThreats", "designAuth"),
    ),
    Role.PERFORMANCE_ENGINEER: CapabilityDescriptor(
        role=Role.PERFORMANCE_ENGINEER,
        name="Performance & Observability Engineer",
        description="Makes it fast and proves it with metrics",
        responsibilities=(
            "Define SLIs/SLOs",
            "Set performance budgets",
            "Plan caching strategy",
            "Optimize images/assets",
            "Design streaming approach",
            "Setup observability",
            "Configure monitoring",
            "Define alert thresholds",
        ),
        outputs=("Performance plan", "Observability setup", "Budgets", "Acceptance gates"),
        dependencies=(Role.ORCHESTRATOR, Role.NEXTJS_ARCHITECT, Role.AI_DESIGNER),
        tools=COMMON_TOOLS + ("defineMetrics", "planObservability"),
    ),
    Role.QUALITY_LEAD: CapabilityDescriptor(
        role=Role.QUALITY_LEAD,
        name="Quality, Rollout & Docs Lead",
        description="Ensures it ships and people can use it",
        responsibilities=(
            "Create test plan",
            "Design AI eval sets",
            "Plan load tests",
            "Define release strategy",
            "Setup feature flags",
            "Plan canary rollout",
            "Write developer docs",
            "Create examples",
            "Document APIs",
        ),
        outputs=("Test plan", "Release checklist", "Documentation outline", "Definition of done"),
        dependencies=(Role.ORCHESTRATOR, Role.AI_DESIGNER, Role.PERFORMANCE_ENGINEER),
        tools=COMMON_TOOLS + ("createTestPlan", "planRollout"),
    ),
}


def lookup(role: Role) -> CapabilityDescriptor:
    """
    Return the capability descriptor for a role.

    Raises:
        ConfigurationError: If the role is not part of the registry
    """
    try:
        return AGENT_CAPABILITIES[Role(role)]
    except (KeyError, ValueError) as e:
        raise ConfigurationError(f"Unknown agent role: {role!r}") from e


def dependencies_of(role: Role) -> Tuple[Role, ...]:
    """Declared dependency roles of a role."""
    return lookup(role).dependencies


def validate_registry(
    capabilities: Mapping[Role, CapabilityDescriptor] = AGENT_CAPABILITIES,
    compile_order: Tuple[Role, ...] = WORKER_ROLES,
) -> None:
    """
    Check the static registry for consistency.

    Every dependency must name a registry role, the dependency graph must be
    acyclic, and the compile order must cover every worker and list each role
    after all of its dependencies.

    Raises:
        ConfigurationError: On the first inconsistency found
    """
    missing_roles = [r for r in Role if r not in capabilities]
    if missing_roles:
        raise ConfigurationError(f"Roles without capability descriptor: {missing_roles}")

    for role, descriptor in capabilities.items():
        if descriptor.role != role:
            raise ConfigurationError(f"Descriptor for {role.value} declares role {descriptor.role.value}")
        for dep in descriptor.dependencies:
            if dep not in capabilities:
                raise ConfigurationError(f"{role.value} depends on unknown role {dep!r}")
            if dep == role:
                raise ConfigurationError(f"{role.value} depends on itself")

    if set(compile_order) != set(WORKER_ROLES) or len(compile_order) != len(WORKER_ROLES):
        raise ConfigurationError("Compile order must list every worker role exactly once")

    position = {role: i for i, role in enumerate(compile_order)}
    for role in compile_order:
        for dep in capabilities[role].dependencies:
            if dep == Role.ORCHESTRATOR:
                continue
            # Earlier position for every dependency also rules out cycles
            # among the workers.
            if position[dep] >= position[role]:
                raise ConfigurationError(
                    f"Compile order lists {role.value} before its dependency {dep.value}"
                )

    if any(dep != Role.ORCHESTRATOR for dep in capabilities[Role.ORCHESTRATOR].dependencies):
        raise ConfigurationError("Orchestrator must not depend on worker roles")


def role_names(roles: List[Role]) -> List[str]:
    """Display names for a list of roles."""
    return [lookup(r).name for r in roles]


validate_registry()
