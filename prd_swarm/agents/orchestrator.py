"""
Orchestrator Agent: the editor-in-chief of the PRD swarm.

Drives one run end to end:
1. Plans execution waves from the selected roles and the capability registry
2. Writes a PRD outline
3. Runs each wave concurrently, waves strictly one after another
4. Compiles every stored section into the final PRD

A worker that fails is recorded and skipped; its dependents still run with
whatever context is available. Outline and compile failures are fatal.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Tuple, Type

from ..core.config import settings
from ..errors import ConfigurationError, SchedulingDeadlock
from ..generation import GenerateFn
from .ai_designer import AIDesignerAgent
from .architect import NextJSArchitectAgent
from .base import AgentResult, BaseAgent
from .context import SwarmContext
from .data_api_designer import DataAPIDesignerAgent
from .market_analyst import MarketAnalystAgent
from .performance_engineer import PerformanceEngineerAgent
from .quality_lead import QualityLeadAgent
from .scope_planner import ScopePlannerAgent
from .security_officer import SecurityOfficerAgent
from .types import (
    WORKER_ROLES,
    AgentStatus,
    Role,
    dependencies_of as registry_dependencies,
    lookup,
    role_names,
)

logger = logging.getLogger(__name__)


AGENT_CLASSES: Mapping[Role, Type[BaseAgent]] = {
    Role.MARKET_ANALYST: MarketAnalystAgent,
    Role.SCOPE_PLANNER: ScopePlannerAgent,
    Role.NEXTJS_ARCHITECT: NextJSArchitectAgent,
    Role.AI_DESIGNER: AIDesignerAgent,
    Role.DATA_API_DESIGNER: DataAPIDesignerAgent,
    Role.SECURITY_OFFICER: SecurityOfficerAgent,
    Role.PERFORMANCE_ENGINEER: PerformanceEngineerAgent,
    Role.QUALITY_LEAD: QualityLeadAgent,
}

# Brief selection field -> worker role
SELECTION_FIELDS: Mapping[str, Role] = {
    "market_analyst": Role.MARKET_ANALYST,
    "scope_planner": Role.SCOPE_PLANNER,
    "nextjs_architect": Role.NEXTJS_ARCHITECT,
    "ai_designer": Role.AI_DESIGNER,
    "data_api_designer": Role.DATA_API_DESIGNER,
    "security_officer": Role.SECURITY_OFFICER,
    "performance_engineer": Role.PERFORMANCE_ENGINEER,
    "quality_lead": Role.QUALITY_LEAD,
}


def _check_agent_classes() -> None:
    if set(AGENT_CLASSES) != set(WORKER_ROLES):
        raise ConfigurationError("AGENT_CLASSES must cover exactly the worker roles")
    for role, cls in AGENT_CLASSES.items():
        if cls.role != role:
            raise ConfigurationError(f"{cls.__name__} declares role {cls.role.value}, expected {role.value}")
    if set(SELECTION_FIELDS.values()) != set(WORKER_ROLES):
        raise ConfigurationError("SELECTION_FIELDS must cover exactly the worker roles")


_check_agent_classes()


@dataclass(frozen=True)
class WavePlan:
    """Execution plan: ordered waves plus roles that could never be placed."""
    waves: List[List[Role]] = field(default_factory=list)
    unscheduled: List[Role] = field(default_factory=list)

    @property
    def scheduled(self) -> List[Role]:
        return [role for wave in self.waves for role in wave]


def _canonical_key(role: Role) -> Tuple[int, str]:
    try:
        return WORKER_ROLES.index(role), role.value
    except ValueError:
        return len(WORKER_ROLES), role.value


def compute_waves(
    selected: Iterable[Role],
    dependencies_of: Callable[[Role], Iterable[Role]] = registry_dependencies,
) -> WavePlan:
    """
    Group selected roles into dependency-respecting waves.

    A role joins the next wave once each of its dependencies is the
    orchestrator, already placed in an earlier wave, or not selected at all.
    When a scan places nothing while roles remain, scheduling stops and the
    rest are reported as unscheduled.

    Args:
        selected: Roles taking part in the run (the orchestrator is ignored)
        dependencies_of: Dependency lookup, the capability registry by default

    Returns:
        WavePlan with roles inside each wave in canonical order
    """
    selected_set = {Role(r) for r in selected if Role(r) != Role.ORCHESTRATOR}
    remaining = sorted(selected_set, key=_canonical_key)
    placed: set = set()
    waves: List[List[Role]] = []

    while remaining:
        wave = [
            role for role in remaining
            if all(
                dep == Role.ORCHESTRATOR or dep in placed or dep not in selected_set
                for dep in dependencies_of(role)
            )
        ]
        if not wave:
            break
        waves.append(wave)
        placed.update(wave)
        remaining = [role for role in remaining if role not in placed]

    return WavePlan(waves=waves, unscheduled=remaining)


class OrchestratorAgent(BaseAgent):
    """PRD Orchestrator: plans, runs and compiles the swarm."""

    role = Role.ORCHESTRATOR
    step_limit = 1

    def __init__(
        self,
        context: SwarmContext,
        model: Optional[str] = None,
        generate: Optional[GenerateFn] = None,
        strict: Optional[bool] = None,
    ):
        super().__init__(context, model=model, generate=generate)
        self.strict = settings.SWARM_STRICT_SCHEDULING if strict is None else strict
        self.plan: Optional[WavePlan] = None
        self.results: Dict[Role, AgentResult] = {}

        self.agents: Dict[Role, BaseAgent] = {}
        for role in self.selected_roles():
            self.agents[role] = AGENT_CLASSES[role](context, model=model, generate=generate)
            context.dependencies[role] = [dep.value for dep in lookup(role).dependencies]

        logger.info(f"Initialized {len(self.agents)} agents: {[r.value for r in self.agents]}")

    def selected_roles(self) -> List[Role]:
        """Worker roles enabled by the brief, in canonical order."""
        selection = self.context.brief.prd_agents
        if selection is None:
            return list(WORKER_ROLES)
        enabled = {role for name, role in SELECTION_FIELDS.items() if getattr(selection, name)}
        return [role for role in WORKER_ROLES if role in enabled]

    def get_system_prompt(self) -> str:
        return """You are the PRD Orchestrator - the Editor-in-Chief of the PRD generation swarm.

Your responsibilities:
- Create the PRD outline and structure
- Coordinate agent execution in the correct order
- Resolve conflicts and inconsistencies between agents
- Enforce scope boundaries (in-scope vs out-of-scope)
- Compile all agent outputs into a cohesive final PRD
- Ensure professional quality and consistency

You maintain high standards and ensure all sections work together seamlessly.
You are the final authority on content and structure."""

    async def create_outline(self) -> str:
        """Generate the PRD outline and store it on the context."""
        prompt = f"""{self.get_project_context()}

Create a PRD outline for this project. Include:
1. Title and overview
2. Section headers for each major area
3. Subsections where needed
4. Brief notes on what each section should contain

Return the outline in Markdown format with clear hierarchy."""

        outline = await self.generate(prompt, include_tools=False)
        self.context.outline = outline
        return outline

    def get_execution_waves(self) -> WavePlan:
        """
        Plan waves for the selected agents.

        Raises:
            SchedulingDeadlock: In strict mode, when some roles can never run
        """
        plan = compute_waves(self.agents.keys())

        if plan.unscheduled:
            names = [r.value for r in plan.unscheduled]
            if self.strict:
                raise SchedulingDeadlock(plan.unscheduled)
            logger.warning(f"Unresolvable dependencies, skipping roles: {names}")

        self.plan = plan
        return plan

    @property
    def unscheduled_roles(self) -> List[Role]:
        return list(self.plan.unscheduled) if self.plan else []

    async def execute_agents(self, plan: WavePlan) -> Dict[Role, AgentResult]:
        """Run waves in order, agents within a wave concurrently."""
        logger.info(f"Executing {len(self.agents)} agents in {len(plan.waves)} parallel waves")
        for i, wave in enumerate(plan.waves, start=1):
            logger.info(f"  Wave {i}: [{', '.join(role_names(wave))}]")

        for i, wave in enumerate(plan.waves, start=1):
            logger.info(f"Wave {i}/{len(plan.waves)}: executing {len(wave)} agent(s)")
            agents = [self.agents[role] for role in wave]
            for agent in agents:
                agent.update_state(AgentStatus.working, f"Generating {agent.role.value} section")

            results = await asyncio.gather(*(agent.run() for agent in agents))

            for result in results:
                self.results[result.role] = result
                name = lookup(result.role).name
                if result.ok:
                    logger.info(f"  Completed: {name} ({len(result.output or '')} chars)")
                else:
                    logger.warning(f"  Failed: {name}: {result.error}")
            logger.info(f"Wave {i} complete")

        return self.results

    def build_compile_prompt(self) -> str:
        """Compilation prompt with stored sections in canonical order."""
        sections = self.context.sections
        blocks = [
            f"\n### {lookup(role).name}\n{sections[role]}\n"
            for role in WORKER_ROLES
            if sections.get(role)
        ]
        agent_outputs = "\n".join(blocks)

        return f"""You are compiling the final PRD from multiple agent outputs.

{self.get_project_context()}

## Agent Outputs:
{agent_outputs}

Create a polished, professional PRD document that:
1. Starts with a clear title and executive summary
2. Flows logically from market analysis → scope → architecture → implementation concerns
3. Removes redundancy while keeping critical details
4. Maintains consistent terminology and formatting
5. Uses professional Markdown with proper headings, lists, and code blocks
6. Ends with a summary of open questions and next steps

Return the complete PRD in Markdown format."""

    async def compile_prd(self) -> str:
        return await self.generate(
            self.build_compile_prompt(),
            temperature=settings.COMPILE_TEMPERATURE,
            include_tools=False,
        )

    async def execute(self) -> str:
        """
        Run the whole swarm and return the compiled PRD.

        Raises:
            SchedulingDeadlock: In strict mode, before any agent runs
            ProviderError: If the outline or compile step fails
        """
        logger.info("Starting PRD orchestrator")

        try:
            plan = self.get_execution_waves()

            self.update_state(AgentStatus.working, "Creating PRD outline")
            await self.create_outline()

            self.update_state(AgentStatus.working, "Executing agent swarm")
            await self.execute_agents(plan)

            self.update_state(AgentStatus.working, "Compiling final PRD")
            final_prd = await self.compile_prd()

            self.store_output(final_prd)
        except Exception as e:
            if self.state.status != AgentStatus.error:
                self.mark_error(str(e) or type(e).__name__)
            logger.error(f"Orchestrator failed: {e}", exc_info=True)
            raise

        logger.info("PRD orchestrator complete")
        return final_prd

    def get_execution_summary(self) -> str:
        """Markdown summary of every role's final status."""
        states = list(self.context.agent_states.values())
        counts = {status: 0 for status in AgentStatus}
        for state in states:
            counts[state.status] += 1

        lines = [
            "",
            "## Agent Execution Summary",
            "",
            f"- Completed: {counts[AgentStatus.completed]}",
            f"- Errors: {counts[AgentStatus.error]}",
            f"- In Progress: {counts[AgentStatus.working] + counts[AgentStatus.thinking]}",
            f"- Idle: {counts[AgentStatus.idle]}",
            f"- Total: {len(states)}",
            "",
        ]
        for state in states:
            line = f"- {lookup(state.role).name}: {state.status.value}"
            if state.error:
                line += f" ({state.error})"
            lines.append(line)

        if self.unscheduled_roles:
            lines.append("")
            lines.append(f"Unscheduled: {', '.join(r.value for r in self.unscheduled_roles)}")

        return "\n".join(lines) + "\n"
