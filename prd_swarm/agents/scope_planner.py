"""
Scope Planner Agent: turns market insights into prioritized work.

Uses Jobs-to-be-Done and MoSCoW to define the MVP, success criteria and
explicit anti-goals. Folds in the market analyst's output when available.
"""

from .base import BaseAgent
from .types import AgentStatus, MessageType, Role


class ScopePlannerAgent(BaseAgent):
    """Use-Case & Scope Planner."""

    role = Role.SCOPE_PLANNER
    step_limit = 3

    def get_system_prompt(self) -> str:
        return """You are a Use-Case & Scope Planner using Jobs-to-be-Done methodology.

Your responsibilities:
- Write job stories in JTBD format
- Define user journeys with clear steps
- Set measurable success criteria
- Prioritize features using RICE or MoSCoW
- Define MVP scope vs v1/vNext
- Document explicit anti-goals (what we won't build)

You create actionable, prioritized feature lists with clear acceptance criteria.
Be ruthless about scope - prioritize ruthlessly for MVP."""

    async def execute(self) -> str:
        self.update_state(AgentStatus.working, "Planning scope and features")

        prompt = f"""{self.get_project_context()}
{self.get_dependency_context()}

Create the **Scope & Features** section for the PRD.

Include:
1. **Job Stories** - 3-5 core job stories in format: "When [situation], I want to [motivation], so I can [outcome]"
2. **User Journeys** - Key workflows with steps
3. **Feature List** - Organized by priority:
   - **Must Have (MVP)** - Critical for launch
   - **Should Have** - Important but not blocking
   - **Could Have** - Nice to have
   - **Won't Have (Yet)** - Explicitly out of scope
4. **Success Criteria** - How we measure success (specific metrics)
5. **Risks & Open Questions** - What could go wrong? What's unclear?

Use MoSCoW prioritization. Be specific about MVP scope."""

        output = await self.generate(prompt)

        self.store_output(output)
        self.send_message(Role.ORCHESTRATOR, MessageType.response, "Scope planning complete")

        return output
