"""
Quality Lead Agent: test plan, rollout and developer documentation.

The prompt branches on whether the brief enables automated testing. When it
is deferred, the section documents manual procedures and a phase-two plan.
"""

from .base import BaseAgent
from .types import AgentStatus, MessageType, Role


def _or_default(value: str, default: str) -> str:
    return value if value and value != "none" else default


class QualityLeadAgent(BaseAgent):
    """Quality, Rollout & Docs Lead."""

    role = Role.QUALITY_LEAD
    step_limit = 3

    def get_system_prompt(self) -> str:
        return """You are a Quality, Rollout & Documentation Lead ensuring production readiness.

Your responsibilities:
- Create comprehensive test plan
- Design AI evaluation sets
- Plan load and stress tests
- Define release strategy
- Set up feature flags
- Plan canary/gradual rollout
- Write developer documentation
- Create code examples
- Document APIs

You ensure the product ships successfully and developers can use it.
Focus on practical, executable plans."""

    def _testing_instructions(self) -> str:
        testing = self.context.brief.testing
        if testing.enabled:
            return f"""Include:
1. **Test Plan**:
   - Unit tests: {testing.unit}
   - E2E tests: {testing.e2e}
   - Critical test scenarios (auth, data integrity, error handling)
   - Coverage expectations (aim for 80%+ on critical paths)
2. **AI Evaluation** - If using AI: eval datasets, metrics, golden prompts
3. **Load Testing** - Expected traffic, stress test scenarios
4. **Release Strategy**:
   - Preview deployments
   - Feature flags
   - Canary/gradual rollout (10% → 50% → 100%)
   - Rollback criteria
5. **Documentation Plan**:
   - Quickstart guide
   - API documentation
   - Code examples
   - Troubleshooting guide
6. **Definition of Done** - Checklist before launch

Be specific about test coverage and release gates."""

        unit = _or_default(testing.unit, "Jest/Vitest")
        e2e = _or_default(testing.e2e, "Playwright/Cypress")
        return f"""IMPORTANT: Testing is **deferred** for this project.

Include:
1. **Testing Status**:
   - Explicitly state that automated testing is NOT included in the current scope
   - Document this as a known limitation and future enhancement
   - Recommend manual testing procedures as interim solution
2. **Manual Testing Checklist**:
   - Critical user flows to manually verify
   - Smoke tests before each deployment
3. **Release Strategy** (without automated tests):
   - Manual verification steps
   - Preview deployments for stakeholder review
   - Feature flags for gradual rollout
   - Clear rollback procedure
4. **Documentation Plan**:
   - Quickstart guide
   - API documentation (if applicable)
   - Manual testing procedures
   - Known limitations section
5. **Future Enhancement**:
   - Recommend adding {unit} + {e2e} in phase 2
   - Outline when testing should be prioritized (e.g., before scaling, before production)

Be clear and honest that testing is out of scope, but provide practical manual alternatives."""

    async def execute(self) -> str:
        self.update_state(AgentStatus.working, "Planning testing & rollout")

        prompt = f"""{self.get_project_context()}
{self.get_dependency_context()}

Create the **Testing, Rollout & Documentation** section for the PRD.

{self._testing_instructions()}"""

        output = await self.generate(prompt)

        self.store_output(output)
        self.send_message(Role.ORCHESTRATOR, MessageType.response, "Quality plan complete", {
            "testing_enabled": self.context.brief.testing.enabled,
        })

        return output
