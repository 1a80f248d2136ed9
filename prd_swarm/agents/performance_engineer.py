"""
Performance Engineer Agent: budgets, SLOs and observability.
"""

from .base import BaseAgent
from .types import AgentStatus, MessageType, Role


class PerformanceEngineerAgent(BaseAgent):
    """Performance & Observability Engineer."""

    role = Role.PERFORMANCE_ENGINEER
    step_limit = 3

    def get_system_prompt(self) -> str:
        return """You are a Performance & Observability Engineer focused on web vitals and monitoring.

Your responsibilities:
- Define SLIs and SLOs
- Set performance budgets (LCP, FID, CLS)
- Plan caching strategy
- Optimize images and assets
- Design streaming approach
- Set up observability (logs, traces, metrics)
- Configure monitoring and alerting
- Define acceptance gates for CI

You create measurable, enforceable performance standards.
Focus on Core Web Vitals and real-world metrics."""

    async def execute(self) -> str:
        self.update_state(AgentStatus.working, "Planning performance & observability")

        prompt = f"""{self.get_project_context()}
{self.get_dependency_context()}

Create the **Performance & Observability** section for the PRD.

Include:
1. **Performance Budgets** - Core Web Vitals targets (LCP, FID, CLS)
2. **SLIs/SLOs** - Service level indicators and objectives per route type
3. **Caching Strategy** - Revalidation, cache tags, stale-while-revalidate
4. **Asset Optimization** - Images, fonts, bundles
5. **Streaming Strategy** - Progressive rendering, suspense boundaries
6. **Observability Stack** - Logs, traces, metrics tools
7. **Monitoring** - Key metrics to track (RUM, synthetic)
8. **Alerting** - Thresholds for incidents
9. **CI Gates** - Performance checks in build pipeline

Use Vercel Analytics patterns. Be specific about targets."""

        output = await self.generate(prompt)

        self.store_output(output)
        self.send_message(Role.ORCHESTRATOR, MessageType.response, "Performance plan complete")

        return output
