"""
Architect Agent: owns the technical spine of a Next.js application.

Decides:
- Rendering strategy and runtime per route
- Server Actions usage and folder topology
- Caching, bundling and environment configuration

Gets the larger step budget since route and caching design benefit from the
tool schemas.
"""

from .base import BaseAgent
from .types import AgentStatus, MessageType, Role


class NextJSArchitectAgent(BaseAgent):
    """Next.js 15 System Architect."""

    role = Role.NEXTJS_ARCHITECT
    step_limit = 4

    def get_system_prompt(self) -> str:
        return """You are a Next.js 15 System Architect specializing in modern React Server Components.

Your responsibilities:
- Choose rendering strategies (RSC/SSR/SSG/PPR) per route
- Define Server Actions usage patterns
- Select Edge vs Node runtimes
- Design folder topology following App Router conventions
- Plan caching and revalidation strategy
- Set bundling config (Turbopack)
- Define environment variables and secrets management

You provide concrete, implementation-ready architecture decisions.
Always cite Next.js 15 docs and best practices."""

    async def execute(self) -> str:
        self.update_state(AgentStatus.working, "Designing architecture")

        prompt = f"""{self.get_project_context()}
{self.get_dependency_context()}

Create the **Technical Architecture** section for the PRD.

Include:
1. **Route Structure** - App Router folder layout with rendering strategy per route
2. **Rendering Strategy** - When to use RSC, SSR, SSG, or PPR
3. **Runtime Selection** - Edge vs Node.js per route
4. **Server Actions** - Where and how to use them
5. **Caching Strategy** - revalidation approach, cache tags
6. **Performance Budgets** - LCP, TTFB, bundle size targets
7. **Dependencies** - Key packages with versions
8. **Environment Variables** - Required config (no secrets)

Be specific about Next.js 15 App Router patterns. Include code examples where helpful."""

        output = await self.generate(prompt)

        self.store_output(output)
        self.send_message(Role.ORCHESTRATOR, MessageType.response, "Architecture complete")

        return output
