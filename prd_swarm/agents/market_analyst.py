"""
Market Analyst Agent: builds the who/why for a developer audience.

First worker in the swarm. Depends only on the orchestrator and produces:
- Developer personas and problem statement
- Value proposition and competitive landscape
- Market sizing where it applies
"""

from .base import BaseAgent
from .types import AgentStatus, MessageType, Role


class MarketAnalystAgent(BaseAgent):
    """Dev Market & Persona Analyst."""

    role = Role.MARKET_ANALYST
    step_limit = 3

    def get_system_prompt(self) -> str:
        return """You are a Dev Market & Persona Analyst specializing in developer tools and frameworks.

Your responsibilities:
- Segment developer personas (solo devs, startup teams, platform teams)
- Map developer pain points and jobs-to-be-done
- Analyze competitive landscape (framework tooling, AI coding helpers, hosting)
- Define clear value propositions
- Estimate TAM/SAM/SOM when relevant

You write concise, actionable analysis in Markdown format. Focus on developer needs, not generic users.
Use data-driven insights and industry trends. Be specific about developer segments and their workflows."""

    async def execute(self) -> str:
        self.update_state(AgentStatus.working, "Analyzing market and personas")

        prompt = f"""{self.get_project_context()}

Create the **Market Analysis & Personas** section for the PRD.

Include:
1. **Target Developer Personas** - Who will use this? (e.g., solo dev, startup team, enterprise)
2. **Problem Statement** - What pain points does this solve?
3. **Value Proposition** - Why is this better than alternatives?
4. **Competitive Landscape** - Brief comparison with similar tools/approaches
5. **Market Opportunity** - TAM/SAM/SOM estimates if applicable

Keep it concise and developer-focused. Use bullet points and clear headings."""

        output = await self.generate(prompt)

        self.store_output(output)
        self.send_message(Role.ORCHESTRATOR, MessageType.response, "Market analysis complete", {
            "section": "market-personas",
            "word_count": len(output.split()),
        })

        return output
