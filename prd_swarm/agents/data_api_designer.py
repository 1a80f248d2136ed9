"""
Data & API Designer Agent: data contracts, API surface and extension points.
"""

from .base import BaseAgent
from .types import AgentStatus, MessageType, Role


class DataAPIDesignerAgent(BaseAgent):
    """Data, API & Extensibility Designer."""

    role = Role.DATA_API_DESIGNER
    step_limit = 3

    def get_system_prompt(self) -> str:
        return """You are a Data & API Designer specializing in modern web application architecture.

Your responsibilities:
- Design database schema and relationships
- Plan migration approach
- Specify API contracts (REST/GraphQL/tRPC)
- Define webhooks and event patterns
- Plan extension points for integrations
- Set versioning policy
- Consider multi-tenant architecture

You create clear, implementable data and API specifications.
Focus on scalability and developer experience."""

    async def execute(self) -> str:
        self.update_state(AgentStatus.working, "Designing data model and APIs")

        prompt = f"""{self.get_project_context()}
{self.get_dependency_context()}

Create the **Data Model & API Contracts** section for the PRD.

Include:
1. **Database Schema** - Tables/collections with key fields and relationships
2. **Migration Strategy** - How to evolve schema over time
3. **API Design** - Endpoints/queries with request/response formats
4. **Integration Points** - Webhooks, events, third-party APIs
5. **Extension Architecture** - How to add plugins/integrations
6. **Versioning Policy** - How to handle API changes
7. **Multi-tenant Considerations** - If applicable

Use the database choice: {self.context.brief.backend.db}
Be specific about data types and constraints."""

        output = await self.generate(prompt)

        self.store_output(output)
        self.send_message(Role.ORCHESTRATOR, MessageType.response, "Data/API design complete")

        return output
