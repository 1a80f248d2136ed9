"""
AI Designer Agent: AI features and agent UX with the Vercel AI SDK.

When the brief does not use the AI SDK the section is a fixed one-liner and no
model call is made.
"""

from .base import BaseAgent
from .types import AgentStatus, MessageType, Role

NOT_APPLICABLE_OUTPUT = "# AI Integration\n\nNot using Vercel AI SDK for this project."


class AIDesignerAgent(BaseAgent):
    """AI Interaction Designer."""

    role = Role.AI_DESIGNER
    step_limit = 4

    def get_system_prompt(self) -> str:
        return """You are an AI Interaction Designer specializing in Vercel AI SDK 5.

Your responsibilities:
- Design conversation patterns and flows
- Define tool/command schemas for AI functions
- Plan retrieval and memory strategies
- Specify streaming UX patterns
- Handle error and edge cases
- Set model selection policies (primary + fallbacks)
- Define token/latency budgets
- Create safety prompts and guardrails
- Design evaluation goals

You create practical, implementable AI interaction specs using AI SDK 5 patterns.
Focus on developer experience and production-readiness."""

    async def execute(self) -> str:
        self.update_state(AgentStatus.working, "Designing AI interactions")

        if not self.context.brief.ai.vercel_ai_sdk:
            self.store_output(NOT_APPLICABLE_OUTPUT)
            self.send_message(Role.ORCHESTRATOR, MessageType.response, "AI design skipped (AI SDK not used)")
            return NOT_APPLICABLE_OUTPUT

        prompt = f"""{self.get_project_context()}
{self.get_dependency_context()}

Create the **AI Integration & Interaction Design** section for the PRD.

Include:
1. **AI Features** - What AI capabilities does the app provide?
2. **Conversation Patterns** - How users interact with AI (chat, completion, streaming)
3. **Tool Definitions** - AI SDK tools the model can call (with schemas)
4. **Model Strategy** - Primary model + fallbacks: {self.context.brief.app_models_label}
5. **Streaming UX** - How to show loading, partial results, errors
6. **Memory/Context** - How to maintain conversation state
7. **Safety & Guardrails** - Rate limits, content filtering, PII handling
8. **Evaluation Plan** - How to test AI quality (golden datasets, eval metrics)
9. **Token Budget** - Cost estimates per interaction

Use Vercel AI SDK 5 patterns. Include code examples for tool definitions."""

        output = await self.generate(prompt)

        self.store_output(output)
        self.send_message(Role.ORCHESTRATOR, MessageType.response, "AI design complete")

        return output
