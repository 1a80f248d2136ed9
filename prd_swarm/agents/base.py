"""
Base agent: prompt assembly and single-shot execution against the provider.

Concrete agents supply a persona (``get_system_prompt``) and an ``execute``
coroutine that builds the section prompt. ``execute`` raises on failure;
``run`` is the orchestrator-facing wrapper that turns the outcome into an
``AgentResult`` so a failed agent never aborts its wave.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

from ..core.config import settings
from ..generation import GenerateFn, generate as default_generate
from .context import SwarmContext
from .tools import ToolSpec, tools_for
from .types import (
    BROADCAST,
    WORKER_ROLES,
    AgentMessage,
    AgentState,
    AgentStatus,
    CapabilityDescriptor,
    MessageType,
    Role,
    lookup,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AgentResult:
    """Outcome of one agent run: either ``output`` or ``error`` is set."""
    role: Role
    output: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class BaseAgent(ABC):
    """Base class that all swarm agents extend."""

    role: Role
    step_limit: int = 3

    def __init__(
        self,
        context: SwarmContext,
        model: Optional[str] = None,
        generate: Optional[GenerateFn] = None,
    ):
        self.context = context
        self.capability: CapabilityDescriptor = lookup(self.role)
        self.model = model or context.model or settings.DEFAULT_MODEL
        self._generate = generate or default_generate
        self.conversation_history: List[Dict[str, str]] = []
        self._writer = context.claim_writer(self.role) if self.role in WORKER_ROLES else None

    @abstractmethod
    def get_system_prompt(self) -> str:
        """Fixed persona and instructions for this role."""

    @abstractmethod
    async def execute(self) -> str:
        """Produce this agent's markdown section."""

    def get_tools(self) -> Dict[str, ToolSpec]:
        """Tool schemas declared for this role in the capability registry."""
        return tools_for(self.role)

    @property
    def state(self) -> AgentState:
        return self.context.agent_states[self.role]

    def update_state(self, status: AgentStatus, task: Optional[str] = None) -> None:
        """Move this agent to a new status, keeping any stored output."""
        self.context.agent_states[self.role] = AgentState(
            role=self.role,
            status=status,
            current_task=task,
            output=self.state.output,
            artifacts=self.state.artifacts,
        )

    def mark_error(self, message: str) -> None:
        self.context.agent_states[self.role] = AgentState(
            role=self.role,
            status=AgentStatus.error,
            current_task=self.state.current_task,
            error=message,
        )

    def send_message(
        self,
        recipient: Union[Role, str],
        type: MessageType,
        content: str,
        artifacts: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Send a message to another agent or broadcast to "all"."""
        self.context.post_message(AgentMessage(
            sender=self.role,
            recipient=recipient,
            type=type,
            content=content,
            artifacts=artifacts,
        ))

    def get_messages_for_me(self) -> List[AgentMessage]:
        return [
            m for m in self.context.messages
            if m.recipient == self.role or m.recipient == BROADCAST
        ]

    async def generate(
        self,
        prompt: str,
        step_limit: Optional[int] = None,
        temperature: Optional[float] = None,
        include_tools: Optional[bool] = None,
    ) -> str:
        """
        Generate text with this agent's persona.

        Args:
            prompt: The task prompt, appended to this agent's conversation
            step_limit: Cap on tool-use steps (defaults to the agent's cap)
            temperature: Sampling temperature override
            include_tools: Offer tool schemas (defaults to AGENT_TOOLS_ENABLED)

        Returns:
            Generated text

        Raises:
            Exception: Whatever the provider raised, after recording the
                error on this agent's state
        """
        use_tools = settings.AGENT_TOOLS_ENABLED if include_tools is None else include_tools
        tools = self.get_tools() if use_tools else None
        messages = self.conversation_history + [{"role": "user", "content": prompt}]

        try:
            text = await self._generate(
                model=self.model,
                system_prompt=self.get_system_prompt(),
                messages=messages,
                tools=tools or None,
                step_limit=step_limit or self.step_limit,
                temperature=settings.AGENT_TEMPERATURE if temperature is None else temperature,
                user_id=self.context.user_id,
                tags=["agent", self.role.value],
            )
        except Exception as e:
            self.mark_error(str(e) or type(e).__name__)
            raise

        self.conversation_history = messages + [{"role": "assistant", "content": text}]
        return text

    def get_dependency_context(self) -> str:
        """Labeled outputs of completed dependencies; missing ones are skipped."""
        parts = []
        for dep in self.capability.dependencies:
            output = self.context.sections.get(dep)
            if output:
                parts.append(f"\n## {lookup(dep).name} Output:\n{output}")
        return "\n".join(parts)

    def store_output(self, output: str, artifacts: Optional[Dict[str, Any]] = None) -> None:
        """Store this agent's section and mark it completed."""
        if self._writer is not None:
            self._writer.write(output)
        self.context.agent_states[self.role] = AgentState(
            role=self.role,
            status=AgentStatus.completed,
            output=output,
            artifacts=artifacts,
        )

    def get_project_context(self) -> str:
        """Project brief rendered for prompts."""
        b = self.context.brief
        ai = f"Vercel AI SDK 5 (models: {b.app_models_label})" if b.ai.vercel_ai_sdk else "TBD"

        return f"""
## Project Context
**Idea:** {b.idea}

**Tech Stack:**
- Framework: {b.framework_label}
- Styling: {b.styling_label}
- Backend: {'Vercel' if b.backend.use_vercel else 'Custom'}
- Database: {b.backend.db}
- Auth: {b.backend.auth}
- AI: {ai}
- IDE/Copilot: {b.ai.copilot}

**Testing:**
- Unit: {b.testing.unit}
- E2E: {b.testing.e2e}

**Constraints:** {b.constraints or 'None specified'}
"""

    async def run(self) -> AgentResult:
        """Execute and report the outcome instead of raising."""
        try:
            output = await self.execute()
        except Exception as e:
            message = str(e) or type(e).__name__
            if self.state.status != AgentStatus.error:
                self.mark_error(message)
            logger.error(f"Agent {self.role.value} failed: {message}", exc_info=True)
            return AgentResult(role=self.role, error=self.state.error or message)
        return AgentResult(role=self.role, output=output)
