"""
Per-run shared state for the PRD swarm.

Sections are written only through a ``SectionWriter``: one writer per worker
role, handed out once, so each agent can write its own slot and nobody else's.
"""

import logging
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional

from ..errors import ConfigurationError
from ..models import Brief
from .types import WORKER_ROLES, AgentMessage, AgentState, Role

logger = logging.getLogger(__name__)


class SectionWriter:
    """Write handle for exactly one role's section."""

    __slots__ = ("_role", "_sections")

    def __init__(self, role: Role, sections: Dict[Role, str]):
        self._role = role
        self._sections = sections

    @property
    def role(self) -> Role:
        return self._role

    def write(self, text: str) -> None:
        """Store the section text; a repeated write replaces the previous one."""
        if self._role in self._sections:
            logger.warning(f"Section for {self._role.value} written more than once, keeping latest")
        self._sections[self._role] = text


class SwarmContext:
    """
    Aggregate root of one generation run.

    Attributes:
        brief: The project brief (read-only by convention)
        user_id: Optional end-user id for provider attribution
        model: Optional model override for the run
        outline: PRD outline set once by the orchestrator
        dependencies: role -> dependency role names, informational
        messages: Append-only message log
        agent_states: State for every role, created idle
    """

    def __init__(self, brief: Brief, model: Optional[str] = None, user_id: Optional[str] = None):
        self.brief = brief
        self.user_id = user_id
        self.model = model
        self.outline: Optional[str] = None
        self.dependencies: Dict[Role, List[str]] = {}
        self.messages: List[AgentMessage] = []
        self.agent_states: Dict[Role, AgentState] = {role: AgentState(role=role) for role in Role}
        self._sections: Dict[Role, str] = {}
        self._writers: Dict[Role, SectionWriter] = {}

    @property
    def sections(self) -> Mapping[Role, str]:
        """Read-only view of the stored sections."""
        return MappingProxyType(self._sections)

    def claim_writer(self, role: Role) -> SectionWriter:
        """
        Hand out the single section writer for a worker role.

        Raises:
            ConfigurationError: If the role has no section slot or its writer
                was already claimed in this run
        """
        if role not in WORKER_ROLES:
            raise ConfigurationError(f"{role.value} has no section slot")
        if role in self._writers:
            raise ConfigurationError(f"Section writer for {role.value} already claimed")
        writer = SectionWriter(role, self._sections)
        self._writers[role] = writer
        return writer

    def post_message(self, message: AgentMessage) -> None:
        self.messages.append(message)


def create_swarm_context(
    brief: Brief,
    model: Optional[str] = None,
    user_id: Optional[str] = None,
) -> SwarmContext:
    """Initialize a new swarm context with every agent idle."""
    return SwarmContext(brief, model=model, user_id=user_id)
