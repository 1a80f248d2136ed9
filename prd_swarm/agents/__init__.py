"""
Multi-agent swarm for PRD generation.

Wave-scheduled agent architecture:

COORDINATION:
- Orchestrator: Outline, wave planning and final compilation

PRODUCT:
- Market Analyst: Personas, problem statement, value proposition
- Scope Planner: Job stories, MoSCoW feature list, success criteria

TECHNICAL:
- Next.js Architect: Routes, rendering, caching
- AI Designer: AI SDK interaction design
- Data & API Designer: Schema, API contracts, extension points

ASSURANCE:
- Security Officer: Auth, threat model, compliance
- Performance Engineer: Budgets, SLOs, observability
- Quality Lead: Test plan, rollout, documentation
"""

from .base import AgentResult, BaseAgent
from .context import SectionWriter, SwarmContext, create_swarm_context
from .orchestrator import AGENT_CLASSES, OrchestratorAgent, WavePlan, compute_waves
from .market_analyst import MarketAnalystAgent
from .scope_planner import ScopePlannerAgent
from .architect import NextJSArchitectAgent
from .ai_designer import AIDesignerAgent
from .data_api_designer import DataAPIDesignerAgent
from .security_officer import SecurityOfficerAgent
from .performance_engineer import PerformanceEngineerAgent
from .quality_lead import QualityLeadAgent
from .tools import TOOL_CATALOG, ToolSpec, tools_for
from .types import (
    AGENT_CAPABILITIES,
    WORKER_ROLES,
    AgentMessage,
    AgentState,
    AgentStatus,
    CapabilityDescriptor,
    MessageType,
    Role,
    lookup,
)


__all__ = [
    # Registry
    "AGENT_CAPABILITIES",
    "WORKER_ROLES",
    "CapabilityDescriptor",
    "Role",
    "lookup",
    "TOOL_CATALOG",
    "ToolSpec",
    "tools_for",
    # State
    "AgentMessage",
    "AgentState",
    "AgentStatus",
    "MessageType",
    "SectionWriter",
    "SwarmContext",
    "create_swarm_context",
    # Agents
    "AgentResult",
    "BaseAgent",
    "OrchestratorAgent",
    "AGENT_CLASSES",
    "WavePlan",
    "compute_waves",
    "MarketAnalystAgent",
    "ScopePlannerAgent",
    "NextJSArchitectAgent",
    "AIDesignerAgent",
    "DataAPIDesignerAgent",
    "SecurityOfficerAgent",
    "PerformanceEngineerAgent",
    "QualityLeadAgent",
]
