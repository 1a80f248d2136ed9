"""PRD generation driver: swarm run plus companion documents."""


import asyncio
import logging
import time
from dataclasses import dataclass
from typing import List, Optional

from ..agents.context import SwarmContext, create_swarm_context
from ..agents.orchestrator import OrchestratorAgent
from ..generation import GenerateFn
from ..models import Brief, GeneratedFile, GenerationMetadata
from .documents import generate_agents_guide, generate_implementation_guide, generate_mcp_guide


logger = logging.getLogger(__name__)


@dataclass
class SwarmResult:
    """Compiled PRD with the context it was built from."""
    prd: str
    context: SwarmContext
    summary: str
    duration_seconds: float
    unscheduled_roles: List[str]


@dataclass
class GeneratedDocuments:
    """The four output documents and run metadata."""
    files: List[GeneratedFile]
    metadata: GenerationMetadata


async def generate_prd_with_agents(
    brief: Brief,
    model: Optional[str] = None,
    user_id: Optional[str] = None,
    generate: Optional[GenerateFn] = None,
    strict: Optional[bool] = None,
) -> SwarmResult:
    """
    Generate a PRD with the agent swarm.

    Args:
        brief: Project brief
        model: Model for every agent (defaults to DEFAULT_MODEL)
        user_id: End-user attribution passed to the provider
        generate: Text generation callable (defaults to the provider)
        strict: Raise on unschedulable roles (defaults to SWARM_STRICT_SCHEDULING)

    Returns:
        SwarmResult with the PRD, context and execution summary

    Raises:
        ProviderError: If the outline or compile step fails
        SchedulingDeadlock: In strict mode, when roles can never be scheduled
    """
    logger.info("PRD generation swarm started")
    start = time.monotonic()

    context = create_swarm_context(brief, model=model, user_id=user_id)
    orchestrator = OrchestratorAgent(context, model=model, generate=generate, strict=strict)
    prd = await orchestrator.execute()

    duration = time.monotonic() - start
    summary = orchestrator.get_execution_summary()
    logger.info(f"PRD generation complete ({duration:.2f}s)")

    return SwarmResult(
        prd=prd,
        context=context,
        summary=summary,
        duration_seconds=duration,
        unscheduled_roles=[r.value for r in orchestrator.unscheduled_roles],
    )


async def generate_all_documents(
    brief: Brief,
    user_id: Optional[str] = None,
    model: Optional[str] = None,
    generate: Optional[GenerateFn] = None,
) -> GeneratedDocuments:
    """
    Generate PRD.md, then AGENTS.md, IMPLEMENTATION.md and MCP.md concurrently.

    The brief's ``docGenerationModel`` is used for every call unless ``model``
    overrides it.
    """
    model = model or brief.doc_generation_model
    result = await generate_prd_with_agents(brief, model=model, user_id=user_id, generate=generate)

    logger.info("PRD generated, creating supporting documents")
    agents_md, implementation_md, mcp_md = await asyncio.gather(
        generate_agents_guide(brief, result.context, model=model, generate=generate),
        generate_implementation_guide(brief, result.context, model=model, generate=generate),
        generate_mcp_guide(brief, model=model, user_id=user_id, generate=generate),
    )
    logger.info("All documents generated")
    logger.debug(result.summary)

    context = result.context
    return GeneratedDocuments(
        files=[
            GeneratedFile(name="PRD.md", content=result.prd),
            GeneratedFile(name="AGENTS.md", content=agents_md),
            GeneratedFile(name="IMPLEMENTATION.md", content=implementation_md),
            GeneratedFile(name="MCP.md", content=mcp_md),
        ],
        metadata=GenerationMetadata(
            summary=result.summary,
            agent_count=len(context.agent_states),
            message_count=len(context.messages),
            sections_generated=len(context.sections),
            unscheduled_roles=result.unscheduled_roles,
            duration_seconds=result.duration_seconds,
        ),
    )
