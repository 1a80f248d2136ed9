"""
Generation API Routes: HTTP endpoint for the PRD swarm.

The whole run, swarm plus companion documents, is bounded by
GENERATION_TIMEOUT_SECONDS.
"""

import asyncio
import logging

from fastapi import APIRouter, HTTPException, status
from fastapi.responses import ORJSONResponse

from ..core.config import settings
from ..models import GenerateRequest, GenerateResponse
from ..workflows import swarm

logger = logging.getLogger(__name__)
router = APIRouter(tags=["generate"])

TIMEOUT_MESSAGE = (
    "Document generation timed out. Agents run in parallel waves; "
    "if this persists, try reducing the number of selected agents."
)


@router.post("/generate", response_model=GenerateResponse, response_class=ORJSONResponse)
async def generate(request: GenerateRequest):
    """
    Generate PRD.md, AGENTS.md, IMPLEMENTATION.md and MCP.md from a brief.

    Errors are mapped by the application's exception handlers:
    provider failures to 502, other swarm failures to 500.
    """
    logger.info(f"Starting agent-based PRD generation for user {request.user_id or 'anon'}")

    try:
        documents = await asyncio.wait_for(
            swarm.generate_all_documents(request.answers, user_id=request.user_id),
            timeout=settings.GENERATION_TIMEOUT_SECONDS,
        )
    except asyncio.TimeoutError:
        logger.error(f"Generation timed out after {settings.GENERATION_TIMEOUT_SECONDS}s")
        raise HTTPException(
            status_code=status.HTTP_504_GATEWAY_TIMEOUT,
            detail={"error": "Timeout", "message": TIMEOUT_MESSAGE},
        )

    logger.info("All documents generated successfully")
    return GenerateResponse(ok=True, files=documents.files, metadata=documents.metadata)
