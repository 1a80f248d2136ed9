"""Generation workflows."""

from .documents import (
    build_implementation_sections,
    generate_agents_guide,
    generate_implementation_guide,
    generate_mcp_guide,
)
from .swarm import GeneratedDocuments, SwarmResult, generate_all_documents, generate_prd_with_agents


__all__ = [
    "GeneratedDocuments",
    "SwarmResult",
    "build_implementation_sections",
    "generate_agents_guide",
    "generate_all_documents",
    "generate_implementation_guide",
    "generate_mcp_guide",
    "generate_prd_with_agents",
]
