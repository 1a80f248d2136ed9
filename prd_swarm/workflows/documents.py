"""Companion documents built from a finished swarm run.

Each generator is a single provider call with no tools and shares no state
with the others, so all three can run concurrently once the PRD is done.
"""


import json
import logging
from typing import List, Optional

from ..agents.context import SwarmContext
from ..agents.types import Role
from ..core.config import settings
from ..generation import GenerateFn, generate as default_generate
from ..models import Brief


logger = logging.getLogger(__name__)

DOCUMENT_SYSTEM_PROMPT = (
    "You are a senior developer writing concise, practical project documentation in Markdown."
)

MCP_NOT_SELECTED = "# MCP Configuration\n\nMCP is optional. IDE/Copilot not selected."


def build_implementation_sections(brief: Brief) -> List[str]:
    """
    Numbered outline for IMPLEMENTATION.md, derived from the brief alone.

    Args:
        brief: Project brief

    Returns:
        Lines like ``"1. **Project Bootstrap** - ..."``, numbered without gaps
    """
    testing = brief.testing
    entries = [f"**Project Bootstrap** - Create {brief.framework_label} app, add styling"]

    if brief.backend.db != "none":
        entries.append("**Database Setup** - Schema, migrations, client setup")
    if brief.backend.auth != "none":
        entries.append(f"**Authentication** - {brief.backend.auth} integration")
    if brief.ai.vercel_ai_sdk:
        entries.append("**AI SDK Setup** - Install AI SDK, create API routes, configure Gateway")

    if testing.enabled:
        entries.append(
            f"**Testing Setup** - {testing.unit} + {testing.e2e} configuration, test examples"
        )
    else:
        entries.append(
            "**Testing Status** - Document that testing is deferred, manual verification procedures"
        )

    entries.append(f"**Deployment** - {'Vercel' if brief.backend.use_vercel else 'Host'} setup and env vars")
    entries.append(
        f"**Verification Checklist** - Final "
        f"{'automated tests and' if testing.enabled else 'manual checks before'} launch"
    )

    return [f"{i}. {entry}" for i, entry in enumerate(entries, start=1)]


def _brief_json(brief: Brief) -> str:
    return json.dumps(brief.model_dump(by_alias=True, mode="json"), indent=2)


async def _generate_document(
    prompt: str,
    model: Optional[str],
    user_id: Optional[str],
    tag: str,
    generate: Optional[GenerateFn],
) -> str:
    model = model or settings.DOC_MODEL
    logger.info(f"Generating {tag} document with {model}")
    return await (generate or default_generate)(
        model=model,
        system_prompt=DOCUMENT_SYSTEM_PROMPT,
        messages=[{"role": "user", "content": prompt}],
        user_id=user_id,
        tags=[tag],
    )


async def generate_implementation_guide(
    brief: Brief,
    context: SwarmContext,
    model: Optional[str] = None,
    generate: Optional[GenerateFn] = None,
) -> str:
    """
    Generate IMPLEMENTATION.md from the architecture, quality and AI sections.

    Args:
        brief: Project brief
        context: Finished swarm context
        model: Document model override (defaults to DOC_MODEL)
        generate: Text generation callable (defaults to the provider)

    Returns:
        Markdown implementation guide
    """
    sections = context.sections
    testing_enabled = brief.testing.enabled
    ai_plan = (
        f"## AI Integration Plan\n{sections.get(Role.AI_DESIGNER, '')}"
        if brief.ai.vercel_ai_sdk else ""
    )
    testing_note = (
        "Be specific with test setup, include example tests, and show how to run them."
        if testing_enabled else
        "IMPORTANT: Testing is DEFERRED. Be explicit about this limitation and provide manual "
        "testing procedures instead of automated test setup."
    )
    outline = "\n".join(build_implementation_sections(brief))

    prompt = f"""Create a step-by-step **IMPLEMENTATION.md** guide for this project.

## Project Context
{_brief_json(brief)}

## Architecture Plan
{sections.get(Role.NEXTJS_ARCHITECT, '')}

## Testing & Rollout Plan
{sections.get(Role.QUALITY_LEAD, '')}

{ai_plan}

Create a numbered, actionable implementation plan that:
1. Starts from an empty IDE/terminal
2. Includes exact commands with latest package versions
3. Shows folder structure at each step
4. Includes code snippets for key files
5. Has verification steps after each major section
6. Lists common pitfalls and solutions

Sections:
{outline}

{testing_note}

Be specific with versions and commands. Include troubleshooting tips."""

    return await _generate_document(prompt, model, context.user_id, "implementation", generate)


async def generate_agents_guide(
    brief: Brief,
    context: SwarmContext,
    model: Optional[str] = None,
    generate: Optional[GenerateFn] = None,
) -> str:
    """Generate AGENTS.md, the operating manual for coding agents in the repo."""
    sections = context.sections
    testing = brief.testing

    if testing.enabled:
        testing_section = (
            "## Testing Guidelines\n"
            f"How to run tests ({testing.unit} + {testing.e2e}), what to test, coverage expectations."
        )
        deferred_note = ""
    else:
        testing_section = (
            "## Testing Status\n"
            "Explicitly state that automated testing is NOT included in this project. Document manual "
            "verification procedures and recommend adding testing in future iterations."
        )
        deferred_note = (
            "\nIMPORTANT: Be clear that testing is deferred - do not include test commands or "
            "test-related setup instructions."
        )

    prompt = f"""Create an **AGENTS.md** file following the agents.md specification.

## Project Context
{_brief_json(brief)}

## Architecture
{sections.get(Role.NEXTJS_ARCHITECT, '')}

## Testing Plan
{sections.get(Role.QUALITY_LEAD, '')}

Create a concise guide with these sections:

# Repository Guidelines

## Project Structure & Module Organization
Explain folder layout, where files belong, conventions.

## Build, Test & Development Commands
Exact commands to install, dev, build, {'test, ' if testing.enabled else ''}deploy.

## Coding Style & Naming Conventions
TypeScript settings, formatting, naming, path aliases.

{testing_section}

## Commit & Pull Request Guidelines
Commit message format, PR requirements, review process.

## Security & Configuration Tips
Env vars, secrets management, security best practices.

Keep it practical and tool-focused. This is for AI agents and developers.
{deferred_note}"""

    return await _generate_document(prompt, model, context.user_id, "agents-guide", generate)


async def generate_mcp_guide(
    brief: Brief,
    model: Optional[str] = None,
    user_id: Optional[str] = None,
    generate: Optional[GenerateFn] = None,
) -> str:
    """Generate MCP.md for the selected IDE/copilot; fixed text when none is selected."""
    copilot = brief.ai.copilot
    if copilot == "none":
        return MCP_NOT_SELECTED

    prompt = f"""Create a brief **MCP.md** guide for {copilot}.

Explain:
1. What MCP is and why it's useful
2. How to configure MCP in {copilot}
3. 2-3 recommended MCP servers for this project type
4. Example configuration snippets
5. Links to official docs

Keep it concise and practical. Focus on getting started quickly."""

    return await _generate_document(prompt, model, user_id, "mcp", generate)
