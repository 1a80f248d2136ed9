import asyncio
from typing import Any, Callable, Dict, List, Optional

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from prd_swarm.errors import ProviderError
from prd_swarm.main import app
from prd_swarm.models import Brief


def prompt_of(call: Dict[str, Any]) -> str:
    """Last user prompt sent in a recorded generation call."""
    return call["messages"][-1]["content"]


def role_tag(call: Dict[str, Any]) -> Optional[str]:
    tags = call.get("tags") or []
    return tags[-1] if tags else None


class FakeGenerator:
    """
    Recording stand-in for the provider ``generate`` callable.

    Answers each call with ``"<tag> output"`` unless ``responses`` maps the
    call's last tag to a fixed text. ``fail_when`` raises ProviderError for
    calls it matches. Tracks how many calls were in flight at once.
    """

    def __init__(
        self,
        responses: Optional[Dict[str, str]] = None,
        fail_when: Optional[Callable[[Dict[str, Any]], bool]] = None,
    ):
        self.responses = responses or {}
        self.fail_when = fail_when
        self.calls: List[Dict[str, Any]] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def __call__(self, **kwargs: Any) -> str:
        self.calls.append(kwargs)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(0)
            if self.fail_when and self.fail_when(kwargs):
                raise ProviderError(f"boom in {role_tag(kwargs)}", model=kwargs.get("model"))
            tag = role_tag(kwargs) or "default"
            return self.responses.get(tag, f"{tag} output")
        finally:
            self.in_flight -= 1

    def calls_for(self, tag: str) -> List[Dict[str, Any]]:
        return [c for c in self.calls if role_tag(c) == tag]

    def prompt(self, index: int = -1) -> str:
        return prompt_of(self.calls[index])


@pytest.fixture
def fake_generate():
    return FakeGenerator()


@pytest.fixture
def failing_generate():
    return FakeGenerator(fail_when=lambda call: True)


@pytest.fixture
def make_generator():
    """Factory for generators with custom responses or failures."""
    return FakeGenerator


@pytest.fixture
def brief():
    """Full brief: AI SDK on, testing on, database and auth chosen."""
    return Brief.model_validate({
        "idea": "A collaborative markdown notes app with AI summaries",
        "framework": "nextjs_app",
        "styling": {"tailwind": True, "shadcn": True},
        "backend": {"useVercel": True, "db": "postgres", "auth": "clerk"},
        "ai": {"vercelAISDK": True, "appModels": ["openai/gpt-4o"], "copilot": "cursor"},
        "testing": {"enabled": True, "unit": "vitest", "e2e": "playwright"},
        "constraints": "Ship MVP in 6 weeks",
    })


@pytest.fixture
def minimal_brief():
    """Brief with every optional capability switched off."""
    return Brief.model_validate({
        "idea": "A static portfolio site",
        "backend": {"useVercel": False},
    })


@pytest_asyncio.fixture
async def api_client():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client
