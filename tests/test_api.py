"""
Tests for the HTTP API.
"""

import asyncio

import pytest

from prd_swarm.core.config import settings
from prd_swarm.errors import ProviderError, SchedulingDeadlock
from prd_swarm.models import GeneratedFile, GenerationMetadata
from prd_swarm.workflows import swarm
from prd_swarm.workflows.swarm import GeneratedDocuments


ANSWERS = {
    "idea": "A habit tracker for remote teams",
    "backend": {"useVercel": True, "db": "postgres", "auth": "authjs"},
    "ai": {"vercelAISDK": False, "copilot": "none"},
    "prdAgents": {"marketAnalyst": True, "scopePlanner": True, "qualityLead": False},
    "unknownField": "ignored",
}


def fake_documents():
    return GeneratedDocuments(
        files=[GeneratedFile(name=name, content=f"# {name}") for name in
               ("PRD.md", "AGENTS.md", "IMPLEMENTATION.md", "MCP.md")],
        metadata=GenerationMetadata(
            summary="summary",
            agent_count=9,
            message_count=2,
            sections_generated=2,
        ),
    )


class TestHealth:
    """Test service endpoints."""

    @pytest.mark.asyncio
    async def test_health(self, api_client):
        """Test the health check."""
        response = await api_client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    @pytest.mark.asyncio
    async def test_health_reports_provider(self, api_client):
        """Test the health check names the configured provider."""
        response = await api_client.get("/health")

        assert response.json()["provider"] == settings.MODEL_PROVIDER


class TestGenerateEndpoint:
    """Test POST /generate."""

    @pytest.mark.asyncio
    async def test_success(self, api_client, monkeypatch):
        """Test the brief is parsed and the four files are returned."""
        seen = {}

        async def fake_generate_all(brief, user_id=None):
            seen["brief"] = brief
            seen["user_id"] = user_id
            return fake_documents()

        monkeypatch.setattr(swarm, "generate_all_documents", fake_generate_all)

        response = await api_client.post("/generate", json={"answers": ANSWERS, "userId": "u1"})

        assert response.status_code == 200
        body = response.json()
        assert body["ok"] is True
        assert [f["name"] for f in body["files"]] == ["PRD.md", "AGENTS.md", "IMPLEMENTATION.md", "MCP.md"]
        assert body["metadata"]["sections_generated"] == 2

        brief = seen["brief"]
        assert seen["user_id"] == "u1"
        assert brief.backend.db == "postgres"
        assert brief.prd_agents.market_analyst is True
        assert brief.prd_agents.quality_lead is False
        assert brief.prd_agents.security_officer is False

    @pytest.mark.asyncio
    async def test_partial_agent_selection(self, api_client, monkeypatch):
        """Test agents left out of prdAgents are not selected."""
        seen = {}

        async def fake_generate_all(brief, user_id=None):
            seen["brief"] = brief
            return fake_documents()

        monkeypatch.setattr(swarm, "generate_all_documents", fake_generate_all)

        answers = {"idea": "Notes app", "prdAgents": {"marketAnalyst": True, "scopePlanner": True}}
        response = await api_client.post("/generate", json={"answers": answers})

        assert response.status_code == 200
        selection = seen["brief"].prd_agents.model_dump()
        assert [name for name, enabled in selection.items() if enabled] == [
            "market_analyst",
            "scope_planner",
        ]

    @pytest.mark.asyncio
    async def test_missing_idea(self, api_client):
        """Test a brief without an idea is rejected."""
        response = await api_client.post("/generate", json={"answers": {"framework": "nextjs_app"}})

        assert response.status_code == 422
        body = response.json()
        assert body["error"] == "Validation Error"
        assert any("idea" in d["field"] for d in body["details"])

    @pytest.mark.asyncio
    async def test_provider_failure(self, api_client, monkeypatch):
        """Test provider failures map to 502."""
        async def failing(brief, user_id=None):
            raise ProviderError("upstream down", model="openai/gpt-5")

        monkeypatch.setattr(swarm, "generate_all_documents", failing)

        response = await api_client.post("/generate", json={"answers": ANSWERS})

        assert response.status_code == 502
        body = response.json()
        assert body["error"] == "Provider Error"
        assert body["details"]["model"] == "openai/gpt-5"

    @pytest.mark.asyncio
    async def test_scheduling_deadlock(self, api_client, monkeypatch):
        """Test a strict scheduling failure maps to 500 with the stuck roles."""
        async def deadlocked(brief, user_id=None):
            raise SchedulingDeadlock(["scope-planner"])

        monkeypatch.setattr(swarm, "generate_all_documents", deadlocked)

        response = await api_client.post("/generate", json={"answers": ANSWERS})

        assert response.status_code == 500
        assert response.json()["details"] == {"unscheduled": ["scope-planner"]}

    @pytest.mark.asyncio
    async def test_timeout(self, api_client, monkeypatch):
        """Test a run exceeding the deadline maps to 504."""
        async def slow(brief, user_id=None):
            await asyncio.sleep(5)
            return fake_documents()

        monkeypatch.setattr(swarm, "generate_all_documents", slow)
        monkeypatch.setattr(settings, "GENERATION_TIMEOUT_SECONDS", 0.05)

        response = await api_client.post("/generate", json={"answers": ANSWERS})

        assert response.status_code == 504
        assert response.json()["error"] == "Timeout"
