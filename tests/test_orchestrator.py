"""
Tests for the orchestrator: wave execution, fault isolation and compilation.
"""

import pytest

from prd_swarm.agents.context import create_swarm_context
from prd_swarm.agents.orchestrator import AGENT_CLASSES, OrchestratorAgent
from prd_swarm.agents.types import WORKER_ROLES, AgentStatus, Role, lookup
from prd_swarm.errors import ProviderError, SchedulingDeadlock
from prd_swarm.models import Brief, PRDAgentSelection
from prd_swarm.workflows.swarm import generate_prd_with_agents


def select(brief, *roles):
    """Copy of the brief with only the given worker roles enabled."""
    fields = {name: False for name in PRDAgentSelection.model_fields}
    for role in roles:
        fields[role.value.replace("-", "_")] = True
    return brief.model_copy(update={"prd_agents": PRDAgentSelection(**fields)})


def is_compile(call):
    return "compiling the final PRD" in call["messages"][-1]["content"]


def is_outline(call):
    return "Create a PRD outline" in call["messages"][-1]["content"]


class TestAgentClasses:
    """Test the role to class dispatch table."""

    def test_covers_every_worker(self):
        """Test each worker role maps to a class declaring that role."""
        assert set(AGENT_CLASSES) == set(WORKER_ROLES)
        for role, cls in AGENT_CLASSES.items():
            assert cls.role == role


class TestInitialization:
    """Test agent selection from the brief."""

    def test_all_agents_by_default(self, brief, fake_generate):
        """Test a brief without a selection enables all eight workers."""
        context = create_swarm_context(brief)
        orchestrator = OrchestratorAgent(context, generate=fake_generate)

        assert list(orchestrator.agents) == list(WORKER_ROLES)
        assert context.dependencies[Role.SCOPE_PLANNER] == ["orchestrator", "market-analyst"]

    def test_selection_respected(self, brief, fake_generate):
        """Test only selected workers are created and recorded."""
        brief = select(brief, Role.QUALITY_LEAD, Role.MARKET_ANALYST)
        context = create_swarm_context(brief)
        orchestrator = OrchestratorAgent(context, generate=fake_generate)

        assert list(orchestrator.agents) == [Role.MARKET_ANALYST, Role.QUALITY_LEAD]
        assert set(context.dependencies) == {Role.MARKET_ANALYST, Role.QUALITY_LEAD}

    def test_partial_selection_from_json(self, fake_generate):
        """Test agents missing from a camelCase selection map stay off."""
        brief = Brief.model_validate({
            "idea": "Notes app",
            "prdAgents": {"marketAnalyst": True, "scopePlanner": True},
        })
        orchestrator = OrchestratorAgent(create_swarm_context(brief), generate=fake_generate)

        assert orchestrator.selected_roles() == [Role.MARKET_ANALYST, Role.SCOPE_PLANNER]
        assert list(orchestrator.agents) == [Role.MARKET_ANALYST, Role.SCOPE_PLANNER]

    def test_agents_share_model(self, brief, fake_generate):
        """Test the model override reaches every worker."""
        context = create_swarm_context(brief)
        orchestrator = OrchestratorAgent(context, model="openai/gpt-4o", generate=fake_generate)

        assert {a.model for a in orchestrator.agents.values()} == {"openai/gpt-4o"}


class TestExecution:
    """Test a full orchestrated run."""

    @pytest.mark.asyncio
    async def test_full_run(self, brief, fake_generate):
        """Test all sections are produced and the PRD is compiled."""
        context = create_swarm_context(brief)
        orchestrator = OrchestratorAgent(context, generate=fake_generate)

        prd = await orchestrator.execute()

        assert prd == "orchestrator output"
        assert set(context.sections) == set(WORKER_ROLES)
        assert context.outline == "orchestrator output"
        assert all(
            context.agent_states[role].status == AgentStatus.completed
            for role in Role
        )
        assert context.agent_states[Role.ORCHESTRATOR].output == prd

    @pytest.mark.asyncio
    async def test_waves_run_in_order(self, brief, fake_generate):
        """Test no agent starts before the agents it depends on."""
        context = create_swarm_context(brief)
        await OrchestratorAgent(context, generate=fake_generate).execute()

        order = [c["tags"][-1] for c in fake_generate.calls if c["tags"][-1] != "orchestrator"]
        position = {tag: i for i, tag in enumerate(order)}
        for role in WORKER_ROLES:
            for dep in lookup(role).dependencies:
                if dep != Role.ORCHESTRATOR:
                    assert position[dep.value] < position[role.value]

    @pytest.mark.asyncio
    async def test_wave_members_run_concurrently(self, brief, fake_generate):
        """Test agents within one wave are in flight together."""
        context = create_swarm_context(brief)
        await OrchestratorAgent(context, generate=fake_generate).execute()

        assert fake_generate.max_in_flight == 2

    @pytest.mark.asyncio
    async def test_outline_and_compile_share_history(self, brief, fake_generate):
        """Test the compile call sees the outline exchange."""
        context = create_swarm_context(brief)
        await OrchestratorAgent(context, generate=fake_generate).execute()

        compile_call = next(c for c in fake_generate.calls if is_compile(c))
        roles = [m["role"] for m in compile_call["messages"]]
        assert roles == ["user", "assistant", "user"]
        assert compile_call["temperature"] == 0.3
        assert compile_call["tools"] is None

    @pytest.mark.asyncio
    async def test_compile_prompt_in_canonical_order(self, brief, make_generator):
        """Test sections are presented in editorial order, not completion order."""
        responses = {role.value: f"SECTION-{role.value}" for role in WORKER_ROLES}
        generate = make_generator(responses=responses)
        context = create_swarm_context(brief)

        await OrchestratorAgent(context, generate=generate).execute()

        prompt = next(c for c in generate.calls if is_compile(c))["messages"][-1]["content"]
        offsets = [prompt.index(f"SECTION-{role.value}") for role in WORKER_ROLES]
        assert offsets == sorted(offsets)
        assert f"### {lookup(Role.MARKET_ANALYST).name}\nSECTION-market-analyst" in prompt


class TestFaultIsolation:
    """Test that one failing agent does not stop the swarm."""

    @pytest.mark.asyncio
    async def test_failed_agent_is_skipped(self, brief, make_generator):
        """Test dependents still run and compilation omits the failed section."""
        generate = make_generator(fail_when=lambda call: call["tags"][-1] == "market-analyst")
        context = create_swarm_context(brief)
        orchestrator = OrchestratorAgent(context, generate=generate)

        prd = await orchestrator.execute()

        assert prd == "orchestrator output"
        assert Role.MARKET_ANALYST not in context.sections
        assert context.agent_states[Role.MARKET_ANALYST].status == AgentStatus.error
        assert "boom" in context.agent_states[Role.MARKET_ANALYST].error
        assert set(context.sections) == set(WORKER_ROLES) - {Role.MARKET_ANALYST}

        scope_prompt = generate.calls_for("scope-planner")[0]["messages"][-1]["content"]
        assert "Dev Market & Persona Analyst Output" not in scope_prompt

        compile_prompt = next(c for c in generate.calls if is_compile(c))["messages"][-1]["content"]
        assert "### Dev Market & Persona Analyst" not in compile_prompt
        assert not orchestrator.results[Role.MARKET_ANALYST].ok

    @pytest.mark.asyncio
    async def test_mid_graph_failure_spares_later_waves(self, brief, make_generator):
        """Test a failing AI designer does not stop the agents scheduled after it."""
        generate = make_generator(fail_when=lambda call: call["tags"][-1] == "ai-designer")
        context = create_swarm_context(brief)
        orchestrator = OrchestratorAgent(context, generate=generate)

        prd = await orchestrator.execute()

        assert prd == "orchestrator output"
        assert context.agent_states[Role.AI_DESIGNER].status == AgentStatus.error
        assert Role.AI_DESIGNER not in context.sections
        assert not orchestrator.results[Role.AI_DESIGNER].ok
        for role in (
            Role.DATA_API_DESIGNER,
            Role.SECURITY_OFFICER,
            Role.PERFORMANCE_ENGINEER,
            Role.QUALITY_LEAD,
        ):
            assert context.agent_states[role].status == AgentStatus.completed
            assert context.sections[role] == f"{role.value} output"

    @pytest.mark.asyncio
    async def test_outline_failure_is_fatal(self, brief, make_generator):
        """Test an outline failure propagates before any worker runs."""
        generate = make_generator(fail_when=is_outline)
        context = create_swarm_context(brief)
        orchestrator = OrchestratorAgent(context, generate=generate)

        with pytest.raises(ProviderError):
            await orchestrator.execute()

        assert context.agent_states[Role.ORCHESTRATOR].status == AgentStatus.error
        assert len(generate.calls) == 1
        assert dict(context.sections) == {}

    @pytest.mark.asyncio
    async def test_compile_failure_is_fatal(self, brief, make_generator):
        """Test a compile failure propagates after the workers ran."""
        generate = make_generator(fail_when=is_compile)
        context = create_swarm_context(brief)

        with pytest.raises(ProviderError):
            await OrchestratorAgent(context, generate=generate).execute()

        assert context.agent_states[Role.ORCHESTRATOR].status == AgentStatus.error
        assert set(context.sections) == set(WORKER_ROLES)


class TestScheduling:
    """Test deadlock handling at the orchestrator level."""

    @pytest.mark.asyncio
    async def test_strict_mode_raises_before_running(self, brief, fake_generate, monkeypatch):
        """Test strict scheduling refuses a plan with unschedulable roles."""
        from prd_swarm.agents import orchestrator as orchestrator_module

        real = orchestrator_module.compute_waves

        def stuck(selected):
            plan = real(selected)
            return orchestrator_module.WavePlan(waves=plan.waves[:1], unscheduled=plan.scheduled[1:])

        monkeypatch.setattr(orchestrator_module, "compute_waves", stuck)
        context = create_swarm_context(brief)

        with pytest.raises(SchedulingDeadlock) as exc_info:
            await OrchestratorAgent(context, generate=fake_generate, strict=True).execute()

        assert "scope-planner" in exc_info.value.unscheduled
        assert fake_generate.calls == []

    @pytest.mark.asyncio
    async def test_lenient_mode_reports_unscheduled(self, brief, fake_generate, monkeypatch):
        """Test unschedulable roles are skipped and listed in the summary."""
        from prd_swarm.agents import orchestrator as orchestrator_module

        real = orchestrator_module.compute_waves

        def stuck(selected):
            plan = real(selected)
            return orchestrator_module.WavePlan(waves=plan.waves[:1], unscheduled=plan.scheduled[1:])

        monkeypatch.setattr(orchestrator_module, "compute_waves", stuck)
        context = create_swarm_context(brief)
        orchestrator = OrchestratorAgent(context, generate=fake_generate, strict=False)

        await orchestrator.execute()

        assert set(context.sections) == {Role.MARKET_ANALYST}
        assert Role.QUALITY_LEAD in orchestrator.unscheduled_roles
        assert "Unscheduled: scope-planner" in orchestrator.get_execution_summary()


class TestSummary:
    """Test the execution summary."""

    @pytest.mark.asyncio
    async def test_summary_counts(self, brief, make_generator):
        """Test counts and per-role lines after a run with one failure."""
        generate = make_generator(fail_when=lambda call: call["tags"][-1] == "quality-lead")
        context = create_swarm_context(brief)
        orchestrator = OrchestratorAgent(context, generate=generate)
        await orchestrator.execute()

        summary = orchestrator.get_execution_summary()

        assert "- Completed: 8" in summary
        assert "- Errors: 1" in summary
        assert "- Total: 9" in summary
        assert "- Quality, Rollout & Docs Lead: error" in summary
        assert "Unscheduled" not in summary

    @pytest.mark.asyncio
    async def test_unselected_agents_stay_idle(self, brief, fake_generate):
        """Test roles left out of the selection are reported idle."""
        context = create_swarm_context(select(brief, Role.MARKET_ANALYST))
        orchestrator = OrchestratorAgent(context, generate=fake_generate)
        await orchestrator.execute()

        summary = orchestrator.get_execution_summary()
        assert "- Completed: 2" in summary
        assert "- Idle: 7" in summary


class TestTwoAgentRun:
    """End-to-end run with a market analyst and a scope planner."""

    @pytest.mark.asyncio
    async def test_two_agent_prd(self, brief, make_generator):
        """Test two waves, dependency folding, and a compiled PRD."""
        generate = make_generator(responses={
            "market-analyst": "Personas: indie devs",
            "scope-planner": "MVP: notes + summaries",
        })
        brief = select(brief, Role.MARKET_ANALYST, Role.SCOPE_PLANNER)

        result = await generate_prd_with_agents(brief, model="openai/gpt-4o", user_id="u1", generate=generate)

        tags = [c["tags"][-1] for c in generate.calls]
        assert tags == ["orchestrator", "market-analyst", "scope-planner", "orchestrator"]
        assert "Personas: indie devs" in generate.calls_for("scope-planner")[0]["messages"][-1]["content"]

        compile_prompt = next(c for c in generate.calls if is_compile(c))["messages"][-1]["content"]
        assert "Personas: indie devs" in compile_prompt
        assert "MVP: notes + summaries" in compile_prompt
        assert compile_prompt.index("Personas: indie devs") < compile_prompt.index("MVP: notes + summaries")

        assert result.prd == "orchestrator output"
        assert dict(result.context.sections) == {
            Role.MARKET_ANALYST: "Personas: indie devs",
            Role.SCOPE_PLANNER: "MVP: notes + summaries",
        }
        assert len(result.context.messages) == 2
        assert result.unscheduled_roles == []
        assert result.duration_seconds >= 0
        assert "- Completed: 3" in result.summary
        assert all(c["model"] == "openai/gpt-4o" for c in generate.calls)
        assert all(c["user_id"] == "u1" for c in generate.calls)
