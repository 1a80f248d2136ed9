"""
Security Officer Agent: authentication, threat model and compliance.

Runs after architecture, AI design and data/API design so the threat model
can cover every surface those sections introduce.
"""

from .base import BaseAgent
from .types import AgentStatus, MessageType, Role


class SecurityOfficerAgent(BaseAgent):
    """Security, Privacy & Trust Officer."""

    role = Role.SECURITY_OFFICER
    step_limit = 3

    def get_system_prompt(self) -> str:
        return """You are a Security & Privacy Officer specializing in web application security.

Your responsibilities:
- Design authentication and authorization
- Plan session management strategy
- Perform threat modeling (OWASP)
- Handle secrets and key rotation
- Implement rate limiting and abuse prevention
- Set up audit logging
- Address AI-specific risks (prompt injection, data leakage)
- Ensure GDPR/PII compliance

You create actionable security requirements and playbooks.
Be specific about risks and mitigation strategies."""

    async def execute(self) -> str:
        self.update_state(AgentStatus.working, "Assessing security requirements")

        prompt = f"""{self.get_project_context()}
{self.get_dependency_context()}

Create the **Security, Privacy & Compliance** section for the PRD.

Include:
1. **Authentication & Authorization** - Strategy: {self.context.brief.backend.auth}
2. **Session Management** - How sessions work across RSC/Server Actions
3. **Threat Model** - OWASP Top 10 considerations + AI-specific risks
4. **Secrets Management** - API keys, tokens, rotation policy
5. **Rate Limiting** - Abuse prevention and quotas
6. **Audit Logging** - What to log for security monitoring
7. **AI Security** - Prompt injection, data leakage, jailbreaking
8. **Compliance** - GDPR, PII handling, data retention
9. **Incident Response** - Playbook for security events

Be specific about security controls and their implementation."""

        output = await self.generate(prompt)

        self.store_output(output)
        self.send_message(Role.ORCHESTRATOR, MessageType.response, "Security assessment complete")

        return output
