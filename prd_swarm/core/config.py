from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = {
        "env_file": ".env",
        "extra": "ignore",
    }

    # LLM provider configuration
    OPENAI_API_KEY: str | None = None
    OPENROUTER_API_KEY: str | None = None
    OPENROUTER_BASE_URL: str = Field(default="https://openrouter.ai/api/v1")

    MODEL_PROVIDER: str = Field(default="openrouter")
    DEFAULT_MODEL: str = Field(default="openai/gpt-5", description="Model used by swarm agents when none is given")
    DOC_MODEL: str = Field(default="openai/gpt-4o", description="Model used by the document generators")

    # Google Vertex AI
    GOOGLE_PROJECT_ID: str | None = Field(default=None, description="Google Cloud project ID for Vertex AI")
    GOOGLE_LOCATION: str = Field(default="us-central1", description="Google Cloud region for Vertex AI")
    GOOGLE_APPLICATION_CREDENTIALS: str | None = Field(default=None, description="Path to service account JSON")

    # Amazon Bedrock
    AWS_REGION: str = Field(default="us-east-1", description="AWS region for Bedrock")
    AWS_ACCESS_KEY_ID: str | None = Field(default=None, description="AWS access key (optional if using IAM role)")
    AWS_SECRET_ACCESS_KEY: str | None = Field(default=None, description="AWS secret key")

    # Microsoft Azure OpenAI
    AZURE_OPENAI_API_KEY: str | None = Field(default=None, description="Azure OpenAI API key")
    AZURE_OPENAI_ENDPOINT: str | None = Field(default=None, description="Azure OpenAI endpoint URL")
    AZURE_OPENAI_API_VERSION: str = Field(default="2024-02-15-preview", description="Azure OpenAI API version")
    AZURE_OPENAI_DEPLOYMENT: str | None = Field(default=None, description="Azure OpenAI deployment name")

    # Swarm behaviour
    AGENT_TEMPERATURE: float = Field(default=0.7, description="Sampling temperature for section agents")
    COMPILE_TEMPERATURE: float = Field(default=0.3, description="Sampling temperature for the final compilation")
    AGENT_TOOLS_ENABLED: bool = Field(default=True, description="Pass tool schemas to section agents")
    SWARM_STRICT_SCHEDULING: bool = Field(
        default=False,
        description="Raise SchedulingDeadlock instead of skipping roles that can never be scheduled",
    )

    # HTTP caller
    CORS_ALLOW_ORIGINS: List[str] = Field(default_factory=lambda: ["http://localhost:3000"])
    GENERATION_TIMEOUT_SECONDS: float = Field(default=290.0, description="Caller-side deadline for a full run")

    # Runtime
    PRD_SWARM_ENV: str = Field(default="dev")
    DEBUG: bool = Field(default=False)

    def validate_production_config(self) -> None:
        """Validate configuration for production environments.

        Raises:
            RuntimeError: If configuration is invalid
        """
        if self.PRD_SWARM_ENV != "production":
            return

        if "*" in self.CORS_ALLOW_ORIGINS:
            raise RuntimeError(
                "CRITICAL: CORS_ALLOW_ORIGINS cannot be '*' in production. "
                "Specify exact origins."
            )

        if "http://localhost:3000" in self.CORS_ALLOW_ORIGINS:
            import logging
            logging.getLogger(__name__).warning(
                "WARNING: CORS_ALLOW_ORIGINS contains localhost - update for production"
            )


settings = Settings()
