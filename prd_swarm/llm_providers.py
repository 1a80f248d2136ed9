"""
Multi-Cloud LLM Provider Support

Maps gateway-style model ids ("openai/gpt-4o", "anthropic/claude-sonnet-4")
onto the configured provider:
- OpenRouter (default)
- OpenAI
- Google Vertex AI
- Amazon Bedrock
- Microsoft Azure OpenAI

The resulting model string and keyword arguments are passed straight to
litellm, so credentials never have to be written into the process environment.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple
from dataclasses import dataclass, field
from enum import Enum

from .core.config import settings

logger = logging.getLogger(__name__)


class LLMProvider(str, Enum):
    """Supported LLM providers."""
    OPENROUTER = "openrouter"
    OPENAI = "openai"
    VERTEX = "vertex"
    BEDROCK = "bedrock"
    AZURE = "azure"


@dataclass
class ProviderConfig:
    """Configuration for an LLM provider."""
    provider: LLMProvider
    model_name: str
    api_key: Optional[str] = None
    base_url: Optional[str] = None
    extra_params: Dict[str, Any] = field(default_factory=dict)

    def completion_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments for ``litellm.acompletion`` (model excluded)."""
        kwargs: Dict[str, Any] = dict(self.extra_params)
        if self.api_key:
            kwargs["api_key"] = self.api_key
        if self.base_url:
            kwargs["api_base"] = self.base_url
        return kwargs


# Default model mappings for each provider
DEFAULT_MODELS = {
    LLMProvider.OPENROUTER: "openai/gpt-4o-mini",
    LLMProvider.OPENAI: "gpt-4o-mini",
    LLMProvider.VERTEX: "gemini-1.5-pro",
    LLMProvider.BEDROCK: "anthropic.claude-3-sonnet-20240229-v1:0",
    LLMProvider.AZURE: "gpt-4o",
}


def _strip_vendor(model_name: str) -> str:
    """Drop the "vendor/" prefix of a gateway model id."""
    return model_name.split("/", 1)[1] if "/" in model_name else model_name


def get_provider_config(
    provider: Optional[str] = None,
    model_name: Optional[str] = None
) -> ProviderConfig:
    """
    Get configuration for the specified provider.

    Args:
        provider: Provider name (defaults to MODEL_PROVIDER setting)
        model_name: Gateway-style model id (defaults to DEFAULT_MODEL setting
            or the provider default)

    Returns:
        ProviderConfig with a litellm model string and credentials
    """
    provider_str = (provider or settings.MODEL_PROVIDER or "openrouter").lower()

    try:
        llm_provider = LLMProvider(provider_str)
    except ValueError:
        logger.warning(f"Unknown provider '{provider_str}', falling back to openrouter")
        llm_provider = LLMProvider.OPENROUTER

    final_model = model_name or settings.DEFAULT_MODEL or DEFAULT_MODELS[llm_provider]

    if llm_provider == LLMProvider.OPENROUTER:
        if not final_model.startswith("openrouter/"):
            final_model = f"openrouter/{final_model}"
        return ProviderConfig(
            provider=llm_provider,
            model_name=final_model,
            api_key=settings.OPENROUTER_API_KEY,
            base_url=settings.OPENROUTER_BASE_URL,
        )

    elif llm_provider == LLMProvider.OPENAI:
        return ProviderConfig(
            provider=llm_provider,
            model_name=_strip_vendor(final_model),
            api_key=settings.OPENAI_API_KEY,
        )

    elif llm_provider == LLMProvider.VERTEX:
        return ProviderConfig(
            provider=llm_provider,
            model_name=f"vertex_ai/{_strip_vendor(final_model)}",
            extra_params={
                "vertex_project": settings.GOOGLE_PROJECT_ID,
                "vertex_location": settings.GOOGLE_LOCATION,
            }
        )

    elif llm_provider == LLMProvider.BEDROCK:
        extra: Dict[str, Any] = {"aws_region_name": settings.AWS_REGION}
        if settings.AWS_ACCESS_KEY_ID:
            extra["aws_access_key_id"] = settings.AWS_ACCESS_KEY_ID
        if settings.AWS_SECRET_ACCESS_KEY:
            extra["aws_secret_access_key"] = settings.AWS_SECRET_ACCESS_KEY
        return ProviderConfig(
            provider=llm_provider,
            model_name=f"bedrock/{_strip_vendor(final_model)}",
            extra_params=extra,
        )

    # Azure uses deployment name in the model field
    deployment = settings.AZURE_OPENAI_DEPLOYMENT or _strip_vendor(final_model)
    return ProviderConfig(
        provider=llm_provider,
        model_name=f"azure/{deployment}",
        api_key=settings.AZURE_OPENAI_API_KEY,
        base_url=settings.AZURE_OPENAI_ENDPOINT,
        extra_params={
            "api_version": settings.AZURE_OPENAI_API_VERSION,
        }
    )


# Settings that must be set before a provider can be called. Cloud SDK
# credentials for Vertex and Bedrock are resolved by litellm.
REQUIRED_SETTINGS: Dict[LLMProvider, Tuple[str, ...]] = {
    LLMProvider.OPENROUTER: ("OPENROUTER_API_KEY",),
    LLMProvider.OPENAI: ("OPENAI_API_KEY",),
    LLMProvider.VERTEX: ("GOOGLE_PROJECT_ID",),
    LLMProvider.BEDROCK: (),
    LLMProvider.AZURE: ("AZURE_OPENAI_API_KEY", "AZURE_OPENAI_ENDPOINT"),
}


def missing_credentials(provider: Optional[str] = None) -> List[str]:
    """
    Names of required settings that are unset for a provider.

    Args:
        provider: Provider name (defaults to MODEL_PROVIDER setting)

    Returns:
        Setting names in declaration order; empty when the provider is usable
    """
    try:
        llm_provider = LLMProvider((provider or settings.MODEL_PROVIDER).lower())
    except ValueError:
        llm_provider = LLMProvider.OPENROUTER
    return [name for name in REQUIRED_SETTINGS[llm_provider] if not getattr(settings, name)]
