"""
Text generation: the one capability the swarm needs from a model provider.

``generate`` takes a gateway-style model id, a system prompt, the conversation
so far and optional tool schemas. With tools it runs a bounded multi-step
loop: every tool call is answered with an inert echo and the model is asked
again, the final allowed step forcing a plain-text answer. Without tools it is
a single call. Every failure surfaces as ``ProviderError``.
"""

import json
import logging
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional, Sequence

import litellm

from .core.config import settings
from .errors import ProviderError
from .llm_providers import get_provider_config

logger = logging.getLogger(__name__)

# Signature shared by ``generate`` and any stand-in passed to agents.
GenerateFn = Callable[..., Awaitable[str]]

DEFAULT_STEP_LIMIT = 5


def echo_tool_call(name: str, arguments: str) -> str:
    """
    Inert tool result: the call's own arguments plus a pending marker.

    Args:
        name: Tool name the model called
        arguments: JSON-encoded arguments as sent by the model

    Returns:
        JSON string handed back to the model as the tool result
    """
    try:
        payload = json.loads(arguments) if arguments else {}
    except json.JSONDecodeError:
        payload = {"raw": arguments}
    if not isinstance(payload, dict):
        payload = {"value": payload}
    return json.dumps({"tool": name, **payload, "status": "pending"})


def _message_to_dict(message: Any) -> Dict[str, Any]:
    """Assistant message (with tool calls) in wire format for the next step."""
    return {
        "role": "assistant",
        "content": message.content or "",
        "tool_calls": [
            {
                "id": call.id,
                "type": "function",
                "function": {
                    "name": call.function.name,
                    "arguments": call.function.arguments,
                },
            }
            for call in message.tool_calls
        ],
    }


async def generate(
    model: str,
    system_prompt: str,
    messages: Sequence[Mapping[str, Any]],
    tools: Optional[Mapping[str, Any]] = None,
    step_limit: Optional[int] = None,
    temperature: Optional[float] = None,
    user_id: Optional[str] = None,
    tags: Optional[List[str]] = None,
) -> str:
    """
    Generate text from a model.

    Args:
        model: Gateway-style model id, e.g. "openai/gpt-4o"
        system_prompt: Persona / instructions for the model
        messages: Conversation history as ``{"role", "content"}`` dicts
        tools: Tool specs (anything with ``to_openai()``); enables the
            multi-step loop
        step_limit: Maximum model calls when tools are present
        temperature: Sampling temperature (defaults to AGENT_TEMPERATURE)
        user_id: End-user attribution passed to the provider
        tags: Free-form tags for provider-side analytics

    Returns:
        The model's final text

    Raises:
        ProviderError: If the provider call fails or returns no text
    """
    config = get_provider_config(model_name=model)
    conversation: List[Dict[str, Any]] = [{"role": "system", "content": system_prompt}]
    conversation.extend(dict(m) for m in messages)

    tool_defs = [spec.to_openai() for spec in tools.values()] if tools else None
    steps = max(1, step_limit or DEFAULT_STEP_LIMIT) if tool_defs else 1

    for step in range(1, steps + 1):
        kwargs: Dict[str, Any] = {
            "model": config.model_name,
            "messages": conversation,
            "temperature": settings.AGENT_TEMPERATURE if temperature is None else temperature,
            "user": user_id or "anon",
            "metadata": {"tags": tags or []},
            **config.completion_kwargs(),
        }
        if tool_defs:
            kwargs["tools"] = tool_defs
            kwargs["tool_choice"] = "none" if step == steps else "auto"

        try:
            response = await litellm.acompletion(**kwargs)
        except Exception as e:
            logger.warning(f"Provider call failed for {model} (step {step}/{steps}): {e}")
            raise ProviderError(f"Generation failed for {model}: {e}", model=model) from e

        try:
            message = response.choices[0].message
        except (AttributeError, IndexError, TypeError) as e:
            raise ProviderError(f"Malformed response from {model}", model=model) from e

        tool_calls = getattr(message, "tool_calls", None)
        if tool_defs and tool_calls and step < steps:
            conversation.append(_message_to_dict(message))
            for call in tool_calls:
                conversation.append({
                    "role": "tool",
                    "tool_call_id": call.id,
                    "content": echo_tool_call(call.function.name, call.function.arguments),
                })
            logger.debug(f"{model} step {step}: answered {len(tool_calls)} tool call(s)")
            continue

        text = message.content or ""
        if not text.strip():
            raise ProviderError(f"Empty response from {model}", model=model)
        return text

    raise ProviderError(f"No text produced by {model} within {steps} steps", model=model)
