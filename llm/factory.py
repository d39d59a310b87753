"""Completion provider selection for the NFT assistant."""

from enum import Enum
from typing import Optional, Union

from .base_client import BaseLLMClient
from .openai_client import OpenAIClient
from .anthropic_client import AnthropicClient


class LLMProvider(str, Enum):
    """Completion providers the assistant can write answers with."""
    OPENAI = "openai"
    ANTHROPIC = "anthropic"


_CLIENTS = {
    LLMProvider.OPENAI: OpenAIClient,
    LLMProvider.ANTHROPIC: AnthropicClient,
}


def create_llm_client(
    provider: Union[LLMProvider, str],
    api_key: Optional[str] = None,
    model: Optional[str] = None,
    timeout: float = 60.0
) -> BaseLLMClient:
    """
    Build the client used for intent classification and response writing.

    Args:
        provider: Provider enum member or its name from settings ("openai", "anthropic")
        api_key: Provider API key; the client reads its own env var when omitted
        model: Model override; each client has a default
        timeout: Per-request timeout in seconds, shared by both SDKs

    Raises:
        ValueError: If the provider name is unknown
    """
    try:
        provider = LLMProvider(provider)
    except ValueError:
        raise ValueError(f"Unsupported LLM provider: {provider}") from None

    return _CLIENTS[provider](api_key=api_key, model=model, timeout=timeout)
