"""LLM client abstraction layer."""

from .base_client import BaseLLMClient, Message, LLMResponse, LLMError
from .factory import create_llm_client, LLMProvider

__all__ = [
    "BaseLLMClient",
    "Message",
    "LLMResponse",
    "LLMError",
    "create_llm_client",
    "LLMProvider",
]
