"""Conversation memory: bounded per-conversation history and rolling statistics."""

from .models import (
    ConversationContext,
    ConversationKey,
    EngagementLevel,
    Interaction,
    MemoryStats,
    RiskTolerance,
)
from .vocabulary import TopicVocabulary
from .conversation_memory import ConversationMemory
from .context_manager import ConversationContextManager
from .sweeper import MemorySweeper

__all__ = [
    "ConversationContext",
    "ConversationKey",
    "EngagementLevel",
    "Interaction",
    "MemoryStats",
    "RiskTolerance",
    "TopicVocabulary",
    "ConversationMemory",
    "ConversationContextManager",
    "MemorySweeper",
]
