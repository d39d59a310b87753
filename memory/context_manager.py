"""Conversation context manager for LLM context window management."""

import logging
from typing import List, Union

from llm.base_client import Message
from schemas.context import Platform
from .conversation_memory import ConversationMemory
from .models import ConversationContext

logger = logging.getLogger(__name__)


class ConversationContextManager:
    """Turns conversation memory into LLM-ready context."""

    # Configuration
    MAX_CONTEXT_TURNS = 5  # Recent turns replayed as chat messages
    MAX_TURN_CHARS = 600  # Long answers are truncated when replayed

    def __init__(self, memory: ConversationMemory):
        """
        Initialize context manager.

        Args:
            memory: Conversation memory to read from
        """
        self.memory = memory

    def replay_messages(self, context: ConversationContext) -> List[Message]:
        """
        Get the most recent turns of a conversation as chat messages.

        Args:
            context: Conversation context from memory

        Returns:
            Alternating user/assistant messages, oldest first
        """
        messages = []
        for interaction in context.recent_interactions[-self.MAX_CONTEXT_TURNS:]:
            messages.append(Message(role="user", content=interaction.user_query))
            messages.append(Message(
                role="assistant",
                content=self._truncate(interaction.ai_response)
            ))
        return messages

    def get_conversation_context_string(
        self,
        user_id: str,
        platform: Union[Platform, str]
    ) -> str:
        """
        Get conversation context as a single string.

        Useful for including in system prompts.
        """
        context = self.memory.get_context(user_id, platform)
        if not context.has_history:
            return ""
        return self.summarize(context)

    def summarize(self, context: ConversationContext) -> str:
        """Format the derived statistics of a conversation for a prompt."""
        topics = ", ".join(context.top_topics) or "none"
        analysis_types = ", ".join(t.value for t in context.top_intent_types) or "none"

        parts = [
            "CONVERSATION CONTEXT:",
            f"- Previous interactions: {context.total_interactions}",
            f"- User engagement level: {context.engagement_level.value}",
            f"- Preferred topics: {topics}",
            f"- Preferred analysis types: {analysis_types}",
            f"- Risk tolerance: {context.risk_tolerance.value}",
            f"- Recent focus: {context.recent_focus}",
            "",
            "Use this context to personalise the answer and stay consistent "
            "with earlier replies.",
        ]
        return "\n".join(parts)

    def _truncate(self, text: str) -> str:
        if len(text) <= self.MAX_TURN_CHARS:
            return text
        return text[:self.MAX_TURN_CHARS - 3] + "..."
