"""Memory data models."""

from datetime import datetime
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

from schemas.intent import Intent, IntentType


class RiskTolerance(str, Enum):
    """Risk appetite inferred from the wording of a user's queries."""
    UNKNOWN = "unknown"
    CONSERVATIVE = "conservative"
    MODERATE = "moderate"
    AGGRESSIVE = "aggressive"


class EngagementLevel(str, Enum):
    """How long a user has been talking to the assistant."""
    NEW = "new"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @classmethod
    def from_total(cls, total_interactions: int) -> "EngagementLevel":
        if total_interactions <= 0:
            return cls.NEW
        if total_interactions < 3:
            return cls.LOW
        if total_interactions < 10:
            return cls.MEDIUM
        return cls.HIGH


class ConversationKey(BaseModel):
    """Identifies one independent conversation: a user on a platform."""
    model_config = ConfigDict(frozen=True)

    user_id: str
    platform: str

    def __str__(self) -> str:
        return f"{self.platform}:{self.user_id}"


class Interaction(BaseModel):
    """A single request/response turn."""
    id: str
    timestamp: datetime
    user_query: str
    ai_response: str
    intent: Optional[Intent] = None


class ConversationContext(BaseModel):
    """Read-only view of a conversation handed to the response generator."""
    has_history: bool = False
    total_interactions: int = 0
    recent_interactions: List[Interaction] = Field(default_factory=list)
    top_topics: List[str] = Field(default_factory=list)
    top_intent_types: List[IntentType] = Field(default_factory=list)
    risk_tolerance: RiskTolerance = RiskTolerance.UNKNOWN
    last_interaction_time: Optional[datetime] = None
    engagement_level: EngagementLevel = EngagementLevel.NEW

    @property
    def recent_focus(self) -> str:
        """Intent type of the latest classified turn, or "general"."""
        for interaction in reversed(self.recent_interactions):
            if interaction.intent is not None:
                return interaction.intent.type.value
        return "general"


class MemoryStats(BaseModel):
    """Process-wide memory usage figures."""
    total_conversations: int = 0
    total_users: int = 0
    stored_interactions: int = 0
