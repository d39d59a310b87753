"""Result schemas returned by the orchestrator and analytics providers."""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field

from .intent import Intent


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AnalyticsResult(BaseModel):
    """Outcome of a single analytics provider call."""
    success: bool
    data: Optional[Any] = None
    error: Optional[str] = None
    subject: Optional[str] = None  # wallet or collection address, if any
    timestamp: datetime = Field(default_factory=_utcnow)


class ChatResult(BaseModel):
    """Output of one conversational turn."""
    response: str
    intent: Optional[Intent] = None
    confidence: float = Field(0.0, ge=0.0, le=1.0)
    suggested_actions: List[str] = Field(default_factory=list)
    error: bool = False


class AnalysisResult(BaseModel):
    """Output of a direct (non-conversational) analysis flow."""
    subject: Optional[str] = None
    analysis: str
    data: Dict[str, Any] = Field(default_factory=dict)
    success: bool = True
