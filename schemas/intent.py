"""Intent classification schemas."""

from enum import Enum
from typing import Any, Dict, List
from pydantic import BaseModel, Field


class IntentType(str, Enum):
    """Classification of user question intent."""
    WALLET_ANALYSIS = "wallet_analysis"
    COLLECTION_ANALYSIS = "collection_analysis"
    MARKET_INSIGHTS = "market_insights"
    RISK_ASSESSMENT = "risk_assessment"
    GENERAL_QUESTION = "general_question"


class Intent(BaseModel):
    """Classification result for a single user query."""
    type: IntentType
    confidence: float = Field(0.5, ge=0.0, le=1.0)
    entities: Dict[str, Any] = Field(default_factory=dict)
    suggested_actions: List[str] = Field(default_factory=list)

    @property
    def wallet_address(self):
        return self.entities.get("wallet_address")

    @property
    def collection_name(self):
        return self.entities.get("collection_name")

    @property
    def collection_address(self):
        return self.entities.get("collection_address")

    @property
    def timeframe(self):
        return self.entities.get("timeframe")
