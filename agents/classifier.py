"""Intent classifier interface and selection."""

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional

from llm.base_client import BaseLLMClient
from schemas.intent import Intent, IntentType

logger = logging.getLogger(__name__)


SUGGESTED_ACTIONS = {
    IntentType.WALLET_ANALYSIS: ["analyze_wallet", "get_wallet_metrics", "get_wallet_nfts"],
    IntentType.COLLECTION_ANALYSIS: ["get_collection_metrics"],
    IntentType.MARKET_INSIGHTS: ["get_market_insights"],
    IntentType.RISK_ASSESSMENT: ["get_wallet_risk_score", "get_market_insights"],
    IntentType.GENERAL_QUESTION: [],
}


class ClassifierMode(str, Enum):
    """How queries are classified."""
    KEYWORD = "keyword"
    LLM = "llm"
    AUTO = "auto"


class IntentClassifier(ABC):
    """Maps a raw user query to an Intent."""

    @abstractmethod
    def classify(self, query: str) -> Intent:
        """Classify a query. Must not raise for any input string."""
        pass


def create_intent_classifier(
    mode: ClassifierMode = ClassifierMode.AUTO,
    llm_client: Optional[BaseLLMClient] = None
) -> IntentClassifier:
    """
    Create the configured intent classifier.

    Args:
        mode: keyword, llm, or auto (llm when a client is available)
        llm_client: Completion provider for the llm variant

    Raises:
        ValueError: If llm mode is requested without a client
    """
    # Imported here; both variants import this module for the base class
    from .router import KeywordIntentClassifier
    from .llm_router import LLMIntentClassifier

    mode = ClassifierMode(mode)

    if mode == ClassifierMode.LLM:
        if llm_client is None:
            raise ValueError("LLM intent classification requires an LLM client")
        return LLMIntentClassifier(llm_client)

    if mode == ClassifierMode.AUTO and llm_client is not None:
        return LLMIntentClassifier(llm_client)

    logger.info("Using keyword intent classifier")
    return KeywordIntentClassifier()
