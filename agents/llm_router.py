"""LLM-based intent classifier."""

import json
import logging
from typing import Any, Dict

from llm.base_client import BaseLLMClient, Message
from schemas.intent import Intent, IntentType
from .classifier import IntentClassifier
from .router import KeywordIntentClassifier

logger = logging.getLogger(__name__)


class LLMIntentClassifier(IntentClassifier):
    """
    Delegates intent analysis to a chat completion provider.

    Falls back to the local keyword classifier whenever the provider fails or
    answers with something that is not the expected JSON.
    """

    SYSTEM_PROMPT = """You analyze questions sent to an NFT and blockchain analytics assistant.
Classify the user's intent and extract the entities it mentions.

## Intent Types
1. "wallet_analysis" - questions about a specific wallet, its holdings or behaviour
   Example: "Analyze wallet 0x123..."
2. "collection_analysis" - questions about an NFT collection's health or performance
   Example: "How is Bored Ape doing?"
3. "market_insights" - questions about the broader NFT market and its trends
   Example: "What's the market trend?"
4. "risk_assessment" - questions about safety, fraud or risk of a wallet or collection
   Example: "Is this wallet risky?"
5. "general_question" - anything else, including educational questions

## Response Format
Respond with valid JSON only:
{
  "type": "wallet_analysis" | "collection_analysis" | "market_insights" | "risk_assessment" | "general_question",
  "confidence": 0.0-1.0,
  "entities": {
    "wallet_address": "string or null",
    "collection_name": "string or null",
    "collection_address": "string or null",
    "timeframe": "24h | 7d | 30d | 90d | 1y | all, or null"
  },
  "suggestedActions": ["analytics calls that would help answer"]
}"""

    def __init__(self, llm_client: BaseLLMClient):
        """
        Initialize LLM classifier.

        Args:
            llm_client: LLM client for reasoning
        """
        self.llm_client = llm_client
        self.fallback = KeywordIntentClassifier()

    def classify(self, query: str) -> Intent:
        """Classify a query using the completion provider."""
        messages = [
            Message(role="system", content=self.SYSTEM_PROMPT),
            Message(role="user", content=f'User Query: "{query}"\n\nRespond with JSON.')
        ]

        try:
            response = self.llm_client.chat(
                messages=messages,
                temperature=0.1,  # Low temperature for consistent classification
                max_tokens=500
            )
            intent = self._parse_response(response.content)

            logger.info(
                f"LLM intent: {intent.type.value} (confidence: {intent.confidence:.2f})"
            )
            return intent

        except json.JSONDecodeError as e:
            logger.error(f"Failed to parse LLM intent as JSON: {e}")
            return self.fallback.classify(query)

        except Exception as e:
            logger.error(f"LLM intent classification error: {e}")
            return self.fallback.classify(query)

    def _parse_response(self, content: str) -> Intent:
        """Parse the provider's JSON answer into an Intent."""
        content = content.strip()

        # Handle potential markdown code blocks
        if content.startswith("```"):
            content = content.split("```")[1]
            if content.startswith("json"):
                content = content[4:]
            content = content.strip()

        parsed = json.loads(content)
        if not isinstance(parsed, dict):
            raise ValueError(f"Expected a JSON object, got {type(parsed).__name__}")

        try:
            intent_type = IntentType(parsed.get("type", "general_question"))
        except ValueError:
            intent_type = IntentType.GENERAL_QUESTION

        try:
            confidence = float(parsed.get("confidence", 0.5))
        except (TypeError, ValueError):
            confidence = 0.5
        confidence = max(0.0, min(1.0, confidence))

        raw_entities = parsed.get("entities") or {}
        entities: Dict[str, Any] = {}
        if isinstance(raw_entities, dict):
            # Every entity the prompt asks for is a string
            entities = {
                k: v.strip() for k, v in raw_entities.items()
                if isinstance(v, str) and v.strip()
            }

        actions = parsed.get("suggestedActions") or parsed.get("suggested_actions") or []
        if not isinstance(actions, list):
            actions = []

        return Intent(
            type=intent_type,
            confidence=confidence,
            entities=entities,
            suggested_actions=[str(a) for a in actions]
        )
