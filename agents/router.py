"""Keyword/regex intent classifier."""

import re
from typing import Any, Dict, Optional

from schemas.intent import Intent, IntentType
from utils.helpers import extract_addresses, extract_collection_names
from .classifier import IntentClassifier, SUGGESTED_ACTIONS


class KeywordIntentClassifier(IntentClassifier):
    """Classifies queries with local pattern matching, no network calls."""

    PATTERN_CONFIDENCE = 0.8
    ENTITY_CONFIDENCE = 0.9
    DEFAULT_CONFIDENCE = 0.5

    def __init__(self):
        """Initialize classifier with matching rules."""
        self.risk_patterns = [
            r"\brisk",
            r"\bsafe\b",
            r"\bscam",
            r"\bfraud",
            r"rug ?pull",
            r"suspicious",
            r"\blegit",
            r"wash ?trad",
        ]
        self.wallet_patterns = [
            r"\bwallet",
            r"\baddress\b",
            r"portfolio",
            r"holdings?\b",
            r"\bwhales?\b",
        ]
        self.collection_patterns = [
            r"\bcollections?\b",
            r"floor( price)?",
            r"\bholders\b",
            r"\brarity\b",
            r"\bmint",
        ]
        self.market_patterns = [
            r"\bmarket",
            r"\btrend",
            r"\bvolume\b",
            r"sentiment",
            r"\bbull(ish)?\b",
            r"\bbear(ish)?\b",
        ]
        self.timeframe_patterns = [
            (r"\b(24h|7d|30d|90d|1y)\b", None),
            (r"\btoday\b|\b24 ?hours?\b|\bdaily\b", "24h"),
            (r"\bweek(ly)?\b|\b7 ?days?\b", "7d"),
            (r"\bmonth(ly)?\b|\b30 ?days?\b", "30d"),
            (r"\bquarter\b|\b90 ?days?\b", "90d"),
            (r"\byear\b|\b12 ?months\b", "1y"),
            (r"\ball[ -]time\b", "all"),
        ]

    def classify(self, query: str) -> Intent:
        """
        Classify a query and extract entities.

        Args:
            query: User query

        Returns:
            Intent with type, confidence, entities and suggested actions
        """
        query_lower = (query or "").lower()
        entities = self._extract_entities(query or "", query_lower)

        intent_type = self._classify_type(query_lower, entities)

        if intent_type == IntentType.GENERAL_QUESTION:
            confidence = self.DEFAULT_CONFIDENCE
        elif self._has_subject(entities):
            confidence = self.ENTITY_CONFIDENCE
        else:
            confidence = self.PATTERN_CONFIDENCE

        return Intent(
            type=intent_type,
            confidence=confidence,
            entities=entities,
            suggested_actions=list(SUGGESTED_ACTIONS[intent_type])
        )

    def _classify_type(self, query_lower: str, entities: Dict[str, Any]) -> IntentType:
        """Classify query into intent type."""
        # Check patterns in priority order
        if self._matches(self.risk_patterns, query_lower):
            return IntentType.RISK_ASSESSMENT

        if self._matches(self.wallet_patterns, query_lower):
            return IntentType.WALLET_ANALYSIS

        if entities.get("collection_name") or entities.get("collection_address"):
            return IntentType.COLLECTION_ANALYSIS

        if self._matches(self.collection_patterns, query_lower):
            return IntentType.COLLECTION_ANALYSIS

        if entities.get("wallet_address"):
            return IntentType.WALLET_ANALYSIS

        if self._matches(self.market_patterns, query_lower):
            return IntentType.MARKET_INSIGHTS

        return IntentType.GENERAL_QUESTION

    def _extract_entities(self, query: str, query_lower: str) -> Dict[str, Any]:
        """Extract addresses, collection names and timeframe from query."""
        entities: Dict[str, Any] = {}

        addresses = extract_addresses(query)
        if addresses:
            # An address next to "collection"/"contract" names a collection
            if re.search(r"\bcollection\b|\bcontract\b", query_lower):
                entities["collection_address"] = addresses[0]
            else:
                entities["wallet_address"] = addresses[0]

        collections = extract_collection_names(query)
        if collections:
            entities["collection_name"] = collections[0]

        timeframe = self._extract_timeframe(query_lower)
        if timeframe:
            entities["timeframe"] = timeframe

        return entities

    def _extract_timeframe(self, query_lower: str) -> Optional[str]:
        for pattern, value in self.timeframe_patterns:
            match = re.search(pattern, query_lower)
            if match:
                return value or match.group(1)
        return None

    @staticmethod
    def _matches(patterns, query_lower: str) -> bool:
        return any(re.search(pattern, query_lower) for pattern in patterns)

    @staticmethod
    def _has_subject(entities: Dict[str, Any]) -> bool:
        return any(
            entities.get(k)
            for k in ("wallet_address", "collection_address", "collection_name")
        )
