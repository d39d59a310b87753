"""Tests for the LLM intent classifier and classifier selection."""

import json

import pytest
from unittest.mock import Mock
from agents.classifier import ClassifierMode, create_intent_classifier
from agents.llm_router import LLMIntentClassifier
from agents.router import KeywordIntentClassifier
from llm.base_client import LLMError, LLMResponse
from schemas.intent import IntentType


def _llm_returning(content):
    client = Mock()
    client.chat.return_value = LLMResponse(content=content)
    return client


class TestLLMIntentClassifier:
    """Test parsing of provider answers and fallback behaviour."""

    def test_parses_json_answer(self):
        """Test a well-formed JSON answer becomes an Intent."""
        client = _llm_returning(json.dumps({
            "type": "collection_analysis",
            "confidence": 0.85,
            "entities": {"collection_name": "Azuki", "wallet_address": None},
            "suggestedActions": ["get_collection_metrics"],
        }))
        classifier = LLMIntentClassifier(client)

        intent = classifier.classify("How is Azuki doing?")

        assert intent.type == IntentType.COLLECTION_ANALYSIS
        assert intent.confidence == 0.85
        assert intent.entities == {"collection_name": "Azuki"}
        assert intent.suggested_actions == ["get_collection_metrics"]
        client.chat.assert_called_once()

    def test_strips_code_fences(self):
        """Test answers wrapped in markdown code fences are accepted."""
        client = _llm_returning('```json\n{"type": "market_insights", "confidence": 0.7}\n```')

        intent = LLMIntentClassifier(client).classify("market?")

        assert intent.type == IntentType.MARKET_INSIGHTS
        assert intent.confidence == 0.7

    def test_non_string_entities_are_dropped(self):
        """Test entity values that are not strings are discarded."""
        client = _llm_returning(json.dumps({
            "type": "wallet_analysis",
            "confidence": 0.8,
            "entities": {"wallet_address": 123, "collection_name": ["x"], "timeframe": " 7d "},
        }))

        intent = LLMIntentClassifier(client).classify("Analyze my wallet")

        assert intent.type == IntentType.WALLET_ANALYSIS
        assert intent.entities == {"timeframe": "7d"}

    def test_unknown_type_becomes_general(self):
        """Test an unknown intent type maps to a general question."""
        client = _llm_returning('{"type": "astrology", "confidence": 0.9}')

        assert LLMIntentClassifier(client).classify("q").type == IntentType.GENERAL_QUESTION

    def test_confidence_is_clamped(self):
        """Test out-of-range confidence is clamped into [0, 1]."""
        client = _llm_returning('{"type": "risk_assessment", "confidence": 7}')

        assert LLMIntentClassifier(client).classify("q").confidence == 1.0

    def test_invalid_json_falls_back_to_keywords(self):
        """Test a non-JSON answer falls back to keyword classification."""
        client = _llm_returning("I think this is about wallets")

        intent = LLMIntentClassifier(client).classify("Is this wallet a scam?")

        assert intent.type == IntentType.RISK_ASSESSMENT
        assert intent.confidence == 0.8

    def test_provider_error_falls_back_to_keywords(self):
        """Test provider failures fall back to keyword classification."""
        client = Mock()
        client.chat.side_effect = LLMError("timeout")

        intent = LLMIntentClassifier(client).classify("What are the market trends?")

        assert intent.type == IntentType.MARKET_INSIGHTS

    def test_non_object_json_falls_back(self):
        """Test a JSON array answer falls back to keyword classification."""
        client = _llm_returning('["wallet_analysis"]')

        assert LLMIntentClassifier(client).classify("hello").type == IntentType.GENERAL_QUESTION


class TestCreateIntentClassifier:
    """Test classifier selection by mode."""

    def test_keyword_mode(self):
        """Test keyword mode ignores any LLM client."""
        classifier = create_intent_classifier(ClassifierMode.KEYWORD, Mock())

        assert isinstance(classifier, KeywordIntentClassifier)

    def test_llm_mode(self):
        """Test llm mode uses the completion provider."""
        assert isinstance(create_intent_classifier("llm", Mock()), LLMIntentClassifier)

    def test_llm_mode_requires_client(self):
        """Test llm mode without a client is rejected."""
        with pytest.raises(ValueError):
            create_intent_classifier(ClassifierMode.LLM, None)

    def test_auto_mode(self):
        """Test auto mode picks the LLM only when a client is available."""
        assert isinstance(create_intent_classifier(ClassifierMode.AUTO, Mock()), LLMIntentClassifier)
        assert isinstance(create_intent_classifier(ClassifierMode.AUTO, None), KeywordIntentClassifier)

    def test_invalid_mode(self):
        """Test unknown modes are rejected."""
        with pytest.raises(ValueError):
            create_intent_classifier("telepathy")
