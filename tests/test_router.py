"""Tests for the keyword intent classifier."""

import pytest
from agents.classifier import SUGGESTED_ACTIONS
from agents.router import KeywordIntentClassifier
from schemas.intent import IntentType

WALLET = "0x742d35Cc6634C0532925a3b8D4C9db96C4b4d8b6"


class TestKeywordIntentClassifier:
    """Test keyword classification."""

    def setup_method(self):
        """Set up test fixtures."""
        self.classifier = KeywordIntentClassifier()

    def test_risk_classification(self):
        """Test risk questions are classified correctly."""
        questions = [
            "Is this wallet a scam?",
            "How risky is this collection?",
            "Could this be a rug pull?",
            "Is it safe to buy Azuki right now?",
        ]

        for question in questions:
            assert self.classifier.classify(question).type == IntentType.RISK_ASSESSMENT

    def test_wallet_classification(self):
        """Test wallet questions are classified correctly."""
        questions = [
            f"Analyze wallet {WALLET}",
            "What does my portfolio look like?",
            "Show me the holdings of this whale",
        ]

        for question in questions:
            assert self.classifier.classify(question).type == IntentType.WALLET_ANALYSIS

    def test_collection_classification(self):
        """Test collection questions are classified correctly."""
        questions = [
            "How is the Bored Ape Yacht Club doing?",
            "What's the floor price right now?",
            "Tell me about CryptoPunks",
        ]

        for question in questions:
            assert self.classifier.classify(question).type == IntentType.COLLECTION_ANALYSIS

    def test_market_classification(self):
        """Test market questions are classified correctly."""
        questions = [
            "What are the market trends this week?",
            "Is sentiment bullish?",
            "How much volume was traded today?",
        ]

        for question in questions:
            assert self.classifier.classify(question).type == IntentType.MARKET_INSIGHTS

    def test_general_classification(self):
        """Test anything else is a general question."""
        intent = self.classifier.classify("What is an NFT?")

        assert intent.type == IntentType.GENERAL_QUESTION
        assert intent.confidence == 0.5
        assert intent.suggested_actions == []

    def test_empty_query(self):
        """Test empty input does not raise."""
        assert self.classifier.classify("").type == IntentType.GENERAL_QUESTION

    def test_risk_takes_priority(self):
        """Test risk wording wins over wallet wording."""
        intent = self.classifier.classify(f"Is wallet {WALLET} suspicious?")

        assert intent.type == IntentType.RISK_ASSESSMENT
        assert intent.wallet_address == WALLET.lower()

    def test_bare_address_is_wallet(self):
        """Test a bare address is treated as a wallet question."""
        intent = self.classifier.classify(WALLET)

        assert intent.type == IntentType.WALLET_ANALYSIS
        assert intent.wallet_address == WALLET.lower()

    def test_collection_address_extraction(self):
        """Test an address next to 'collection' is a collection address."""
        address = "0x" + "bc" * 20
        intent = self.classifier.classify(f"Floor price of collection {address}")

        assert intent.type == IntentType.COLLECTION_ANALYSIS
        assert intent.collection_address == address
        assert intent.wallet_address is None

    def test_collection_name_extraction(self):
        """Test collection aliases are extracted by canonical name."""
        intent = self.classifier.classify("How are bored apes doing?")

        assert intent.collection_name == "Bored Ape Yacht Club"

    @pytest.mark.parametrize("question,expected", [
        ("market volume over 30d", "30d"),
        ("market volume today", "24h"),
        ("market trends this week", "7d"),
        ("market trends this month", "30d"),
        ("market trends over the past year", "1y"),
        ("all-time market volume", "all"),
    ])
    def test_timeframe_extraction(self, question, expected):
        """Test timeframe extraction."""
        assert self.classifier.classify(question).timeframe == expected

    def test_confidence_levels(self):
        """Test confidence reflects whether a subject was found."""
        with_subject = self.classifier.classify(f"Analyze wallet {WALLET}")
        without_subject = self.classifier.classify("Analyze my wallet")

        assert with_subject.confidence == 0.9
        assert without_subject.confidence == 0.8

    def test_suggested_actions(self):
        """Test suggested actions follow the intent type."""
        intent = self.classifier.classify(f"Analyze wallet {WALLET}")

        assert intent.suggested_actions == SUGGESTED_ACTIONS[IntentType.WALLET_ANALYSIS]
