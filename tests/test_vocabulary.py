"""Tests for TopicVocabulary."""

from memory.models import RiskTolerance
from memory.vocabulary import DEFAULT_VOCABULARY, TopicVocabulary


class TestTopicVocabulary:
    """Test topic extraction and risk scoring."""

    def setup_method(self):
        """Set up test fixtures."""
        self.vocabulary = DEFAULT_VOCABULARY

    def test_extract_topics_case_insensitive(self):
        """Test topics are matched regardless of case."""
        topics = self.vocabulary.extract_topics("How is the BAYC Collection doing on Ethereum?")

        assert "bayc" in topics
        assert "collection" in topics
        assert "ethereum" in topics

    def test_extract_topics_substring(self):
        """Test matching is a plain substring test."""
        assert "nft" in self.vocabulary.extract_topics("Which NFTs should I watch?")

    def test_extract_multiword_topic(self):
        """Test multi-word topics are recognised."""
        assert "bored ape" in self.vocabulary.extract_topics("Is Bored Ape still popular?")

    def test_extract_topics_empty(self):
        """Test empty input yields no topics."""
        assert self.vocabulary.extract_topics("") == []
        assert self.vocabulary.extract_topics(None) == []

    def test_custom_vocabulary_normalised(self):
        """Test custom topics are lowercased, stripped and de-duplicated."""
        vocabulary = TopicVocabulary(topics=[" Apes ", "apes", "Punks", ""])

        assert vocabulary.topics == ("apes", "punks")
        assert vocabulary.extract_topics("APES and punks") == ["apes", "punks"]

    def test_score_risk(self):
        """Test conservative and aggressive hits are counted separately."""
        assert self.vocabulary.score_risk("safe, secure and stable") == (3, 0)
        assert self.vocabulary.score_risk("risky speculative gamble") == (0, 3)
        assert self.vocabulary.score_risk("hello") == (0, 0)

    def test_update_from_unknown(self):
        """Test the first neutral query moves unknown to moderate."""
        result = self.vocabulary.update_risk_tolerance(RiskTolerance.UNKNOWN, "hello")

        assert result == RiskTolerance.MODERATE

    def test_update_keeps_settled_estimate(self):
        """Test neutral and tied queries leave a settled estimate unchanged."""
        for current in (RiskTolerance.CONSERVATIVE, RiskTolerance.AGGRESSIVE, RiskTolerance.MODERATE):
            assert self.vocabulary.update_risk_tolerance(current, "hello") == current
            assert self.vocabulary.update_risk_tolerance(current, "safe gamble") == current

    def test_update_with_signal(self):
        """Test a clear signal sets the estimate from any state."""
        assert self.vocabulary.update_risk_tolerance(
            RiskTolerance.AGGRESSIVE, "I prefer low risk"
        ) == RiskTolerance.CONSERVATIVE
        assert self.vocabulary.update_risk_tolerance(
            RiskTolerance.CONSERVATIVE, "high return please"
        ) == RiskTolerance.AGGRESSIVE

    def test_custom_risk_terms(self):
        """Test custom risk keyword sets replace the defaults."""
        vocabulary = TopicVocabulary(conservative_terms=["hodl"], aggressive_terms=["degen"])

        assert vocabulary.score_risk("safe degen play") == (0, 1)
