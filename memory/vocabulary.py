"""Keyword vocabulary used to derive rolling conversation statistics."""

from typing import Iterable, List, Optional, Sequence, Tuple

from .models import RiskTolerance

COLLECTION_TOPICS = (
    "bored ape", "bayc", "cryptopunks", "azuki", "mutant ape",
    "pudgy penguins", "clone x", "moonbirds", "otherdeed", "doodles",
)

ANALYSIS_TOPICS = (
    "wallet", "collection", "market", "risk", "fraud", "trading",
    "investment", "portfolio", "trends", "price",
)

CHAIN_TOPICS = (
    "ethereum", "polygon", "solana", "bitcoin", "defi", "nft",
    "token", "smart contract", "gas", "opensea",
)

CONSERVATIVE_TERMS = ("safe", "secure", "low risk", "conservative", "stable")
AGGRESSIVE_TERMS = ("risky", "high return", "volatile", "speculative", "gamble")


def _normalise(terms: Iterable[str]) -> Tuple[str, ...]:
    seen = []
    for term in terms:
        term = term.strip().lower()
        if term and term not in seen:
            seen.append(term)
    return tuple(seen)


class TopicVocabulary:
    """
    Pure lookup vocabulary for topic extraction and risk scoring.

    Matching is a case-insensitive substring test; there is no tokenisation,
    so "nfts" matches "nft".
    """

    def __init__(
        self,
        topics: Optional[Sequence[str]] = None,
        conservative_terms: Optional[Sequence[str]] = None,
        aggressive_terms: Optional[Sequence[str]] = None
    ):
        """
        Initialize vocabulary.

        Args:
            topics: Topic keywords, in tie-break order (defaults to collections,
                analysis nouns and chain terms)
            conservative_terms: Words signalling a risk-averse user
            aggressive_terms: Words signalling a risk-seeking user
        """
        if topics is None:
            topics = COLLECTION_TOPICS + ANALYSIS_TOPICS + CHAIN_TOPICS
        self.topics = _normalise(topics)
        self.conservative_terms = _normalise(
            CONSERVATIVE_TERMS if conservative_terms is None else conservative_terms
        )
        self.aggressive_terms = _normalise(
            AGGRESSIVE_TERMS if aggressive_terms is None else aggressive_terms
        )

    def extract_topics(self, query: str) -> List[str]:
        """Return the vocabulary topics mentioned in a query, each at most once."""
        if not query:
            return []
        query_lower = query.lower()
        return [topic for topic in self.topics if topic in query_lower]

    def score_risk(self, query: str) -> Tuple[int, int]:
        """Count (conservative, aggressive) keyword hits in a query."""
        if not query:
            return 0, 0
        query_lower = query.lower()
        conservative = sum(1 for term in self.conservative_terms if term in query_lower)
        aggressive = sum(1 for term in self.aggressive_terms if term in query_lower)
        return conservative, aggressive

    def update_risk_tolerance(self, current: RiskTolerance, query: str) -> RiskTolerance:
        """
        Apply one query's evidence to a running risk estimate.

        The first query without a clear signal settles an unknown estimate on
        moderate; later neutral queries never move it.
        """
        conservative, aggressive = self.score_risk(query)
        if conservative > aggressive:
            return RiskTolerance.CONSERVATIVE
        if aggressive > conservative:
            return RiskTolerance.AGGRESSIVE
        if current == RiskTolerance.UNKNOWN:
            return RiskTolerance.MODERATE
        return current


DEFAULT_VOCABULARY = TopicVocabulary()
