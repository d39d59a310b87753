"""In-process conversation memory with bounded history and rolling statistics."""

import itertools
import logging
import secrets
import threading
from collections import deque
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Deque, Dict, List, Mapping, Optional, Tuple, Union

from pydantic import ValidationError

from schemas.context import Platform, platform_value
from schemas.intent import Intent, IntentType
from .models import (
    ConversationContext,
    ConversationKey,
    EngagementLevel,
    Interaction,
    MemoryStats,
    RiskTolerance,
)
from .vocabulary import DEFAULT_VOCABULARY, TopicVocabulary

logger = logging.getLogger(__name__)

_interaction_ids = itertools.count(1)

TOP_TOPICS_LIMIT = 5
TOP_INTENT_TYPES_LIMIT = 3

_EARLIEST = datetime.min.replace(tzinfo=timezone.utc)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _new_interaction_id() -> str:
    return f"int_{next(_interaction_ids)}_{secrets.token_hex(4)}"


def _coerce_intent(intent: Any) -> Optional[Intent]:
    """Accept an Intent or a mapping; anything unusable is treated as absent."""
    if intent is None:
        return None
    if isinstance(intent, Intent):
        return intent.model_copy(deep=True)
    if isinstance(intent, Mapping):
        try:
            return Intent.model_validate(dict(intent))
        except ValidationError as e:
            logger.debug(f"Ignoring malformed intent: {e}")
            return None
    return None


def _rank(counts: Dict[Any, int], last_seen: Dict[Any, Tuple[int, int]], limit: int) -> List[Any]:
    """Order by descending count, then most recently seen, then vocabulary order."""
    ordered = sorted(
        counts,
        key=lambda k: (-counts[k], -last_seen[k][0], last_seen[k][1])
    )
    return ordered[:limit]


class ConversationLog:
    """Bounded interaction log plus derived statistics for one conversation key."""

    def __init__(self, max_interactions: int):
        self.lock = threading.Lock()
        self.closed = False
        self.interactions: Deque[Interaction] = deque(maxlen=max_interactions)
        self.total_interactions = 0
        self.topic_counts: Dict[str, int] = {}
        self.topic_last_seen: Dict[str, Tuple[int, int]] = {}
        self.intent_counts: Dict[IntentType, int] = {}
        self.intent_last_seen: Dict[IntentType, Tuple[int, int]] = {}
        self.risk_tolerance = RiskTolerance.UNKNOWN
        self.last_interaction_time: Optional[datetime] = None

    def append(
        self,
        interaction: Interaction,
        topics: List[str],
        vocabulary: TopicVocabulary
    ) -> None:
        """Record an interaction and fold it into the rolling statistics."""
        self.interactions.append(interaction)
        self.total_interactions += 1
        sequence = self.total_interactions

        for position, topic in enumerate(topics):
            self.topic_counts[topic] = self.topic_counts.get(topic, 0) + 1
            self.topic_last_seen[topic] = (sequence, position)

        if interaction.intent is not None:
            intent_type = interaction.intent.type
            self.intent_counts[intent_type] = self.intent_counts.get(intent_type, 0) + 1
            self.intent_last_seen[intent_type] = (sequence, 0)

        self.risk_tolerance = vocabulary.update_risk_tolerance(
            self.risk_tolerance, interaction.user_query
        )
        self.last_interaction_time = interaction.timestamp

    def evict_older_than(self, cutoff: datetime) -> int:
        """Drop interactions at or before cutoff; returns how many were dropped."""
        removed = 0
        while self.interactions and self.interactions[0].timestamp <= cutoff:
            self.interactions.popleft()
            removed += 1
        return removed


class ConversationMemory:
    """
    Per-(user, platform) conversation memory.

    Keeps a bounded chronological log of interactions for each conversation
    plus cheap rolling statistics (topic and intent frequency, inferred risk
    tolerance) so a response generator can personalise output without
    re-scanning history. ``total_interactions`` counts every append ever made
    and survives truncation of the log.

    Thread-safe: a registry lock guards the key mapping and each conversation
    carries its own lock, so appends to different keys do not serialise on
    each other.
    """

    def __init__(
        self,
        max_interactions: int = 50,
        context_window: int = 10,
        vocabulary: Optional[TopicVocabulary] = None,
        clock: Optional[Callable[[], datetime]] = None
    ):
        """
        Initialize conversation memory.

        Args:
            max_interactions: Cap on stored interactions per conversation
            context_window: Default number of recent interactions in a context
            vocabulary: Topic and risk keyword vocabulary
            clock: Returns the current time (timezone-aware); for tests
        """
        if max_interactions < 1:
            raise ValueError("max_interactions must be at least 1")
        self.max_interactions = max_interactions
        self.context_window = context_window
        self.vocabulary = vocabulary or DEFAULT_VOCABULARY
        self._clock = clock or _utcnow
        self._logs: Dict[ConversationKey, ConversationLog] = {}
        self._lock = threading.Lock()

    @staticmethod
    def make_key(user_id: str, platform: Union[Platform, str]) -> ConversationKey:
        return ConversationKey(user_id=str(user_id), platform=platform_value(platform))

    def _lookup(self, key: ConversationKey) -> Optional[ConversationLog]:
        with self._lock:
            return self._logs.get(key)

    def _detach(self, key: ConversationKey, log: ConversationLog) -> None:
        """Remove a log from the registry. Caller must hold ``log.lock``."""
        with self._lock:
            if self._logs.get(key) is log:
                del self._logs[key]
        log.closed = True

    def add_interaction(
        self,
        user_id: str,
        platform: Union[Platform, str],
        user_query: str,
        ai_response: str,
        intent: Any = None
    ) -> Interaction:
        """
        Append a turn to a conversation, creating the conversation if needed.

        Args:
            user_id: User identifier
            platform: Platform the turn arrived on
            user_query: Raw user input
            ai_response: Generated response
            intent: Optional Intent (or mapping); malformed values are ignored

        Returns:
            The stored Interaction
        """
        key = self.make_key(user_id, platform)
        user_query = user_query or ""
        ai_response = ai_response or ""
        parsed_intent = _coerce_intent(intent)
        topics = self.vocabulary.extract_topics(user_query)

        while True:
            with self._lock:
                log = self._logs.get(key)
                if log is None:
                    log = ConversationLog(self.max_interactions)
                    self._logs[key] = log

            with log.lock:
                if log.closed:
                    # Cleared or swept between lookup and lock; retry on a fresh log
                    continue

                timestamp = self._clock()
                if log.last_interaction_time and timestamp < log.last_interaction_time:
                    timestamp = log.last_interaction_time

                interaction = Interaction(
                    id=_new_interaction_id(),
                    timestamp=timestamp,
                    user_query=user_query,
                    ai_response=ai_response,
                    intent=parsed_intent
                )
                log.append(interaction, topics, self.vocabulary)
                total = log.total_interactions

            logger.debug(f"Added interaction for {key}. Total: {total}")
            return interaction.model_copy(deep=True)

    def get_context(
        self,
        user_id: str,
        platform: Union[Platform, str],
        window_size: Optional[int] = None
    ) -> ConversationContext:
        """
        Get a personalisation context for a conversation.

        Args:
            user_id: User identifier
            platform: Platform
            window_size: Number of recent interactions to include
                (defaults to the configured context window)

        Returns:
            ConversationContext; has_history is False for unknown conversations
        """
        if window_size is None:
            window_size = self.context_window

        log = self._lookup(self.make_key(user_id, platform))
        if log is None:
            return ConversationContext()

        with log.lock:
            if log.closed:
                return ConversationContext()
            recent = list(log.interactions)[-window_size:] if window_size > 0 else []
            return ConversationContext(
                has_history=log.total_interactions > 0,
                total_interactions=log.total_interactions,
                recent_interactions=[i.model_copy(deep=True) for i in recent],
                top_topics=_rank(log.topic_counts, log.topic_last_seen, TOP_TOPICS_LIMIT),
                top_intent_types=_rank(
                    log.intent_counts, log.intent_last_seen, TOP_INTENT_TYPES_LIMIT
                ),
                risk_tolerance=log.risk_tolerance,
                last_interaction_time=log.last_interaction_time,
                engagement_level=EngagementLevel.from_total(log.total_interactions)
            )

    def get_history(
        self,
        user_id: str,
        platform: Union[Platform, str],
        limit: int = 10
    ) -> List[Interaction]:
        """Most recent interactions, oldest first. Empty for unknown conversations."""
        log = self._lookup(self.make_key(user_id, platform))
        if log is None or limit <= 0:
            return []

        with log.lock:
            if log.closed:
                return []
            return [i.model_copy(deep=True) for i in list(log.interactions)[-limit:]]

    def clear(self, user_id: str, platform: Union[Platform, str]) -> bool:
        """
        Forget a conversation entirely, statistics included.

        Returns:
            True if anything was removed
        """
        key = self.make_key(user_id, platform)
        while True:
            log = self._lookup(key)
            if log is None:
                return False
            with log.lock:
                if log.closed:
                    continue
                # A log registered by an in-flight append may still be empty
                had_history = log.total_interactions > 0
                self._detach(key, log)
            if had_history:
                logger.info(f"Cleared memory for {key}")
            return had_history

    def sweep(self, max_age: Union[timedelta, float]) -> int:
        """
        Evict interactions older than max_age from every conversation.

        Conversations left empty are removed. The cumulative interaction
        counter of surviving conversations is not decremented.

        Args:
            max_age: timedelta, or age in seconds

        Returns:
            Number of interactions removed
        """
        try:
            if not isinstance(max_age, timedelta):
                max_age = timedelta(seconds=max_age)
            cutoff = self._clock() - max_age
        except (OverflowError, ValueError):
            # Ages beyond the datetime range (or NaN) expire nothing
            cutoff = _EARLIEST

        with self._lock:
            snapshot = list(self._logs.items())

        removed = 0
        for key, log in snapshot:
            with log.lock:
                if log.closed:
                    continue
                removed += log.evict_older_than(cutoff)
                if not log.interactions:
                    self._detach(key, log)

        if removed:
            logger.info(f"Swept {removed} interactions older than {max_age}")
        return removed

    def get_stats(self) -> MemoryStats:
        """Process-wide memory usage figures."""
        with self._lock:
            snapshot = list(self._logs.items())

        stored = 0
        live = []
        for key, log in snapshot:
            with log.lock:
                if log.closed or log.total_interactions == 0:
                    continue
                live.append(key)
                stored += len(log.interactions)

        return MemoryStats(
            total_conversations=len(live),
            total_users=len({key.user_id for key in live}),
            stored_interactions=stored
        )
