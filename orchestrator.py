"""Main orchestrator for the NFT Intelligence Assistant."""

import logging
from datetime import timedelta
from typing import Any, Dict, List, Optional, Union

from tenacity import (
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from config.settings import Settings
from schemas.context import Platform
from schemas.intent import Intent, IntentType
from schemas.responses import AnalysisResult, ChatResult

# LLM components
from llm.factory import create_llm_client, LLMProvider
from llm.base_client import BaseLLMClient, LLMError

# Memory components
from memory.conversation_memory import ConversationMemory
from memory.context_manager import ConversationContextManager
from memory.models import ConversationContext, Interaction

# Analytics providers
from analytics.base import AnalyticsProvider
from analytics.client import NFTAnalyticsClient
from analytics.demo_provider import DemoAnalyticsProvider

# Agents
from agents.classifier import ClassifierMode, IntentClassifier, create_intent_classifier
from agents.composer import GenerationContext, TemplateResponseComposer
from agents.llm_composer import LLMResponseComposer

from utils.helpers import normalize_address

logger = logging.getLogger(__name__)

APOLOGY = "I apologize, but I encountered an error processing your request. Please try again."


class NFTIntelligenceOrchestrator:
    """Runs the classify, remember, analyse and respond pipeline for each message."""

    # Backoff between LLM generation attempts; tests swap in wait_none()
    retry_wait = wait_exponential(multiplier=1, min=1, max=10)

    def __init__(
        self,
        settings: Optional[Settings] = None,
        memory: Optional[ConversationMemory] = None,
        llm_client: Optional[BaseLLMClient] = None,
        analytics: Optional[AnalyticsProvider] = None
    ):
        """
        Initialize orchestrator.

        Args:
            settings: Application settings
            memory: Conversation memory (built from settings if omitted)
            llm_client: Completion provider (built from settings if omitted)
            analytics: Analytics provider (built from settings if omitted)
        """
        self.settings = settings or Settings()

        self.llm_client = llm_client
        if self.llm_client is None:
            self._init_llm_client()

        self.memory = memory or ConversationMemory(
            max_interactions=self.settings.memory_max_interactions,
            context_window=self.settings.memory_context_window
        )
        self.context_manager = ConversationContextManager(self.memory)

        self.analytics = analytics or self._init_analytics()

        self._init_agents()

    def _init_llm_client(self):
        """Initialize LLM client based on settings."""
        api_key = self.settings.get_llm_api_key()

        if not api_key:
            logger.warning(
                f"No API key for {self.settings.llm_provider}. "
                "LLM features will be disabled, using rule-based fallback."
            )
            return

        try:
            provider = LLMProvider(self.settings.llm_provider)
            self.llm_client = create_llm_client(
                provider=provider,
                api_key=api_key,
                model=self.settings.llm_model,
                timeout=self.settings.llm_timeout
            )
            logger.info(
                f"LLM client initialized: {self.settings.llm_provider} "
                f"({self.llm_client.get_model_name()})"
            )
        except ValueError as e:
            logger.error(f"Failed to initialize LLM client: {e}")
            self.llm_client = None

    def _init_analytics(self) -> AnalyticsProvider:
        """Initialize the analytics provider (demo data when no key is set)."""
        if self.settings.demo_analytics_enabled():
            logger.warning("Using demo analytics provider; figures are not real market data")
            return DemoAnalyticsProvider()

        return NFTAnalyticsClient(
            api_key=self.settings.analytics_api_key,
            base_url=self.settings.analytics_base_url,
            timeout=self.settings.analytics_timeout
        )

    def _init_agents(self):
        """Initialize classifier and composer (LLM or fallback)."""
        self.classifier: IntentClassifier = create_intent_classifier(
            mode=ClassifierMode(self.settings.classifier_mode),
            llm_client=self.llm_client
        )

        if self.llm_client:
            self.composer = LLMResponseComposer(self.llm_client, self.context_manager)
            logger.info("Using LLM response composer")
        else:
            self.composer = TemplateResponseComposer()
            logger.info("Using template response composer (fallback)")

    def process_query(
        self,
        message: str,
        user_id: str,
        platform: Union[Platform, str] = Platform.WEB
    ) -> ChatResult:
        """
        Process a user message end-to-end.

        Memory is only written after a response was generated successfully, so
        a failed turn leaves no trace in the conversation statistics.

        Args:
            message: User message
            user_id: User identifier
            platform: Platform the message arrived on

        Returns:
            ChatResult with response and intent
        """
        logger.info(f"Processing query from {platform} user {user_id}: {message[:100]}")

        try:
            intent = self.classifier.classify(message)
            conversation = self.memory.get_context(user_id, platform)
            analytics = self._gather_analytics(intent)

            response = self._generate(GenerationContext(
                query=message,
                intent=intent,
                conversation=conversation,
                analytics=analytics
            ))

        except Exception as e:
            logger.error(f"Error processing query: {e}")
            return ChatResult(response=APOLOGY, error=True)

        self.memory.add_interaction(user_id, platform, message, response, intent)

        return ChatResult(
            response=response,
            intent=intent,
            confidence=intent.confidence,
            suggested_actions=intent.suggested_actions
        )

    def _generate(self, context: GenerationContext) -> str:
        """Compose a response, retrying provider failures with backoff."""
        for attempt in Retrying(
            stop=stop_after_attempt(max(1, self.settings.llm_max_retries)),
            wait=self.retry_wait,
            retry=retry_if_exception_type(LLMError),
            before_sleep=lambda retry_state: logger.warning(
                f"Retrying response generation after {retry_state.outcome.exception()}"
            ),
            reraise=True,
        ):
            with attempt:
                return self.composer.compose(context)

    def _gather_analytics(self, intent: Intent) -> Dict[str, Any]:
        """Fetch the analytics data relevant to an intent."""
        wallet = normalize_address(intent.wallet_address)
        collection = normalize_address(intent.collection_address)
        timeframe = intent.timeframe or "24h"

        calls = {}
        if intent.type == IntentType.WALLET_ANALYSIS and wallet:
            calls["wallet"] = lambda: self.analytics.get_complete_wallet_analysis(wallet)
        elif intent.type == IntentType.COLLECTION_ANALYSIS and collection:
            calls["collection"] = lambda: self.analytics.get_collection_metrics(
                collection, time_range=timeframe
            )
        elif intent.type == IntentType.MARKET_INSIGHTS:
            calls["market"] = lambda: self.analytics.get_market_insights(timeframe)
        elif intent.type == IntentType.RISK_ASSESSMENT:
            if wallet:
                calls["wallet_profile"] = lambda: self.analytics.analyze_wallet(wallet)
                calls["wallet_risk"] = lambda: self.analytics.get_wallet_risk_score(wallet)
            if collection:
                calls["collection"] = lambda: self.analytics.get_collection_metrics(collection)
            calls["market"] = lambda: self.analytics.get_market_insights(intent.timeframe or "7d")

        data = {}
        for name, call in calls.items():
            result = call()
            if result.success:
                data[name] = result.data
            else:
                logger.warning(f"Analytics call '{name}' failed: {result.error}")
        return data

    # Direct analysis flows

    def analyze_wallet(self, address: str) -> AnalysisResult:
        """
        Analyse a wallet without going through a conversation.

        Raises:
            ValueError: If the address is not a valid wallet address
        """
        wallet = self._require_address(address, "wallet")
        result = self.analytics.get_complete_wallet_analysis(wallet)
        if not result.success:
            return AnalysisResult(subject=wallet, analysis=result.error or "", success=False)

        data = {"wallet": result.data}
        risk = self.analytics.get_wallet_risk_score(wallet)
        if risk.success:
            data["risk"] = risk.data

        return self._synthesize(
            IntentType.WALLET_ANALYSIS, f"Analyze wallet {wallet}", data, wallet,
            entities={"wallet_address": wallet}
        )

    def analyze_collection(self, address: str, timeframe: str = "24h") -> AnalysisResult:
        """
        Analyse a collection by contract address.

        Raises:
            ValueError: If the address is not a valid contract address
        """
        collection = self._require_address(address, "collection")
        result = self.analytics.get_collection_metrics(collection, time_range=timeframe)
        if not result.success:
            return AnalysisResult(subject=collection, analysis=result.error or "", success=False)

        return self._synthesize(
            IntentType.COLLECTION_ANALYSIS, f"Analyze collection {collection}",
            {"collection": result.data}, collection,
            entities={"collection_address": collection, "timeframe": timeframe}
        )

    def market_insights(self, timeframe: str = "24h") -> AnalysisResult:
        """Summarise market-wide activity over a timeframe."""
        result = self.analytics.get_market_insights(timeframe)
        if not result.success:
            return AnalysisResult(analysis=result.error or "", success=False)

        return self._synthesize(
            IntentType.MARKET_INSIGHTS, "Provide market insights and trends",
            {"market": result.data}, None, entities={"timeframe": timeframe}
        )

    def assess_risk(
        self,
        wallet_address: Optional[str] = None,
        collection_address: Optional[str] = None
    ) -> AnalysisResult:
        """
        Assess the risk of a wallet and/or collection against market context.

        Raises:
            ValueError: If neither address is given or one is malformed
        """
        if not wallet_address and not collection_address:
            raise ValueError("walletAddress or collectionAddress is required")

        data: Dict[str, Any] = {}
        entities: Dict[str, Any] = {}
        subjects: List[str] = []

        if wallet_address:
            wallet = self._require_address(wallet_address, "wallet")
            entities["wallet_address"] = wallet
            subjects.append(wallet)
            profile = self.analytics.analyze_wallet(wallet)
            risk = self.analytics.get_wallet_risk_score(wallet)
            data["wallet"] = {
                "analysis": profile.data if profile.success else None,
                "risk": risk.data if risk.success else None,
            }

        if collection_address:
            collection = self._require_address(collection_address, "collection")
            entities["collection_address"] = collection
            subjects.append(collection)
            metrics = self.analytics.get_collection_metrics(collection)
            data["collection"] = metrics.data if metrics.success else None

        market = self.analytics.get_market_insights("7d")
        data["market"] = market.data if market.success else None

        return self._synthesize(
            IntentType.RISK_ASSESSMENT,
            f"Assess risk for {', '.join(subjects)}",
            data, ", ".join(subjects), entities=entities
        )

    def _synthesize(
        self,
        intent_type: IntentType,
        query: str,
        data: Dict[str, Any],
        subject: Optional[str],
        entities: Optional[Dict[str, Any]] = None
    ) -> AnalysisResult:
        intent = Intent(type=intent_type, confidence=0.9, entities=entities or {})
        analysis = self._generate(GenerationContext(query=query, intent=intent, analytics=data))
        return AnalysisResult(subject=subject, analysis=analysis, data=data)

    @staticmethod
    def _require_address(address: str, kind: str) -> str:
        normalized = normalize_address(address)
        if not normalized:
            raise ValueError(f"Invalid {kind} address: {address}")
        return normalized

    # Memory passthroughs

    def get_conversation_history(
        self,
        user_id: str,
        platform: Union[Platform, str] = Platform.WEB,
        limit: int = 10
    ) -> List[Interaction]:
        """Get conversation history for display."""
        return self.memory.get_history(user_id, platform, limit)

    def get_conversation_context(
        self,
        user_id: str,
        platform: Union[Platform, str] = Platform.WEB
    ) -> ConversationContext:
        return self.memory.get_context(user_id, platform)

    def clear_memory(self, user_id: str, platform: Union[Platform, str] = Platform.WEB) -> bool:
        """Clear conversation memory for a user on a platform."""
        return self.memory.clear(user_id, platform)

    def sweep_memory(self, max_age: Optional[timedelta] = None) -> int:
        """Evict interactions older than max_age (default: configured max age)."""
        if max_age is None:
            max_age = timedelta(hours=self.settings.memory_max_age_hours)
        return self.memory.sweep(max_age)

    def get_status(self) -> Dict[str, Any]:
        """Service status for health reporting."""
        connection = self.analytics.test_connection()
        return {
            "analytics_api": connection.success,
            "analytics_provider": type(self.analytics).__name__,
            "llm_provider": self.llm_client.get_provider_name() if self.llm_client else None,
            "classifier": type(self.classifier).__name__,
            "memory": self.memory.get_stats().model_dump(),
        }


# Short alias used by the entry points
Orchestrator = NFTIntelligenceOrchestrator
