"""Tests for the HTTP API."""

from unittest.mock import Mock

from fastapi.testclient import TestClient

from analytics.demo_provider import DemoAnalyticsProvider
from app import create_app
from config.settings import Settings
from memory.conversation_memory import ConversationMemory
from orchestrator import NFTIntelligenceOrchestrator

WHALE = "0x742d35cc6634c0532925a3b8d4c9db96c4b4d8b6"


def _settings():
    return Settings(
        openai_api_key="",
        anthropic_api_key="",
        analytics_api_key="",
        classifier_mode="keyword",
        memory_sweep_enabled=False,
    )


class TestAPI:
    """Test API routes against a demo-backed orchestrator."""

    def setup_method(self):
        """Set up test fixtures."""
        settings = _settings()
        self.orchestrator = NFTIntelligenceOrchestrator(
            settings=settings,
            memory=ConversationMemory(),
            analytics=DemoAnalyticsProvider()
        )
        self.client = TestClient(create_app(settings, self.orchestrator))

    def test_health(self):
        """Test the health endpoint."""
        response = self.client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["services"]["llm"] is False
        assert body["services"]["analytics_provider"] == "DemoAnalyticsProvider"

    def test_chat(self):
        """Test a chat turn returns response, intent and confidence."""
        response = self.client.post("/api/chat", json={
            "message": f"Analyze wallet {WHALE}",
            "userId": "u1",
            "platform": "web",
        })

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["intent"]["type"] == "wallet_analysis"
        assert body["confidence"] == 0.9
        assert "## Wallet Analysis" in body["response"]

    def test_chat_default_platform(self):
        """Test platform defaults to web."""
        self.client.post("/api/chat", json={"message": "hello", "userId": "u1"})

        assert self.orchestrator.get_conversation_context("u1", "web").total_interactions == 1

    def test_chat_validation(self):
        """Test missing fields are rejected."""
        assert self.client.post("/api/chat", json={"userId": "u1"}).status_code == 422
        assert self.client.post("/api/chat", json={"message": "hi"}).status_code == 422

    def test_conversation_history_and_context(self):
        """Test history and context reflect earlier chat turns."""
        for message in ("How is the market today?", "What is an NFT?"):
            self.client.post("/api/chat", json={"message": message, "userId": "u1"})

        history = self.client.get("/api/conversation/history/u1", params={"limit": 1}).json()
        context = self.client.get("/api/conversation/context/u1").json()

        assert [h["user_query"] for h in history["history"]] == ["What is an NFT?"]
        assert context["context"]["total_interactions"] == 2
        assert context["context"]["has_history"] is True

    def test_platforms_are_isolated(self):
        """Test history is looked up per platform."""
        self.client.post("/api/chat", json={"message": "hello", "userId": "u1", "platform": "telegram"})

        web = self.client.get("/api/conversation/history/u1").json()
        telegram = self.client.get("/api/conversation/history/u1", params={"platform": "telegram"}).json()

        assert web["history"] == []
        assert len(telegram["history"]) == 1

    def test_clear_memory(self):
        """Test clearing memory reports whether anything was removed."""
        self.client.post("/api/chat", json={"message": "hello", "userId": "u1"})

        first = self.client.delete("/api/conversation/memory/u1").json()
        second = self.client.delete("/api/conversation/memory/u1").json()

        assert first["success"] is True
        assert first["cleared"] is True
        assert second["cleared"] is False

    def test_analyze_wallet(self):
        """Test direct wallet analysis."""
        response = self.client.post("/api/analyze/wallet", json={"walletAddress": WHALE})

        assert response.status_code == 200
        assert response.json()["wallet"] == WHALE

    def test_analyze_wallet_invalid(self):
        """Test malformed wallet addresses are a client error."""
        response = self.client.post("/api/analyze/wallet", json={"walletAddress": "0x123"})

        assert response.status_code == 400

    def test_analyze_collection(self):
        """Test direct collection analysis."""
        response = self.client.post("/api/analyze/collection", json={
            "collectionAddress": "0x" + "bc" * 20,
            "timeframe": "7d",
        })

        assert response.status_code == 200
        assert response.json()["data"]["collection"]["time_range"] == "7d"

    def test_market_insights(self):
        """Test market insights."""
        response = self.client.post("/api/market/insights", json={})

        assert response.status_code == 200
        assert response.json()["data"]["market"]["time_range"] == "24h"

    def test_risk_assessment(self):
        """Test risk assessment with and without a subject."""
        ok = self.client.post("/api/risk/assessment", json={"walletAddress": WHALE})
        missing = self.client.post("/api/risk/assessment", json={})

        assert ok.status_code == 200
        assert ok.json()["data"]["wallet"]["risk"]["risk_level"] == "low"
        assert missing.status_code == 400

    def test_status(self):
        """Test the status endpoint."""
        body = self.client.get("/api/status").json()

        assert body["status"] == "operational"
        assert body["services"]["analytics_api"] is True


class TestAPIErrors:
    """Test unhandled error reporting."""

    def test_unhandled_error_returns_500(self):
        """Test unexpected exceptions become a JSON 500."""
        orchestrator = Mock()
        orchestrator.get_status.side_effect = RuntimeError("analytics exploded")
        client = TestClient(create_app(_settings(), orchestrator), raise_server_exceptions=False)

        response = client.get("/api/status")

        assert response.status_code == 500
        assert response.json() == {
            "error": "Internal server error",
            "message": "analytics exploded",
        }
