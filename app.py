"""NFT Intelligence Assistant - HTTP API."""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from config.settings import Settings
from memory.sweeper import MemorySweeper
from orchestrator import NFTIntelligenceOrchestrator
from schemas.context import Platform

logger = logging.getLogger(__name__)


# =============================================================================
# Request Models
# =============================================================================


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class ChatRequest(_CamelModel):
    message: str = Field(min_length=1)
    user_id: str = Field(alias="userId", min_length=1)
    platform: str = Platform.WEB.value


class WalletRequest(_CamelModel):
    wallet_address: str = Field(alias="walletAddress")


class CollectionRequest(_CamelModel):
    collection_address: str = Field(alias="collectionAddress")
    timeframe: str = "24h"


class MarketRequest(_CamelModel):
    timeframe: str = "24h"


class RiskRequest(_CamelModel):
    wallet_address: Optional[str] = Field(None, alias="walletAddress")
    collection_address: Optional[str] = Field(None, alias="collectionAddress")


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


# =============================================================================
# Application
# =============================================================================


def create_app(
    settings: Optional[Settings] = None,
    orchestrator: Optional[NFTIntelligenceOrchestrator] = None
) -> FastAPI:
    """
    Build the HTTP application.

    Args:
        settings: Application settings (read from the environment if omitted)
        orchestrator: Pre-built orchestrator, mainly for tests
    """
    settings = settings or (orchestrator.settings if orchestrator else Settings.from_env())
    orchestrator = orchestrator or NFTIntelligenceOrchestrator(settings=settings)

    sweeper = MemorySweeper(
        orchestrator.memory,
        max_age=timedelta(hours=settings.memory_max_age_hours),
        interval_seconds=settings.memory_sweep_interval_seconds
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if settings.memory_sweep_enabled:
            sweeper.start()
        yield
        sweeper.stop()

    app = FastAPI(title="NFT Intelligence Assistant", lifespan=lifespan)
    app.state.orchestrator = orchestrator
    app.state.sweeper = sweeper

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception):
        logger.error(f"Unhandled error on {request.url.path}: {exc}")
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error", "message": str(exc)}
        )

    @app.get("/health")
    def health():
        return {
            "status": "healthy",
            "timestamp": _now(),
            "services": {
                "web_api": True,
                "llm": orchestrator.llm_client is not None,
                "analytics_provider": type(orchestrator.analytics).__name__,
                "memory_sweeper": sweeper.running,
            },
        }

    @app.post("/api/chat")
    def chat(request: ChatRequest):
        logger.info(f"Chat request from {request.platform} user {request.user_id}")
        result = orchestrator.process_query(request.message, request.user_id, request.platform)
        return {
            "success": not result.error,
            "response": result.response,
            "intent": result.intent.model_dump(mode="json") if result.intent else None,
            "confidence": result.confidence,
            "suggestedActions": result.suggested_actions,
            "timestamp": _now(),
        }

    @app.post("/api/analyze/wallet")
    def analyze_wallet(request: WalletRequest):
        try:
            result = orchestrator.analyze_wallet(request.wallet_address)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        if not result.success:
            raise HTTPException(status_code=400, detail=f"Failed to analyze wallet: {result.analysis}")
        return {
            "success": True,
            "wallet": result.subject,
            "analysis": result.analysis,
            "data": result.data,
            "timestamp": _now(),
        }

    @app.post("/api/analyze/collection")
    def analyze_collection(request: CollectionRequest):
        try:
            result = orchestrator.analyze_collection(request.collection_address, request.timeframe)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        if not result.success:
            raise HTTPException(status_code=400, detail=f"Failed to analyze collection: {result.analysis}")
        return {
            "success": True,
            "collection": result.subject,
            "analysis": result.analysis,
            "data": result.data,
            "timestamp": _now(),
        }

    @app.post("/api/market/insights")
    def market_insights(request: MarketRequest):
        result = orchestrator.market_insights(request.timeframe)
        if not result.success:
            raise HTTPException(status_code=400, detail=f"Failed to get market insights: {result.analysis}")
        return {
            "success": True,
            "analysis": result.analysis,
            "data": result.data,
            "timestamp": _now(),
        }

    @app.post("/api/risk/assessment")
    def risk_assessment(request: RiskRequest):
        try:
            result = orchestrator.assess_risk(request.wallet_address, request.collection_address)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        return {
            "success": True,
            "assessment": result.analysis,
            "data": result.data,
            "timestamp": _now(),
        }

    @app.get("/api/conversation/history/{user_id}")
    def conversation_history(user_id: str, platform: str = Platform.WEB.value, limit: int = 10):
        history = orchestrator.get_conversation_history(user_id, platform, limit)
        return {
            "success": True,
            "userId": user_id,
            "platform": platform,
            "history": [i.model_dump(mode="json") for i in history],
            "timestamp": _now(),
        }

    @app.get("/api/conversation/context/{user_id}")
    def conversation_context(user_id: str, platform: str = Platform.WEB.value):
        context = orchestrator.get_conversation_context(user_id, platform)
        return {
            "success": True,
            "userId": user_id,
            "platform": platform,
            "context": context.model_dump(mode="json"),
            "timestamp": _now(),
        }

    @app.delete("/api/conversation/memory/{user_id}")
    def clear_memory(user_id: str, platform: str = Platform.WEB.value):
        logger.info(f"Clear memory request for user: {user_id}")
        cleared = orchestrator.clear_memory(user_id, platform)
        return {
            "success": True,
            "cleared": cleared,
            "userId": user_id,
            "platform": platform,
            "timestamp": _now(),
        }

    @app.get("/api/status")
    def status():
        return {
            "success": True,
            "status": "operational",
            "services": orchestrator.get_status(),
            "timestamp": _now(),
            "version": "1.0.0",
        }

    return app


def main():
    """Run the API server with uvicorn."""
    import uvicorn

    settings = Settings.from_env()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
