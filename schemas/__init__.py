"""Pydantic schemas for the NFT Intelligence Assistant."""

from .context import Platform
from .intent import Intent, IntentType
from .responses import AnalyticsResult, AnalysisResult, ChatResult

__all__ = [
    "Platform",
    "Intent",
    "IntentType",
    "AnalyticsResult",
    "AnalysisResult",
    "ChatResult",
]
