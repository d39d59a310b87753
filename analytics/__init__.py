"""NFT analytics data providers."""

from .base import AnalyticsProvider
from .client import NFTAnalyticsClient
from .demo_provider import DemoAnalyticsProvider

__all__ = ["AnalyticsProvider", "NFTAnalyticsClient", "DemoAnalyticsProvider"]
