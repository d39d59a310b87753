"""Demo analytics provider with fabricated data.

Nothing returned here is real market data. Values are derived from a hash of
the request so the same question always gets the same numbers, and every
payload carries ``"demo": True``.
"""

import hashlib
import random
from typing import Optional

from schemas.responses import AnalyticsResult
from .base import AnalyticsProvider


class DemoAnalyticsProvider(AnalyticsProvider):
    """Offline stand-in for the analytics API, for demos and local runs."""

    def __init__(self):
        """Initialize with the fixed demo wallets and collections."""
        self._demo_wallets = {
            "0x742d35cc6634c0532925a3b8d4c9db96c4b4d8b6": ("whale", "low"),
            "0x1234567890123456789012345678901234567890": ("suspicious", "high"),
            "0xabcdefabcdefabcdefabcdefabcdefabcdefabcd": ("new", "medium"),
        }
        self._risk_ranges = {"low": (10, 30), "medium": (30, 70), "high": (70, 95)}

    @staticmethod
    def _rng(*parts) -> random.Random:
        seed = hashlib.sha256("|".join(str(p) for p in parts).encode()).hexdigest()
        return random.Random(int(seed[:16], 16))

    def _result(self, data: dict, subject: Optional[str] = None) -> AnalyticsResult:
        data["demo"] = True
        return AnalyticsResult(success=True, data=data, subject=subject)

    def _wallet_profile(self, address: str):
        return self._demo_wallets.get(address.lower(), ("regular", "medium"))

    def test_connection(self) -> AnalyticsResult:
        return self._result({"status": "demo mode"})

    def analyze_wallet(self, address: str, blockchain: int = 1) -> AnalyticsResult:
        rng = self._rng("profile", address, blockchain)
        wallet_type, _ = self._wallet_profile(address)
        return self._result({
            "address": address,
            "wallet_type": wallet_type,
            "is_whale": wallet_type == "whale",
            "is_contract": False,
            "wallet_age_days": rng.randint(30, 1200),
            "total_transactions": rng.randint(50, 2000),
        }, subject=address)

    def get_wallet_metrics(
        self,
        address: str,
        blockchain: int = 1,
        time_range: str = "30d"
    ) -> AnalyticsResult:
        rng = self._rng("metrics", address, blockchain, time_range)
        bought = round(rng.uniform(1_000, 500_000), 2)
        sold = round(bought * rng.uniform(0.5, 1.6), 2)
        return self._result({
            "address": address,
            "time_range": time_range,
            "bought_value": bought,
            "sold_value": sold,
            "current_value": round(rng.uniform(500, 400_000), 2),
            "collections_held": rng.randint(3, 25),
        }, subject=address)

    def get_wallet_risk_score(self, address: str, blockchain: int = 1) -> AnalyticsResult:
        rng = self._rng("risk", address, blockchain)
        wallet_type, risk = self._wallet_profile(address)
        low, high = self._risk_ranges[risk]
        return self._result({
            "address": address,
            "risk_level": risk,
            "risk_score": rng.randint(low, high),
            "reputation": {"low": "Trusted", "high": "Suspicious"}.get(risk, "Neutral"),
        }, subject=address)

    def get_wallet_nfts(
        self,
        address: str,
        blockchain: int = 1,
        limit: int = 30
    ) -> AnalyticsResult:
        rng = self._rng("nfts", address, blockchain)
        collections = ["Bored Ape Yacht Club", "CryptoPunks", "Azuki", "Doodles", "Moonbirds"]
        count = min(limit, rng.randint(0, 12))
        return self._result({
            "address": address,
            "nfts": [
                {"collection": rng.choice(collections), "token_id": str(rng.randint(1, 9999))}
                for _ in range(count)
            ],
        }, subject=address)

    def get_collection_metrics(
        self,
        address: str,
        blockchain: int = 1,
        time_range: str = "24h"
    ) -> AnalyticsResult:
        rng = self._rng("collection", address, blockchain, time_range)
        return self._result({
            "collection": address,
            "time_range": time_range,
            "floor_price_eth": round(rng.uniform(0.05, 60), 3),
            "volume_usd": round(rng.uniform(10_000, 5_000_000), 2),
            "holders": rng.randint(500, 10_000),
            "sales": rng.randint(5, 2_000),
        }, subject=address)

    def get_market_insights(self, time_range: str = "24h") -> AnalyticsResult:
        rng = self._rng("market", time_range)
        return self._result({
            "time_range": time_range,
            "volume_usd": round(rng.uniform(5e6, 9e7), 2),
            "transactions": rng.randint(10_000, 250_000),
            "unique_wallets": rng.randint(5_000, 80_000),
            "sentiment": rng.choice(["bullish", "neutral", "bearish"]),
        })
