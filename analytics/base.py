"""NFT analytics provider interface."""

from abc import ABC, abstractmethod

from schemas.responses import AnalyticsResult


class AnalyticsProvider(ABC):
    """
    Source of NFT/wallet analytics.

    Implementations never raise for provider-side failures; they return an
    AnalyticsResult with success=False and a readable error instead.
    """

    @abstractmethod
    def test_connection(self) -> AnalyticsResult:
        pass

    @abstractmethod
    def analyze_wallet(self, address: str, blockchain: int = 1) -> AnalyticsResult:
        """Wallet profile (whale/contract flags, first and last activity)."""
        pass

    @abstractmethod
    def get_wallet_metrics(
        self,
        address: str,
        blockchain: int = 1,
        time_range: str = "30d"
    ) -> AnalyticsResult:
        pass

    @abstractmethod
    def get_wallet_risk_score(self, address: str, blockchain: int = 1) -> AnalyticsResult:
        """Reputation / risk score of a wallet."""
        pass

    @abstractmethod
    def get_wallet_nfts(
        self,
        address: str,
        blockchain: int = 1,
        limit: int = 30
    ) -> AnalyticsResult:
        pass

    @abstractmethod
    def get_collection_metrics(
        self,
        address: str,
        blockchain: int = 1,
        time_range: str = "24h"
    ) -> AnalyticsResult:
        pass

    @abstractmethod
    def get_market_insights(self, time_range: str = "24h") -> AnalyticsResult:
        pass

    def get_complete_wallet_analysis(self, address: str, blockchain: int = 1) -> AnalyticsResult:
        """Profile, metrics, reputation and holdings of a wallet in one result."""
        parts = {
            "profile": self.analyze_wallet(address, blockchain),
            "metrics": self.get_wallet_metrics(address, blockchain),
            "reputation": self.get_wallet_risk_score(address, blockchain),
            "nfts": self.get_wallet_nfts(address, blockchain),
        }
        data = {name: result.data for name, result in parts.items() if result.success}
        errors = {name: result.error for name, result in parts.items() if not result.success}

        return AnalyticsResult(
            success=bool(data),
            data=data,
            error="; ".join(f"{name}: {error}" for name, error in errors.items()) or None,
            subject=address
        )
