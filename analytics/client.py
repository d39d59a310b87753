"""HTTP client for the UnleashNFTs (bitsCrunch) analytics API."""

import logging
from typing import Any, Dict, Optional

import requests

from schemas.responses import AnalyticsResult
from .base import AnalyticsProvider

logger = logging.getLogger(__name__)


class NFTAnalyticsClient(AnalyticsProvider):
    """
    Real analytics provider backed by the UnleashNFTs REST API.

    Every call returns an AnalyticsResult; HTTP, timeout and network errors
    are logged and reported through ``error`` rather than raised.
    """

    DEFAULT_BASE_URL = "https://api.unleashnfts.com/api/v1"

    STATUS_MESSAGES = {
        400: "Bad request - check parameters",
        401: "Invalid API key",
        403: "Access forbidden",
        404: "Endpoint not found",
        429: "Rate limit exceeded",
    }

    def __init__(
        self,
        api_key: Optional[str],
        base_url: str = DEFAULT_BASE_URL,
        timeout: int = 30
    ):
        """
        Initialize analytics client.

        Args:
            api_key: API key sent as the x-api-key header
            base_url: Base URL of the API
            timeout: Request timeout in seconds (default: 30)
        """
        self.api_key = api_key
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout

        if not api_key:
            logger.warning("No NFT analytics API key provided")

    def _get_headers(self) -> dict:
        """Build request headers."""
        headers = {
            "Accept": "application/json",
            "User-Agent": "NFT-Intelligence-Assistant/1.0"
        }
        if self.api_key:
            headers["x-api-key"] = self.api_key
        return headers

    def _format_status_error(self, response: requests.Response) -> str:
        status = response.status_code
        if status in self.STATUS_MESSAGES:
            return self.STATUS_MESSAGES[status]
        if status >= 500:
            return "Server error"

        message = None
        try:
            body = response.json()
            if isinstance(body, dict):
                message = body.get("message")
        except ValueError:
            pass
        if status == 422:
            return message or "Validation error"
        return message or f"API error: {status}"

    def _get(
        self,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        subject: Optional[str] = None
    ) -> AnalyticsResult:
        """
        Perform a GET request and wrap the outcome.

        Args:
            path: Path below the base URL
            params: Query parameters
            subject: Wallet or collection the call is about

        Returns:
            AnalyticsResult with the decoded JSON body on success
        """
        url = f"{self.base_url}{path}"
        logger.info(f"Analytics API: GET {path}")

        try:
            response = requests.get(
                url,
                params=params,
                headers=self._get_headers(),
                timeout=self.timeout
            )

            if response.status_code != 200:
                return self._failure(self._format_status_error(response), path, subject)

            return AnalyticsResult(success=True, data=response.json(), subject=subject)

        except requests.exceptions.Timeout:
            return self._failure(f"Request timeout after {self.timeout}s", path, subject)
        except requests.exceptions.ConnectionError:
            return self._failure("Network error", path, subject)
        except requests.exceptions.RequestException as e:
            return self._failure(str(e) or "Unknown error", path, subject)
        except ValueError as e:
            return self._failure(f"Invalid JSON response: {e}", path, subject)

    def _failure(self, message: str, path: str, subject: Optional[str]) -> AnalyticsResult:
        logger.warning(f"Analytics API error during {path}: {message}")
        return AnalyticsResult(success=False, error=message, subject=subject)

    def test_connection(self) -> AnalyticsResult:
        """Probe the API with a cheap market metrics request."""
        return self._get("/market/metrics", params={
            "currency": "usd",
            "time_range": "24h",
            "include_washtrade": "true",
            "metrics": "volume",
        })

    def analyze_wallet(self, address: str, blockchain: int = 1) -> AnalyticsResult:
        return self._get(
            f"/wallet/{address}/profile",
            params={
                "blockchain": blockchain,
                "metrics": "is_whale,is_contract,first_transaction,last_transaction",
            },
            subject=address
        )

    def get_wallet_metrics(
        self,
        address: str,
        blockchain: int = 1,
        time_range: str = "30d"
    ) -> AnalyticsResult:
        return self._get(
            f"/wallet/{address}/metrics",
            params={
                "blockchain": blockchain,
                "currency": "usd",
                "metrics": "minted_value,sold_value,bought_value,current_value",
                "time_range": time_range,
                "include_washtrade": "true",
            },
            subject=address
        )

    def get_wallet_risk_score(self, address: str, blockchain: int = 1) -> AnalyticsResult:
        return self._get(
            f"/wallet/{blockchain}/{address}/score/reputation",
            params={"metrics": "reputation_score,risk_level,activity_score"},
            subject=address
        )

    def get_wallet_nfts(
        self,
        address: str,
        blockchain: int = 1,
        limit: int = 30
    ) -> AnalyticsResult:
        return self._get(
            "/wallet/balance/nft",
            params={
                "blockchain": blockchain,
                "address": address,
                "offset": 0,
                "limit": limit,
            },
            subject=address
        )

    def get_collection_metrics(
        self,
        address: str,
        blockchain: int = 1,
        time_range: str = "24h"
    ) -> AnalyticsResult:
        return self._get(
            f"/collection/{blockchain}/{address}/metrics",
            params={
                "currency": "usd",
                "metrics": "volume,sales,holders,floor_price,market_cap",
                "time_range": time_range,
                "include_washtrade": "true",
            },
            subject=address
        )

    def get_market_insights(self, time_range: str = "24h") -> AnalyticsResult:
        return self._get("/market/metrics", params={
            "currency": "usd",
            "time_range": time_range,
            "include_washtrade": "true",
            "metrics": "volume,transactions,unique_wallets,floor_price,market_cap",
        })
