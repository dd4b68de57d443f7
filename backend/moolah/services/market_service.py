"""Read-only proxies for third-party market data and exchange rates."""

import logging
from typing import Any, Dict, Optional

import httpx

from moolah.config import Settings
from moolah.errors import UpstreamUnavailable

logger = logging.getLogger(__name__)

# Upstream statuses worth passing through as-is; everything else becomes 502
PASSTHROUGH_STATUSES = {429}


class MarketDataClient:
    """Thin async client for the crypto and exchange-rate upstreams."""

    def __init__(
        self,
        crypto_url: str,
        exchange_rates_url: str,
        crypto_api_key: Optional[str] = None,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.crypto_url = crypto_url
        self.exchange_rates_url = exchange_rates_url
        self.crypto_api_key = crypto_api_key
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> "MarketDataClient":
        return cls(
            crypto_url=settings.crypto_api_url,
            exchange_rates_url=settings.exchange_rates_url,
            crypto_api_key=settings.crypto_api_key,
            timeout=settings.upstream_timeout_seconds,
        )

    async def _get_json(self, name: str, url: str, params: Dict[str, Any], headers: Dict[str, str]) -> Any:
        try:
            async with httpx.AsyncClient(transport=self._transport, timeout=self.timeout) as client:
                response = await client.get(url, params=params, headers=headers)
        except httpx.HTTPError as e:
            logger.error(f"{name} request failed: {e}")
            raise UpstreamUnavailable(f"{name} service unavailable") from e

        if response.is_error:
            logger.error(f"{name} returned HTTP {response.status_code}")
            status = response.status_code if response.status_code in PASSTHROUGH_STATUSES else None
            raise UpstreamUnavailable(f"{name} service returned {response.status_code}", status_code=status)

        try:
            return response.json()
        except ValueError as e:
            raise UpstreamUnavailable(f"{name} service returned invalid JSON") from e

    async def top_crypto(self, top: int = 10) -> Any:
        """Top coins by market cap, passed through untouched."""
        headers = {"Authorization": f"Bearer {self.crypto_api_key}"} if self.crypto_api_key else {}
        return await self._get_json("Crypto", self.crypto_url, {"top": top}, headers)

    async def exchange_rates(self, base: Optional[str] = None) -> Dict[str, Any]:
        """Latest reference rates reshaped to {base, date, rates}."""
        params = {"base": base.upper()} if base else {}
        data = await self._get_json("Currency", self.exchange_rates_url, params, {})
        try:
            return {"base": data["base"], "date": data["date"], "rates": data["rates"]}
        except (KeyError, TypeError) as e:
            raise UpstreamUnavailable("Currency service returned an unexpected payload") from e
