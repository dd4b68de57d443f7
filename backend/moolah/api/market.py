"""
Market data proxy endpoints. These need no authentication.
"""

from fastapi import APIRouter, Depends, Query
from typing import Any, Optional

from moolah.dependencies import get_market_data
from moolah.schemas.market import ExchangeRates
from moolah.services.market_service import MarketDataClient

router = APIRouter(tags=["market"])


@router.get("/crypto/top-10")
async def get_top_crypto(market_data: MarketDataClient = Depends(get_market_data)) -> Any:
    """Top 10 cryptocurrencies, as returned by the upstream provider."""
    return await market_data.top_crypto(top=10)


@router.get("/currency/latest", response_model=ExchangeRates)
async def get_latest_rates(
    base: Optional[str] = Query(None, pattern="^[A-Za-z]{3}$"),
    market_data: MarketDataClient = Depends(get_market_data)
):
    """Latest exchange rates for a base currency (provider default when omitted)."""
    return await market_data.exchange_rates(base)
