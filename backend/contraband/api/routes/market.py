"""Mock prices, roleplay purchases, uptime."""
from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from contraband.api.deps import get_market
from contraband.core.errors import MarketError, market_error_to_http
from contraband.services.market_service import MarketService

router = APIRouter()


class BuyBody(BaseModel):
    id: str = Field(..., min_length=1, max_length=64, description="Item id from the price table")


@router.get("/prices")
def get_prices(market: MarketService = Depends(get_market)) -> dict[str, Any]:
    """
    Current mock prices. Not idempotent: every call advances the random walk and persists it.
    """
    try:
        return market.read_prices()
    except MarketError as e:
        raise market_error_to_http(e)


@router.post("/buy")
def buy(body: BuyBody, market: MarketService = Depends(get_market)) -> dict[str, Any]:
    """Log a purchase at the last quoted price. No inventory is kept."""
    try:
        return market.record_purchase(body.id.strip())
    except MarketError as e:
        raise market_error_to_http(e)


@router.get("/uptime")
def uptime(market: MarketService = Depends(get_market)) -> dict[str, int]:
    return market.get_uptime()
