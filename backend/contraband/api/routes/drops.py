"""
Drop table: read, admin update, and server-side weighted rolls.

Update takes the key from the X-API-Key header, falling back to apiKey in the body.
"""
from typing import Any

from fastapi import APIRouter, Body, Depends, Header, Query

from contraband.api.deps import get_market
from contraband.core.constants import MAX_SIMULATION_TRIALS
from contraband.core.errors import InvalidConfiguration, MarketError, market_error_to_http
from contraband.services.market_service import MarketService

router = APIRouter()


@router.get("")
def list_drops(market: MarketService = Depends(get_market)) -> dict[str, Any]:
    try:
        return market.get_drops()
    except MarketError as e:
        raise market_error_to_http(e)


@router.post("/update")
def update_drops(
    payload: Any = Body(None),
    x_api_key: str | None = Header(None, alias="X-API-Key"),
    market: MarketService = Depends(get_market),
) -> dict[str, Any]:
    """
    Replace the drop table. Body: { drops: [{id, weight}, ...], apiKey? }.
    401 without a valid key (checked before the payload), 400 for a malformed table.
    """
    body = payload if isinstance(payload, dict) else {}
    body_key = body.get("apiKey")
    api_key = x_api_key or (body_key if isinstance(body_key, str) else None)
    try:
        if not isinstance(payload, dict):
            # Still check the key first so a bad key never learns anything about payload rules
            market.gate.authorize(api_key)
            raise InvalidConfiguration("Invalid payload. Expected { drops: [...] }")
        return market.update_drops(api_key, body.get("drops"))
    except MarketError as e:
        raise market_error_to_http(e)


@router.post("/simulate")
def simulate_drop(market: MarketService = Depends(get_market)) -> dict[str, Any]:
    """Roll the current table once; the result is relayed to the activity log."""
    try:
        return market.simulate_drop()
    except MarketError as e:
        raise market_error_to_http(e)


@router.get("/odds")
def drop_odds(
    trials: int = Query(10_000, ge=1, le=MAX_SIMULATION_TRIALS),
    market: MarketService = Depends(get_market),
) -> dict[str, Any]:
    """Observed counts over `trials` rolls alongside the expected weight / total odds."""
    try:
        return market.drop_odds(trials)
    except MarketError as e:
        raise market_error_to_http(e)
