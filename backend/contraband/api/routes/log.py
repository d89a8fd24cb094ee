"""Activity log relay: forwards a message to the Discord webhook when one is configured."""
from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from contraband.api.deps import get_market
from contraband.core.errors import MarketError, market_error_to_http
from contraband.services.market_service import MarketService

router = APIRouter()


class LogBody(BaseModel):
    message: str | None = None


@router.post("/log")
def relay_log(body: LogBody, market: MarketService = Depends(get_market)) -> dict[str, Any]:
    """
    Always accepted when a message is present; `forwarded` says whether the webhook took it.
    A webhook failure is logged server-side and never fails this request.
    """
    try:
        return market.relay_log(body.message)
    except MarketError as e:
        raise market_error_to_http(e)
