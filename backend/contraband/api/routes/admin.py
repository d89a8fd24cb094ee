"""Admin login: hardcoded credentials -> API key for drop table edits."""
from fastapi import APIRouter, Depends
from pydantic import BaseModel

from contraband.api.deps import get_market
from contraband.core.errors import MarketError, market_error_to_http
from contraband.services.market_service import MarketService

router = APIRouter()


class LoginBody(BaseModel):
    username: str | None = None
    password: str | None = None


@router.post("/login")
def admin_login(body: LoginBody, market: MarketService = Depends(get_market)):
    """Return a new API key ({apiKey, message}) for the admin, or 401 on bad credentials."""
    try:
        return market.issue_login(body.username, body.password)
    except MarketError as e:
        raise market_error_to_http(e)
