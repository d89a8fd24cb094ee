"""
Request dependencies. The service is built once in the app lifespan and stored on app.state;
tests swap it via app.dependency_overrides[get_market].
"""
from fastapi import Request

from contraband.services.market_service import MarketService


def get_market(request: Request) -> MarketService:
    return request.app.state.market
