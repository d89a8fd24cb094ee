"""
FastAPI app entrypoint.

Contraband market backend: drop weights, mock prices, admin keys, log relay.
Run: uvicorn contraband.main:app --app-dir backend --port $PORT
"""
import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Load .env from backend/ before any app code
load_dotenv(Path(__file__).resolve().parent.parent / ".env")

from contraband.api.deps import get_market
from contraband.api.routes import admin, drops, log, market
from contraband.config import settings
from contraband.services.market_service import MarketService, build_market_service

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Tests override get_market; only build the file-backed service when nothing is injected
    if getattr(app.state, "market", None) is None:
        app.state.market = build_market_service(settings)
    logger.info(
        "Contraband backend ready (data_dir=%s, webhook=%s)",
        settings.data_dir,
        "on" if settings.discord_webhook_url else "off",
    )
    yield


app = FastAPI(title="QCR Contraband Market", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list(),
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(admin.router, prefix="/admin", tags=["admin"])
app.include_router(drops.router, prefix="/drops", tags=["drops"])
app.include_router(market.router, tags=["market"])
app.include_router(log.router, tags=["log"])


@app.get("/")
def root(market_service: MarketService = Depends(get_market)) -> dict[str, Any]:
    """Health: status, service name, uptime seconds."""
    return market_service.health()
