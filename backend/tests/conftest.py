import json
import random

import httpx
import pytest
from fastapi.testclient import TestClient

from contraband.api.deps import get_market
from contraband.main import app
from contraband.services.access import AccessGate
from contraband.services.market_service import MarketService
from contraband.services.relay import WebhookRelay
from contraband.services.store import MemoryStore
from tests.helpers import ADMIN_PASS, ADMIN_USER, WEBHOOK_URL, FakeClock


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def gate(store):
    return AccessGate(store, username=ADMIN_USER, password=ADMIN_PASS)


@pytest.fixture
def webhook():
    """WebhookRelay backed by httpx.MockTransport; `sent` collects posted JSON bodies."""
    sent: list[dict] = []
    state = {"status": 204}

    def handler(request: httpx.Request) -> httpx.Response:
        sent.append(json.loads(request.content))
        return httpx.Response(state["status"])

    relay = WebhookRelay(WEBHOOK_URL, timeout=2.0, prefix="QCR Log: ", transport=httpx.MockTransport(handler))
    relay.sent = sent
    relay.state = state
    return relay


@pytest.fixture
def market(store, gate, clock):
    return MarketService(
        store,
        gate,
        WebhookRelay(""),
        rng=random.Random(1234),
        clock_ms=clock.now_ms,
        monotonic=clock.monotonic,
    )


@pytest.fixture
def client(market):
    app.dependency_overrides[get_market] = lambda: market
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
