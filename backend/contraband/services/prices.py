"""
Mock market prices: a bounded random walk advanced on every read.

advance_prices is the state transition (PriceTable, now) -> PriceTable'. Its output is the
base for the next call; no history is kept beyond the latest prices and lastUpdated.
"""
import random
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from contraband.config import settings

CENT = Decimal("0.01")


def round_price(value: float) -> float:
    """Round to cents, half-up (12.345 -> 12.35)."""
    return float(Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP))


def clamp_elapsed(elapsed_seconds: float, max_elapsed: int | None = None) -> float:
    cap = settings.price_max_elapsed_seconds if max_elapsed is None else max_elapsed
    return max(1, min(elapsed_seconds, cap))


def drift_price(
    base_price: float,
    elapsed_seconds: float,
    rng: random.Random | None = None,
    *,
    max_pct: float | None = None,
    floor: float | None = None,
    max_elapsed: int | None = None,
) -> float:
    """
    One random-walk step: +/- max_pct per elapsed second, elapsed clamped to [1, max_elapsed].
    Result is never below floor and always has at most two decimals.
    """
    max_pct = settings.price_max_pct if max_pct is None else max_pct
    floor = settings.price_floor if floor is None else floor
    elapsed = clamp_elapsed(elapsed_seconds, max_elapsed)
    pct = (rng or random).uniform(-max_pct, max_pct) * elapsed
    new_price = max(floor, base_price * (1 + pct))
    return max(floor, round_price(new_price))


def elapsed_seconds_between(last_updated_ms: Any, now_ms: int) -> int:
    """Whole seconds since lastUpdated; a missing or bad timestamp counts as no time passed."""
    if isinstance(last_updated_ms, bool) or not isinstance(last_updated_ms, (int, float)):
        return 0
    return max(0, int((now_ms - last_updated_ms) // 1000))


def advance_prices(
    snapshot: dict[str, Any],
    now_ms: int,
    rng: random.Random | None = None,
) -> dict[str, Any]:
    """
    Return the next price snapshot: every price drifted once, lastUpdated set to now_ms.
    The input snapshot is not modified.
    """
    base = snapshot.get("prices") or {}
    elapsed = elapsed_seconds_between(snapshot.get("lastUpdated"), now_ms)
    new_prices = {item_id: drift_price(float(price), elapsed, rng) for item_id, price in base.items()}
    return {"prices": new_prices, "lastUpdated": now_ms}
