"""
Market service: the operations behind the HTTP routes.

Login issuance, drop table read/update/simulate, the mutating price read, uptime, and the
log relay. Every failure is raised as a MarketError scoped to the one call.
"""
import logging
import random
import time
from typing import Any, Callable

from contraband.config import Settings
from contraband.core.constants import KIND_DROPS, KIND_PRICES, MAX_SIMULATION_TRIALS, SERVICE_NAME
from contraband.core.errors import InvalidConfiguration, RelayFailure, StorageFailure
from contraband.services.access import AccessGate
from contraband.services.drops import (
    DropEntry,
    choose_weighted,
    expected_odds,
    parse_drop_table,
    simulate_drops,
    table_to_rows,
)
from contraband.services.prices import advance_prices
from contraband.services.relay import WebhookRelay
from contraband.services.store import JsonFileStore, SnapshotStore, now_ms

logger = logging.getLogger(__name__)


class MarketService:
    def __init__(
        self,
        store: SnapshotStore,
        gate: AccessGate,
        relay: WebhookRelay,
        *,
        rng: random.Random | None = None,
        clock_ms: Callable[[], int] = now_ms,
        monotonic: Callable[[], float] = time.monotonic,
    ) -> None:
        self.store = store
        self.gate = gate
        self.relay = relay
        self._rng = rng or random.Random()
        self._clock_ms = clock_ms
        self._monotonic = monotonic
        self._started = monotonic()

    # --- Admin ---

    def issue_login(self, username: str | None, password: str | None) -> dict[str, Any]:
        api_key = self.gate.issue_key(username, password)
        return {"apiKey": api_key, "message": "Admin API key generated"}

    # --- Drops ---

    def _stored_rows(self) -> list[Any]:
        rows = self.store.load(KIND_DROPS).get("drops")
        if not isinstance(rows, list):
            raise StorageFailure("Unable to read drops")
        return rows

    def _drop_table(self) -> list[DropEntry]:
        return parse_drop_table(self._stored_rows())

    def get_drops(self) -> dict[str, Any]:
        return {"drops": self._stored_rows()}

    def update_drops(self, api_key: str | None, raw_drops: Any) -> dict[str, Any]:
        """Replace the drop table. Key check comes first; nothing is written unless both checks pass."""
        self.gate.authorize(api_key)
        rows = table_to_rows(parse_drop_table(raw_drops))
        self.store.save(KIND_DROPS, {"drops": rows})
        logger.info("Drop table updated: %s", ", ".join(f"{r['id']}={r['weight']}" for r in rows))
        return {"success": True, "drops": rows}

    def simulate_drop(self) -> dict[str, Any]:
        """Roll the current table once and relay the result like any other activity line."""
        entry = choose_weighted(self._drop_table(), self._rng)
        forwarded = self._relay(f"Simulated Drop -> {entry.id} (weight {entry.weight})")
        return {"drop": entry.to_row(), "forwarded": forwarded}

    def drop_odds(self, trials: int) -> dict[str, Any]:
        if not 1 <= trials <= MAX_SIMULATION_TRIALS:
            raise InvalidConfiguration(f"trials must be between 1 and {MAX_SIMULATION_TRIALS}")
        table = self._drop_table()
        return {
            "trials": trials,
            "counts": simulate_drops(table, trials, self._rng),
            "expected": expected_odds(table),
        }

    # --- Prices ---

    def read_prices(self, now: int | None = None) -> dict[str, Any]:
        """
        Advance every price one random-walk step, persist, and return the new table.
        A failed save is logged and the computed prices are still returned.
        """
        now = self._clock_ms() if now is None else now
        snapshot = self.store.load(KIND_PRICES)
        try:
            advanced = advance_prices(snapshot, now, self._rng)
        except (AttributeError, TypeError, ValueError) as e:
            logger.warning("Price snapshot unusable: %s", e)
            raise StorageFailure("Failed to generate prices") from e
        try:
            self.store.save(KIND_PRICES, advanced)
        except StorageFailure as e:
            logger.warning("Persisting prices failed; serving unsaved walk: %s", e)
        return {"prices": advanced["prices"], "timestamp": now}

    def record_purchase(self, item_id: str) -> dict[str, Any]:
        """Buying is roleplay only: log the last quoted price, no inventory or price change."""
        prices = self.store.load(KIND_PRICES).get("prices") or {}
        if item_id not in prices:
            raise InvalidConfiguration(f"Unknown item '{item_id}'")
        try:
            price = float(prices[item_id])
        except (TypeError, ValueError) as e:
            logger.warning("Stored price for %s unusable: %r", item_id, prices[item_id])
            raise StorageFailure("Unable to read prices") from e
        forwarded = self._relay(f"Bought {item_id} for ${price:.2f}")
        return {"success": True, "item": item_id, "price": price, "forwarded": forwarded}

    # --- Process / log ---

    def get_uptime(self) -> dict[str, int]:
        return {"uptime": int(self._monotonic() - self._started)}

    def health(self) -> dict[str, Any]:
        return {"status": "ok", "name": SERVICE_NAME, **self.get_uptime()}

    def relay_log(self, message: str | None) -> dict[str, Any]:
        # Blank check only; the message itself is forwarded untouched
        if not (message or "").strip():
            raise InvalidConfiguration("Missing message")
        forwarded = self._relay(message)
        out: dict[str, Any] = {"success": True, "forwarded": forwarded}
        if not self.relay.is_configured():
            out["msg"] = "No DISCORD_WEBHOOK_URL set"
        return out

    def _relay(self, message: str) -> bool:
        """Forward to the webhook; a sink failure is logged and reported as not forwarded."""
        try:
            return self.relay.forward(message)
        except RelayFailure as e:
            logger.warning("Log relay failed: %s", e)
            return False


def build_market_service(settings: Settings, store: SnapshotStore | None = None) -> MarketService:
    """Wire the service from settings; data files are seeded on first load."""
    store = store or JsonFileStore(settings.data_dir)
    gate = AccessGate(store, username=settings.admin_username, password=settings.admin_password)
    relay = WebhookRelay(
        settings.discord_webhook_url,
        timeout=settings.relay_timeout_seconds,
        prefix=settings.relay_prefix,
    )
    return MarketService(store, gate, relay)
