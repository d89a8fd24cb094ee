"""
Weighted random drop selection.

Each entry wins with probability weight / total. An all-zero table always yields its first
entry; an empty table is a configuration error.
"""
import random
from collections import Counter

from contraband.core.errors import InvalidConfiguration
from contraband.services.drops.types import DropEntry


def choose_weighted(table: list[DropEntry], rng: random.Random | None = None) -> DropEntry:
    """Pick one entry. Earlier entries win exact-zero boundaries."""
    if not table:
        raise InvalidConfiguration("Drop table is empty")
    total = sum(entry.weight for entry in table)
    if total <= 0:
        return table[0]
    r = (rng or random).random() * total
    for entry in table:
        r -= entry.weight
        if r <= 0:
            return entry
    # Float rounding can leave r a hair above zero after the last subtraction
    return next(entry for entry in reversed(table) if entry.weight > 0)


def simulate_drops(
    table: list[DropEntry],
    trials: int,
    rng: random.Random | None = None,
) -> dict[str, int]:
    """Roll the table `trials` times; returns id -> hit count (every id present, zero if never hit)."""
    if trials < 1:
        raise InvalidConfiguration("trials must be at least 1")
    hits = Counter(choose_weighted(table, rng).id for _ in range(trials))
    return {entry.id: hits.get(entry.id, 0) for entry in table}


def expected_odds(table: list[DropEntry]) -> dict[str, float]:
    """id -> weight / total. All-zero tables put all mass on the first entry."""
    if not table:
        raise InvalidConfiguration("Drop table is empty")
    total = sum(entry.weight for entry in table)
    if total <= 0:
        return {entry.id: (1.0 if i == 0 else 0.0) for i, entry in enumerate(table)}
    return {entry.id: entry.weight / total for entry in table}
