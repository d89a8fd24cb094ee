import random

import pytest

from contraband.core.errors import InvalidConfiguration
from contraband.services.drops import DropEntry, choose_weighted, expected_odds, simulate_drops
from tests.helpers import StubRng

SEED_TABLE = [
    DropEntry(id="cigs", weight=30),
    DropEntry(id="weed", weight=25),
    DropEntry(id="pills", weight=18),
    DropEntry(id="weap", weight=10),
    DropEntry(id="chips", weight=10),
    DropEntry(id="gold", weight=7),
]


def test_frequencies_converge_to_weight_share() -> None:
    trials = 200_000
    counts = simulate_drops(SEED_TABLE, trials, random.Random(42))
    total = sum(e.weight for e in SEED_TABLE)
    for entry in SEED_TABLE:
        assert counts[entry.id] / trials == pytest.approx(entry.weight / total, abs=0.01)


def test_zero_weight_entry_is_never_picked() -> None:
    table = [DropEntry(id="a", weight=0), DropEntry(id="b", weight=5), DropEntry(id="c", weight=0)]
    counts = simulate_drops(table, 5_000, random.Random(7))
    assert counts == {"a": 0, "b": 5_000, "c": 0}


def test_all_zero_weights_always_return_first_entry() -> None:
    table = [DropEntry(id="first", weight=0), DropEntry(id="second", weight=0)]
    rng = random.Random(3)
    assert all(choose_weighted(table, rng).id == "first" for _ in range(500))


def test_empty_table_is_invalid() -> None:
    with pytest.raises(InvalidConfiguration):
        choose_weighted([])


def test_earlier_entry_wins_exact_boundary() -> None:
    table = [DropEntry(id="a", weight=1), DropEntry(id="b", weight=1)]
    # r = 0.5 * 2 = 1.0 lands exactly on a's upper edge
    assert choose_weighted(table, StubRng(0.5)).id == "a"
    assert choose_weighted(table, StubRng(0.51)).id == "b"


def test_top_of_range_picks_last_positive_entry() -> None:
    table = [DropEntry(id="a", weight=3), DropEntry(id="b", weight=4)]
    assert choose_weighted(table, StubRng(0.999999)).id == "b"
    assert choose_weighted(table, StubRng(0.0)).id == "a"


def test_simulate_rejects_non_positive_trials() -> None:
    with pytest.raises(InvalidConfiguration):
        simulate_drops(SEED_TABLE, 0)


def test_expected_odds() -> None:
    odds = expected_odds(SEED_TABLE)
    assert odds["cigs"] == pytest.approx(0.30)
    assert odds["gold"] == pytest.approx(0.07)
    assert sum(odds.values()) == pytest.approx(1.0)
    assert expected_odds([DropEntry(id="x", weight=0), DropEntry(id="y", weight=0)]) == {"x": 1.0, "y": 0.0}


def test_overshoot_falls_back_to_last_positive_entry() -> None:
    table = [DropEntry(id="a", weight=3), DropEntry(id="b", weight=4), DropEntry(id="c", weight=0)]
    # A draw past the total (float drift) must never land on a zero-weight tail
    assert choose_weighted(table, StubRng(1.5)).id == "b"
