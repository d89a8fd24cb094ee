#!/usr/bin/env python3
"""
Roll the persisted drop table N times and print observed vs expected odds.
Reads drops.json from DATA_DIR (seeds the default table if missing). Does not relay anything.

Usage: cd backend && python scripts/drop_odds.py [--trials 100000] [--seed 42]
"""
import argparse
import random
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from contraband.config import settings
from contraband.core.constants import KIND_DROPS
from contraband.services.drops import expected_odds, parse_drop_table, simulate_drops
from contraband.services.store import JsonFileStore


def main():
    parser = argparse.ArgumentParser(description="Simulate weighted drops from the persisted drop table")
    parser.add_argument("--trials", type=int, default=100_000, help="Number of rolls (default 100000)")
    parser.add_argument("--seed", type=int, default=None, help="RNG seed for a repeatable run")
    parser.add_argument("--data-dir", type=Path, default=settings.data_dir, help="Directory holding drops.json")
    args = parser.parse_args()

    store = JsonFileStore(args.data_dir)
    table = parse_drop_table(store.load(KIND_DROPS).get("drops"))
    counts = simulate_drops(table, args.trials, random.Random(args.seed))
    expected = expected_odds(table)

    print(f"{'id':<12}{'weight':>8}{'expected':>11}{'observed':>11}")
    for entry in table:
        observed = counts[entry.id] / args.trials
        print(f"{entry.id:<12}{entry.weight:>8}{expected[entry.id]:>11.2%}{observed:>11.2%}")
    print(f"{args.trials} trials")


if __name__ == "__main__":
    main()
