from contraband.services.drops.selector import choose_weighted, expected_odds, simulate_drops
from contraband.services.drops.types import DropEntry, parse_drop_table, table_to_rows

__all__ = [
    "DropEntry",
    "choose_weighted",
    "expected_odds",
    "parse_drop_table",
    "simulate_drops",
    "table_to_rows",
]
