"""Drop table types. Same shape on disk, over the wire, and in the selector."""
import math
from typing import Any

from contraband.core.errors import InvalidConfiguration


class DropEntry:
    """One item id and its integer drop weight (weight >= 0)."""

    __slots__ = ("id", "weight")

    def __init__(self, *, id: str, weight: int):
        self.id = id
        self.weight = weight

    def to_row(self) -> dict[str, Any]:
        """Format for drops.json and API responses: { id, weight }."""
        return {"id": self.id, "weight": self.weight}

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DropEntry):
            return NotImplemented
        return self.id == other.id and self.weight == other.weight

    def __repr__(self) -> str:
        return f"DropEntry(id={self.id!r}, weight={self.weight!r})"


def _parse_weight(item_id: str, raw: Any) -> int:
    # bool is an int subclass; true/false is never a weight
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise InvalidConfiguration(f"Weight for '{item_id}' must be a number")
    if isinstance(raw, float):
        if not math.isfinite(raw):
            raise InvalidConfiguration(f"Weight for '{item_id}' must be finite")
        if not raw.is_integer():
            raise InvalidConfiguration(f"Weight for '{item_id}' must be a whole number")
        raw = int(raw)
    if raw < 0:
        raise InvalidConfiguration(f"Weight for '{item_id}' must be >= 0")
    return raw


def parse_drop_table(raw: Any) -> list[DropEntry]:
    """
    Validate a JSON drops list into DropEntry objects, preserving order.
    Raises InvalidConfiguration on a non-list or empty payload, bad entries, or duplicate ids.
    """
    if not isinstance(raw, list):
        raise InvalidConfiguration("Invalid payload. Expected { drops: [...] }")
    if not raw:
        raise InvalidConfiguration("Drop table must have at least one entry")
    table: list[DropEntry] = []
    seen: set[str] = set()
    for i, item in enumerate(raw):
        if not isinstance(item, dict):
            raise InvalidConfiguration(f"Drop entry {i} must be an object with id and weight")
        item_id = item.get("id")
        if not isinstance(item_id, str) or not item_id.strip():
            raise InvalidConfiguration(f"Drop entry {i} needs a non-empty string id")
        item_id = item_id.strip()
        if item_id in seen:
            raise InvalidConfiguration(f"Duplicate drop id '{item_id}'")
        seen.add(item_id)
        table.append(DropEntry(id=item_id, weight=_parse_weight(item_id, item.get("weight"))))
    return table


def table_to_rows(table: list[DropEntry]) -> list[dict[str, Any]]:
    return [entry.to_row() for entry in table]
