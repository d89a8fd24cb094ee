"""
Snapshot store: drops, prices and API keys, each persisted as one self-contained JSON record.

load(kind) writes and returns the built-in default when no snapshot exists yet.
save(kind, snapshot) overwrites; I/O errors surface as StorageFailure and are never retried.
"""
import copy
import json
import logging
import os
import tempfile
import threading
import time
from pathlib import Path
from typing import Any, Protocol

from contraband.core.constants import (
    DEFAULT_DROPS,
    DEFAULT_PRICES,
    KIND_DROPS,
    KIND_KEYS,
    KIND_PRICES,
    SNAPSHOT_FILES,
    SNAPSHOT_KINDS,
)
from contraband.core.errors import StorageFailure

logger = logging.getLogger(__name__)

Snapshot = dict[str, Any]


def now_ms() -> int:
    """Wall clock in milliseconds since epoch (the price table's logical clock)."""
    return int(time.time() * 1000)


def default_snapshot(kind: str) -> Snapshot:
    """Fresh seed record for a snapshot kind."""
    if kind == KIND_DROPS:
        return {"drops": copy.deepcopy(DEFAULT_DROPS)}
    if kind == KIND_PRICES:
        return {"prices": dict(DEFAULT_PRICES), "lastUpdated": now_ms()}
    if kind == KIND_KEYS:
        return {"keys": []}
    raise ValueError(f"Unknown snapshot kind: {kind!r}")


def _check_kind(kind: str) -> None:
    if kind not in SNAPSHOT_KINDS:
        raise ValueError(f"Unknown snapshot kind: {kind!r}")


class SnapshotStore(Protocol):
    """Interface for snapshot persistence. File-backed in production, in-memory in tests."""

    def load(self, kind: str) -> Snapshot:
        """Return the persisted snapshot for kind, seeding the default on first use."""
        ...

    def save(self, kind: str, snapshot: Snapshot) -> None:
        """Overwrite the snapshot for kind. Raises StorageFailure on error."""
        ...


class JsonFileStore:
    """One pretty-printed JSON file per snapshot kind under data_dir."""

    def __init__(self, data_dir: Path | str) -> None:
        self.data_dir = Path(data_dir)
        # Single writer per kind; concurrent requests otherwise race read-then-write
        self._locks = {kind: threading.Lock() for kind in SNAPSHOT_KINDS}

    def path_for(self, kind: str) -> Path:
        _check_kind(kind)
        return self.data_dir / SNAPSHOT_FILES[kind]

    def load(self, kind: str) -> Snapshot:
        path = self.path_for(kind)
        with self._locks[kind]:
            if not path.exists():
                snapshot = default_snapshot(kind)
                self._write(path, snapshot)
                logger.info("Seeded default %s snapshot at %s", kind, path)
                return snapshot
            try:
                data = json.loads(path.read_text(encoding="utf-8"))
            except (OSError, ValueError) as e:
                logger.warning("Reading %s snapshot failed: %s", kind, e)
                raise StorageFailure(f"Unable to read {kind}") from e
        if not isinstance(data, dict):
            raise StorageFailure(f"Unable to read {kind}")
        return data

    def save(self, kind: str, snapshot: Snapshot) -> None:
        path = self.path_for(kind)
        with self._locks[kind]:
            self._write(path, snapshot)

    def _write(self, path: Path, snapshot: Snapshot) -> None:
        """Write via temp file + os.replace so readers never see a half-written snapshot."""
        tmp_name = None
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.stem}.", suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(snapshot, fh, indent=2)
            os.replace(tmp_name, path)
        except (OSError, TypeError, ValueError) as e:
            logger.warning("Writing %s failed: %s", path.name, e)
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StorageFailure(f"Failed to save {path.stem}") from e


class MemoryStore:
    """In-process store with the same contract; snapshots are deep-copied in and out."""

    def __init__(self, initial: dict[str, Snapshot] | None = None) -> None:
        self._data: dict[str, Snapshot] = {}
        for kind, snapshot in (initial or {}).items():
            _check_kind(kind)
            self._data[kind] = copy.deepcopy(snapshot)

    def load(self, kind: str) -> Snapshot:
        _check_kind(kind)
        if kind not in self._data:
            self._data[kind] = default_snapshot(kind)
        return copy.deepcopy(self._data[kind])

    def save(self, kind: str, snapshot: Snapshot) -> None:
        _check_kind(kind)
        self._data[kind] = copy.deepcopy(snapshot)
