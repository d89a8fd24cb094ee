from contraband.services.market_service import MarketService, build_market_service
from contraband.services.store import JsonFileStore, MemoryStore, SnapshotStore

__all__ = ["MarketService", "build_market_service", "JsonFileStore", "MemoryStore", "SnapshotStore"]
