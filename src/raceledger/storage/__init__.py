"""Persistence: DuckDB connection, key-value gateway, snapshot keys."""

from raceledger.storage.gateway import DuckDBGateway, MemoryGateway, StorageGateway

__all__ = ["DuckDBGateway", "MemoryGateway", "StorageGateway"]
