"""Key-value persistence gateway. Fails soft: errors are logged, never raised to the ledger."""

from __future__ import annotations

import json
import time
from typing import TYPE_CHECKING, Any, Protocol

import duckdb
import structlog

if TYPE_CHECKING:
    from duckdb import DuckDBPyConnection

log = structlog.get_logger(__name__)


class StorageGateway(Protocol):
    """put/get/delete of JSON-serializable values. get returns None for missing or unreadable keys."""

    def put(self, key: str, value: Any) -> None: ...
    def get(self, key: str) -> Any: ...
    def delete(self, key: str) -> None: ...


class DuckDBGateway:
    """Stores each key's latest JSON snapshot in the kv_store table."""

    def __init__(self, conn: DuckDBPyConnection) -> None:
        self.conn = conn

    def put(self, key: str, value: Any) -> None:
        try:
            payload = json.dumps(value)
            self.conn.execute(
                """
                INSERT INTO kv_store (key, value, updated_at)
                VALUES (?, ?, ?)
                ON CONFLICT (key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = excluded.updated_at
                """,
                [key, payload, int(time.time() * 1000)],
            )
        except (duckdb.Error, TypeError, ValueError) as e:
            log.error("storage_put_failed", key=key, error=str(e))

    def get(self, key: str) -> Any:
        try:
            row = self.conn.execute("SELECT value FROM kv_store WHERE key = ?", [key]).fetchone()
            if not row or row[0] is None:
                return None
            return json.loads(row[0]) if isinstance(row[0], str) else row[0]
        except (duckdb.Error, TypeError, ValueError) as e:
            log.error("storage_get_failed", key=key, error=str(e))
            return None

    def delete(self, key: str) -> None:
        try:
            self.conn.execute("DELETE FROM kv_store WHERE key = ?", [key])
        except duckdb.Error as e:
            log.error("storage_delete_failed", key=key, error=str(e))

    def keys(self) -> list[str]:
        try:
            rows = self.conn.execute("SELECT key FROM kv_store ORDER BY key").fetchall()
        except duckdb.Error as e:
            log.error("storage_keys_failed", error=str(e))
            return []
        return [r[0] for r in rows]


class MemoryGateway:
    """In-process gateway with the same contract. Values are kept as JSON text so
    unserializable values fail the same way they would on disk."""

    def __init__(self) -> None:
        self._data: dict[str, str] = {}

    def put(self, key: str, value: Any) -> None:
        try:
            self._data[key] = json.dumps(value)
        except (TypeError, ValueError) as e:
            log.error("storage_put_failed", key=key, error=str(e))

    def get(self, key: str) -> Any:
        raw = self._data.get(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except ValueError as e:
            log.error("storage_get_failed", key=key, error=str(e))
            return None

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return sorted(self._data)
