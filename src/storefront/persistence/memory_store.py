"""In-memory key-value store — default adapter for development and tests.

Values are kept as JSON text so that anything stored here round-trips
exactly as it would through a real store. Availability is configurable for
exercising failure paths.
"""

import json
import threading
from typing import Any

from storefront.errors import PersistenceError
from storefront.persistence.port import KeyValueStore


class InMemoryStore(KeyValueStore):
    def __init__(self):
        self._data: dict[str, str] = {}
        self._lock = threading.Lock()
        self.available = True
        self.failure_reason = "Store unavailable"

    def configure(self, available: bool = True, failure_reason: str = "Store unavailable"):
        """Configure the adapter behavior for testing."""
        self.available = available
        self.failure_reason = failure_reason

    def _check(self, operation: str, key: str):
        if not self.available:
            raise PersistenceError(operation, key, self.failure_reason)

    def get(self, key: str) -> Any | None:
        self._check("get", key)
        with self._lock:
            raw = self._data.get(key)
        return None if raw is None else json.loads(raw)

    def set(self, key: str, value: Any) -> None:
        self._check("set", key)
        try:
            raw = json.dumps(value)
        except TypeError as exc:
            raise PersistenceError("set", key, f"value is not JSON-compatible: {exc}") from exc
        with self._lock:
            self._data[key] = raw

    def delete(self, key: str) -> None:
        self._check("delete", key)
        with self._lock:
            self._data.pop(key, None)

    def keys(self, prefix: str = "") -> list[str]:
        """Keys currently stored, optionally filtered by prefix (test helper)."""
        with self._lock:
            return sorted(k for k in self._data if k.startswith(prefix))

    def reset(self):
        """Drop all data (useful between tests)."""
        with self._lock:
            self._data.clear()
        self.available = True
        self.failure_reason = "Store unavailable"
