"""Key-value store port — abstract interface for durable storage.

The domain programs against this port; adapters are swapped via
configuration. Values are JSON-compatible records (dicts, lists, strings,
numbers, booleans, None); timestamps travel as ISO-8601 strings.
"""

from abc import ABC, abstractmethod
from typing import Any


def key(namespace: str, *parts: str) -> str:
    """Build a namespaced key, e.g. ``key("orders", "ORD-1")`` -> ``"orders:ORD-1"``."""
    return ":".join([namespace, *(str(part) for part in parts)])


class KeyValueStore(ABC):
    """Abstract interface for key-value store adapters.

    Adapters raise ``storefront.errors.PersistenceError`` when the
    underlying storage is unavailable; they never retry.
    """

    @abstractmethod
    def get(self, key: str) -> Any | None:
        """Return the value stored under ``key``, or None when absent."""
        ...

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""
        ...

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove ``key``; deleting an absent key is not an error."""
        ...
