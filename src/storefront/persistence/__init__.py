"""Store adapter registry — pluggable key-value persistence.

Uses the in-memory store by default. Configure with the
``STOREFRONT_STORE`` environment variable (``memory`` or ``file``); the file
store writes under ``STOREFRONT_DATA_DIR`` (default ``./data``).
"""

import os

_store_instance = None


def get_store():
    """Return the configured store adapter (singleton)."""
    global _store_instance
    if _store_instance is None:
        adapter = os.environ.get("STOREFRONT_STORE", "memory")
        if adapter == "memory":
            from storefront.persistence.memory_store import InMemoryStore

            _store_instance = InMemoryStore()
        elif adapter == "file":
            from storefront.persistence.file_store import JsonFileStore

            _store_instance = JsonFileStore(os.environ.get("STOREFRONT_DATA_DIR", "data"))
        else:
            raise ValueError(f"Unknown store adapter: {adapter}")
    return _store_instance


def reset_store():
    """Reset the store singleton (useful for testing)."""
    global _store_instance
    _store_instance = None
