"""JSON file store — one JSON document per key inside a data directory.

Writes go to a temp file that is then renamed over the target, so a reader
never observes a half-written record.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Any
from urllib.parse import quote

from storefront.errors import PersistenceError
from storefront.persistence.port import KeyValueStore


class JsonFileStore(KeyValueStore):
    def __init__(self, data_dir: str | Path):
        self.data_dir = Path(data_dir)

    def _path_for(self, key: str) -> Path:
        return self.data_dir / f"{quote(key, safe='')}.json"

    def get(self, key: str) -> Any | None:
        path = self._path_for(key)
        try:
            with open(path, encoding="utf-8") as f:
                return json.load(f)
        except FileNotFoundError:
            return None
        except (OSError, json.JSONDecodeError) as exc:
            raise PersistenceError("get", key, str(exc)) from exc

    def set(self, key: str, value: Any) -> None:
        path = self._path_for(key)
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            fd, temp_path = tempfile.mkstemp(dir=self.data_dir, prefix=".record_", suffix=".tmp")
        except OSError as exc:
            raise PersistenceError("set", key, str(exc)) from exc

        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(value, f)
            os.replace(temp_path, path)
        except (OSError, TypeError) as exc:
            try:
                os.unlink(temp_path)
            except OSError:
                pass
            raise PersistenceError("set", key, str(exc)) from exc

    def delete(self, key: str) -> None:
        try:
            self._path_for(key).unlink(missing_ok=True)
        except OSError as exc:
            raise PersistenceError("delete", key, str(exc)) from exc
