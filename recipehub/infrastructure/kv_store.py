# =========================
# FILE: recipehub/infrastructure/kv_store.py
# =========================
from __future__ import annotations

import logging
import os
import threading
from typing import Dict, Optional

import ujson as json

from recipehub.domain.repositories import KeyValueStore

log = logging.getLogger("infra.kv_store")


class InMemoryKeyValueStore(KeyValueStore):
    def __init__(self) -> None:
        self._data: Dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


class JsonFileKeyValueStore(KeyValueStore):
    """
    Whole store kept as one JSON object on disk.
    Loaded once; every write rewrites the file via a temp file + rename.
    """

    def __init__(self, path: str) -> None:
        self.path = path
        self._lock = threading.Lock()
        self._data: Dict[str, str] = self._load()

    def _load(self) -> Dict[str, str]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except ValueError:
            log.warning("Store file %s is not valid JSON, starting empty", self.path)
            return {}
        if not isinstance(raw, dict):
            log.warning("Store file %s does not hold an object, starting empty", self.path)
            return {}
        return {str(k): str(v) for k, v in raw.items()}

    def _flush(self) -> None:
        os.makedirs(os.path.dirname(os.path.abspath(self.path)), exist_ok=True)
        tmp = f"{self.path}.tmp"
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(self._data, f, ensure_ascii=False, indent=2)
        os.replace(tmp, self.path)

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            self._data[key] = value
            self._flush()

    def delete(self, key: str) -> None:
        with self._lock:
            if self._data.pop(key, None) is not None:
                self._flush()


def build_store(backend: str, path: str) -> KeyValueStore:
    if backend == "memory":
        return InMemoryKeyValueStore()
    if backend == "file":
        log.info("Using JSON file store at %s", path)
        return JsonFileKeyValueStore(path)
    raise ValueError(f"Unknown STORE_BACKEND: {backend!r}")
