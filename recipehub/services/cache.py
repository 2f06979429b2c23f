# recipehub/services/cache.py
from __future__ import annotations

import threading
import time
from typing import Any, Callable, Dict, Hashable, Tuple


class TTLCache:
    def __init__(self, ttl_s: int = 60, max_items: int = 512, clock: Callable[[], float] = time.time) -> None:
        self.ttl_s = ttl_s
        self.max_items = max_items
        self._clock = clock
        self._lock = threading.Lock()
        self._data: Dict[Hashable, Tuple[float, Any]] = {}

    def get(self, key: Hashable):
        now = self._clock()
        with self._lock:
            v = self._data.get(key)
            if not v:
                return None
            ts, payload = v
            if now - ts > self.ttl_s:
                self._data.pop(key, None)
                return None
            return payload

    def set(self, key: Hashable, payload: Any) -> None:
        with self._lock:
            if len(self._data) >= self.max_items:
                # drop oldest
                oldest = sorted(self._data.items(), key=lambda kv: kv[1][0])[: max(1, self.max_items // 10)]
                for k, _ in oldest:
                    self._data.pop(k, None)
            self._data[key] = (self._clock(), payload)

    def get_or_load(self, key: Hashable, loader: Callable[[], Any]) -> Any:
        cached = self.get(key)
        if cached is not None:
            return cached
        payload = loader()
        self.set(key, payload)
        return payload
