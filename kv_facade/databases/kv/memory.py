"""
In-process key-value backend, selected with the `memory://` store URL.

Data lives as long as the process. Useful for local runs and tests.
"""

import threading
from typing import Dict, List, Optional

from kv_facade.databases.kv.base import KVStore
from kv_facade.errors import StoreUnavailable


class MemoryKVStore(KVStore):
    NAME = "memory"

    def __init__(self) -> None:
        self._store: Dict[str, str] = {}
        self._lock = threading.Lock()
        self.is_connected = False

    def connect(self) -> None:
        self.is_connected = True

    def close(self) -> None:
        self.is_connected = False

    def _check(self) -> None:
        if not self.is_connected:
            raise StoreUnavailable("Memory store is not connected")

    def ping(self) -> None:
        self._check()

    def set(self, key: str, value: str) -> None:
        self._check()
        with self._lock:
            self._store[key] = str(value)

    def get(self, key: str) -> Optional[str]:
        self._check()
        with self._lock:
            return self._store.get(key)

    def list_keys(self) -> List[str]:
        self._check()
        with self._lock:
            return list(self._store.keys())
