"""
Key-value store client.

`connect_store` picks a backend from the URL scheme:

    memory://                        -> MemoryKVStore
    postgresql://... / postgres://... -> PostgresKVStore
"""

from urllib.parse import urlparse

from kv_facade.databases.kv.base import KVStore
from kv_facade.databases.kv.connector import PostgresKVStore
from kv_facade.databases.kv.memory import MemoryKVStore

_POSTGRES_SCHEMES = {"postgres", "postgresql"}


def build_store(url: str, table: str = "kv_store") -> KVStore:
    """Instantiate (without connecting) the backend for `url`."""
    scheme = urlparse(url).scheme.lower()
    if scheme == "memory":
        return MemoryKVStore()
    if scheme in _POSTGRES_SCHEMES:
        return PostgresKVStore(url, table=table)
    raise ValueError(
        f"Unsupported store URL scheme '{scheme}'. "
        f"Supported: 'memory', {', '.join(repr(s) for s in sorted(_POSTGRES_SCHEMES))}"
    )


def connect_store(url: str, table: str = "kv_store") -> KVStore:
    store = build_store(url, table=table)
    store.connect()
    return store


__all__ = [
    "KVStore",
    "MemoryKVStore",
    "PostgresKVStore",
    "build_store",
    "connect_store",
]
