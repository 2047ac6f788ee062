from typing import List, Optional


class KVStore:
    """
    Base class for key-value store backends. One instance is shared by every
    request handler of a process.

    Backends raise `StoreUnavailable` when the connection is missing or
    broken. A missing key is reported by `get` returning None.
    """

    NAME = ""

    def connect(self) -> None:
        raise NotImplementedError(f"{type(self).__name__}.connect() not implemented")

    def close(self) -> None:
        raise NotImplementedError(f"{type(self).__name__}.close() not implemented")

    def ping(self) -> None:
        raise NotImplementedError(f"{type(self).__name__}.ping() not implemented")

    def set(self, key: str, value: str) -> None:
        raise NotImplementedError(f"{type(self).__name__}.set() not implemented")

    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError(f"{type(self).__name__}.get() not implemented")

    def list_keys(self) -> List[str]:
        raise NotImplementedError(f"{type(self).__name__}.list_keys() not implemented")

    def __enter__(self) -> "KVStore":
        self.connect()
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
