"""
Exceptions raised by the store client and the fetch-and-save workflow.

A missing key is not an error: `get` returns None.
"""

from typing import Optional


class KVFacadeError(Exception):
    """Base class for every failure the HTTP surface reports."""


class StoreError(KVFacadeError):
    """The key-value store rejected an operation."""


class StoreUnavailable(StoreError):
    """The key-value store connection is missing or broken."""


class StoreWriteFailed(KVFacadeError):
    """A workflow write to the store failed. The cause is chained."""


class MalformedContent(KVFacadeError):
    """An opening <pre> marker was found without a closing </pre>."""


class FetchFailed(KVFacadeError):
    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        reason: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.reason = reason

    @classmethod
    def from_status(cls, status_code: int, reason: str) -> "FetchFailed":
        return cls(
            f"Failed to fetch URL with status: {status_code} {reason}".rstrip(),
            status_code=status_code,
            reason=reason,
        )
