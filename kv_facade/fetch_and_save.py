"""
Fetch a remote page, extract its <pre> text and store it under a fresh key.

Each successful run writes exactly one key, `<prefix>-<epoch millis>`.
Nothing is written when the fetch or the extraction fails. There are no
retries.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable, Optional

import httpx

from kv_facade.databases.kv import KVStore
from kv_facade.errors import FetchFailed, StoreWriteFailed
from kv_facade.extractor import extract_pre_text

logger = logging.getLogger(__name__)


def epoch_millis() -> int:
    return time.time_ns() // 1_000_000


class KeyDeriver:
    """
    Builds `<prefix>-<millis>` keys.

    Keys issued by one instance are strictly increasing: when the clock has
    not moved past the last issued timestamp, the last timestamp plus one is
    used instead.
    """

    def __init__(self, prefix: str, clock: Callable[[], int] = epoch_millis) -> None:
        self.prefix = prefix
        self._clock = clock
        self._last = 0
        self._lock = threading.Lock()

    def next_key(self) -> str:
        with self._lock:
            stamp = max(self._clock(), self._last + 1)
            self._last = stamp
        return f"{self.prefix}-{stamp}"


@dataclass(frozen=True)
class FetchResult:
    key: str
    url: str
    text: str


class FetchAndSave:
    def __init__(
        self,
        store: KVStore,
        http_client: httpx.Client,
        url: str,
        key_prefix: str = "content",
        key_deriver: Optional[KeyDeriver] = None,
    ) -> None:
        self.store = store
        self.http_client = http_client
        self.url = url
        self.key_deriver = key_deriver or KeyDeriver(key_prefix)

    def fetch(self) -> str:
        try:
            resp = self.http_client.get(self.url)
        except httpx.RequestError as exc:
            raise FetchFailed(f"Failed to reach {self.url}: {exc}") from exc
        if not resp.is_success:
            raise FetchFailed.from_status(resp.status_code, resp.reason_phrase)
        return resp.text

    def run(self) -> FetchResult:
        """
        Run the workflow once.

        Raises:
            FetchFailed: transport error or non-2xx response.
            MalformedContent: unclosed <pre> block.
            StoreWriteFailed: the store rejected the write.
        """
        body = self.fetch()
        text = extract_pre_text(body)
        key = self.key_deriver.next_key()

        try:
            self.store.set(key, text)
        except Exception as exc:
            raise StoreWriteFailed(f"Could not save key '{key}': {exc}") from exc

        logger.info(f"Saved {len(text)} characters from {self.url} under '{key}'")
        return FetchResult(key=key, url=self.url, text=text)
