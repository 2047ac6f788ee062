import httpx
import pytest

from kv_facade.databases.kv import MemoryKVStore
from kv_facade.errors import FetchFailed, MalformedContent, StoreUnavailable, StoreWriteFailed
from kv_facade.fetch_and_save import FetchAndSave, KeyDeriver

URL = "https://example.test/draft"
NOW_MS = 1_700_000_000_000


def frozen_clock():
    return NOW_MS


def make_client(status_code=200, text="", exc=None):
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "GET"
        assert str(request.url) == URL
        if exc is not None:
            raise exc
        return httpx.Response(status_code, text=text)

    return httpx.Client(transport=httpx.MockTransport(handler))


@pytest.fixture
def store():
    with MemoryKVStore() as s:
        yield s


def make_workflow(store, client, prefix="content"):
    return FetchAndSave(
        store, client, url=URL, key_deriver=KeyDeriver(prefix, clock=frozen_clock)
    )


def test_saves_extracted_text_under_derived_key(store):
    client = make_client(text="<html><pre>\n  draft text \n</pre></html>")
    result = make_workflow(store, client).run()

    assert result.key == f"content-{NOW_MS}"
    assert result.url == URL
    assert result.text == "draft text"
    assert store.get(result.key) == "draft text"
    assert store.list_keys() == [result.key]


def test_custom_prefix(store):
    client = make_client(text="<pre>x</pre>")
    result = make_workflow(store, client, prefix="architects-content-text").run()
    assert result.key == f"architects-content-text-{NOW_MS}"


def test_page_without_marker_saves_empty_text(store):
    client = make_client(text="<html><body>no pre here</body></html>")
    result = make_workflow(store, client).run()
    assert store.get(result.key) == ""


def test_http_error_writes_nothing(store):
    client = make_client(status_code=503, text="<pre>ignored</pre>")
    with pytest.raises(FetchFailed) as excinfo:
        make_workflow(store, client).run()

    assert excinfo.value.status_code == 503
    assert "503" in str(excinfo.value)
    assert "Service Unavailable" in str(excinfo.value)
    assert store.list_keys() == []


def test_network_error_is_fetch_failed(store):
    client = make_client(exc=httpx.ConnectError("connection refused"))
    with pytest.raises(FetchFailed) as excinfo:
        make_workflow(store, client).run()

    assert excinfo.value.status_code is None
    assert isinstance(excinfo.value.__cause__, httpx.ConnectError)
    assert store.list_keys() == []


def test_malformed_content_writes_nothing(store):
    client = make_client(text="<pre>unterminated")
    with pytest.raises(MalformedContent):
        make_workflow(store, client).run()
    assert store.list_keys() == []


def test_store_failure_is_write_failed():
    closed_store = MemoryKVStore()
    client = make_client(text="<pre>x</pre>")
    with pytest.raises(StoreWriteFailed) as excinfo:
        make_workflow(closed_store, client).run()
    assert isinstance(excinfo.value.__cause__, StoreUnavailable)


# =======================================================
# DERIVED KEYS
# =======================================================


def test_key_deriver_is_monotonic_within_a_millisecond():
    deriver = KeyDeriver("content", clock=frozen_clock)
    keys = [deriver.next_key() for _ in range(3)]
    assert keys == [
        f"content-{NOW_MS}",
        f"content-{NOW_MS + 1}",
        f"content-{NOW_MS + 2}",
    ]


def test_key_deriver_follows_clock():
    ticks = iter([100, 250, 250, 900])
    deriver = KeyDeriver("p", clock=lambda: next(ticks))
    assert [deriver.next_key() for _ in range(4)] == ["p-100", "p-250", "p-251", "p-900"]


def test_colliding_keys_last_write_wins(store):
    # Two independent derivers (e.g. two processes) resolving to the same millisecond.
    first = make_workflow(store, make_client(text="<pre>first</pre>"))
    second = make_workflow(store, make_client(text="<pre>second</pre>"))

    key_1 = first.run().key
    key_2 = second.run().key

    assert key_1 == key_2
    assert store.get(key_1) == "second"
    assert store.list_keys() == [key_1]
