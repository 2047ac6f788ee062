"""
Content extraction for fetched pages.

Only the first <pre>...</pre> block is considered. Later blocks are ignored
and tags with attributes (e.g. <pre class="x">) do not count as a marker.
"""

from kv_facade.errors import MalformedContent

PRE_OPEN = "<pre>"
PRE_CLOSE = "</pre>"


def extract_pre_text(document: str) -> str:
    """
    Return the trimmed text between the first `<pre>` and the first `</pre>`
    that follows it.

    Returns an empty string when the document has no `<pre>` at all.

    Raises:
        MalformedContent: `<pre>` is present but never closed.
    """
    start = document.find(PRE_OPEN)
    if start == -1:
        return ""
    start += len(PRE_OPEN)

    end = document.find(PRE_CLOSE, start)
    if end == -1:
        raise MalformedContent(
            f"Found '{PRE_OPEN}' at offset {start - len(PRE_OPEN)} but no closing '{PRE_CLOSE}'"
        )
    return document[start:end].strip()
