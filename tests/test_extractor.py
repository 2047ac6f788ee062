import pytest

from kv_facade.errors import MalformedContent
from kv_facade.extractor import extract_pre_text


def test_trims_whitespace():
    assert extract_pre_text("<pre> hello </pre>") == "hello"


def test_extracts_from_full_document():
    document = """
    <html>
      <body>
        <h1>Draft</h1>
        <pre>
    Chapter 1

    It was a dark night.
        </pre>
      </body>
    </html>
    """
    assert extract_pre_text(document) == "Chapter 1\n\n    It was a dark night."


def test_no_marker_yields_empty_text():
    assert extract_pre_text("<html><body>nothing here</body></html>") == ""
    assert extract_pre_text("") == ""


def test_unclosed_marker_is_malformed():
    with pytest.raises(MalformedContent):
        extract_pre_text("<pre>never closed")


def test_only_first_block_is_used():
    assert extract_pre_text("<pre>one</pre><pre>two</pre>") == "one"


def test_close_marker_before_open_is_ignored():
    assert extract_pre_text("</pre> junk <pre> kept </pre>") == "kept"


def test_tag_with_attributes_is_not_a_marker():
    assert extract_pre_text('<pre class="code">x</pre>') == ""


def test_empty_block():
    assert extract_pre_text("<pre>   </pre>") == ""
