"""
HTML for the key viewer page served at `/`.

Keys are escaped before they are embedded; the page reads the key back from
a data attribute and URL-encodes it when requesting `/get-value/{key}`.
"""

import html
from typing import Iterable

WELCOME_TEXT = (
    "Welcome to the key-value app! Try visiting /set/:key/:value or /get/:key."
)

_PAGE_HEAD = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Key Viewer</title>
    <style>
        body { font-family: sans-serif; padding: 20px; text-align: center; }
        .button-container { margin-top: 20px; }
        .key-button {
            padding: 10px 15px;
            margin: 5px;
            cursor: pointer;
            background-color: #007bff;
            color: white;
            border: none;
            border-radius: 5px;
            font-size: 16px;
        }
        .key-button:hover { background-color: #0056b3; }
        #value-display {
            margin-top: 20px;
            border: 1px solid #ccc;
            padding: 15px;
            background-color: #f9f9f9;
            min-height: 50px;
            text-align: left;
            white-space: pre-wrap;
        }
        h1 { color: #333; }
    </style>
</head>
<body>
    <h1>Key Viewer</h1>
    <p>Click a button below to view its value.</p>
    <div class="button-container">
"""

_PAGE_TAIL = """    </div>
    <div id="value-display">Select a key to see its value here.</div>

    <script>
        async function loadValue(key) {
            const display = document.getElementById('value-display');
            display.innerText = 'Loading...';
            try {
                const response = await fetch('/get-value/' + encodeURIComponent(key));
                if (response.status === 404) {
                    display.innerText = 'Key not found.';
                    return;
                }
                if (!response.ok) {
                    throw new Error('Failed to fetch value');
                }
                const data = await response.json();
                display.innerText = data.value;
            } catch (error) {
                display.innerText = 'Error fetching value.';
                console.error(error);
            }
        }
    </script>
</body>
</html>
"""

EMPTY_STATE = (
    '        <p>No keys found. Try setting some at '
    '<a href="/set/mykey/myvalue">/set/mykey/myvalue</a> '
    'or by visiting <a href="/fetch-and-save">/fetch-and-save</a>.</p>\n'
)


def key_button(key: str) -> str:
    escaped = html.escape(key, quote=True)
    return (
        f'        <button class="key-button" data-key="{escaped}" '
        f'onclick="loadValue(this.dataset.key)">{escaped}</button>\n'
    )


def render_key_viewer(keys: Iterable[str]) -> str:
    buttons = "".join(key_button(k) for k in keys)
    return _PAGE_HEAD + (buttons or EMPTY_STATE) + _PAGE_TAIL
