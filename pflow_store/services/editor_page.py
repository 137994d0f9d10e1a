"""HTML shell for the pflow.dev metamodel editor."""

from __future__ import annotations

import json

PFLOW_JS_VERSION = "1.1.2"
PFLOW_JS_BASE = f"https://cdn.jsdelivr.net/gh/pflow-dev/pflow-js@{PFLOW_JS_VERSION}/p/static"
PFLOW_JS_BUNDLE = f"{PFLOW_JS_BASE}/js/main.5dc69f67.js"
PFLOW_CSS_BUNDLE = f"{PFLOW_JS_BASE}/css/main.63d515f3.css"

_PAGE = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="utf-8"/>
    <meta name="viewport" content="width=device-width,initial-scale=1"/>
    <title>pflow.dev | metamodel editor</title>
    <script>
        sessionStorage.cid = {cid};
        sessionStorage.data = {data}.replaceAll(' ', '+');
    </script>
    <script defer="defer" src="{bundle}"> </script>
    <link href="{css}" rel="stylesheet">
</head>
<body>
    <noscript>You need to enable JavaScript to run this app.</noscript>
    <div id="root"></div>
</body></html>
"""


def script_string(value: str) -> str:
    """Quote a value as a JS string literal that cannot close its <script> tag."""
    return (
        json.dumps(value)
        .replace("<", "\\u003c")
        .replace(">", "\\u003e")
        .replace("&", "\\u0026")
    )


def render_editor_page(cid: str, data: str) -> str:
    return _PAGE.format(
        cid=script_string(cid),
        data=script_string(data),
        bundle=PFLOW_JS_BUNDLE,
        css=PFLOW_CSS_BUNDLE,
    )
