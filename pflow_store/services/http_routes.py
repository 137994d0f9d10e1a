from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import Request
from fastapi.responses import HTMLResponse, RedirectResponse, Response

from ..db import Storage
from ..models import Zblob, ZblobMetadata, parse_keywords
from . import archive_codec
from .content_hasher import compute_text_cid, is_cid
from .editor_page import render_editor_page

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json; charset=utf-8"


def register_http_routes(app: Any) -> None:
    register_redirect_routes(app)
    register_model_routes(app)
    register_source_routes(app)


def _storage(request: Request) -> tuple[Storage, str]:
    return request.app.state.storage, request.app.state.collection


def _metadata_from_request(request: Request) -> ZblobMetadata:
    params = request.query_params
    return ZblobMetadata(
        title=params.get("title", ""),
        description=params.get("description", ""),
        keywords=parse_keywords(params.get("keywords")),
        referrer=request.headers.get("referer", ""),
    )


def store_blob(request: Request, text_blob: str) -> Zblob:
    """Hash the blob as received and store it under its CID."""
    storage, collection = _storage(request)
    cid = compute_text_cid(text_blob)
    return storage.create_or_retrieve(
        collection,
        cid,
        text_blob,
        _metadata_from_request(request),
    )


def lookup_blob(request: Request, cid: str) -> Optional[Zblob]:
    if not is_cid(cid):
        logger.debug("Ignoring malformed cid %r", cid)
        return None
    storage, collection = _storage(request)
    return storage.get_by_cid(collection, cid)


def model_source(request: Request, cid: str) -> bytes:
    """Decoded model.json for a cid, or an empty document."""
    zblob = lookup_blob(request, cid)
    if zblob is None:
        return b""
    return archive_codec.decode(zblob.payload, archive_codec.MODEL_ENTRY)


def editor_response(cid: str, data: str) -> HTMLResponse:
    return HTMLResponse(render_editor_page(cid, data))


def register_redirect_routes(app: Any) -> None:
    @app.get("/")
    def root_redirect():
        return RedirectResponse("/p/", status_code=303)

    @app.get("/p")
    def editor_redirect():
        return RedirectResponse("/p/", status_code=303)


def register_model_routes(app: Any) -> None:
    @app.get("/p/")
    def index_handler(request: Request, z: Optional[str] = None):
        if not z:
            return editor_response("", "")
        zblob = store_blob(request, z)
        return RedirectResponse(f"/p/{zblob.cid}/", status_code=308)

    @app.get("/p/{cid}/")
    def model_handler(cid: str, request: Request, z: Optional[str] = None):
        if z:
            zblob = store_blob(request, z)
            return RedirectResponse(f"/p/{zblob.cid}/", status_code=302)

        zblob = lookup_blob(request, cid)
        if zblob is None:
            return editor_response("", "")
        return editor_response(zblob.cid, zblob.payload)


def register_source_routes(app: Any) -> None:
    @app.get("/src/{cid}.json")
    def src_handler(cid: str, request: Request):
        return Response(model_source(request, cid), media_type=JSON_CONTENT_TYPE)

    # Rendering is not implemented server-side; the image route serves the source.
    @app.get("/img/{cid}.svg")
    def img_handler(cid: str, request: Request):
        return Response(model_source(request, cid), media_type=JSON_CONTENT_TYPE)
