from __future__ import annotations

import logging
import time

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .config import DEFAULT_COLLECTION
from .db import Storage
from .errors import InvalidInputError, StorageError
from .services.http_routes import register_http_routes

logger = logging.getLogger(__name__)


def create_app(storage: Storage, collection: str = DEFAULT_COLLECTION) -> FastAPI:
    """Build the HTTP app around an already opened store."""
    app = FastAPI(title="pflow-store", docs_url=None, redoc_url=None, openapi_url=None)
    app.state.storage = storage
    app.state.collection = collection

    @app.middleware("http")
    async def trace_requests(request: Request, call_next):
        started = time.perf_counter()
        status = 500
        try:
            response = await call_next(request)
            status = response.status_code
            return response
        finally:
            logger.info(
                "%s %s -> %s (%.1f ms)",
                request.method,
                request.url.path,
                status,
                (time.perf_counter() - started) * 1000,
            )

    @app.exception_handler(StorageError)
    async def storage_error_handler(request: Request, exc: StorageError):
        logger.error("Storage failure serving %s: %s", request.url.path, exc)
        return JSONResponse(status_code=503, content={"detail": "Storage unavailable"})

    @app.exception_handler(InvalidInputError)
    async def invalid_input_handler(request: Request, exc: InvalidInputError):
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    register_http_routes(app)
    return app
