"""Storage node HTTP service.

Exposes a BlobStore over HTTP:

    GET  /alive       liveness probe
    GET  /blob/{id}   fetch a blob
    POST /blob/{id}   store the request body as a blob
    GET  /blob        list stored blob IDs

Every other path and method gets a fixed 404.
"""

import logging
from typing import List

from fastapi import Depends, FastAPI, Request
from fastapi.responses import PlainTextResponse, Response
from fastapi.concurrency import run_in_threadpool

from .constants import ALIVE_BODY, INVALID_ID_BODY, MISSING_BODY, NOT_FOUND_BODY
from .errors import InvalidBlobIdError, StorageError
from .keys import is_safe_key
from .models import StoreResult
from .storage import BlobStore

logger = logging.getLogger(__name__)

_ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def get_store(request: Request) -> BlobStore:
    """Dependency returning the store the app was created with."""
    return request.app.state.store


def _invalid_id() -> Response:
    return PlainTextResponse(INVALID_ID_BODY, status_code=500)


def create_node_app(store: BlobStore) -> FastAPI:
    """Build the storage node application around an already set-up store."""
    app = FastAPI(
        title="sos blob server",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.store = store

    @app.get("/alive", response_class=PlainTextResponse)
    async def alive():
        return ALIVE_BODY

    @app.get("/blob/{blob_id}")
    async def get_blob(blob_id: str, store: BlobStore = Depends(get_store)):
        if not is_safe_key(blob_id):
            return _invalid_id()

        try:
            data = await run_in_threadpool(store.get, blob_id)
        except InvalidBlobIdError as e:
            logger.warning("%s", e)
            return _invalid_id()
        except StorageError as e:
            logger.error("%s", e)
            return PlainTextResponse(str(e), status_code=500)

        if data is None:
            return PlainTextResponse(NOT_FOUND_BODY, status_code=404)
        return Response(content=data, media_type="application/octet-stream")

    @app.post("/blob/{blob_id}")
    async def upload_blob(blob_id: str, request: Request, store: BlobStore = Depends(get_store)):
        if not is_safe_key(blob_id):
            return _invalid_id()

        data = await request.body()
        try:
            size = await run_in_threadpool(store.store, blob_id, data)
        except InvalidBlobIdError as e:
            logger.warning("%s", e)
            return _invalid_id()
        except StorageError as e:
            logger.error("%s", e)
            return PlainTextResponse(str(e), status_code=500)

        return StoreResult(id=blob_id, size=size)

    @app.get("/blob")
    async def list_blobs(store: BlobStore = Depends(get_store)) -> List[str]:
        return await run_in_threadpool(store.existing)

    # Registered last so it only catches what nothing above handles
    @app.api_route("/{path:path}", methods=_ALL_METHODS, include_in_schema=False)
    async def missing(path: str):
        return PlainTextResponse(MISSING_BODY, status_code=404)

    return app
