"""
DocRegistry HTTP API.

Thin FastAPI dispatcher in front of a DocumentStore. Handlers translate
requests to store calls; every registry error is returned verbatim as
``{"error": {...}}`` with the status code carried by the error class.

Run with:
    uvicorn docregistry.api:app
"""

import json
import logging
from contextlib import asynccontextmanager
from typing import Any

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.responses import JSONResponse

from docregistry.config.settings import Settings, load_settings
from docregistry.errors import DocRegistryError, InvalidPayloadError, is_client_error
from docregistry.store import DocumentStore

logger = logging.getLogger("docregistry-api")


async def read_payload(request: Request) -> dict[str, Any]:
    """Request body as a dict of fields.

    The store owns validation, so a missing or non-object body becomes an
    empty payload and is rejected there as InvalidPayload.
    """
    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        payload = json.loads(raw)
    except ValueError as e:
        raise InvalidPayloadError(
            "Request body is not valid JSON", details={"body": "invalid_json"}, original_error=e
        ) from e
    return payload if isinstance(payload, dict) else {}


def get_store(request: Request) -> DocumentStore:
    """Dependency injection: the DocumentStore held by the application."""
    return request.app.state.store


router = APIRouter(prefix="/api/documents", tags=["documents"])


@router.post("", status_code=201)
def add_document(
    payload: dict[str, Any] = Depends(read_payload),
    store: DocumentStore = Depends(get_store),
):
    return store.add_document(payload.get("name"), payload.get("description")).to_response()


@router.get("")
def get_documents(store: DocumentStore = Depends(get_store)):
    return [doc.to_response() for doc in store.get_documents()]


@router.get("/search")
def find_documents(keyword: str | None = None, store: DocumentStore = Depends(get_store)):
    return [doc.to_response() for doc in store.find_documents(keyword)]


@router.get("/{doc_id}")
def get_document(doc_id: str, store: DocumentStore = Depends(get_store)):
    return store.get_document(doc_id).to_response()


@router.patch("/{doc_id}")
def update_document(
    doc_id: str,
    payload: dict[str, Any] = Depends(read_payload),
    store: DocumentStore = Depends(get_store),
):
    return store.update_document(
        doc_id, payload.get("name"), payload.get("description")
    ).to_response()


@router.delete("/{doc_id}")
def delete_document(doc_id: str, store: DocumentStore = Depends(get_store)):
    return store.delete_document(doc_id).to_response()


async def registry_error_handler(request: Request, exc: DocRegistryError) -> JSONResponse:
    if is_client_error(exc):
        logger.info(f"{request.method} {request.url.path} rejected: {exc.code}")
    else:
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
    return JSONResponse(status_code=exc.status_code, content={"error": exc.to_dict()})


def create_app(store: DocumentStore | None = None, settings: Settings | None = None) -> FastAPI:
    """Build the application.

    When ``store`` is given the caller owns it; otherwise one is created from
    ``settings`` at startup and closed at shutdown.
    """
    settings = settings or load_settings()

    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owns_store = store is None
        app.state.store = store if store is not None else DocumentStore.from_settings(settings)
        logger.info(f"DocRegistry started (env={settings.ENV}, backend={settings.STORE_BACKEND})")
        yield
        if owns_store:
            app.state.store.close()
            logger.info("DocRegistry store closed")

    app = FastAPI(
        title="DocRegistry",
        description="Minimal document registry",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.add_exception_handler(DocRegistryError, registry_error_handler)
    app.include_router(router)

    @app.get("/health")
    def health(store: DocumentStore = Depends(get_store)):
        return {"status": "ok", "documents": store.count()}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
