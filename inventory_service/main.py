from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from inventory_service.api.router import api_router
from inventory_service.core.config import Settings, get_settings
from inventory_service.core.errors import ApiError, UploadRejected
from inventory_service.services.photo_store import PhotoStore
from inventory_service.services.record_store import RecordStore


logger = logging.getLogger(__name__)

ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    loc = ".".join(str(p) for p in first.get("loc", ()) if p not in ("body", "query", "path"))
    msg = first.get("msg", "Invalid request")
    return f"{loc}: {msg}" if loc else msg


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the service app.

    Without explicit settings the configuration comes from the INVENTORY_*
    environment, so the function also works as a uvicorn factory:
    ``uvicorn --factory inventory_service.main:create_app``.
    """
    settings = settings or get_settings()
    app = FastAPI(title="Inventory Service", version="1.0")

    app.state.settings = settings
    app.state.record_store = RecordStore(settings)
    app.state.photo_store = PhotoStore(settings)

    @app.exception_handler(ApiError)
    async def api_error_handler(_request: Request, exc: ApiError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(UploadRejected)
    async def upload_rejected_handler(_request: Request, exc: UploadRejected) -> JSONResponse:
        logger.info("Upload rejected: %s", exc.message)
        return JSONResponse(status_code=400, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(_request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"error": _validation_message(exc)})

    @app.on_event("startup")
    async def startup() -> None:
        settings.ensure_directories()

    app.include_router(api_router)

    # Registered last: anything no route above claims, by path or by method.
    @app.api_route("/{path:path}", methods=ALL_METHODS, include_in_schema=False)
    async def method_not_allowed(path: str) -> JSONResponse:
        return JSONResponse(status_code=405, content={"error": "Method Not Allowed"})

    return app
