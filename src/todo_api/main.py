from __future__ import annotations

import logging
import uuid
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .errors import APIError, DecodeError, ParseError, StorageError
from .logging_utils import reset_request_id, set_request_id
from .routers import todos as todos_router
from .settings import Settings, get_settings
from .storage import Storage, get_storage

logger = logging.getLogger(__name__)

openapi_tags = [
    {"name": "health", "description": "Service health and status endpoints."},
    {"name": "todos", "description": "CRUD operations for Todo items."},
]


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    """
    Single adapter turning every APIError into the uniform JSON error body.

    Response format:
        {
            "error": "NotFound",
            "message": "todo 7 not found",
            "detail": null
        }
    """
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    else:
        logger.info("%s %s rejected: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Route FastAPI's request validation failures through the APIError adapter.
    Body problems become DecodeError; anything else (path, query) a ParseError.
    """
    errors = exc.errors()
    if any(e.get("loc", ("",))[0] == "body" for e in errors):
        err: APIError = DecodeError("Request body could not be decoded", detail=jsonable_encoder(errors))
    else:
        err = ParseError("Request parameters could not be parsed", detail=jsonable_encoder(errors))
    return await api_error_handler(request, err)


# PUBLIC_INTERFACE
def create_app(storage: Optional[Storage] = None, settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        storage: Storage backend to serve; defaults to the one selected by settings.
        settings: Application settings; defaults to get_settings().

    Returns:
        A configured FastAPI instance with the storage available on app.state.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Todo API",
        description="CRUD API for Todo items backed by a pluggable storage interface.",
        version="0.1.0",
        openapi_tags=openapi_tags,
    )
    app.state.settings = settings
    app.state.storage = storage if storage is not None else get_storage(settings)

    allow_all = (settings.cors_allow_origins == ["*"]) or (len(settings.cors_allow_origins) == 0)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if allow_all else settings.cors_allow_origins,
        allow_credentials=not allow_all,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    @app.middleware("http")
    async def request_id_middleware(request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        token = set_request_id(request_id)
        try:
            try:
                response = await call_next(request)
            except Exception:
                logger.exception("%s %s raised an unhandled error", request.method, request.url.path)
                response = await api_error_handler(request, StorageError("internal storage failure"))
            logger.info("%s %s -> %s", request.method, request.url.path, response.status_code)
        finally:
            reset_request_id(token)
        response.headers["X-Request-ID"] = request_id
        return response

    # PUBLIC_INTERFACE
    @app.get("/", summary="Health Check", tags=["health"])
    def health_check():
        """
        Health check endpoint.

        Returns:
            A JSON object indicating service health and the storage backend in use.
        """
        return {"message": "Healthy", "backend": app.state.storage.name}

    app.include_router(todos_router.router)
    return app


app = create_app()
