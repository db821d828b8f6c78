"""
Exception handlers for the FastAPI app.

Register with ``register_exception_handlers(app)``.  Store failures
become an opaque 500 so raw database errors never reach a client, and
request body validation failures are reported as 400.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .config import settings
from .exceptions import DirectoryError, StoreError

logger = logging.getLogger(__name__)


def _store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
    logger.error("Store failure on %s %s: %s", request.method, request.url.path, exc.__cause__ or exc)
    detail = exc.message if settings.debug else "Internal server error"
    return JSONResponse(status_code=500, content={"detail": detail})


def _directory_error_handler(request: Request, exc: DirectoryError) -> JSONResponse:
    """Fallback for domain errors an endpoint did not translate itself."""
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


def _validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StoreError, _store_error_handler)
    app.add_exception_handler(DirectoryError, _directory_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
