"""
Translation of store failures and validation errors into HTTP responses.
"""

import logging
from typing import NoReturn, Optional

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from implementation.classes.enums import StoreErrorKind
from implementation.classes.errors import StoreError

logger = logging.getLogger(__name__)


def raise_for_store_error(
    exc: StoreError,
    *,
    conflict: Optional[str] = None,
    referential: Optional[str] = None,
) -> NoReturn:
    """
    Re-raise a StoreError as the HTTPException the route expects.

    Duplicate keys become 409 when ``conflict`` is given, referential
    violations become 400 when ``referential`` is given. Any other kind is
    re-raised unchanged for the app-level handler.
    """
    if exc.kind is StoreErrorKind.DUPLICATE_KEY and conflict is not None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=conflict) from exc
    if exc.kind is StoreErrorKind.REFERENTIAL_VIOLATION and referential is not None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=referential) from exc
    raise exc


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report payload and path validation failures as 400 Bad Request."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors())},
    )


async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
    """Last-resort handler for store failures no route translated."""
    if exc.kind is StoreErrorKind.TRANSPORT:
        logger.error("Database unavailable during %s %s: %s", request.method, request.url.path, exc.message)
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"detail": "database unavailable"},
        )
    if exc.kind is StoreErrorKind.DUPLICATE_KEY:
        return JSONResponse(status_code=status.HTTP_409_CONFLICT, content={"detail": exc.message})
    if exc.kind is StoreErrorKind.NOT_FOUND:
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": exc.message})
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": exc.message})


def install_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StoreError, store_error_handler)
