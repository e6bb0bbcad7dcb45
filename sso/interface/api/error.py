"""HTTP mapping for errors that escape route handlers."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from sso.domain.error import DomainError, NotFoundError, StorageError

logger = logging.getLogger(__name__)


async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)}
    )


async def storage_error_handler(request: Request, exc: StorageError) -> JSONResponse:
    logger.error(f"Storage error on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Storage unavailable"},
    )


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    logger.warning(f"Unhandled domain error on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST, content={"detail": str(exc)}
    )


def register_error_handlers(app: FastAPI) -> None:
    """Register domain error handlers.

    The most specific handler for an exception's class wins.
    """
    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(StorageError, storage_error_handler)
    app.add_exception_handler(DomainError, domain_error_handler)
