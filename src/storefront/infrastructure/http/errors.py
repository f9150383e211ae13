"""Translate domain exceptions into HTTP responses.

Every error body has the shape ``{"message": ...}``.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from storefront.domain.exceptions import (
    ConflictError,
    DomainException,
    EntityNotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def status_for(exc: DomainException) -> int:
    if isinstance(exc, ValidationError):
        return 400
    if isinstance(exc, EntityNotFoundError):
        return 404
    if isinstance(exc, ConflictError):
        return 409
    return 500


def _describe(exc: RequestValidationError) -> str:
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        problems.append(f"{location}: {error.get('msg')}" if location else error.get("msg"))
    return "Invalid request: " + "; ".join(problems)


async def _domain_error(request: Request, exc: DomainException) -> JSONResponse:
    status = status_for(exc)
    if status == 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
        return JSONResponse(status_code=500, content={"message": "Internal server error"})
    return JSONResponse(status_code=status, content={"message": str(exc)})


async def _malformed_request(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"message": _describe(exc)})


async def _unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content={"message": "Internal server error"})


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainException, _domain_error)
    app.add_exception_handler(RequestValidationError, _malformed_request)
    app.add_exception_handler(Exception, _unexpected_error)
