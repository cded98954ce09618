"""Global exception handlers for FastAPI application.

Every error leaves the API as an RFC 7807 Problem Details document.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from doease.core.database import NotFoundError
from doease.core.exceptions import AppException
from doease.core.schemas.problem_details import ProblemDetails

logger = logging.getLogger(__name__)


def _get_request_id(request: Request) -> str | None:
    return getattr(request.state, "request_id", None)


def _problem_response(
    request: Request,
    status_code: int,
    detail: str,
    type_: str = "about:blank",
    title: str | None = None,
    instance: str | None = None,
    extra: dict[str, Any] | None = None,
) -> JSONResponse:
    problem = ProblemDetails(
        type=type_,
        title=title or AppException._default_title(status_code),
        status=status_code,
        detail=detail,
        instance=instance or request.url.path,
        **(extra or {}),
    )
    content = problem.to_response_content()

    request_id = _get_request_id(request)
    if request_id:
        content["request_id"] = request_id

    return JSONResponse(
        status_code=status_code,
        content=content,
        media_type="application/problem+json",
    )


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Convert AppException instances into problem responses."""
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        "Application exception occurred",
        extra={
            "path": request.url.path,
            "method": request.method,
            "exception_type": exc.type,
            "status_code": exc.status_code,
            "detail": exc.detail,
        },
    )
    return _problem_response(
        request,
        exc.status_code,
        exc.detail,
        type_=exc.type,
        title=exc.title,
        instance=exc.instance,
        extra=exc.extra,
    )


async def not_found_error_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    """Repository lookups that miss become 404s."""
    logger.info(
        "Resource not found",
        extra={"path": request.url.path, "model": exc.model_name},
    )
    return _problem_response(
        request,
        status.HTTP_404_NOT_FOUND,
        f"{exc.model_name} not found",
        type_="not-found",
        title="Not Found",
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Convert request validation errors with field-level detail."""
    errors = [
        {
            "field": ".".join(str(loc) for loc in error["loc"]),
            "message": error["msg"],
            "type": error["type"],
        }
        for error in exc.errors()
    ]
    logger.warning(
        "Request validation failed",
        extra={
            "path": request.url.path,
            "method": request.method,
            "error_count": len(errors),
        },
    )
    return _problem_response(
        request,
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        f"Request validation failed for {len(errors)} field(s)",
        type_="validation-error",
        title="Validation Error",
        extra={"errors": errors},
    )


async def database_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Persistence failures propagate to here and become 500s."""
    logger.error(
        "Database error",
        extra={
            "path": request.url.path,
            "method": request.method,
            "exception_type": type(exc).__name__,
        },
        exc_info=exc,
    )
    return _problem_response(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "A database error occurred while processing your request",
        type_="database-error",
        title="Internal Server Error",
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all for exceptions without a specific handler."""
    logger.error(
        "Unexpected exception occurred",
        extra={
            "path": request.url.path,
            "method": request.method,
            "exception_type": type(exc).__name__,
            "exception_message": str(exc),
        },
        exc_info=exc,
    )
    return _problem_response(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "An unexpected error occurred while processing your request",
        type_="internal-error",
        title="Internal Server Error",
    )


def configure_exception_handlers(app: FastAPI) -> None:
    """Register the problem-details handlers on the application."""
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(NotFoundError, not_found_error_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(SQLAlchemyError, database_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    logger.debug("Exception handlers configured")
