# backend/coachbook/errors.py
"""
Exception handlers producing the API's JSON error envelopes.

Every error body carries ``success: false`` and a ``message``; domain errors
add their ``code``, and rejected requests list every failed field under
``errors``.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .core.exceptions import DomainException, RequestValidationFailed, UnauthorizedException
from .utils.helpers import format_error_response

logger = logging.getLogger(__name__)


def _title_from_status(status_code: int) -> str:
    mapping = {
        400: "Bad Request",
        401: "Unauthorized",
        403: "Forbidden",
        404: "Not Found",
        405: "Method Not Allowed",
        409: "Conflict",
        422: "Unprocessable Entity",
        500: "Internal Server Error",
    }
    return mapping.get(status_code, "Error")


def _parse_detail(detail: Any) -> tuple[Optional[str], Optional[str]]:
    if isinstance(detail, dict):
        code = detail.get("code") if isinstance(detail.get("code"), str) else None
        message = detail.get("message") or detail.get("detail")
        return (message if isinstance(message, str) else None), code
    if isinstance(detail, str):
        return detail, None
    return None, None


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(RequestValidationFailed)
    async def request_validation_failed_handler(
        request: Request, exc: RequestValidationFailed
    ) -> JSONResponse:
        body: Dict[str, Any] = {
            "success": False,
            "message": exc.message,
            "errors": exc.error_list(),
        }
        return JSONResponse(body, status_code=status.HTTP_400_BAD_REQUEST)

    @app.exception_handler(DomainException)
    async def domain_exception_handler(request: Request, exc: DomainException) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, UnauthorizedException) else None
        return JSONResponse(
            format_error_response(exc.message, exc.code),
            status_code=exc.status_code,
            headers=headers,
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        message, code = _parse_detail(exc.detail)
        return JSONResponse(
            format_error_response(message or _title_from_status(exc.status_code), code),
            status_code=exc.status_code,
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        body = format_error_response("Validation failed", "validation_error")
        body["errors"] = jsonable_encoder(exc.errors())
        return JSONResponse(body, status_code=status.HTTP_400_BAD_REQUEST)

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return JSONResponse(
            format_error_response("Internal Server Error", "internal_server_error"),
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
