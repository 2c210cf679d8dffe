# blog_search/errors.py
"""
Exception handlers producing the ``{message, code}`` error envelope.

Domain exceptions carry their own status and code. Anything unexpected is
logged with its traceback and reported as a generic 500.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .core.exceptions import DomainException, RepositoryException

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Server error"


def _error_body(message: str, code: str, details: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    body: Dict[str, Any] = {"message": message, "code": code}
    if details:
        body["details"] = details
    return body


def _code_from_status(status_code: int) -> str:
    mapping = {
        400: "BAD_REQUEST",
        401: "AUTH_REQUIRED",
        403: "FORBIDDEN",
        404: "NOT_FOUND",
        405: "METHOD_NOT_ALLOWED",
        429: "TOO_MANY_REQUESTS",
    }
    return mapping.get(status_code, "SERVER_ERROR" if status_code >= 500 else "ERROR")


def _first_error_field(exc: RequestValidationError) -> Optional[str]:
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part not in ("query", "path", "body")]
        if loc:
            return ".".join(loc)
    return None


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(DomainException)
    async def domain_exception_handler(request: Request, exc: DomainException) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error(f"{exc.code} on {request.url.path}: {exc.message}")
            return JSONResponse(
                _error_body(GENERIC_ERROR_MESSAGE, exc.code), status_code=exc.status_code
            )
        headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
        return JSONResponse(
            _error_body(exc.message, exc.code, exc.details),
            status_code=exc.status_code,
            headers=headers,
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        message = exc.detail if isinstance(exc.detail, str) else GENERIC_ERROR_MESSAGE
        return JSONResponse(
            _error_body(message, _code_from_status(exc.status_code)),
            status_code=exc.status_code,
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        field = _first_error_field(exc)
        message = f"Invalid value for '{field}'" if field else "Invalid request"
        return JSONResponse(
            _error_body(message, "VALIDATION_ERROR", {"field": field} if field else None),
            status_code=400,
        )

    @app.exception_handler(RepositoryException)
    async def repository_exception_handler(
        request: Request, exc: RepositoryException
    ) -> JSONResponse:
        logger.error(f"Repository error on {request.url.path}: {str(exc)}")
        return JSONResponse(_error_body(GENERIC_ERROR_MESSAGE, "SERVER_ERROR"), status_code=500)

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error(f"Unhandled error on {request.url.path}: {str(exc)}", exc_info=exc)
        return JSONResponse(_error_body(GENERIC_ERROR_MESSAGE, "SERVER_ERROR"), status_code=500)
