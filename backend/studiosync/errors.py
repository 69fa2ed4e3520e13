import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from .core.config import settings
from .core.exceptions import DomainException, ErrorCode, RepositoryException

logger = logging.getLogger(__name__)

_HTTP_STATUS_CODES = {
    400: ErrorCode.VALIDATION_ERROR,
    401: ErrorCode.UNAUTHORIZED,
    403: ErrorCode.FORBIDDEN,
    404: ErrorCode.NOT_FOUND,
    405: ErrorCode.METHOD_NOT_ALLOWED,
    409: ErrorCode.DUPLICATE_ENTRY,
    422: ErrorCode.VALIDATION_ERROR,
    429: ErrorCode.RATE_LIMITED,
    503: ErrorCode.SERVICE_UNAVAILABLE,
}


def _envelope(
    *,
    error: str,
    code: ErrorCode,
    details: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    body: Dict[str, Any] = {"success": False, "error": error, "code": code.value}
    if details:
        body["details"] = jsonable_encoder(details)
    return body


def _validation_response(errors: Any) -> JSONResponse:
    return JSONResponse(
        _envelope(
            error="Request validation failed",
            code=ErrorCode.VALIDATION_ERROR,
            details={"errors": jsonable_encoder(errors)},
        ),
        status_code=422,
    )


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(DomainException)
    async def domain_exception_handler(request: Request, exc: DomainException) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        return JSONResponse(
            _envelope(error=exc.message, code=exc.code, details=exc.details),
            status_code=exc.status_code,
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        code = _HTTP_STATUS_CODES.get(exc.status_code, ErrorCode.INTERNAL_ERROR)
        detail = exc.detail if isinstance(exc.detail, str) else "Request failed"
        if exc.status_code == 404 and detail == "Not Found":
            detail = f"Route {request.method} {request.url.path} not found"
        return JSONResponse(
            _envelope(error=detail, code=code),
            status_code=exc.status_code,
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return _validation_response(exc.errors())

    @app.exception_handler(ValidationError)
    async def validation_exception_handler(request: Request, exc: ValidationError) -> JSONResponse:
        return _validation_response(exc.errors())

    @app.exception_handler(IntegrityError)
    async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
        logger.warning(f"Integrity error on {request.method} {request.url.path}: {exc.orig}")
        return JSONResponse(
            _envelope(error="Duplicate entry", code=ErrorCode.DUPLICATE_ENTRY),
            status_code=409,
        )

    @app.exception_handler(RepositoryException)
    async def repository_exception_handler(
        request: Request, exc: RepositoryException
    ) -> JSONResponse:
        logger.error(f"Repository error on {request.method} {request.url.path}: {exc}")
        return JSONResponse(
            _envelope(error="Internal server error", code=ErrorCode.INTERNAL_ERROR),
            status_code=500,
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        message = str(exc) if settings.is_development else "Internal server error"
        return JSONResponse(
            _envelope(error=message, code=ErrorCode.INTERNAL_ERROR),
            status_code=500,
        )
