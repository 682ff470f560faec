"""
Global error handling for the FastAPI application.
Domain exceptions map to one HTTP status per error kind; anything else is a 500.
"""

import logging
from typing import Any, Dict, List, Tuple, Type
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse
from fastapi import FastAPI, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError

from task_api.config import settings
from task_api.application.dto.base_dto import ErrorResponseDTO, ValidationErrorResponseDTO
from task_api.domain.models.base import (
    DomainException,
    EntityNotFoundError,
    ForbiddenError,
    InvalidArgumentError,
    ValidationError,
    AuthenticationError,
    ServiceUnavailableError,
    RemoteServiceError,
)

logger = logging.getLogger(__name__)


# Checked in order; subclasses before their bases
DOMAIN_ERROR_STATUS: List[Tuple[Type[DomainException], int, str]] = [
    (EntityNotFoundError, status.HTTP_404_NOT_FOUND, "Not Found"),
    (ForbiddenError, status.HTTP_403_FORBIDDEN, "Forbidden"),
    (ValidationError, status.HTTP_400_BAD_REQUEST, "Validation Error"),
    (InvalidArgumentError, status.HTTP_400_BAD_REQUEST, "Bad Request"),
    (AuthenticationError, status.HTTP_401_UNAUTHORIZED, "Unauthorized"),
    (ServiceUnavailableError, status.HTTP_503_SERVICE_UNAVAILABLE, "Service Unavailable"),
    (RemoteServiceError, status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error"),
]

HTTP_ERROR_NAMES: Dict[int, str] = {
    status.HTTP_400_BAD_REQUEST: "Bad Request",
    status.HTTP_401_UNAUTHORIZED: "Unauthorized",
    status.HTTP_403_FORBIDDEN: "Forbidden",
    status.HTTP_404_NOT_FOUND: "Not Found",
    status.HTTP_405_METHOD_NOT_ALLOWED: "Method Not Allowed",
}


def _json(status_code: int, body: ErrorResponseDTO, headers: Dict[str, str] = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(body.model_dump(exclude_none=True)),
        headers=headers,
    )


def format_domain_error(exc: DomainException) -> Tuple[int, ErrorResponseDTO]:
    """Map a domain exception to its HTTP status and error body."""
    status_code, error = status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error"
    for exc_type, mapped_status, mapped_error in DOMAIN_ERROR_STATUS:
        if isinstance(exc, exc_type):
            status_code, error = mapped_status, mapped_error
            break

    details = None
    if isinstance(exc, ValidationError) and exc.field:
        details = {"field": exc.field}

    return status_code, ErrorResponseDTO(
        error=error,
        message=exc.message,
        code=exc.code,
        details=details,
    )


async def domain_exception_handler(request: Request, exc: DomainException) -> JSONResponse:
    status_code, body = format_domain_error(exc)
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} -> {status_code}: {exc.message}")
    return _json(status_code, body)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    field_errors = [
        {
            "field": ".".join(str(part) for part in error.get("loc", ()) if part != "body"),
            "message": error.get("msg", "Invalid value"),
        }
        for error in exc.errors()
    ]
    body = ValidationErrorResponseDTO(
        error="Validation Error",
        message="Request validation failed",
        code="VALIDATION_ERROR",
        field_errors=field_errors,
    )
    return _json(status.HTTP_400_BAD_REQUEST, body)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
        message = f"The path {request.url.path} was not found"
    else:
        message = str(exc.detail)
    body = ErrorResponseDTO(
        error=HTTP_ERROR_NAMES.get(exc.status_code, "Error"),
        message=message,
        code=str(exc.status_code),
    )
    return _json(exc.status_code, body, headers=getattr(exc, "headers", None))


def register_exception_handlers(app: FastAPI) -> None:
    """Install the domain, validation and HTTP exception handlers."""
    app.add_exception_handler(DomainException, domain_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Middleware to handle all uncaught exceptions and format error responses.
    """

    async def dispatch(self, request: Request, call_next):
        """
        Process the request and handle any exceptions.
        """
        try:
            response = await call_next(request)
            return response
        except Exception as exc:
            return await self.handle_exception(request, exc)

    async def handle_exception(self, request: Request, exc: Exception) -> JSONResponse:
        """
        Log the exception and return a 500 without internals.
        """
        logger.error(
            f"Unhandled exception: {type(exc).__name__}: {str(exc)}",
            exc_info=True,
            extra={
                "request_path": request.url.path,
                "request_method": request.method,
                "client_host": request.client.host if request.client else None
            }
        )

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=self.format_error_response(exc)
        )

    def format_error_response(self, exc: Exception) -> Dict[str, Any]:
        """
        Format exception into a consistent error response structure.
        """
        error_response = jsonable_encoder(
            ErrorResponseDTO(
                error="Internal Server Error",
                message="An unexpected error occurred",
                code="INTERNAL_ERROR",
            ).model_dump(exclude_none=True)
        )

        # In debug mode, name the exception type
        if settings.debug:
            error_response["details"] = {"exception_type": type(exc).__name__}

        return error_response
