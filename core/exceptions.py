"""
HTTP exception handlers: map ServiceError categories onto HTTP statuses.
"""
from typing import Optional
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from fastapi.responses import JSONResponse
import uuid
from starlette import status as http_status

from .response import error_response
from application.error_mapper import ErrorCategory, ServiceError, error_mapper
from core.logging_config import get_logger
from core.settings import payment_settings
from shared.codes import BusinessCode


_HTTP_STATUS_BY_CATEGORY = {
    ErrorCategory.INVALID_ARGUMENT: http_status.HTTP_400_BAD_REQUEST,
    ErrorCategory.ALREADY_EXISTS: http_status.HTTP_409_CONFLICT,
    ErrorCategory.UNAVAILABLE: http_status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorCategory.NOT_FOUND: http_status.HTTP_404_NOT_FOUND,
    ErrorCategory.INTERNAL: http_status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def category_to_http_status(category: ErrorCategory) -> int:
    return _HTTP_STATUS_BY_CATEGORY.get(category, http_status.HTTP_500_INTERNAL_SERVER_ERROR)


def _request_id(request: Request) -> str:
    return getattr(getattr(request, "state", object()), "request_id", None) or str(uuid.uuid4())


def register_exception_handlers(app: FastAPI):
    """Register global exception handlers."""

    logger = get_logger(__name__)

    def _service_error_response(request: Request, error: ServiceError) -> JSONResponse:
        response = error_response(
            code=error.code,
            message=error.message,
            error_type=error.error_type,
            category=error.category.value,
            retryable=error.retryable,
            details=error.details,
            field=error.field,
            request_id=_request_id(request),
        )
        headers: Optional[dict] = None
        if error.category is ErrorCategory.UNAVAILABLE:
            headers = {"Retry-After": str(payment_settings.in_progress_retry_after_seconds)}
        return JSONResponse(
            status_code=category_to_http_status(error.category),
            content=response.model_dump(mode="json"),
            headers=headers,
        )

    @app.exception_handler(ServiceError)
    async def service_error_handler(request: Request, exc: ServiceError):
        logger.warning(
            "http_mapped_error",
            code=int(exc.code),
            category=exc.category.value,
            message=exc.message,
            request_id=_request_id(request),
        )
        return _service_error_response(request, exc)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        first_error = errors[0] if errors else {}
        field = ".".join(str(loc) for loc in first_error.get("loc", [])[1:])
        error = ServiceError(
            ErrorCategory.INVALID_ARGUMENT,
            BusinessCode.PARAM_VALIDATION_ERROR,
            f"{field}: {first_error.get('msg', 'invalid request')}" if field else first_error.get("msg", "invalid request"),
            "ValidationError",
            field=field or None,
        )
        return _service_error_response(request, error)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        code_mapping = {
            404: BusinessCode.NOT_FOUND,
            503: BusinessCode.SERVICE_UNAVAILABLE,
        }
        response = error_response(
            code=code_mapping.get(exc.status_code, BusinessCode.BUSINESS_ERROR),
            message=str(exc.detail),
            error_type="HTTPError",
            details={"status_code": exc.status_code},
            request_id=_request_id(request),
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=response.model_dump(mode="json"),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Anything not already translated becomes INTERNAL."""
        logger.error(
            "unhandled_exception",
            request_id=_request_id(request),
            error=str(exc),
            exc_info=True,
        )
        return _service_error_response(request, error_mapper.to_service_error(exc))
