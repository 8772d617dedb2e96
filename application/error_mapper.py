"""
Translate domain failures into the external error taxonomy.

Transports only ever see ServiceError; each one maps ErrorCategory onto its
own status codes (gRPC status, HTTP status).
"""
from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import ValidationError as PydanticValidationError

from domain.common.exceptions import (
    BusinessException,
    IdempotencyConflictException,
    IdempotencyInProgressException,
    InternalFailureException,
    PaymentNotFoundException,
    PaymentValidationException,
)
from shared.codes import BusinessCode


class ErrorCategory(str, Enum):
    INVALID_ARGUMENT = "INVALID_ARGUMENT"
    ALREADY_EXISTS = "ALREADY_EXISTS"
    UNAVAILABLE = "UNAVAILABLE"
    NOT_FOUND = "NOT_FOUND"
    INTERNAL = "INTERNAL"


INTERNAL_MESSAGE = "internal error"


class ServiceError(BusinessException):
    """A failure already placed in the external taxonomy."""

    def __init__(
        self,
        category: ErrorCategory,
        code: int,
        message: str,
        error_type: str,
        *,
        retryable: bool = False,
        details: Optional[dict] = None,
        field: Optional[str] = None,
    ) -> None:
        super().__init__(code=code, message=message, error_type=error_type, details=details, field=field)
        self.category = category
        self.retryable = retryable


_CATEGORY_BY_EXCEPTION: tuple[tuple[type, ErrorCategory], ...] = (
    (PaymentValidationException, ErrorCategory.INVALID_ARGUMENT),
    (IdempotencyConflictException, ErrorCategory.ALREADY_EXISTS),
    (IdempotencyInProgressException, ErrorCategory.UNAVAILABLE),
    (PaymentNotFoundException, ErrorCategory.NOT_FOUND),
    (InternalFailureException, ErrorCategory.INTERNAL),
)


def _pydantic_message(exc: PydanticValidationError) -> tuple[str, Optional[str]]:
    errors = exc.errors()
    first = errors[0] if errors else {}
    field = ".".join(str(loc) for loc in first.get("loc", ())) or None
    reason = first.get("msg", "invalid request")
    return (f"{field}: {reason}" if field else reason), field


class ErrorMapper:
    def category_of(self, exc: BaseException) -> ErrorCategory:
        for exc_type, category in _CATEGORY_BY_EXCEPTION:
            if isinstance(exc, exc_type):
                return category
        if isinstance(exc, PydanticValidationError):
            return ErrorCategory.INVALID_ARGUMENT
        return ErrorCategory.INTERNAL

    def to_service_error(self, exc: BaseException) -> ServiceError:
        if isinstance(exc, ServiceError):
            return exc

        category = self.category_of(exc)

        if isinstance(exc, PydanticValidationError):
            message, field = _pydantic_message(exc)
            return ServiceError(
                category,
                BusinessCode.PARAM_VALIDATION_ERROR,
                message,
                "ValidationError",
                field=field,
            )

        if isinstance(exc, BusinessException) and category is not ErrorCategory.INTERNAL:
            return ServiceError(
                category,
                exc.code,
                exc.message,
                exc.error_type,
                retryable=category is ErrorCategory.UNAVAILABLE,
                details=exc.details,
                field=exc.field,
            )

        # Internal details stay in the logs, never in the response
        code = exc.code if isinstance(exc, InternalFailureException) else BusinessCode.SYSTEM_ERROR
        return ServiceError(ErrorCategory.INTERNAL, code, INTERNAL_MESSAGE, "InternalFailure")


error_mapper = ErrorMapper()
