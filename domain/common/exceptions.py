"""Domain-level business exceptions, shared by domain and infrastructure.

The application layer translates these into the external taxonomy; domain code
never depends on transport status codes.
"""
from __future__ import annotations

from typing import Optional
from shared.codes import BusinessCode


class BusinessException(Exception):
    """Base class for business exceptions."""

    def __init__(
        self,
        code: int,
        message: str,
        error_type: str = "BusinessError",
        details: Optional[dict] = None,
        field: Optional[str] = None,
    ) -> None:
        self.code = code
        self.message = message
        self.error_type = error_type
        self.details = details
        self.field = field
        super().__init__(self.message)


class PaymentValidationException(BusinessException):
    def __init__(self, message: str, *, field: str | None = None):
        super().__init__(
            code=BusinessCode.PARAM_VALIDATION_ERROR,
            message=message,
            error_type="ValidationError",
            field=field,
        )


class IdempotencyConflictException(BusinessException):
    def __init__(self, idempotency_key: str):
        super().__init__(
            code=BusinessCode.IDEMPOTENCY_CONFLICT,
            message="idempotency key reused with different payload",
            error_type="IdempotencyConflict",
            details={"idempotency_key": idempotency_key},
            field="idempotency_key",
        )


class IdempotencyInProgressException(BusinessException):
    def __init__(self, idempotency_key: str):
        super().__init__(
            code=BusinessCode.IDEMPOTENCY_IN_PROGRESS,
            message="request with this key is currently being processed; retry",
            error_type="IdempotencyInProgress",
            details={"idempotency_key": idempotency_key},
            field="idempotency_key",
        )


class PaymentNotFoundException(BusinessException):
    def __init__(self, payment_id: str):
        super().__init__(
            code=BusinessCode.PAYMENT_NOT_FOUND,
            message=f"payment not found: {payment_id}",
            error_type="NotFound",
            details={"payment_id": payment_id},
        )


class InternalFailureException(BusinessException):
    """Storage failures, id collisions and invariant violations.

    These indicate a defect or an infrastructure fault, never a caller mistake.
    """

    def __init__(
        self,
        message: str,
        *,
        code: int = BusinessCode.SYSTEM_ERROR,
        error_type: str = "InternalFailure",
        details: Optional[dict] = None,
    ):
        super().__init__(code=code, message=message, error_type=error_type, details=details)


class InvariantViolationException(InternalFailureException):
    def __init__(self, message: str, *, details: Optional[dict] = None):
        super().__init__(
            message,
            code=BusinessCode.INVARIANT_VIOLATION,
            error_type="InvariantViolation",
            details=details,
        )


class IllegalStatusTransitionException(InvariantViolationException):
    def __init__(self, payment_id: str, current: str, target: str):
        super().__init__(
            f"illegal status transition {current} -> {target} for payment {payment_id}",
            details={"payment_id": payment_id, "current": current, "target": target},
        )


class IdempotencyRecordMissingException(InvariantViolationException):
    def __init__(self, idempotency_key: str):
        super().__init__(
            f"no in-progress idempotency record for key {idempotency_key}",
            details={"idempotency_key": idempotency_key},
        )


class DuplicatePaymentIdException(InternalFailureException):
    def __init__(self, payment_id: str):
        super().__init__(
            f"payment_id collision: {payment_id}",
            code=BusinessCode.ID_COLLISION,
            error_type="DuplicatePaymentId",
            details={"payment_id": payment_id},
        )
