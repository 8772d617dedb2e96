"""
Shared business codes used across layers (Domain/Application/Transport).

This package exposes BusinessCode at `shared.codes` as the single source of
truth, so gRPC and HTTP error mapping never drift apart.
"""
from enum import IntEnum


class BusinessCode(IntEnum):
    """Unified business status codes (single source of truth)."""

    # Success
    SUCCESS = 0

    # Parameter errors (1xxxx)
    PARAM_ERROR = 10000
    PARAM_MISSING = 10001
    PARAM_TYPE_ERROR = 10002
    PARAM_VALIDATION_ERROR = 10003

    # Business errors (2xxxx)
    BUSINESS_ERROR = 20000
    NOT_FOUND = 20006  # Generic resource not found

    # Payments (201xx)
    PAYMENT_NOT_FOUND = 20101
    IDEMPOTENCY_CONFLICT = 20110
    IDEMPOTENCY_IN_PROGRESS = 20111

    # System errors (4xxxx)
    SYSTEM_ERROR = 40000
    DATABASE_ERROR = 40001
    SERVICE_UNAVAILABLE = 40003
    INVARIANT_VIOLATION = 40004
    ID_COLLISION = 40005


__all__ = ["BusinessCode"]
