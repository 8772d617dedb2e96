"""
Request validation for RequestPayment.

Rules run in a fixed order and the first failure wins, so a given request is
always rejected with the same reason.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import AbstractSet, Optional

from .entity import PaymentRequest


# Common ISO-4217 currencies (extend via PAYMENT__ALLOWED_CURRENCIES)
ISO_4217: frozenset[str] = frozenset({
    "USD", "EUR", "GBP", "CNY", "JPY", "KRW", "HKD", "AUD", "CAD", "SGD",
    "CHF", "SEK", "NOK", "DKK", "NZD", "INR", "BRL", "MXN", "ZAR", "PLN",
})


@dataclass(frozen=True)
class ValidationResult:
    ok: bool
    field: Optional[str] = None
    message: Optional[str] = None

    @classmethod
    def valid(cls) -> "ValidationResult":
        return cls(ok=True)

    @classmethod
    def invalid(cls, field: str, message: str) -> "ValidationResult":
        return cls(ok=False, field=field, message=message)


def _is_currency_code(value: object) -> bool:
    return (
        isinstance(value, str)
        and len(value) == 3
        and value.isascii()
        and value.isalpha()
        and value.isupper()
    )


def validate(
    request: PaymentRequest,
    allowed_currencies: AbstractSet[str] = ISO_4217,
) -> ValidationResult:
    if not request.idempotency_key:
        return ValidationResult.invalid("idempotency_key", "idempotency_key required")

    amount = request.amount_minor
    # bool is an int subclass; True must not pass as 1
    if isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
        return ValidationResult.invalid("amount_minor", "amount must be positive")

    if not _is_currency_code(request.currency) or request.currency not in allowed_currencies:
        return ValidationResult.invalid("currency", "invalid currency")

    if not request.order_id:
        return ValidationResult.invalid("order_id", "order_id required")

    return ValidationResult.valid()
