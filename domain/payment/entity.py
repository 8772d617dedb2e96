"""
Payment domain entities - the Payment aggregate and its request/response values.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import IntEnum
from typing import Optional

from domain.common.exceptions import IllegalStatusTransitionException


class PaymentStatus(IntEnum):
    """Payment status. Values are part of the wire contract."""
    UNSPECIFIED = 0  # caller default only, never persisted
    PENDING = 1
    SUCCEEDED = 2
    FAILED = 3

    @property
    def is_terminal(self) -> bool:
        return self in (PaymentStatus.SUCCEEDED, PaymentStatus.FAILED)


def _ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """Normalize a timestamp to UTC."""
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class PaymentRequest:
    """An incoming request to create a payment. Transient, never stored."""

    amount_minor: int
    currency: str
    order_id: str
    idempotency_key: str
    metadata: dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        if self.metadata is None:
            self.metadata = {}


@dataclass(frozen=True)
class PaymentResponse:
    """Outcome of RequestPayment; stored verbatim for replays."""

    payment_id: str
    status: PaymentStatus
    message: str
    idempotency_key: str
    created_at: datetime


@dataclass
class Payment:
    """
    Payment aggregate root.

    Business rules:
    1. payment_id is unique across the store
    2. created_at is set once at creation
    3. status only moves PENDING -> SUCCEEDED | FAILED; terminal is final
    """

    payment_id: str
    status: PaymentStatus
    amount_minor: int
    currency: str
    order_id: str
    idempotency_key: str
    created_at: datetime
    message: str = ""
    metadata: dict[str, str] = field(default_factory=dict)
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        self.created_at = _ensure_utc(self.created_at)
        self.updated_at = _ensure_utc(self.updated_at) or self.created_at
        if self.metadata is None:
            self.metadata = {}

    @classmethod
    def pending(
        cls,
        payment_id: str,
        request: PaymentRequest,
        created_at: datetime,
    ) -> "Payment":
        return cls(
            payment_id=payment_id,
            status=PaymentStatus.PENDING,
            amount_minor=request.amount_minor,
            currency=request.currency,
            order_id=request.order_id,
            idempotency_key=request.idempotency_key,
            created_at=created_at,
            message="payment pending",
            metadata=dict(request.metadata),
        )

    def is_final_status(self) -> bool:
        return self.status.is_terminal

    def transition_to(self, status: PaymentStatus, message: str) -> None:
        """
        Move a pending payment to a terminal status.

        Business rule: only PENDING -> SUCCEEDED | FAILED is allowed.
        """
        status = PaymentStatus(status)
        if self.status != PaymentStatus.PENDING or not status.is_terminal:
            raise IllegalStatusTransitionException(self.payment_id, self.status.name, status.name)
        self.status = status
        self.message = message
        self.updated_at = utcnow()

    def to_response(self) -> PaymentResponse:
        return PaymentResponse(
            payment_id=self.payment_id,
            status=self.status,
            message=self.message,
            idempotency_key=self.idempotency_key,
            created_at=self.created_at,
        )
