"""
Payment DTOs (Pydantic v2) used at transport boundaries.

DTOs only check wire types. Business rules (positive amount, currency
allow-list and so on) belong to the domain validator, so that every
transport rejects a request with the same reason.
"""
from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, StrictInt, field_serializer

from domain.payment.entity import Payment, PaymentRequest, PaymentResponse, PaymentStatus
from shared.timefmt import iso_utc


class RequestPaymentIn(BaseModel):
    model_config = ConfigDict(extra="ignore")

    amount_minor: StrictInt = 0
    currency: str = ""
    order_id: str = ""
    idempotency_key: str = ""
    metadata: Optional[dict[str, str]] = None

    def to_domain(self) -> PaymentRequest:
        return PaymentRequest(
            amount_minor=self.amount_minor,
            currency=self.currency,
            order_id=self.order_id,
            idempotency_key=self.idempotency_key,
            metadata=dict(self.metadata or {}),
        )



class _StatusOut(BaseModel):
    status: PaymentStatus
    created_at: datetime

    @field_serializer("status")
    def _serialize_status(self, status: PaymentStatus) -> str:
        return PaymentStatus(status).name

    @field_serializer("created_at")
    def _serialize_created_at(self, created_at: datetime) -> str:
        return iso_utc(created_at)


class RequestPaymentOut(_StatusOut):
    payment_id: str
    message: str
    idempotency_key: str

    @classmethod
    def from_domain(cls, resp: PaymentResponse) -> "RequestPaymentOut":
        return cls(
            payment_id=resp.payment_id,
            status=resp.status,
            message=resp.message,
            idempotency_key=resp.idempotency_key,
            created_at=resp.created_at,
        )


class PaymentOut(_StatusOut):
    payment_id: str
    amount_minor: int
    currency: str
    order_id: str
    idempotency_key: str
    message: str

    @classmethod
    def from_domain(cls, payment: Payment) -> "PaymentOut":
        return cls(
            payment_id=payment.payment_id,
            status=payment.status,
            amount_minor=payment.amount_minor,
            currency=payment.currency,
            order_id=payment.order_id,
            idempotency_key=payment.idempotency_key,
            created_at=payment.created_at,
            message=payment.message,
        )
