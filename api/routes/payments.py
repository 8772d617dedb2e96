"""
Payments API routes.

HTTP mirror of the gRPC PaymentService. Keep this thin: the processor owns
validation, idempotency and error translation.
"""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Header

from api.dependencies import get_processor
from application.dtos.payments import PaymentOut, RequestPaymentIn, RequestPaymentOut
from application.services.payment_processor import PaymentProcessor
from core.response import success_response


router = APIRouter(prefix="/payments", tags=["Payments"])


@router.post("")
async def request_payment(
    body: RequestPaymentIn,
    idempotency_key: Optional[str] = Header(default=None, alias="Idempotency-Key"),
    processor: PaymentProcessor = Depends(get_processor),
):
    # The body wins; the header is a convenience for HTTP clients
    if not body.idempotency_key and idempotency_key:
        body = body.model_copy(update={"idempotency_key": idempotency_key})
    resp = await processor.request_payment(body.to_domain())
    return success_response(data=RequestPaymentOut.from_domain(resp), message=resp.message)


@router.get("/{payment_id}")
async def get_payment(
    payment_id: str,
    processor: PaymentProcessor = Depends(get_processor),
):
    payment = await processor.get_payment(payment_id)
    return success_response(data=PaymentOut.from_domain(payment), message=payment.message)
