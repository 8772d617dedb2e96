from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from google.protobuf import timestamp_pb2

from domain.payment.entity import Payment, PaymentRequest, PaymentResponse
from grpc_app.generated.payments.v1 import payments_pb2


def _to_timestamp(dt: Optional[datetime]) -> Optional[timestamp_pb2.Timestamp]:
    if dt is None:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    ts = timestamp_pb2.Timestamp()
    ts.FromDatetime(dt.astimezone(timezone.utc))
    return ts


def request_from_proto(msg: payments_pb2.RequestPaymentRequest) -> PaymentRequest:
    return PaymentRequest(
        amount_minor=int(msg.amount_minor),
        currency=msg.currency,
        order_id=msg.order_id,
        idempotency_key=msg.idempotency_key,
        metadata=dict(msg.metadata),
    )


def response_to_proto(resp: PaymentResponse) -> payments_pb2.RequestPaymentReply:
    reply = payments_pb2.RequestPaymentReply(
        payment_id=resp.payment_id,
        status=int(resp.status),
        message=resp.message,
        idempotency_key=resp.idempotency_key,
    )
    ts = _to_timestamp(resp.created_at)
    if ts:
        reply.created_at.CopyFrom(ts)
    return reply


def payment_to_proto(payment: Payment) -> payments_pb2.Payment:
    msg = payments_pb2.Payment(
        payment_id=payment.payment_id,
        status=int(payment.status),
        amount_minor=payment.amount_minor,
        currency=payment.currency,
        order_id=payment.order_id,
        idempotency_key=payment.idempotency_key,
        message=payment.message,
        metadata=dict(payment.metadata),
    )
    ts = _to_timestamp(payment.created_at)
    if ts:
        msg.created_at.CopyFrom(ts)
    return msg
