from __future__ import annotations

from typing import Optional

import grpc

from application.factory import get_payment_processor
from application.services.payment_processor import PaymentProcessor
from grpc_app.generated.payments.v1 import payments_pb2, payments_pb2_grpc
from grpc_app.mappers.payment import payment_to_proto, request_from_proto, response_to_proto


class PaymentService(payments_pb2_grpc.PaymentServiceServicer):
    def __init__(self, processor: Optional[PaymentProcessor] = None) -> None:
        self._processor = processor or get_payment_processor()

    async def RequestPayment(self, request: payments_pb2.RequestPaymentRequest, context: grpc.aio.ServicerContext):  # type: ignore[override]
        resp = await self._processor.request_payment(request_from_proto(request))
        return response_to_proto(resp)

    async def GetPayment(self, request: payments_pb2.GetPaymentRequest, context: grpc.aio.ServicerContext):  # type: ignore[override]
        payment = await self._processor.get_payment(request.payment_id)
        return payments_pb2.PaymentReply(payment=payment_to_proto(payment))

    async def Health(self, request: payments_pb2.HealthRequest, context: grpc.aio.ServicerContext):  # type: ignore[override]
        status = await self._processor.health()
        return payments_pb2.HealthReply(status=status.status)
