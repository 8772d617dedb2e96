"""In-memory implementation of PaymentRepository.

Payments are keyed by a freshly generated payment_id, so writes from
different requests never touch the same entry and need no cross-request
locking. Stored objects never leave the repository; callers get copies.
"""
from __future__ import annotations

import copy
from typing import Dict, Optional

from domain.common.exceptions import DuplicatePaymentIdException, InvariantViolationException
from domain.payment.entity import Payment, PaymentStatus
from domain.payment.repository import PaymentRepository


class InMemoryPaymentRepository(PaymentRepository):
    def __init__(self) -> None:
        self._payments: Dict[str, Payment] = {}

    async def create(self, payment: Payment) -> None:  # type: ignore[override]
        if payment.payment_id in self._payments:
            raise DuplicatePaymentIdException(payment.payment_id)
        if payment.status != PaymentStatus.PENDING:
            raise InvariantViolationException(
                "payments must be created PENDING",
                details={"payment_id": payment.payment_id, "status": payment.status.name},
            )
        self._payments[payment.payment_id] = copy.deepcopy(payment)

    async def get(self, payment_id: str) -> Optional[Payment]:  # type: ignore[override]
        payment = self._payments.get(payment_id)
        return copy.deepcopy(payment) if payment is not None else None

    async def update_status(self, payment_id: str, status: PaymentStatus, message: str) -> Payment:  # type: ignore[override]
        payment = self._payments.get(payment_id)
        if payment is None:
            raise InvariantViolationException(
                f"cannot update unknown payment {payment_id}",
                details={"payment_id": payment_id},
            )
        # Raises IllegalStatusTransitionException before anything changes
        payment.transition_to(status, message)
        return copy.deepcopy(payment)

    def __len__(self) -> int:
        return len(self._payments)
