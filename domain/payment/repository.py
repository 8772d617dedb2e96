"""
Payment repository port - what the processor needs from payment storage.
"""
from abc import ABC, abstractmethod
from typing import Optional

from .entity import Payment, PaymentStatus


class PaymentRepository(ABC):
    """Keyed store of payment_id -> Payment.

    Creation is append-only and the only mutation is a status transition.
    Implementations must return copies; callers never hold live references to
    stored state.
    """

    @abstractmethod
    async def create(self, payment: Payment) -> None:
        """Store a new payment. Raises DuplicatePaymentIdException on collision."""

    @abstractmethod
    async def get(self, payment_id: str) -> Optional[Payment]:
        """Return the payment or None."""

    @abstractmethod
    async def update_status(self, payment_id: str, status: PaymentStatus, message: str) -> Payment:
        """Move a PENDING payment to a terminal status and return the new state.

        Raises IllegalStatusTransitionException for terminal payments and
        InvariantViolationException for unknown ids.
        """
