"""
Idempotency repository port.
"""
from abc import ABC, abstractmethod
from typing import Optional

from domain.payment.entity import PaymentResponse
from .entity import IdempotencyRecord, ReservationOutcome


class IdempotencyRepository(ABC):
    """Keyed record of idempotency key -> (fingerprint, state, result).

    `reserve` is the one correctness-critical operation: for concurrent calls
    bearing the same key exactly one caller may observe `Reserved`.
    """

    @abstractmethod
    async def reserve(self, key: str, fingerprint: str) -> ReservationOutcome:
        """Atomically claim `key` or describe the record already holding it."""

    @abstractmethod
    async def complete(self, key: str, result: PaymentResponse) -> None:
        """Mark an IN_PROGRESS record COMPLETED with `result`.

        Calling again with an equal result is a no-op. Raises
        IdempotencyRecordMissingException when no record exists and
        InvariantViolationException when a different result was stored.
        """

    @abstractmethod
    async def abandon(self, key: str) -> bool:
        """Drop an IN_PROGRESS record so the key can be reserved again.

        Returns False, changing nothing, for missing or COMPLETED records.
        """

    @abstractmethod
    async def get(self, key: str) -> Optional[IdempotencyRecord]:
        """Read-only view of the record for `key`."""
