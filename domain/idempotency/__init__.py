"""Idempotency domain exports."""
from .entity import (
    AlreadyCompleted,
    Conflict,
    IdempotencyRecord,
    InProgress,
    RecordState,
    ReservationOutcome,
    Reserved,
    fingerprint,
)
from .repository import IdempotencyRepository

__all__ = [
    "AlreadyCompleted",
    "Conflict",
    "IdempotencyRecord",
    "IdempotencyRepository",
    "InProgress",
    "RecordState",
    "ReservationOutcome",
    "Reserved",
    "fingerprint",
]
