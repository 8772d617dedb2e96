"""
Idempotency records and reservation outcomes.

A record ties an idempotency key to the fingerprint of the request that first
claimed it, and, once processing finishes, to the response returned to every
replay of that request.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional, Union
import hashlib
import json

from domain.payment.entity import PaymentRequest, PaymentResponse


class RecordState(str, Enum):
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


@dataclass(frozen=True)
class IdempotencyRecord:
    key: str
    fingerprint: str
    state: RecordState
    result: Optional[PaymentResponse] = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    completed_at: Optional[datetime] = None


def fingerprint(request: PaymentRequest) -> str:
    """Stable digest of the fields that must match on replay.

    Metadata is informational and deliberately left out. A JSON array keeps
    field boundaries unambiguous ("a|b" + "c" never equals "a" + "b|c").
    """
    canonical = json.dumps(
        [request.amount_minor, request.currency, request.order_id],
        separators=(",", ":"),
        ensure_ascii=False,
    )
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()


# Reservation outcomes --------------------------------------------------------

@dataclass(frozen=True)
class Reserved:
    """The caller owns the key and must complete or abandon it."""
    record: IdempotencyRecord


@dataclass(frozen=True)
class Conflict:
    """The key was claimed by a different logical request."""
    existing_fingerprint: str


@dataclass(frozen=True)
class AlreadyCompleted:
    """True replay; return the stored result verbatim."""
    result: PaymentResponse


@dataclass(frozen=True)
class InProgress:
    """A request with the same key and payload is still being processed."""
    started_at: datetime


ReservationOutcome = Union[Reserved, Conflict, AlreadyCompleted, InProgress]
