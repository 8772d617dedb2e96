"""
Payment domain events.

Dataclass events record the semantic facts of request processing for
downstream handling (logging, metrics, projections). The domain stays free of
infrastructure imports; sinks decide how events are rendered.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
import uuid


@dataclass
class PaymentEvent:
    idempotency_key: str
    event_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    occurred_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def name(self) -> str:
        return type(self).__name__


@dataclass
class PaymentCreated(PaymentEvent):
    payment_id: str = ""
    order_id: str = ""
    amount_minor: int = 0
    currency: str = ""


@dataclass
class PaymentSettled(PaymentEvent):
    payment_id: str = ""
    status: str = ""
    message: str = ""


@dataclass
class PaymentReplayed(PaymentEvent):
    payment_id: str = ""


@dataclass
class IdempotencyConflictDetected(PaymentEvent):
    pass


@dataclass
class RequestInFlight(PaymentEvent):
    pass


@dataclass
class ReservationAbandoned(PaymentEvent):
    reason: str = ""
