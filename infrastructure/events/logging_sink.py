"""Event sinks that render payment events as structured log lines."""
from __future__ import annotations

import dataclasses
from datetime import datetime
from typing import List

from core.logging_config import get_logger
from domain.payment.events import (
    IdempotencyConflictDetected,
    PaymentEvent,
    ReservationAbandoned,
    RequestInFlight,
)


logger = get_logger("payments.events")

_WARNING_EVENTS = (IdempotencyConflictDetected, RequestInFlight, ReservationAbandoned)


def _event_fields(event: PaymentEvent) -> dict:
    fields = {}
    for f in dataclasses.fields(event):
        value = getattr(event, f.name)
        fields[f.name] = value.isoformat() if isinstance(value, datetime) else value
    return fields


class LoggingEventSink:
    def emit(self, event: PaymentEvent) -> None:
        log = logger.warning if isinstance(event, _WARNING_EVENTS) else logger.info
        log(event.name, **_event_fields(event))


class RecordingEventSink:
    """Keeps events in memory; handy for tests and local debugging."""

    def __init__(self) -> None:
        self.events: List[PaymentEvent] = []

    def emit(self, event: PaymentEvent) -> None:
        self.events.append(event)

    def of_type(self, event_type: type) -> List[PaymentEvent]:
        return [e for e in self.events if isinstance(e, event_type)]
