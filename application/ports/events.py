"""
Event sink port (application/ports).

The processor emits semantic events only; formatting and delivery belong to
the sink implementation chosen at the composition root.
"""
from __future__ import annotations

from typing import Protocol, runtime_checkable

from domain.payment.events import PaymentEvent


@runtime_checkable
class EventSink(Protocol):
    def emit(self, event: PaymentEvent) -> None: ...
