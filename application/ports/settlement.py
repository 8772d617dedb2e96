"""
Settlement port (application/ports) exposing a replaceable protocol.

The processor asks a strategy for a terminal outcome of a freshly created
payment. No real money moves; implementations are simulations or test doubles.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from domain.payment.entity import Payment, PaymentStatus


@dataclass(frozen=True)
class SettlementDecision:
    status: PaymentStatus
    message: str

    def __post_init__(self):
        if not PaymentStatus(self.status).is_terminal:
            raise ValueError(f"settlement must be terminal, got {self.status!r}")

    @classmethod
    def succeeded(cls, message: str = "payment succeeded") -> "SettlementDecision":
        return cls(PaymentStatus.SUCCEEDED, message)

    @classmethod
    def failed(cls, message: str = "payment failed") -> "SettlementDecision":
        return cls(PaymentStatus.FAILED, message)


@runtime_checkable
class SettlementStrategy(Protocol):
    """Decides SUCCEEDED or FAILED for a pending payment."""

    async def decide(self, payment: Payment) -> SettlementDecision: ...
