"""
Composition root for the payment processor.

Transports call `get_payment_processor()` to share one processor (and its
stores) per process; tests build their own with `build_payment_processor`.
"""
from __future__ import annotations

from typing import Optional

from application.ports.events import EventSink
from application.services.payment_processor import PaymentProcessor, default_payment_id_factory
from core.logging_config import get_logger
from core.settings import PaymentSettings, payment_settings
from infrastructure.events.logging_sink import LoggingEventSink
from infrastructure.repositories.idempotency_repository import InMemoryIdempotencyRepository
from infrastructure.repositories.payment_repository import InMemoryPaymentRepository
from infrastructure.settlement import RuleBasedSettlement


logger = get_logger(__name__)

_processor: Optional[PaymentProcessor] = None


def build_payment_processor(
    config: PaymentSettings = payment_settings,
    *,
    events: Optional[EventSink] = None,
) -> PaymentProcessor:
    settlement = RuleBasedSettlement(
        config.failure_rules,
        success_message=config.success_message,
        delay_ms=config.settlement_delay_ms,
    )
    processor = PaymentProcessor(
        payments=InMemoryPaymentRepository(),
        idempotency=InMemoryIdempotencyRepository(),
        settlement=settlement,
        events=events if events is not None else LoggingEventSink(),
        id_factory=default_payment_id_factory(config.payment_id_prefix),
        allowed_currencies=set(config.allowed_currencies),
        complete_attempts=config.complete_max_attempts,
        complete_retry_delay=config.complete_retry_delay_ms / 1000,
    )
    logger.info(
        "payment_processor_built",
        backend="memory",
        currencies=len(config.allowed_currencies),
        failure_rules=len(config.failure_rules),
    )
    return processor


def get_payment_processor() -> PaymentProcessor:
    global _processor
    if _processor is None:
        _processor = build_payment_processor()
    return _processor


def set_payment_processor(processor: Optional[PaymentProcessor]) -> None:
    """Replace the process-wide processor (None resets it)."""
    global _processor
    _processor = processor
