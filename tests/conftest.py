"""Pytest bootstrap configuration and shared fixtures.

Every test gets fresh stores, so processors never share state across tests.
"""
import os

# Keep log output plain and predictable under pytest
os.environ.setdefault("DEBUG", "false")

import pytest

from application.services.payment_processor import PaymentProcessor
from domain.payment.entity import PaymentRequest
from infrastructure.events.logging_sink import RecordingEventSink
from infrastructure.repositories.idempotency_repository import InMemoryIdempotencyRepository
from infrastructure.repositories.payment_repository import InMemoryPaymentRepository
from infrastructure.settlement import AlwaysSucceedSettlement


@pytest.fixture
def sink() -> RecordingEventSink:
    return RecordingEventSink()


@pytest.fixture
def payments() -> InMemoryPaymentRepository:
    return InMemoryPaymentRepository()


@pytest.fixture
def idempotency() -> InMemoryIdempotencyRepository:
    return InMemoryIdempotencyRepository()


@pytest.fixture
def make_processor(payments, idempotency, sink):
    def _make(settlement=None, **kwargs) -> PaymentProcessor:
        return PaymentProcessor(
            payments,
            kwargs.pop("idempotency", idempotency),
            settlement or AlwaysSucceedSettlement(),
            events=sink,
            **kwargs,
        )
    return _make


@pytest.fixture
def processor(make_processor) -> PaymentProcessor:
    return make_processor()


@pytest.fixture
def make_request():
    def _make(**overrides) -> PaymentRequest:
        fields = dict(
            amount_minor=1000,
            currency="USD",
            order_id="ord-1",
            idempotency_key="key-1",
            metadata={},
        )
        fields.update(overrides)
        return PaymentRequest(**fields)
    return _make
