import asyncio

import pytest

from application.error_mapper import ErrorCategory, ServiceError
from application.ports.settlement import SettlementDecision
from application.services.payment_processor import default_payment_id_factory
from core.settings import FailureRule
from domain.common.exceptions import IllegalStatusTransitionException
from domain.idempotency.entity import RecordState, fingerprint
from domain.payment.entity import PaymentStatus
from domain.payment.events import (
    PaymentCreated,
    PaymentReplayed,
    PaymentSettled,
    ReservationAbandoned,
)
from infrastructure.repositories.idempotency_repository import InMemoryIdempotencyRepository
from infrastructure.settlement import CallableSettlement, RuleBasedSettlement


pytestmark = pytest.mark.asyncio


async def test_request_payment_concrete_scenario(processor, payments, make_request):
    resp = await processor.request_payment(make_request())

    assert resp.status in (PaymentStatus.SUCCEEDED, PaymentStatus.FAILED)
    assert resp.payment_id.startswith("pay_")
    assert resp.idempotency_key == "key-1"
    assert resp.created_at is not None
    assert resp.message

    again = await processor.request_payment(make_request())
    assert (again.payment_id, again.status, again.created_at) == (resp.payment_id, resp.status, resp.created_at)
    assert len(payments) == 1


async def test_replay_returns_identical_response(processor, make_request, sink):
    first = await processor.request_payment(make_request())
    second = await processor.request_payment(make_request())

    assert second == first
    assert len(sink.of_type(PaymentCreated)) == 1
    assert len(sink.of_type(PaymentSettled)) == 1
    replays = sink.of_type(PaymentReplayed)
    assert len(replays) == 1 and replays[0].payment_id == first.payment_id


async def test_replay_returns_original_failure_message(make_processor, make_request):
    settlement = RuleBasedSettlement([FailureRule(order_id_prefix="fail-", message="card declined")])
    processor = make_processor(settlement)

    first = await processor.request_payment(make_request(order_id="fail-7"))
    second = await processor.request_payment(make_request(order_id="fail-7"))

    assert first.status == PaymentStatus.FAILED
    assert first.message == "card declined"
    assert second == first


async def test_key_reuse_with_different_payload_conflicts(processor, payments, make_request):
    first = await processor.request_payment(make_request())

    with pytest.raises(ServiceError) as ei:
        await processor.request_payment(make_request(amount_minor=2000))

    assert ei.value.category is ErrorCategory.ALREADY_EXISTS
    assert ei.value.message == "idempotency key reused with different payload"
    stored = await processor.get_payment(first.payment_id)
    assert stored.amount_minor == 1000
    assert stored.status == first.status
    assert len(payments) == 1


@pytest.mark.parametrize(
    "overrides, field, message",
    [
        ({"amount_minor": 0}, "amount_minor", "amount must be positive"),
        ({"amount_minor": -100}, "amount_minor", "amount must be positive"),
        ({"currency": "US"}, "currency", "invalid currency"),
        ({"idempotency_key": ""}, "idempotency_key", "idempotency_key required"),
        ({"order_id": ""}, "order_id", "order_id required"),
    ],
)
async def test_validation_rejects_without_creating_state(
    processor, payments, idempotency, make_request, overrides, field, message
):
    req = make_request(**overrides)
    with pytest.raises(ServiceError) as ei:
        await processor.request_payment(req)

    assert ei.value.category is ErrorCategory.INVALID_ARGUMENT
    assert ei.value.message == message
    assert ei.value.field == field
    assert len(payments) == 0
    assert await idempotency.get(req.idempotency_key) is None


async def test_get_payment_not_found(processor):
    with pytest.raises(ServiceError) as ei:
        await processor.get_payment("nonexistent-id")
    assert ei.value.category is ErrorCategory.NOT_FOUND


async def test_get_payment_returns_full_record(processor, make_request):
    resp = await processor.request_payment(make_request(metadata={"channel": "web"}))
    payment = await processor.get_payment(resp.payment_id)

    assert payment.payment_id == resp.payment_id
    assert payment.amount_minor == 1000
    assert payment.currency == "USD"
    assert payment.order_id == "ord-1"
    assert payment.idempotency_key == "key-1"
    assert payment.created_at == resp.created_at
    assert payment.message == resp.message
    assert payment.metadata == {"channel": "web"}


async def test_terminal_status_is_immutable(processor, payments, make_request):
    resp = await processor.request_payment(make_request())

    with pytest.raises(IllegalStatusTransitionException):
        await payments.update_status(resp.payment_id, PaymentStatus.FAILED, "late failure")

    await processor.request_payment(make_request())
    payment = await processor.get_payment(resp.payment_id)
    assert payment.status == resp.status
    assert payment.created_at == resp.created_at


async def test_in_progress_key_is_unavailable(processor, idempotency, make_request):
    req = make_request()
    await idempotency.reserve(req.idempotency_key, fingerprint(req))

    with pytest.raises(ServiceError) as ei:
        await processor.request_payment(req)

    assert ei.value.category is ErrorCategory.UNAVAILABLE
    assert ei.value.retryable is True


async def test_in_progress_with_different_payload_is_conflict(processor, idempotency, make_request):
    await idempotency.reserve("key-1", fingerprint(make_request()))

    with pytest.raises(ServiceError) as ei:
        await processor.request_payment(make_request(order_id="ord-2"))

    assert ei.value.category is ErrorCategory.ALREADY_EXISTS


async def test_metadata_is_not_part_of_the_fingerprint(processor, make_request):
    first = await processor.request_payment(make_request(metadata={"note": "a"}))
    second = await processor.request_payment(make_request(metadata={"note": "b"}))

    assert second == first
    stored = await processor.get_payment(first.payment_id)
    assert stored.metadata == {"note": "a"}


async def test_concurrent_requests_same_key_create_one_payment(make_processor, payments, make_request):
    gate = asyncio.Event()

    async def slow_settlement(payment):
        await gate.wait()
        return SettlementDecision.succeeded()

    processor = make_processor(CallableSettlement(slow_settlement))
    busy = 0

    async def call_until_settled():
        nonlocal busy
        while True:
            try:
                return await processor.request_payment(make_request())
            except ServiceError as exc:
                assert exc.category is ErrorCategory.UNAVAILABLE
                busy += 1
                await asyncio.sleep(0.001)

    tasks = [asyncio.create_task(call_until_settled()) for _ in range(25)]
    await asyncio.sleep(0.02)
    gate.set()
    results = await asyncio.wait_for(asyncio.gather(*tasks), timeout=5)

    assert len({r.payment_id for r in results}) == 1
    assert len({r.created_at for r in results}) == 1
    assert len(payments) == 1
    assert busy > 0


async def test_unrelated_keys_proceed_concurrently(make_processor, payments, make_request):
    gate = asyncio.Event()

    async def slow_settlement(payment):
        await gate.wait()
        return SettlementDecision.succeeded()

    processor = make_processor(CallableSettlement(slow_settlement))
    tasks = [
        asyncio.create_task(processor.request_payment(make_request(idempotency_key=f"key-{i}", order_id=f"ord-{i}")))
        for i in range(10)
    ]
    await asyncio.sleep(0.02)
    # All ten are parked in settlement at the same time
    assert len(payments) == 10
    gate.set()
    results = await asyncio.wait_for(asyncio.gather(*tasks), timeout=5)
    assert len({r.payment_id for r in results}) == 10


async def test_settlement_failure_abandons_reservation(make_processor, payments, idempotency, make_request, sink):
    calls = 0

    def flaky(payment):
        nonlocal calls
        calls += 1
        if calls == 1:
            raise RuntimeError("simulator exploded")
        return SettlementDecision.succeeded()

    processor = make_processor(CallableSettlement(flaky))

    with pytest.raises(ServiceError) as ei:
        await processor.request_payment(make_request())

    assert ei.value.category is ErrorCategory.INTERNAL
    assert ei.value.message == "internal error"
    assert await idempotency.get("key-1") is None
    assert len(sink.of_type(ReservationAbandoned)) == 1
    # The orphaned payment is closed out rather than left pending
    orphan = sink.of_type(PaymentCreated)[0].payment_id
    assert (await payments.get(orphan)).status == PaymentStatus.FAILED

    retry = await processor.request_payment(make_request())
    assert retry.status == PaymentStatus.SUCCEEDED
    assert retry.payment_id != orphan
    record = await idempotency.get("key-1")
    assert record.state is RecordState.COMPLETED


async def test_payment_id_collision_is_internal_and_retryable(make_processor, payments, idempotency, make_request):
    ids = iter(["pay_dup", "pay_dup", "pay_fresh"])
    processor = make_processor(id_factory=lambda: next(ids))

    first = await processor.request_payment(make_request())
    with pytest.raises(ServiceError) as ei:
        await processor.request_payment(make_request(idempotency_key="key-2", order_id="ord-2"))

    assert ei.value.category is ErrorCategory.INTERNAL
    assert await idempotency.get("key-2") is None
    # The colliding request must not touch the existing payment
    assert (await payments.get(first.payment_id)).order_id == "ord-1"

    retry = await processor.request_payment(make_request(idempotency_key="key-2", order_id="ord-2"))
    assert retry.payment_id == "pay_fresh"


class FlakyComplete(InMemoryIdempotencyRepository):
    def __init__(self, failures: int) -> None:
        super().__init__()
        self.failures = failures
        self.calls = 0

    async def complete(self, key, result):
        self.calls += 1
        if self.failures:
            self.failures -= 1
            raise ConnectionError("store offline")
        await super().complete(key, result)


async def test_transient_complete_failure_is_retried(make_processor, payments, make_request, sink):
    store = FlakyComplete(failures=1)
    processor = make_processor(idempotency=store, complete_retry_delay=0)

    first = await processor.request_payment(make_request())
    again = await processor.request_payment(make_request())

    assert first.status == PaymentStatus.SUCCEEDED
    assert again == first
    assert store.calls == 2
    assert len(payments) == 1
    assert (await store.get("key-1")).state is RecordState.COMPLETED
    assert sink.of_type(ReservationAbandoned) == []


async def test_persistent_complete_failure_never_creates_second_payment(
    make_processor, payments, make_request, sink
):
    store = FlakyComplete(failures=100)
    processor = make_processor(idempotency=store, complete_attempts=3, complete_retry_delay=0)

    with pytest.raises(ServiceError) as ei:
        await processor.request_payment(make_request())
    assert ei.value.category is ErrorCategory.INTERNAL
    assert store.calls == 3

    # The settled payment holds the key; a retry is told to wait
    assert (await store.get("key-1")).state is RecordState.IN_PROGRESS
    with pytest.raises(ServiceError) as retry:
        await processor.request_payment(make_request())
    assert retry.value.category is ErrorCategory.UNAVAILABLE

    assert len(payments) == 1
    only = sink.of_type(PaymentCreated)[0].payment_id
    assert (await payments.get(only)).status == PaymentStatus.SUCCEEDED
    assert sink.of_type(ReservationAbandoned) == []


async def test_cancellation_leaves_record_in_progress(make_processor, idempotency, make_request):
    started = asyncio.Event()

    async def hang(payment):
        started.set()
        await asyncio.Event().wait()

    processor = make_processor(CallableSettlement(hang))
    task = asyncio.create_task(processor.request_payment(make_request()))
    await started.wait()
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task

    record = await idempotency.get("key-1")
    assert record.state is RecordState.IN_PROGRESS
    with pytest.raises(ServiceError) as ei:
        await processor.request_payment(make_request())
    assert ei.value.category is ErrorCategory.UNAVAILABLE


async def test_health(processor):
    assert (await processor.health()).status == "ok"


async def test_processors_are_isolated(make_processor, make_request):
    from infrastructure.repositories.payment_repository import InMemoryPaymentRepository
    from application.services.payment_processor import PaymentProcessor
    from infrastructure.settlement import AlwaysSucceedSettlement

    a = make_processor()
    b = PaymentProcessor(InMemoryPaymentRepository(), InMemoryIdempotencyRepository(), AlwaysSucceedSettlement())

    ra = await a.request_payment(make_request())
    rb = await b.request_payment(make_request())
    assert ra.payment_id != rb.payment_id


def test_default_ids_are_prefixed_uuid_hex():
    new_id = default_payment_id_factory("pi_")
    first, second = new_id(), new_id()
    assert first.startswith("pi_") and len(first) == len("pi_") + 32
    int(first[len("pi_"):], 16)
    assert first != second
