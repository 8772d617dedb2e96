"""
Application service orchestrating the RequestPayment / GetPayment use-cases.

RequestPayment runs VALIDATING -> RESERVING -> CREATING -> SETTLING ->
COMPLETING, or stops right after RESERVING for replays, conflicts and
requests already in flight. Every failure leaves this class as a ServiceError.

The processor holds no per-request state; stores, settlement strategy and
event sink are injected so several processors can run side by side in tests.
"""
from __future__ import annotations

import asyncio
from dataclasses import dataclass
from datetime import datetime
from typing import AbstractSet, Callable, Optional
import uuid

from application.error_mapper import ErrorCategory, ErrorMapper, ServiceError, error_mapper
from application.ports.events import EventSink
from application.ports.settlement import SettlementStrategy
from core.logging_config import get_logger
from domain.common.exceptions import (
    IdempotencyConflictException,
    IdempotencyInProgressException,
    IllegalStatusTransitionException,
    InvariantViolationException,
    PaymentNotFoundException,
    PaymentValidationException,
)
from domain.idempotency.entity import AlreadyCompleted, Conflict, InProgress, Reserved, fingerprint
from domain.idempotency.repository import IdempotencyRepository
from domain.payment.entity import Payment, PaymentRequest, PaymentResponse, PaymentStatus, utcnow
from domain.payment.events import (
    IdempotencyConflictDetected,
    PaymentCreated,
    PaymentEvent,
    PaymentReplayed,
    PaymentSettled,
    RequestInFlight,
    ReservationAbandoned,
)
from domain.payment.repository import PaymentRepository
from domain.payment.validator import ISO_4217, validate


logger = get_logger(__name__)

ABORTED_MESSAGE = "payment processing aborted"


@dataclass(frozen=True)
class HealthStatus:
    status: str = "ok"


def default_payment_id_factory(prefix: str = "pay_") -> Callable[[], str]:
    """Ids are `<prefix><uuid4 hex>`."""
    return lambda: f"{prefix}{uuid.uuid4().hex}"


class PaymentProcessor:
    def __init__(
        self,
        payments: PaymentRepository,
        idempotency: IdempotencyRepository,
        settlement: SettlementStrategy,
        *,
        events: Optional[EventSink] = None,
        id_factory: Optional[Callable[[], str]] = None,
        clock: Callable[[], datetime] = utcnow,
        allowed_currencies: AbstractSet[str] = ISO_4217,
        mapper: ErrorMapper = error_mapper,
        complete_attempts: int = 3,
        complete_retry_delay: float = 0.05,
    ) -> None:
        self._payments = payments
        self._idempotency = idempotency
        self._settlement = settlement
        self._events = events
        self._new_payment_id = id_factory or default_payment_id_factory()
        self._clock = clock
        self._allowed_currencies = frozenset(allowed_currencies)
        self._mapper = mapper
        self._complete_attempts = max(1, complete_attempts)
        self._complete_retry_delay = max(0.0, complete_retry_delay)

    # ------------------------------------------------------------------
    # Public use-cases
    # ------------------------------------------------------------------

    async def request_payment(self, request: PaymentRequest) -> PaymentResponse:
        try:
            return await self._request_payment(request)
        except ServiceError:
            raise
        except Exception as exc:
            raise self._translate(exc, operation="request_payment") from exc

    async def get_payment(self, payment_id: str) -> Payment:
        try:
            if not payment_id:
                raise PaymentValidationException("payment_id required", field="payment_id")
            payment = await self._payments.get(payment_id)
            if payment is None:
                raise PaymentNotFoundException(payment_id)
            return payment
        except ServiceError:
            raise
        except Exception as exc:
            raise self._translate(exc, operation="get_payment") from exc

    async def health(self) -> HealthStatus:
        return HealthStatus()

    # ------------------------------------------------------------------
    # RequestPayment state machine
    # ------------------------------------------------------------------

    async def _request_payment(self, request: PaymentRequest) -> PaymentResponse:
        # VALIDATING
        result = validate(request, self._allowed_currencies)
        if not result.ok:
            raise PaymentValidationException(result.message, field=result.field)

        # RESERVING
        key = request.idempotency_key
        outcome = await self._idempotency.reserve(key, fingerprint(request))

        if isinstance(outcome, AlreadyCompleted):
            self._emit(PaymentReplayed(idempotency_key=key, payment_id=outcome.result.payment_id))
            return outcome.result
        if isinstance(outcome, Conflict):
            self._emit(IdempotencyConflictDetected(idempotency_key=key))
            raise IdempotencyConflictException(key)
        if isinstance(outcome, InProgress):
            self._emit(RequestInFlight(idempotency_key=key))
            raise IdempotencyInProgressException(key)
        if not isinstance(outcome, Reserved):
            raise TypeError(f"unexpected reservation outcome: {outcome!r}")

        return await self._process_reserved(request)

    async def _process_reserved(self, request: PaymentRequest) -> PaymentResponse:
        key = request.idempotency_key
        created_id: Optional[str] = None
        try:
            # CREATING
            payment = Payment.pending(self._new_payment_id(), request, self._clock())
            await self._payments.create(payment)
            created_id = payment.payment_id
            self._emit(PaymentCreated(
                idempotency_key=key,
                payment_id=payment.payment_id,
                order_id=payment.order_id,
                amount_minor=payment.amount_minor,
                currency=payment.currency,
            ))

            # SETTLING
            decision = await self._settlement.decide(payment)
            settled = await self._payments.update_status(payment.payment_id, decision.status, decision.message)
            self._emit(PaymentSettled(
                idempotency_key=key,
                payment_id=settled.payment_id,
                status=settled.status.name,
                message=settled.message,
            ))
        except Exception as exc:
            await self._release(key, created_id, exc)
            raise

        # COMPLETING: the payment is terminal now, so the key must never be abandoned
        response = settled.to_response()
        await self._complete(key, response)
        return response

    async def _complete(self, key: str, response: PaymentResponse) -> None:
        """Record the outcome, retrying transient store failures.

        `complete` is safe to repeat with an equal result. If every attempt
        fails the record stays IN_PROGRESS: callers get UNAVAILABLE instead
        of a second payment.
        """
        for attempt in range(1, self._complete_attempts + 1):
            try:
                await self._idempotency.complete(key, response)
                return
            except InvariantViolationException:
                raise
            except Exception as exc:
                if attempt == self._complete_attempts:
                    logger.error(
                        "idempotency_complete_failed",
                        idempotency_key=key,
                        payment_id=response.payment_id,
                        attempts=attempt,
                        exc_info=True,
                    )
                    raise
                logger.warning(
                    "idempotency_complete_retry",
                    idempotency_key=key,
                    attempt=attempt,
                    error=str(exc),
                )
                if self._complete_retry_delay:
                    await asyncio.sleep(self._complete_retry_delay * attempt)

    async def _release(self, key: str, payment_id: Optional[str], cause: Exception) -> None:
        """Undo a reservation whose processing failed before a terminal outcome.

        The key is abandoned only when no payment exists or the payment was
        marked FAILED; otherwise it stays IN_PROGRESS.
        """
        if payment_id is not None:
            try:
                await self._payments.update_status(payment_id, PaymentStatus.FAILED, ABORTED_MESSAGE)
            except IllegalStatusTransitionException:
                logger.error("payment_abort_already_terminal", idempotency_key=key, payment_id=payment_id)
                return
            except Exception:
                logger.error("payment_abort_mark_failed_error", idempotency_key=key, payment_id=payment_id, exc_info=True)
                return

        try:
            released = await self._idempotency.abandon(key)
        except Exception:
            logger.error("idempotency_abandon_error", idempotency_key=key, exc_info=True)
            return
        if released:
            self._emit(ReservationAbandoned(idempotency_key=key, reason=type(cause).__name__))

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _translate(self, exc: Exception, *, operation: str) -> ServiceError:
        error = self._mapper.to_service_error(exc)
        if error.category is ErrorCategory.INTERNAL and error is not exc:
            logger.error(
                "payment_internal_failure",
                operation=operation,
                error_type=type(exc).__name__,
                error=str(exc),
                exc_info=exc,
            )
        return error

    def _emit(self, event: PaymentEvent) -> None:
        if self._events is None:
            return
        try:
            self._events.emit(event)
        except Exception:
            logger.error("payment_event_sink_error", event_name=event.name, exc_info=True)
