"""In-memory implementation of IdempotencyRepository.

Single-process only. Every mutating call runs under the lock of its own key,
so concurrent requests with unrelated keys never wait on each other.
"""
from __future__ import annotations

import dataclasses
from datetime import datetime, timezone
from typing import Dict, Optional

from core.logging_config import get_logger
from domain.common.exceptions import (
    IdempotencyRecordMissingException,
    InvariantViolationException,
)
from domain.idempotency.entity import (
    AlreadyCompleted,
    Conflict,
    IdempotencyRecord,
    InProgress,
    RecordState,
    ReservationOutcome,
    Reserved,
)
from domain.idempotency.repository import IdempotencyRepository
from domain.payment.entity import PaymentResponse
from infrastructure.locks import KeyedLock


logger = get_logger(__name__)


class InMemoryIdempotencyRepository(IdempotencyRepository):
    def __init__(self) -> None:
        self._records: Dict[str, IdempotencyRecord] = {}
        self._locks = KeyedLock()

    async def reserve(self, key: str, fingerprint: str) -> ReservationOutcome:  # type: ignore[override]
        async with self._locks.hold(key):
            existing = self._records.get(key)
            if existing is None:
                record = IdempotencyRecord(key=key, fingerprint=fingerprint, state=RecordState.IN_PROGRESS)
                self._records[key] = record
                return Reserved(record)
            # A different payload is a client error even while the first is in flight
            if existing.fingerprint != fingerprint:
                return Conflict(existing.fingerprint)
            if existing.state is RecordState.COMPLETED:
                return AlreadyCompleted(existing.result)
            return InProgress(existing.created_at)

    async def complete(self, key: str, result: PaymentResponse) -> None:  # type: ignore[override]
        async with self._locks.hold(key):
            existing = self._records.get(key)
            if existing is None:
                raise IdempotencyRecordMissingException(key)
            if existing.state is RecordState.COMPLETED:
                if existing.result == result:
                    return
                raise InvariantViolationException(
                    f"idempotency record {key} already completed with a different result",
                    details={"idempotency_key": key},
                )
            self._records[key] = dataclasses.replace(
                existing,
                state=RecordState.COMPLETED,
                result=result,
                completed_at=datetime.now(timezone.utc),
            )

    async def abandon(self, key: str) -> bool:  # type: ignore[override]
        async with self._locks.hold(key):
            existing = self._records.get(key)
            if existing is None or existing.state is not RecordState.IN_PROGRESS:
                logger.warning(
                    "idempotency_abandon_skipped",
                    idempotency_key=key,
                    state=existing.state.value if existing else None,
                )
                return False
            del self._records[key]
            return True

    async def get(self, key: str) -> Optional[IdempotencyRecord]:  # type: ignore[override]
        # Records are frozen; handing out the stored instance is safe
        return self._records.get(key)
