"""Simulated settlement strategies.

No provider is called. Outcomes are deterministic so a given request always
settles the same way, which keeps replay behaviour easy to reason about.
"""
from __future__ import annotations

import asyncio
import inspect
from typing import Awaitable, Callable, Iterable, Union

from application.ports.settlement import SettlementDecision
from core.settings import FailureRule
from domain.payment.entity import Payment


class AlwaysSucceedSettlement:
    def __init__(self, message: str = "payment succeeded", delay_ms: int = 0) -> None:
        self._message = message
        self._delay = max(0, delay_ms) / 1000

    async def decide(self, payment: Payment) -> SettlementDecision:
        if self._delay:
            await asyncio.sleep(self._delay)
        return SettlementDecision.succeeded(self._message)


def _matches(rule: FailureRule, payment: Payment) -> bool:
    if rule.order_id_prefix is not None and not payment.order_id.startswith(rule.order_id_prefix):
        return False
    if rule.currency is not None and payment.currency != rule.currency:
        return False
    if rule.min_amount_minor is not None and payment.amount_minor < rule.min_amount_minor:
        return False
    if rule.max_amount_minor is not None and payment.amount_minor > rule.max_amount_minor:
        return False
    return True


class RuleBasedSettlement:
    """Succeeds unless a configured failure rule matches (first match wins)."""

    def __init__(
        self,
        rules: Iterable[FailureRule] = (),
        *,
        success_message: str = "payment succeeded",
        delay_ms: int = 0,
    ) -> None:
        self._rules = list(rules)
        self._success_message = success_message
        self._delay = max(0, delay_ms) / 1000

    async def decide(self, payment: Payment) -> SettlementDecision:
        if self._delay:
            await asyncio.sleep(self._delay)
        for rule in self._rules:
            if _matches(rule, payment):
                return SettlementDecision.failed(rule.message)
        return SettlementDecision.succeeded(self._success_message)


DecisionFn = Callable[[Payment], Union[SettlementDecision, Awaitable[SettlementDecision]]]


class CallableSettlement:
    """Adapts a plain (sync or async) function to the strategy protocol."""

    def __init__(self, fn: DecisionFn) -> None:
        self._fn = fn

    async def decide(self, payment: Payment) -> SettlementDecision:
        result = self._fn(payment)
        if inspect.isawaitable(result):
            result = await result
        return result
