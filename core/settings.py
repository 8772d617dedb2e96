"""
Payment-related settings using pydantic-settings v2 with nested env keys.

Kept apart from core.config.Settings so payment tuning can be loaded (and
overridden in tests) without touching transport settings.

Examples:
    PAYMENT__ALLOWED_CURRENCIES='["USD","EUR"]'
    PAYMENT__SETTLEMENT_DELAY_MS=25
    PAYMENT__FAILURE_RULES='[{"order_id_prefix": "fail-", "message": "card declined"}]'
"""
from __future__ import annotations

from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import BaseModel, Field, field_validator

from domain.payment.validator import ISO_4217


class FailureRule(BaseModel):
    """Failure injection for the simulated settlement.

    A payment fails when it matches every field that is set on the rule.
    """
    order_id_prefix: Optional[str] = None
    currency: Optional[str] = None
    min_amount_minor: Optional[int] = None
    max_amount_minor: Optional[int] = None
    message: str = "payment declined"


class PaymentSettings(BaseSettings):
    allowed_currencies: list[str] = Field(default_factory=lambda: sorted(ISO_4217))
    payment_id_prefix: str = "pay_"
    settlement_delay_ms: int = Field(default=0, ge=0)
    success_message: str = "payment succeeded"
    failure_rules: list[FailureRule] = Field(default_factory=list)
    # Hint returned to HTTP clients when a request with the same key is in flight
    in_progress_retry_after_seconds: int = Field(default=1, ge=0)
    # Retries of the final idempotency write after a payment is settled
    complete_max_attempts: int = Field(default=3, ge=1)
    complete_retry_delay_ms: int = Field(default=50, ge=0)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="PAYMENT__",
        case_sensitive=False,
        extra="ignore",
        env_nested_delimiter="__",
    )

    @field_validator("allowed_currencies")
    @classmethod
    def _strip_currencies(cls, v: list[str]) -> list[str]:
        return [c.strip() for c in v if c and c.strip()]


payment_settings = PaymentSettings()
