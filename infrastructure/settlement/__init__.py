"""Settlement strategies (simulated; no PSP integration)."""
from .simulated import AlwaysSucceedSettlement, CallableSettlement, RuleBasedSettlement

__all__ = [
    "AlwaysSucceedSettlement",
    "CallableSettlement",
    "RuleBasedSettlement",
]
