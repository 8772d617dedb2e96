"""Timestamp formatting shared by the HTTP envelope and the payment DTOs."""
from datetime import datetime, timezone


def iso_utc(ts: datetime) -> str:
    """UTC ISO-8601 with a trailing Z; naive values are taken as UTC."""
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    else:
        ts = ts.astimezone(timezone.utc)
    return ts.isoformat().replace("+00:00", "Z")
