"""Retry-After parsing and backoff schedules."""
import math
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Optional

RETRY_AFTER_MIN_S = 5.0
RETRY_AFTER_MAX_S = 300.0

RATE_LIMIT_BASE_S = 1.2
RATE_LIMIT_STEP_S = 0.8

SERVER_ERROR_BASE_S = 0.8
SERVER_ERROR_STEP_S = 0.6


def parse_retry_after(value: Optional[str], now: Optional[datetime] = None) -> Optional[float]:
    """Seconds to wait for a ``Retry-After`` header value.

    Accepts delta-seconds (``"5"``) or an HTTP-date. The result is clamped
    to [5, 300] seconds. Returns None when the header is absent or
    unparseable (``nan`` and ``inf`` included) so the caller can fall back
    to its own backoff.
    """
    if value is None:
        return None
    raw = value.strip()
    if not raw:
        return None

    try:
        seconds = float(raw)
    except ValueError:
        try:
            when = parsedate_to_datetime(raw)
        except (TypeError, ValueError):
            return None
        if when.tzinfo is None:
            when = when.replace(tzinfo=timezone.utc)
        current = now or datetime.now(timezone.utc)
        seconds = (when - current).total_seconds()

    if not math.isfinite(seconds):
        return None
    return min(max(seconds, RETRY_AFTER_MIN_S), RETRY_AFTER_MAX_S)


def rate_limit_backoff(attempt: int) -> float:
    """Wait after a 429 that carried no usable Retry-After."""
    return RATE_LIMIT_BASE_S + attempt * RATE_LIMIT_STEP_S


def server_error_backoff(attempt: int) -> float:
    """Wait after a 5xx or a transport failure."""
    return SERVER_ERROR_BASE_S + attempt * SERVER_ERROR_STEP_S
