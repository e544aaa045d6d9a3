"""Datetime helpers for token timestamps.

All functions return naive UTC datetimes, matching how token records store
``expires_at``. JWT claims (``exp``, ``iat``, ``nbf``) are integer epoch
seconds and are converted with ``from_epoch``.
"""

from datetime import UTC, datetime, timedelta


def utc_now() -> datetime:
    """Get current UTC time as naive datetime."""
    return datetime.now(UTC).replace(tzinfo=None)


def is_expired(expires_at: datetime) -> bool:
    """Check if a timestamp (naive UTC) is in the past."""
    return utc_now() > expires_at


def get_expiry(seconds: int = 0, minutes: int = 0) -> datetime:
    """Get future expiry datetime, e.g. from an OAuth ``expires_in``."""
    return utc_now() + timedelta(seconds=seconds, minutes=minutes)


def from_epoch(seconds: int) -> datetime:
    """Convert epoch seconds (JWT NumericDate) to naive UTC."""
    return datetime.fromtimestamp(seconds, UTC).replace(tzinfo=None)


def to_epoch(dt: datetime) -> int:
    """Convert a datetime to epoch seconds. Naive values are taken as UTC."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return int(dt.timestamp())
