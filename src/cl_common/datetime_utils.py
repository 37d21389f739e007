"""UTC datetime utilities."""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Return timezone-aware UTC now."""
    return datetime.now(timezone.utc)


def unix_now() -> int:
    """Return the current time as whole unix seconds (oracle timestamp scale)."""
    return int(utc_now().timestamp())
