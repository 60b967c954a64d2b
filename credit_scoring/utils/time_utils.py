"""Time and identifier utilities"""

import secrets
import time
from datetime import datetime, timedelta, timezone


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime"""
    return datetime.now(timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes (SQLite drops the offset)"""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def add_days(from_time: datetime, days: int) -> datetime:
    return from_time + timedelta(days=days)


def generate_score_id() -> str:
    """
    Generate a credit score identifier.

    Format: cs_<unix nanoseconds>_<random hex>. The timestamp keeps ids roughly
    sortable by creation time; the suffix keeps ids unique when two scores are
    created in the same nanosecond.
    """
    return f"cs_{time.time_ns()}_{secrets.token_hex(4)}"
