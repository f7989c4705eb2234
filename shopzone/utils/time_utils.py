# shopzone/utils/time_utils.py
from datetime import datetime, timezone


def utcnow() -> datetime:
    """Server-side 'now' in UTC (naive, canonical for all DateTime columns)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)
