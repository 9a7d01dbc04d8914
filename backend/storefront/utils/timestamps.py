"""Timestamp helpers for document stamps and session clocks."""
import time
from datetime import datetime, timezone


def utc_now_iso() -> str:
    """ISO-8601 UTC timestamp with millisecond precision and a Z suffix."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def now_ms() -> int:
    """Current epoch time in milliseconds."""
    return int(time.time() * 1000)
