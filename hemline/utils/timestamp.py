"""Timestamp helpers for log directories and pipeline events."""

from datetime import datetime


def now() -> str:
    """Compact local timestamp for directory names (e.g., '20251114_123456')."""
    return datetime.now().strftime("%Y%m%d_%H%M%S")


def now_exact() -> str:
    """ISO 8601 timestamp with microseconds, used in event logs."""
    return datetime.now().isoformat()
