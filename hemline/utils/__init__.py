"""
Shared utilities for HEMLINE.

Common functionality used across contexts:
- Logging setup and pipeline event logs
- LLM provider access
- Timestamps
"""

from hemline.utils.timestamp import now, now_exact

__all__ = ["now", "now_exact"]
