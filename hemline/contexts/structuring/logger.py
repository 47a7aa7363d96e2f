"""
Structuring context logger.

Provides logging helpers with an automatic [structure] prefix.
All structuring modules should import from this module, not from utils.logger directly.
"""

from loguru import logger

CONTEXT_PREFIX = "[structure]"


def _log_info(message: str) -> None:
    """Log info message with [structure] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [structure] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [structure] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")
