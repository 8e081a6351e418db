"""
Editing context logger.

Provides logging interface for editing context with automatic [edit] prefix.
Editing has no CLI of its own; sinks are configured by whichever context's
script is running.
"""

from loguru import logger

CONTEXT_PREFIX = "[edit]"


def _log_debug(message: str) -> None:
    """Log debug message with [edit] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_section_update(section: str, count: int) -> None:
    """Log a whole-section replacement."""
    _log_debug(f"Replaced section '{section}' ({count} records)")
