"""
Persistence context logger.

Provides logging interface for persistence context with automatic [store] prefix.
All persistence modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from vitae.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[store]"


def setup_persistence_logger(log_dir: Path, db_path: Path) -> Path:
    """
    Setup logger for persistence context.

    Args:
        log_dir: Directory for this session
        db_path: Database in use, recorded in the provenance header

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="store",
        log_dir=log_dir,
        extra_provenance={"Database": db_path},
    )


def _log_info(message: str) -> None:
    """Log info message with [store] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [store] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [store] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [store] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_fetch_result(user_id: str, resume_id, found: bool) -> None:
    """Log outcome of a fetch."""
    target = f"resume {resume_id}" if resume_id is not None else "latest resume"
    if found:
        _log_debug(f"Loaded {target} for user {user_id}")
    else:
        _log_info(f"No {target} found for user {user_id}")


def log_upsert_result(user_id: str, resume_id: int, inserted: bool) -> None:
    """Log outcome of a save."""
    action = "Created" if inserted else "Updated"
    _log_success(f"{action} resume {resume_id} for user {user_id}")
