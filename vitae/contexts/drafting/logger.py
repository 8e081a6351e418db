"""
Drafting context logger.

Provides logging interface for drafting context with automatic [draft] prefix.
All drafting modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from vitae.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[draft]"


def setup_drafting_logger(log_dir: Path, provider_name: str) -> Path:
    """
    Setup logger for drafting context.

    Args:
        log_dir: Directory for this drafting session
        provider_name: LLM provider in use, recorded in the provenance header

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="draft",
        log_dir=log_dir,
        extra_provenance={"LLM provider": provider_name},
    )


def _log_info(message: str) -> None:
    """Log info message with [draft] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [draft] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [draft] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [draft] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_generation_start(task: str, provider_name: str, prompt: str) -> None:
    """Log start of a generation call."""
    _log_info(f"Generating {task} with {provider_name}")
    _log_debug(f"  Prompt length: {len(prompt)} chars")


def log_generation_result(task: str, response, elapsed_time: float) -> None:
    """
    Log a completed generation call.

    Args:
        task: What was generated (e.g., "summary", "courses")
        response: LLMResponse from the provider
        elapsed_time: Time taken by the call
    """
    _log_success(f"{task}: {len(response.content)} chars ({elapsed_time:.2f}s)")
    _log_debug(f"  Tokens: {response.input_tokens} in / {response.output_tokens} out")
