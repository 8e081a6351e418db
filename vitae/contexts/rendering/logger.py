"""
Rendering context logger.

Provides logging interface for rendering context with automatic [render] prefix.
All rendering modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path
from typing import TYPE_CHECKING, Optional

from loguru import logger

from vitae.utils.logger import setup_logger as _setup_logger

if TYPE_CHECKING:
    from vitae.contexts.rendering.config import LayoutConfig

CONTEXT_PREFIX = "[render]"


def setup_rendering_logger(
    log_dir: Path, config: "LayoutConfig", layout_presets: Optional[list] = None
) -> Path:
    """
    Setup logger for rendering context.

    Args:
        log_dir: Directory for this export session
        config: Resolved layout; page geometry and font go in the provenance header
        layout_presets: Layout presets applied

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="render",
        log_dir=log_dir,
        extra_provenance={
            "Page size": f"{config.page_size} ({config.page_width:g} x {config.page_height:g} mm)",
            "Margin": f"{config.margin:g} mm",
            "Font": config.font_family,
            "Layout presets": ", ".join(layout_presets or []) or "none",
        },
    )


def _log_info(message: str) -> None:
    """Log info message with [render] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [render] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [render] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [render] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [render] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_export_start(full_name: str, has_job_description: bool) -> None:
    """Log start of a PDF export."""
    _log_info(f"Exporting resume for {full_name}")
    if has_job_description:
        _log_debug("  Job description supplied, ATS keywords will be embedded")


def log_export_result(result, elapsed_time: float) -> None:
    """
    Log a completed export.

    Args:
        result: ExportResult from export_resume()
        elapsed_time: Time taken by the export
    """
    pages = f"{result.page_count} page{'s' if result.page_count != 1 else ''}"
    _log_success(f"Generated {result.filename}: {pages} ({elapsed_time:.2f}s)")
    _log_debug(f"  Sections: {', '.join(result.sections)}")
    if result.ats_characters:
        _log_debug(f"  ATS: embedded job description ({result.ats_characters} characters)")
    if result.pdf_path:
        _log_info(f"  Saved to {result.pdf_path}")
