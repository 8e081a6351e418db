"""
Logger setup shared by the VITAE contexts.

Each CLI session gets its own log directory holding one DEBUG-level file per
context, plus INFO-level colorized console output. The file starts with a
provenance header: VITAE version, the command that ran, and whatever the
calling context adds (layout, database, LLM provider).
Context-specific wrappers live in contexts/{context}/logger.py.
"""

import os
import sys
from pathlib import Path
from typing import Dict, Mapping, Optional

from dotenv import load_dotenv
from loguru import logger

from vitae import __version__

load_dotenv()

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {message}"
CONSOLE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | <level>{level: <7}</level> | <level>{message}</level>"

LEVEL_COLORS = {
    "WARNING": "<yellow>",
    "ERROR": "<red>",
    "CRITICAL": "<bold><red>",
}

# Environment settings worth recording when set
TRACKED_ENV_VARS = (
    "VITAE_LAYOUT_CONFIG",
    "VITAE_DB_PATH",
    "VITAE_RESULTS_PATH",
    "LLM_PROVIDER",
)


def setup_logger(
    context_name: str,
    log_dir: Path,
    extra_provenance: Optional[Mapping[str, object]] = None,
) -> Path:
    """
    Configure loguru sinks for one context and write the provenance header.

    Args:
        context_name: Context identifier ("render", "draft", "store"); names the log file
        log_dir: Directory for this logging session
        extra_provenance: Context details for the header, e.g. {"Page size": "A4 (210 x 297 mm)"}

    Returns:
        Path to log file
    """
    log_dir.mkdir(exist_ok=True, parents=True)
    log_file = log_dir / f"{context_name}.log"

    logger.remove()
    for level_name, color in LEVEL_COLORS.items():
        logger.level(level_name, color=color)

    logger.add(log_file, format=FILE_FORMAT, level="DEBUG")
    logger.add(sys.stdout, format=CONSOLE_FORMAT, level="INFO", colorize=True)

    log_provenance(context_name, extra_provenance)

    return log_file


def provenance_lines(
    context_name: str, extra_provenance: Optional[Mapping[str, object]] = None
) -> Dict[str, str]:
    """Collect the provenance header as ordered key/value pairs."""
    lines = {
        "VITAE": f"{__version__} ({context_name})",
        "Command": " ".join(sys.argv),
        "Working directory": str(Path.cwd()),
        "Python": sys.version.split()[0],
    }
    for name in TRACKED_ENV_VARS:
        if os.getenv(name):
            lines[name] = os.environ[name]
    for key, value in (extra_provenance or {}).items():
        lines[key] = str(value)
    return lines


def log_provenance(
    context_name: str, extra_provenance: Optional[Mapping[str, object]] = None
) -> None:
    """Write the provenance header between two rules."""
    logger.info("=" * 80)
    for key, value in provenance_lines(context_name, extra_provenance).items():
        logger.info(f"{key}: {value}")
    logger.info("=" * 80)
