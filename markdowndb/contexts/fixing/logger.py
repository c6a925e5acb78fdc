"""
Fixing context logger.

Provides logging interface for fixing context with automatic [fix] prefix.
All fixing modules should import from this module, not from loguru directly.
"""

from pathlib import Path

from loguru import logger

from markdowndb.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[fix]"


def setup_fixing_logger(log_dir: Path, source: Path) -> Path:
    """
    Setup logger for fixing context.

    Args:
        log_dir: Directory for this fixing session
        source: Template file being edited, recorded in the provenance header

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="fix",
        log_dir=log_dir,
        extra_provenance={"Template": str(source)},
    )


# Wrapper functions with automatic [fix] prefix


def _log_info(message: str) -> None:
    """Log info message with [fix] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [fix] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [fix] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [fix] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level fixing-specific logging helpers


def log_fix_applied(fix, result) -> None:
    """
    Log an applied fix at debug level.

    Args:
        fix: FixDescriptor that was applied
        result: FixResult from apply_fix()
    """
    anchor = ".".join(part for part in (fix.section, fix.entry, fix.field) if part)
    _log_debug(f"Applied {fix.type} at {anchor or 'document start'} (cursor {result.cursor_position})")


def log_stale_fix(fix, reason: str) -> None:
    """Log a fix whose anchor no longer matches the text."""
    _log_debug(f"Skipped stale {fix.type}: {reason}")


def log_fix_written(source: Path, fix) -> None:
    """Log the user-facing outcome of writing a fixed file."""
    _log_success(f"{source.name}: applied {fix.type}")


def log_fix_unavailable(source: Path, reason: str) -> None:
    """Log the user-facing outcome of a fix that could not be applied."""
    _log_warning(f"{source.name}: {reason}")


def log_fix_start(source: Path, log_file: Path) -> None:
    """Log start of a file fixing run."""
    _log_info(f"Fixing {source.name}")
    _log_info(f"Log file: {log_file}")
