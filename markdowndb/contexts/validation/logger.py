"""
Validation context logger.

Provides logging interface for validation context with automatic [validate] prefix.
All validation modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from markdowndb.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[validate]"


def setup_validation_logger(log_dir: Path, schema_name: str, console: bool = True) -> Path:
    """
    Setup logger for validation context.

    Args:
        log_dir: Directory for this validation session
        schema_name: Schema used for the run, recorded in the provenance header
        console: Also log to stderr

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="validate",
        log_dir=log_dir,
        extra_provenance={"Schema": schema_name},
        console=console,
    )


# Wrapper functions with automatic [validate] prefix


def _log_info(message: str) -> None:
    """Log info message with [validate] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [validate] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [validate] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [validate] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level validation-specific logging helpers


def log_validation_start(source: Path, schema_name: str, log_file: Path) -> None:
    """Log start of a file validation run."""
    _log_info(f"Validating {source.name} against '{schema_name}' schema")
    _log_info(f"Log file: {log_file}")
    _log_debug(f"Source: {source}")


def log_validation_result(schema_name: str, result) -> None:
    """
    Log validation counts at debug level.

    Args:
        schema_name: Schema identifier
        result: ValidationResult from validate_template()
    """
    _log_debug(
        f"{schema_name}: valid={result.valid} errors={len(result.errors)} "
        f"warnings={len(result.warnings)} info={len(result.info)}"
    )
    for diagnostic in result.errors:
        _log_debug(f"  error {diagnostic.type}: {diagnostic.message}")


def log_validation_outcome(source: Path, result) -> None:
    """Log the user-facing outcome of a file validation run."""
    if result.valid:
        _log_success(f"{source.name}: valid ({len(result.warnings)} warnings)")
    else:
        _log_error(f"{source.name}: {len(result.errors)} error(s)")
