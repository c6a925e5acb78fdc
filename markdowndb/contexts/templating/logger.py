"""
Templating context logger.

Provides logging interface for templating context with automatic [parse] prefix.
All templating modules should import from this module, not from loguru directly.
"""

from loguru import logger

CONTEXT_PREFIX = "[parse]"


def _log_debug(message: str) -> None:
    """Log debug message with [parse] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_parse_result(document) -> None:
    """
    Log a one-line summary of a parsed document.

    Args:
        document: ParsedDocument from parse_template()
    """
    entry_count = sum(len(section.entries) for section in document.sections.values())
    _log_debug(
        f"Parsed <{document.type}>: {len(document.top_level_fields)} top-level fields, "
        f"{len(document.sections)} sections, {entry_count} entries"
    )
    for warning in document.warnings:
        _log_debug(f"  {warning}")
