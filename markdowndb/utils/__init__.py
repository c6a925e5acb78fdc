"""
Shared utilities for MarkdownDB.

Common functionality used across contexts:
- Logger setup with provenance
- Timestamps for log directories
"""

from markdowndb.utils.timestamp import now

__all__ = ["now"]
