"""
Template Pattern Constants

Centralized regex patterns for the MarkdownDB line grammar.
Organized into frozen dataclasses by category for immutability and clear grouping.

The parser matches against stripped lines. The fixing context re-scans raw text
with multiline variants of the header patterns and must stay in agreement with
the shapes defined here.
"""

import re
from dataclasses import dataclass


@dataclass(frozen=True)
class LinePatterns:
    """
    Line shapes recognized by the template parser, in dispatch priority order.

    Applied to a single stripped line.
    """

    COMMENT_PREFIX: str = "//"

    # </JOB>, </PROFILE>
    CLOSING_TAG: str = r"^</[A-Z_]+>$"

    # <JOB>, <PROFILE>
    TYPE_TAG: str = r"^<([A-Z_]+)>$"

    # # EDUCATION, # INTERESTS:, # REQUIRED_SKILLS: // required
    # Single hash followed by whitespace, so "## ID" never matches here.
    SECTION_HEADER: str = r"^#[ \t]+([A-Za-z_][A-Za-z0-9_]*):?[ \t]*(?://.*)?$"

    # ## EDU_1, ## EXP_2 // comment
    ENTRY_HEADER: str = r"^##[ \t]+([A-Za-z0-9_]+)[ \t]*(?://.*)?$"

    # BULLETS:  (nothing after the colon)
    LIST_OPEN: str = r"^([A-Z_]+):$"

    # - item text
    LIST_ITEM: str = r"^-\s+(.+)$"

    # KEY: value
    FIELD: str = r"^([A-Z_]+):\s*(.*)$"

    # Trailing "// comment" in a field value. Requires start-of-value or whitespace
    # before the slashes so URLs like https://example.com survive.
    INLINE_COMMENT: str = r"(?:^|\s)//.*$"


@dataclass(frozen=True)
class EntryIdPatterns:
    """
    Entry identifier conventions (EDU_1, EXP_12).
    """

    # Leading letters plus the first underscore: "EDU_" from "EDU_1"
    PREFIX: str = r"^([A-Z]+_)"

    # Template for a conforming ID under a given (escaped) prefix
    NUMBERED: str = r"^{prefix}\d+$"


def strip_inline_comment(value: str) -> str:
    """
    Remove a trailing // comment from a field value and trim it.

    Args:
        value: Raw text after "KEY:"

    Returns:
        Trimmed value without comment

    Examples:
        >>> strip_inline_comment("Engineer // required")
        'Engineer'
        >>> strip_inline_comment("https://github.com/jsmith")
        'https://github.com/jsmith'
    """
    return re.sub(LinePatterns.INLINE_COMMENT, "", value.strip()).strip()


def is_comment_line(stripped_line: str) -> bool:
    """Check if a stripped line is a full-line comment."""
    return stripped_line.startswith(LinePatterns.COMMENT_PREFIX)
