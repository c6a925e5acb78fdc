"""
Fix descriptor data structures.

A FixDescriptor describes one textual edit that remediates one diagnostic. It
is generated on demand, applied at most once, then discarded; the caller
re-validates before generating the next fix.
"""

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Optional


class FixType(str, Enum):
    """Closed set of edits the applier knows how to perform."""

    INSERT_AT_START = "insert_at_start"
    INSERT_TOP_LEVEL_FIELD = "insert_top_level_field"
    INSERT_FIELD_IN_ENTRY = "insert_field_in_entry"
    REPLACE_ENUM_VALUE_MULTI = "replace_enum_value_multi"
    RENAME_ENTRY_ID = "rename_entry_id"
    RENAME_SECTION = "rename_section"
    DELETE_SECTION = "delete_section"

    def __str__(self) -> str:
        return self.value


@dataclass
class FixDescriptor:
    """
    One proposed edit.

    Attributes:
        type: Edit kind
        section: Section that anchors the edit
        entry: Entry ID that anchors the edit
        field: Field to insert or whose value to replace
        text: Text to insert
        current_value: Value or name expected at the anchor
        new_value: Replacement name (renames)
        allowed_values: Choices for interactive enum replacement
        field_order: Canonical field order for the insertion scope
        button_label: UI label (inert for the edit itself)
        description: UI description (inert for the edit itself)
    """

    type: FixType
    section: Optional[str] = None
    entry: Optional[str] = None
    field: Optional[str] = None
    text: Optional[str] = None
    current_value: Optional[str] = None
    new_value: Optional[str] = None
    allowed_values: Optional[list[str]] = None
    field_order: tuple[str, ...] = ()
    button_label: Optional[str] = None
    description: Optional[str] = None

    @property
    def is_interactive(self) -> bool:
        """True when applying the fix needs a caller-chosen value."""
        return self.type == FixType.REPLACE_ENUM_VALUE_MULTI

    def to_dict(self) -> dict[str, Any]:
        """Plain-dict form without unset keys."""
        data = asdict(self)
        data["type"] = str(self.type)
        data["field_order"] = list(self.field_order)
        return {key: value for key, value in data.items() if value not in (None, [])}


@dataclass(frozen=True)
class FixResult:
    """
    Outcome of applying a fix.

    Attributes:
        new_content: Full edited text
        cursor_position: Offset just after the inserted or modified text
    """

    new_content: str
    cursor_position: int
