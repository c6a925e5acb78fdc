"""
Fix application.

Applies one FixDescriptor to raw template text and reports where the cursor
should land. Anchors are re-located in the current text on every call; when an
anchor is gone (the text changed since the fix was generated) the fix is stale
and apply_fix returns None instead of guessing.
"""

import re
from typing import Callable, Optional

from markdowndb.contexts.fixing.exceptions import UnsupportedFixError
from markdowndb.contexts.fixing.fix_data_structure import FixDescriptor, FixResult, FixType
from markdowndb.contexts.fixing.logger import log_fix_applied, log_stale_fix
from markdowndb.contexts.fixing.text_positions import (
    collapse_blank_lines,
    entry_span,
    find_blank_field,
    find_entry_header,
    find_field_value,
    find_section_header,
    find_smart_insert_position,
    line_end,
    next_section_start,
    section_field_span,
    section_span,
    span_has_only_comments,
    top_level_span,
)


def apply_fix(
    fix: FixDescriptor, raw_content: str, chosen_enum_value: Optional[str] = None
) -> Optional[FixResult]:
    """
    Apply a fix to template text.

    Args:
        fix: Descriptor from generate_fix()
        raw_content: Current template text
        chosen_enum_value: Replacement for replace_enum_value_multi fixes

    Returns:
        FixResult with the edited text and cursor offset, or None if the fix is
        stale or can't be applied (e.g., no value chosen)

    Raises:
        UnsupportedFixError: If the fix type is unknown
    """
    try:
        fix_type = FixType(fix.type)
    except ValueError:
        raise UnsupportedFixError(fix.type) from None

    if fix_type == FixType.REPLACE_ENUM_VALUE_MULTI:
        result = _replace_enum_value(fix, raw_content, chosen_enum_value)
    else:
        result = _HANDLERS[fix_type](fix, raw_content)

    if result is not None:
        log_fix_applied(fix, result)
    return result


def _insert_at_start(fix: FixDescriptor, content: str) -> Optional[FixResult]:
    if not fix.text:
        log_stale_fix(fix, "nothing to insert")
        return None
    return FixResult(new_content=fix.text + content, cursor_position=len(fix.text))


def _insert_top_level_field(fix: FixDescriptor, content: str) -> Optional[FixResult]:
    span = top_level_span(content)
    if span is None:
        log_stale_fix(fix, "no type tag to anchor top-level fields")
        return None
    return _insert_field(fix, content, *span)


def _insert_field_in_entry(fix: FixDescriptor, content: str) -> Optional[FixResult]:
    if not fix.entry:
        log_stale_fix(fix, "no entry given")
        return None
    span = entry_span(content, fix.entry, fix.section)
    if span is None:
        log_stale_fix(fix, f"entry {fix.section}.{fix.entry} not found")
        return None
    return _insert_field(fix, content, *span)


def _insert_field(fix: FixDescriptor, content: str, start: int, end: int) -> Optional[FixResult]:
    """Insert 'FIELD: ' in scope, reusing an existing blank FIELD line."""
    if not fix.field or not fix.text:
        log_stale_fix(fix, "no field to insert")
        return None

    blank = find_blank_field(content, start, end, fix.field)
    if blank is not None:
        key_end = blank.end("key")
        if blank.group("space"):
            return FixResult(new_content=content, cursor_position=key_end + 1)
        new_content = content[:key_end] + " " + content[key_end:]
        return FixResult(new_content=new_content, cursor_position=key_end + 1)

    position = find_smart_insert_position(content, start, end, fix.field, fix.field_order)
    lead = "\n" if position > 0 and content[position - 1] != "\n" else ""
    new_content = content[:position] + lead + fix.text + "\n" + content[position:]
    return FixResult(new_content=new_content, cursor_position=position + len(lead) + len(fix.text))


def _value_scope(fix: FixDescriptor, content: str) -> Optional[tuple[int, int]]:
    """Scope holding an enum field: entry, section-level fields, or top level."""
    if fix.entry:
        return entry_span(content, fix.entry, fix.section)
    if fix.section:
        return section_field_span(content, fix.section)
    span = top_level_span(content)
    if span is None:
        # Untagged text: top-level fields run from the start to the first section
        return 0, next_section_start(content, 0)
    return span


def _replace_enum_value(
    fix: FixDescriptor, content: str, chosen_enum_value: Optional[str]
) -> Optional[FixResult]:
    if not chosen_enum_value:
        log_stale_fix(fix, "no value chosen")
        return None
    if fix.allowed_values and chosen_enum_value not in fix.allowed_values:
        log_stale_fix(fix, f"{chosen_enum_value!r} is not an allowed value")
        return None
    if not fix.field or not fix.current_value:
        log_stale_fix(fix, "no field value to replace")
        return None

    scope = _value_scope(fix, content)
    if scope is None:
        log_stale_fix(fix, "field scope not found")
        return None

    value_start = find_field_value(content, *scope, fix.field)
    if value_start is None or not content.startswith(fix.current_value, value_start):
        log_stale_fix(fix, f"{fix.field} no longer has value {fix.current_value!r}")
        return None

    value_end = value_start + len(fix.current_value)
    new_content = content[:value_start] + chosen_enum_value + content[value_end:]
    return FixResult(new_content=new_content, cursor_position=value_start + len(chosen_enum_value))


def _rename_header(fix: FixDescriptor, content: str, header: Optional[re.Match]) -> Optional[FixResult]:
    """Replace the name between a header's lead and tail, keeping both."""
    if header is None:
        log_stale_fix(fix, f"header {fix.current_value or fix.entry or fix.section} not found")
        return None
    if not fix.new_value:
        log_stale_fix(fix, "no new name")
        return None
    name_start = header.end("lead")
    name_end = header.start("tail")
    new_content = content[:name_start] + fix.new_value + content[name_end:]
    return FixResult(new_content=new_content, cursor_position=name_start + len(fix.new_value))


def _rename_entry_id(fix: FixDescriptor, content: str) -> Optional[FixResult]:
    entry_id = fix.entry or fix.current_value
    if not entry_id:
        return _rename_header(fix, content, None)

    if fix.section:
        span = section_span(content, fix.section)
        if span is None:
            return _rename_header(fix, content, None)
        header = find_entry_header(content, entry_id, *span)
    else:
        header = find_entry_header(content, entry_id)
    return _rename_header(fix, content, header)


def _rename_section(fix: FixDescriptor, content: str) -> Optional[FixResult]:
    section_name = fix.section or fix.current_value
    header = find_section_header(content, section_name) if section_name else None
    return _rename_header(fix, content, header)


def _delete_section(fix: FixDescriptor, content: str) -> Optional[FixResult]:
    """Delete a section header and its body when the body holds only blanks and comments."""
    header = find_section_header(content, fix.section) if fix.section else None
    if header is None:
        log_stale_fix(fix, f"section {fix.section} not found")
        return None

    body_start = line_end(content, header.end())
    section_end = next_section_start(content, body_start)
    if not span_has_only_comments(content, body_start, section_end):
        log_stale_fix(fix, f"section {fix.section} has content")
        return None

    before = content[: header.start()]
    new_content = collapse_blank_lines(before + content[section_end:])
    cursor = min(len(collapse_blank_lines(before)), len(new_content))
    return FixResult(new_content=new_content, cursor_position=cursor)


# replace_enum_value_multi takes the chosen value and is dispatched separately
_HANDLERS: dict[FixType, Callable[[FixDescriptor, str], Optional[FixResult]]] = {
    FixType.INSERT_AT_START: _insert_at_start,
    FixType.INSERT_TOP_LEVEL_FIELD: _insert_top_level_field,
    FixType.INSERT_FIELD_IN_ENTRY: _insert_field_in_entry,
    FixType.RENAME_ENTRY_ID: _rename_entry_id,
    FixType.RENAME_SECTION: _rename_section,
    FixType.DELETE_SECTION: _delete_section,
}
