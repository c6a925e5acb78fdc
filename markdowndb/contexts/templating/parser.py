"""
Template parsing utilities for the Templating context.

Parses MarkdownDB template text into a ParsedDocument:

    <JOB>
    TITLE: Engineer          // inline comment stripped
    # REQUIRED_SKILLS
    - Python
    # EDUCATION
    ## EDU_1
    DEGREE: BSc
    BULLETS:
    - Dean's list

The parser is permissive. Unrecognized lines are ignored and malformed input
degrades to an emptier document rather than raising.
"""

import re
from typing import Any, Optional

from markdowndb.contexts.templating.document_data_structure import (
    ParsedDocument,
    TemplateEntry,
    TemplateSection,
)
from markdowndb.contexts.templating.logger import log_parse_result
from markdowndb.contexts.templating.patterns import (
    LinePatterns,
    is_comment_line,
    strip_inline_comment,
)


def parse_template(content: Any) -> ParsedDocument:
    """
    Parse template text into a structured document.

    Single left-to-right scan. Each line is attributed to the nearest section,
    entry or named list opened so far; a section header closes the open entry
    and list, an entry header closes the open list. Line shapes are tried in
    priority order and the first match wins, so "# NAME:" is always a section
    header and never a field.

    Args:
        content: Raw template text. Empty or non-string input yields an empty document.

    Returns:
        ParsedDocument (never raises)
    """
    if not content or not isinstance(content, str):
        return ParsedDocument(raw=content if isinstance(content, str) else "")

    document = ParsedDocument(raw=content)

    current_section: Optional[TemplateSection] = None
    current_entry: Optional[TemplateEntry] = None
    current_list: Optional[list[str]] = None

    for line in content.split("\n"):
        stripped = line.strip()

        # 1. Blank lines, comments, closing tags
        if not stripped or is_comment_line(stripped):
            continue
        if re.match(LinePatterns.CLOSING_TAG, stripped):
            continue

        # 2. <TAG> returns to top level
        type_match = re.match(LinePatterns.TYPE_TAG, stripped)
        if type_match:
            document.type = type_match.group(1)
            current_section = None
            current_entry = None
            current_list = None
            continue

        # 3. # SECTION
        section_match = re.match(LinePatterns.SECTION_HEADER, stripped)
        if section_match:
            section_name = section_match.group(1)
            if section_name in document.sections:
                document.warnings.append(
                    f"Section '{section_name}' declared more than once; contents merged"
                )
            else:
                document.sections[section_name] = TemplateSection(name=section_name)
            current_section = document.sections[section_name]
            current_entry = None
            current_list = None
            continue

        # 4. ## ENTRY_ID
        entry_match = re.match(LinePatterns.ENTRY_HEADER, stripped)
        if entry_match:
            entry_id = entry_match.group(1)
            current_list = None
            if current_section is None:
                document.warnings.append(f"Entry '{entry_id}' outside any section was dropped")
                current_entry = None
                continue
            if entry_id in current_section.entries:
                document.duplicate_entries.append((current_section.name, entry_id))
                document.warnings.append(
                    f"Duplicate entry ID '{entry_id}' in section '{current_section.name}'"
                )
            current_entry = TemplateEntry(entry_id=entry_id)
            current_section.entries[entry_id] = current_entry
            continue

        # 5. KEY: with nothing after the colon opens a named list
        list_open_match = re.match(LinePatterns.LIST_OPEN, stripped)
        if list_open_match:
            list_name = list_open_match.group(1)
            if current_entry is not None:
                current_list = current_entry.lists.setdefault(list_name, [])
            elif current_section is not None:
                current_list = current_section.lists.setdefault(list_name, [])
            else:
                # No list container at top level: record presence with an empty value
                document.top_level_fields[list_name] = ""
            continue

        # 6. - item
        item_match = re.match(LinePatterns.LIST_ITEM, stripped)
        if item_match:
            item = item_match.group(1).strip()
            if current_list is not None:
                current_list.append(item)
            elif current_section is not None and current_entry is None:
                current_section.list.append(item)
            continue

        # 7. KEY: value
        field_match = re.match(LinePatterns.FIELD, stripped)
        if field_match:
            key = field_match.group(1)
            value = strip_inline_comment(field_match.group(2))
            if current_entry is not None:
                current_entry.fields[key] = value
            elif current_section is not None:
                current_section.fields[key] = value
            else:
                document.top_level_fields[key] = value
            continue

        # Anything else is free-form content we deliberately keep out of the tree

    log_parse_result(document)
    return document


# Short alias
parse = parse_template


# =============================================================================
# DERIVED EXTRACTION HELPERS
# =============================================================================


def get_field(document: ParsedDocument, field_name: str) -> Optional[str]:
    """
    Get a top-level field value.

    Args:
        document: Result from parse_template()
        field_name: Field name (e.g., 'TITLE')

    Returns:
        Field value, or None when missing or blank
    """
    return document.top_level_fields.get(field_name) or None


def get_section(document: ParsedDocument, section_name: str) -> Optional[TemplateSection]:
    """Get a section by exact name, or None."""
    return document.sections.get(section_name)


def has_section(document: ParsedDocument, section_name: str) -> bool:
    """Check if a section exists."""
    return section_name in document.sections


def get_section_list(document: ParsedDocument, section_name: str) -> list[str]:
    """Bullets directly under a section, or an empty list."""
    section = get_section(document, section_name)
    return list(section.list) if section else []


def is_section_empty(section: TemplateSection) -> bool:
    """Check if a section has no bullets, fields, list items or entries."""
    return section.is_empty


def get_section_entries(document: ParsedDocument, section_name: str) -> list[dict[str, Any]]:
    """
    Get a section's entries as ID-tagged field mappings.

    Args:
        document: Result from parse_template()
        section_name: Section holding ## entries (e.g., 'EDUCATION')

    Returns:
        One dict per entry in document order, e.g.
        [{"id": "EDU_1", "DEGREE": "BSc", "SCHOOL": "MIT"}]
    """
    section = get_section(document, section_name)
    if section is None:
        return []
    return [{"id": entry_id, **entry.fields} for entry_id, entry in section.entries.items()]


def get_entry_list(entry: TemplateEntry, list_name: str) -> list[str]:
    """
    Get a named list from an entry.

    Args:
        entry: Entry from a parsed section
        list_name: List name (e.g., 'BULLETS')

    Returns:
        List items, or an empty list when absent
    """
    return list(entry.get_list(list_name))
