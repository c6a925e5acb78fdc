"""
Fix generation.

Maps one diagnostic to at most one FixDescriptor. Generation is pure: it reads
the raw text for next entry numbers and section bodies, and to infer the schema
from the type tag when the caller didn't pass one.
"""

import re
from typing import Optional

from markdowndb.contexts.fixing.fix_data_structure import FixDescriptor, FixType
from markdowndb.contexts.fixing.text_positions import (
    find_next_entry_number,
    find_type_tag,
    section_span,
    span_has_only_comments,
)
from markdowndb.contexts.templating.patterns import EntryIdPatterns
from markdowndb.contexts.validation.diagnostics import Diagnostic, DiagnosticType, ValidationResult
from markdowndb.contexts.validation.schema import ValidationSchema
from markdowndb.contexts.validation.schema_registry import get_schema_for_type

# Entry ID prefix per section when the schema doesn't declare one
DEFAULT_ENTRY_PREFIXES = {
    "EDUCATION": "EDU_",
    "EXPERIENCE": "EXP_",
    "SKILLS": "SKILL_",
    "PROJECTS": "PROJ_",
    "CERTIFICATIONS": "CERT_",
}
FALLBACK_ENTRY_PREFIX = "ENTRY_"


def generate_fix(
    diagnostic: Diagnostic, raw_content: str, schema: Optional[ValidationSchema] = None
) -> Optional[FixDescriptor]:
    """
    Propose a single edit for a diagnostic.

    Args:
        diagnostic: Finding from validate_template()
        raw_content: Current template text
        schema: Schema the diagnostic was produced against. Inferred from the
            text's <TAG> when omitted.

    Returns:
        FixDescriptor, or None for diagnostics with no mechanical fix

    Example:
        >>> fix = generate_fix(result.errors[0], text)
        >>> fix.type, fix.text
        (<FixType.INSERT_TOP_LEVEL_FIELD: 'insert_top_level_field'>, 'COMPANY: ')
    """
    diagnostic_type = diagnostic.type

    if diagnostic_type == DiagnosticType.MISSING_TYPE:
        return _fix_missing_type(diagnostic, schema)

    if schema is None:
        schema = _infer_schema(raw_content)

    if diagnostic_type == DiagnosticType.MISSING_REQUIRED_FIELD:
        return _fix_missing_field(diagnostic, schema)
    if diagnostic_type == DiagnosticType.INVALID_ENUM_VALUE:
        return _fix_enum_value(diagnostic)
    if diagnostic_type in (DiagnosticType.DUPLICATE_ENTRY_ID, DiagnosticType.INVALID_ENTRY_ID):
        return _fix_entry_id(diagnostic, raw_content, schema)
    if diagnostic_type in (DiagnosticType.POSSIBLE_SECTION_TYPO, DiagnosticType.SECTION_NAME_CASE):
        return _fix_section_name(diagnostic)
    if diagnostic_type == DiagnosticType.EMPTY_SECTION:
        return _fix_empty_section(diagnostic, raw_content)
    return None


def generate_fixes(
    result: ValidationResult, raw_content: str, schema: Optional[ValidationSchema] = None
) -> list[tuple[Diagnostic, Optional[FixDescriptor]]]:
    """
    Pair every diagnostic in a result with its proposed fix.

    Fixes are independent proposals against the same text. Apply one, then
    re-validate and regenerate; offsets shift after every edit.

    Returns:
        (diagnostic, fix or None) in errors, warnings, info order
    """
    if schema is None:
        schema = _infer_schema(raw_content)
    return [(d, generate_fix(d, raw_content, schema)) for d in result.diagnostics]


def _infer_schema(raw_content: str) -> Optional[ValidationSchema]:
    """Schema for the text's <TAG>, or None for untagged or unknown kinds."""
    tag = find_type_tag(raw_content)
    if tag is None:
        return None
    return get_schema_for_type(tag.group(1))


def _fix_missing_type(diagnostic: Diagnostic, schema: Optional[ValidationSchema]) -> Optional[FixDescriptor]:
    expected = diagnostic.suggested_value or (schema.expected_type if schema else None)
    if not expected:
        return None
    return FixDescriptor(
        type=FixType.INSERT_AT_START,
        text=f"<{expected}>\n",
        button_label=f"Add <{expected}>",
        description=f"Insert the <{expected}> type declaration at the top",
    )


def _fix_missing_field(diagnostic: Diagnostic, schema: Optional[ValidationSchema]) -> Optional[FixDescriptor]:
    field_name = diagnostic.field
    if not field_name:
        return None

    if diagnostic.section and diagnostic.entry:
        section_schema = schema.get_section_schema(diagnostic.section) if schema else None
        return FixDescriptor(
            type=FixType.INSERT_FIELD_IN_ENTRY,
            section=diagnostic.section,
            entry=diagnostic.entry,
            field=field_name,
            text=f"{field_name}: ",
            field_order=section_schema.field_order if section_schema else (),
            button_label=f"Add {field_name}",
            description=f"Add {field_name} to {diagnostic.section}.{diagnostic.entry}",
        )

    return FixDescriptor(
        type=FixType.INSERT_TOP_LEVEL_FIELD,
        field=field_name,
        text=f"{field_name}: ",
        field_order=schema.top_level_field_order if schema else (),
        button_label=f"Add {field_name}",
        description=f"Add the {field_name} field",
    )


def _fix_enum_value(diagnostic: Diagnostic) -> FixDescriptor:
    return FixDescriptor(
        type=FixType.REPLACE_ENUM_VALUE_MULTI,
        section=diagnostic.section,
        entry=diagnostic.entry,
        field=diagnostic.field,
        current_value=diagnostic.value,
        allowed_values=list(diagnostic.allowed_values or []),
        button_label="Choose value",
        description=f"Replace \"{diagnostic.value}\" with an allowed {diagnostic.field} value",
    )


def _entry_prefix(section_name: Optional[str], schema: Optional[ValidationSchema]) -> str:
    """ID prefix for a section: schema declaration, then known defaults, then ENTRY_."""
    if schema and section_name:
        section_schema = schema.get_section_schema(section_name)
        if section_schema and section_schema.id_prefix:
            return section_schema.id_prefix
    return DEFAULT_ENTRY_PREFIXES.get(section_name or "", FALLBACK_ENTRY_PREFIX)


def _fix_entry_id(
    diagnostic: Diagnostic, raw_content: str, schema: Optional[ValidationSchema]
) -> Optional[FixDescriptor]:
    entry_id = diagnostic.entry
    if not entry_id:
        return None

    prefix = None
    if diagnostic.type == DiagnosticType.DUPLICATE_ENTRY_ID:
        match = re.match(EntryIdPatterns.PREFIX, entry_id)
        prefix = match.group(1) if match else None
    if prefix is None:
        prefix = _entry_prefix(diagnostic.section, schema)

    new_id = f"{prefix}{find_next_entry_number(raw_content, prefix)}"
    return FixDescriptor(
        type=FixType.RENAME_ENTRY_ID,
        section=diagnostic.section,
        entry=entry_id,
        current_value=entry_id,
        new_value=new_id,
        button_label=f"Rename to {new_id}",
        description=f"Rename entry {entry_id} to {new_id}",
    )


def _fix_section_name(diagnostic: Diagnostic) -> Optional[FixDescriptor]:
    if not diagnostic.section or not diagnostic.suggested_value:
        return None
    return FixDescriptor(
        type=FixType.RENAME_SECTION,
        section=diagnostic.section,
        current_value=diagnostic.section,
        new_value=diagnostic.suggested_value,
        button_label=f"Rename to {diagnostic.suggested_value}",
        description=f"Rename section {diagnostic.section} to {diagnostic.suggested_value}",
    )


def _fix_empty_section(diagnostic: Diagnostic, raw_content: str) -> Optional[FixDescriptor]:
    if not diagnostic.section:
        return None
    # Only a body of blanks and comments is deletable
    span = section_span(raw_content, diagnostic.section)
    if span is not None and not span_has_only_comments(raw_content, *span):
        return None
    return FixDescriptor(
        type=FixType.DELETE_SECTION,
        section=diagnostic.section,
        button_label="Remove section",
        description=f"Remove the empty {diagnostic.section} section",
    )
