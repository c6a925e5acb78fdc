"""
Schema-driven template validation.

Philosophy: validate structure, celebrate creativity. Required fields and
sections are enforced, but unknown fields and sections are reported as
preserved custom content rather than rejected.

Diagnostics appear within each bucket in evaluation order: type check, then
top-level fields (required before enums), then sections in schema declaration
order, then custom sections in document order, then the custom-content summary.
"""

import difflib
import re
from typing import Optional

from markdowndb.contexts.templating.document_data_structure import (
    ParsedDocument,
    TemplateEntry,
    TemplateSection,
)
from markdowndb.contexts.templating.patterns import EntryIdPatterns
from markdowndb.contexts.validation.diagnostics import (
    Diagnostic,
    DiagnosticType,
    ValidationResult,
)
from markdowndb.contexts.validation.logger import log_validation_result
from markdowndb.contexts.validation.schema import SectionSchema, ValidationSchema

# Minimum difflib similarity for suggesting a standard section name
SECTION_TYPO_CUTOFF = 0.8


def is_blank(fields: dict[str, str], name: str) -> bool:
    """A field is absent if missing from the mapping or empty after trimming."""
    value = fields.get(name)
    return value is None or not value.strip()


def validate_template(document: ParsedDocument, schema: ValidationSchema) -> ValidationResult:
    """
    Validate a parsed template against a schema.

    Deterministic and side-effect free apart from debug logging.

    Args:
        document: Result from parse_template()
        schema: Schema for the template kind (see schema_registry.get_schema)

    Returns:
        ValidationResult; valid is False iff any error was recorded

    Example:
        >>> doc = parse_template("<JOB>\\nTITLE: Engineer\\n# REQUIRED_SKILLS\\n- Python\\n")
        >>> result = validate_template(doc, get_schema("job"))
        >>> [e.field for e in result.errors]
        ['COMPANY']
    """
    result = ValidationResult()

    _validate_type(document, schema, result)
    _validate_top_level_fields(document, schema, result)
    _validate_sections(document, schema, result)
    _add_custom_content_info(result)

    log_validation_result(schema.name, result)
    return result


# Short alias
validate = validate_template


def _validate_type(document: ParsedDocument, schema: ValidationSchema, result: ValidationResult):
    """Check the <TAG> declaration."""
    if document.type is None:
        diagnostic = Diagnostic(
            type=DiagnosticType.MISSING_TYPE,
            suggested_value=schema.expected_type,
            message=f"Missing <{schema.expected_type}> type declaration at the start",
        )
        if schema.missing_type_is_error:
            result.add_error(diagnostic)
        else:
            result.add_warning(diagnostic)
    elif document.type != schema.expected_type:
        result.add_warning(
            Diagnostic(
                type=DiagnosticType.UNEXPECTED_TYPE,
                value=document.type,
                suggested_value=schema.expected_type,
                message=f"Expected <{schema.expected_type}> but found <{document.type}>",
            )
        )


def _validate_top_level_fields(
    document: ParsedDocument, schema: ValidationSchema, result: ValidationResult
):
    """Required fields, then enums, then custom field tracking."""
    fields = document.top_level_fields

    for field_name in schema.top_level_required:
        if is_blank(fields, field_name):
            result.add_error(
                Diagnostic(
                    type=DiagnosticType.MISSING_REQUIRED_FIELD,
                    field=field_name,
                    message=f'Required field "{field_name}" is missing or empty',
                )
            )

    for diagnostic in _check_enums(fields, schema.enums):
        result.add_error(diagnostic)

    standard_fields = schema.standard_fields
    for field_name in fields:
        if field_name not in standard_fields:
            result.custom_fields.append(field_name)


def _validate_sections(document: ParsedDocument, schema: ValidationSchema, result: ValidationResult):
    """Required sections, standard section contracts, then custom sections."""
    sections = document.sections

    for section_name, section_schema in schema.sections.items():
        if not section_schema.required:
            continue
        section = sections.get(section_name)
        if section is None:
            result.add_error(
                Diagnostic(
                    type=DiagnosticType.MISSING_REQUIRED_SECTION,
                    section=section_name,
                    message=f'Required section "{section_name}" is missing',
                )
            )
        elif section.is_empty:
            result.add_warning(
                Diagnostic(
                    type=DiagnosticType.EMPTY_SECTION,
                    section=section_name,
                    message=f'Required section "{section_name}" is empty',
                )
            )

    for section_name, section_schema in schema.sections.items():
        section = sections.get(section_name)
        if section is None:
            continue
        if section_schema.is_list:
            _validate_list_section(section, section_schema, result)
        else:
            _validate_entry_section(document, section, section_schema, result)

    for section_name in sections:
        if section_name in schema.sections:
            continue
        # Custom sections are never validated against contracts
        result.custom_sections.append(section_name)
        _check_section_name(section_name, schema, result)


def _validate_list_section(
    section: TemplateSection, section_schema: SectionSchema, result: ValidationResult
):
    """A list section should have at least one bullet."""
    if section.list:
        return
    # Required sections were already reported by the presence check
    if section_schema.required and section.is_empty:
        return
    result.add_warning(
        Diagnostic(
            type=DiagnosticType.EMPTY_SECTION,
            section=section.name,
            message=f'Section "{section.name}" is empty',
        )
    )


def _validate_entry_section(
    document: ParsedDocument,
    section: TemplateSection,
    section_schema: SectionSchema,
    result: ValidationResult,
):
    """An entry section should have entries, each honoring the entry contract."""
    if not section.entries:
        if not (section_schema.required and section.is_empty):
            result.add_warning(
                Diagnostic(
                    type=DiagnosticType.EMPTY_SECTION,
                    section=section.name,
                    message=f'Section "{section.name}" has no entries',
                )
            )
        return

    reported = set()
    for section_name, entry_id in document.duplicate_entries:
        if section_name != section.name or entry_id in reported:
            continue
        reported.add(entry_id)
        result.add_warning(
            Diagnostic(
                type=DiagnosticType.DUPLICATE_ENTRY_ID,
                section=section.name,
                entry=entry_id,
                message=f'Entry ID "{entry_id}" is used more than once in "{section.name}"',
            )
        )

    for entry in section.entries.values():
        _validate_entry(section.name, entry, section_schema, result)


def _validate_entry(
    section_name: str, entry: TemplateEntry, section_schema: SectionSchema, result: ValidationResult
):
    """ID convention, required fields, enums, then custom entry fields."""
    entry_id = entry.entry_id
    prefix = section_schema.id_prefix

    if prefix and not re.match(EntryIdPatterns.NUMBERED.format(prefix=re.escape(prefix)), entry_id):
        result.add_warning(
            Diagnostic(
                type=DiagnosticType.INVALID_ENTRY_ID,
                section=section_name,
                entry=entry_id,
                message=f'Entry ID "{entry_id}" in "{section_name}" should look like {prefix}1',
            )
        )

    for field_name in section_schema.required_fields:
        if is_blank(entry.fields, field_name):
            result.add_error(
                Diagnostic(
                    type=DiagnosticType.MISSING_REQUIRED_FIELD,
                    section=section_name,
                    entry=entry_id,
                    field=field_name,
                    message=f'Required field "{field_name}" is missing or empty in {section_name}.{entry_id}',
                )
            )

    for diagnostic in _check_enums(entry.fields, section_schema.enums):
        diagnostic.section = section_name
        diagnostic.entry = entry_id
        diagnostic.message = f"{diagnostic.message} (in {section_name}.{entry_id})"
        result.add_error(diagnostic)

    standard_fields = section_schema.standard_fields
    custom = [name for name in [*entry.fields, *entry.lists] if name not in standard_fields]
    if custom:
        result.add_info(
            Diagnostic(
                type=DiagnosticType.CUSTOM_ENTRY_FIELDS,
                section=section_name,
                entry=entry_id,
                fields=custom,
                message=f"{section_name}.{entry_id} has custom field(s): {', '.join(custom)}",
            )
        )


def _check_enums(fields: dict[str, str], enums: dict[str, tuple[str, ...]]) -> list[Diagnostic]:
    """
    Check enum-constrained fields.

    A value is invalid when it is non-empty and not a case-exact member of the
    allowed set. Blank values are left to the required-field check.
    """
    diagnostics = []
    for field_name, allowed in enums.items():
        value = fields.get(field_name)
        if not value or value in allowed:
            continue
        diagnostics.append(
            Diagnostic(
                type=DiagnosticType.INVALID_ENUM_VALUE,
                field=field_name,
                value=value,
                allowed_values=list(allowed),
                message=f'Invalid value "{value}" for {field_name}. Allowed values: {", ".join(allowed)}',
            )
        )
    return diagnostics


def _check_section_name(section_name: str, schema: ValidationSchema, result: ValidationResult):
    """Suggest a standard section name for a custom section that looks like one."""
    suggestion = _suggest_section_name(section_name, schema)
    if suggestion is None:
        return

    if section_name.upper() == suggestion:
        result.add_warning(
            Diagnostic(
                type=DiagnosticType.SECTION_NAME_CASE,
                section=section_name,
                suggested_value=suggestion,
                message=f'Section "{section_name}" should be uppercase: "{suggestion}"',
            )
        )
    else:
        result.add_warning(
            Diagnostic(
                type=DiagnosticType.POSSIBLE_SECTION_TYPO,
                section=section_name,
                suggested_value=suggestion,
                message=f'Section "{section_name}" looks like a typo of "{suggestion}"',
            )
        )


def _suggest_section_name(section_name: str, schema: ValidationSchema) -> Optional[str]:
    """Closest standard section name, or None when nothing is similar enough."""
    normalized = section_name.upper()
    if normalized in schema.sections:
        return normalized
    matches = difflib.get_close_matches(normalized, schema.section_names, n=1, cutoff=SECTION_TYPO_CUTOFF)
    return matches[0] if matches else None


def _add_custom_content_info(result: ValidationResult):
    """Summarize preserved custom fields and sections."""
    if result.custom_fields:
        count = len(result.custom_fields)
        result.add_info(
            Diagnostic(
                type=DiagnosticType.CUSTOM_FIELDS,
                fields=list(result.custom_fields),
                message=(
                    f"Includes {count} custom field(s): {', '.join(result.custom_fields)}. "
                    "These are fully supported and will be preserved."
                ),
            )
        )

    if result.custom_sections:
        count = len(result.custom_sections)
        result.add_info(
            Diagnostic(
                type=DiagnosticType.CUSTOM_SECTIONS,
                message=(
                    f"Includes {count} custom section(s): {', '.join(result.custom_sections)}. "
                    "These are fully supported and will be preserved."
                ),
            )
        )
