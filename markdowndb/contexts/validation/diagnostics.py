"""
Diagnostic records and validation results.

Severity is carried by the bucket a diagnostic is placed in (errors, warnings,
info), not by the record itself. The same DiagnosticType can land in different
buckets depending on the schema (e.g., missing_type).
"""

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Optional


class DiagnosticType(str, Enum):
    """Fixed taxonomy of validation findings."""

    # Structural
    MISSING_TYPE = "missing_type"
    UNEXPECTED_TYPE = "unexpected_type"
    MISSING_REQUIRED_FIELD = "missing_required_field"
    INVALID_ENUM_VALUE = "invalid_enum_value"
    MISSING_REQUIRED_SECTION = "missing_required_section"

    # Section and entry hygiene
    EMPTY_SECTION = "empty_section"
    DUPLICATE_ENTRY_ID = "duplicate_entry_id"
    INVALID_ENTRY_ID = "invalid_entry_id"
    POSSIBLE_SECTION_TYPO = "possible_section_typo"
    SECTION_NAME_CASE = "section_name_case"

    # Custom content
    CUSTOM_ENTRY_FIELDS = "custom_entry_fields"
    CUSTOM_FIELDS = "custom_fields"
    CUSTOM_SECTIONS = "custom_sections"

    def __str__(self) -> str:
        return self.value


@dataclass
class Diagnostic:
    """
    One validation finding.

    Attributes:
        type: Taxonomy tag
        message: Human-readable description
        section: Section the finding is scoped to
        entry: Entry ID the finding is scoped to
        field: Field name the finding is about
        value: Offending value (invalid_enum_value)
        allowed_values: Allowed set (invalid_enum_value)
        suggested_value: Pre-computed replacement (section renames, expected tag)
        fields: Field names (custom_entry_fields)
    """

    type: DiagnosticType
    message: str
    section: Optional[str] = None
    entry: Optional[str] = None
    field: Optional[str] = None
    value: Optional[str] = None
    allowed_values: Optional[list[str]] = None
    suggested_value: Optional[str] = None
    fields: Optional[list[str]] = None

    def to_dict(self) -> dict[str, Any]:
        """Plain-dict form without unset keys."""
        data = asdict(self)
        data["type"] = str(self.type)
        return {key: value for key, value in data.items() if value is not None}


@dataclass
class ValidationResult:
    """
    Result of validating one parsed document.

    Attributes:
        valid: True iff no errors were recorded
        errors: Structural problems that should be fixed
        warnings: Non-blocking problems
        info: Affirmative notes about preserved custom content
        custom_fields: Top-level field names not in the schema
        custom_sections: Section names not in the schema
    """

    valid: bool = True
    errors: list[Diagnostic] = field(default_factory=list)
    warnings: list[Diagnostic] = field(default_factory=list)
    info: list[Diagnostic] = field(default_factory=list)
    custom_fields: list[str] = field(default_factory=list)
    custom_sections: list[str] = field(default_factory=list)

    def add_error(self, diagnostic: Diagnostic) -> None:
        self.errors.append(diagnostic)
        self.valid = False

    def add_warning(self, diagnostic: Diagnostic) -> None:
        self.warnings.append(diagnostic)

    def add_info(self, diagnostic: Diagnostic) -> None:
        self.info.append(diagnostic)

    @property
    def diagnostics(self) -> list[Diagnostic]:
        """All diagnostics, errors first, then warnings, then info."""
        return [*self.errors, *self.warnings, *self.info]

    def to_dict(self) -> dict[str, Any]:
        """Plain-dict form for JSON output."""
        return {
            "valid": self.valid,
            "errors": [d.to_dict() for d in self.errors],
            "warnings": [d.to_dict() for d in self.warnings],
            "info": [d.to_dict() for d in self.info],
            "custom_fields": list(self.custom_fields),
            "custom_sections": list(self.custom_sections),
        }
