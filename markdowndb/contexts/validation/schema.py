"""
Validation schema data structures.

A ValidationSchema is static configuration describing one template kind (job,
profile): its type tag, required/optional top-level fields, enum constraints and
the contract for each standard section. Schemas are shared read-only; nothing in
the validation or fixing contexts mutates them.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from markdowndb.contexts.validation.exceptions import InvalidSchemaError

SCHEMA_KEYS = {
    "name",
    "expected_type",
    "missing_type_is_error",
    "top_level_required",
    "top_level_optional",
    "enums",
    "top_level_field_order",
    "sections",
}

SECTION_KEYS = {
    "required",
    "is_list",
    "required_fields",
    "optional_fields",
    "enums",
    "id_prefix",
    "field_order",
}


@dataclass(frozen=True)
class SectionSchema:
    """
    Contract for one standard section.

    Attributes:
        name: Section name (e.g., 'EDUCATION')
        required: Section must be present
        is_list: Section holds bullets; otherwise it holds ## entries
        required_fields: Fields every entry must have
        optional_fields: Standard, non-required entry fields and lists
        enums: Allowed values per entry field
        id_prefix: Entry ID convention (e.g., 'EDU_' for EDU_1, EDU_2)
        field_order: Canonical field order inside an entry
    """

    name: str
    required: bool = False
    is_list: bool = False
    required_fields: tuple[str, ...] = ()
    optional_fields: tuple[str, ...] = ()
    enums: dict[str, tuple[str, ...]] = field(default_factory=dict)
    id_prefix: Optional[str] = None
    field_order: tuple[str, ...] = ()

    @property
    def standard_fields(self) -> set[str]:
        return set(self.required_fields) | set(self.optional_fields)


@dataclass(frozen=True)
class ValidationSchema:
    """
    Contract for one template kind.

    Attributes:
        name: Schema identifier (e.g., 'job')
        expected_type: Tag the document should declare (e.g., 'JOB')
        missing_type_is_error: Missing tag is an error (True) or a warning (False)
        top_level_required: Required top-level fields
        top_level_optional: Standard, non-required top-level fields
        enums: Allowed values per top-level field
        sections: Standard sections in declaration order
        top_level_field_order: Canonical order of top-level fields
    """

    name: str
    expected_type: str
    missing_type_is_error: bool = False
    top_level_required: tuple[str, ...] = ()
    top_level_optional: tuple[str, ...] = ()
    enums: dict[str, tuple[str, ...]] = field(default_factory=dict)
    sections: dict[str, SectionSchema] = field(default_factory=dict)
    top_level_field_order: tuple[str, ...] = ()

    @property
    def standard_fields(self) -> set[str]:
        return set(self.top_level_required) | set(self.top_level_optional)

    @property
    def section_names(self) -> list[str]:
        return list(self.sections)

    def get_section_schema(self, section_name: str) -> Optional[SectionSchema]:
        """Schema for a standard section, or None for custom sections."""
        return self.sections.get(section_name)

    @classmethod
    def from_dict(cls, data: dict[str, Any], source: Optional[Path] = None) -> "ValidationSchema":
        """
        Build a schema from its plain-dict (YAML) form.

        Args:
            data: Schema mapping as loaded from YAML
            source: Schema file path, used in error messages

        Returns:
            ValidationSchema instance

        Raises:
            InvalidSchemaError: If required keys are missing or keys are unknown
        """
        if not isinstance(data, dict):
            raise InvalidSchemaError("Schema must be a mapping", source)

        unknown = set(data) - SCHEMA_KEYS
        if unknown:
            raise InvalidSchemaError(f"Unknown schema keys: {sorted(unknown)}", source)

        for key in ("name", "expected_type"):
            if not data.get(key):
                raise InvalidSchemaError(f"Schema is missing '{key}'", source)

        sections = {}
        for section_name, section_data in (data.get("sections") or {}).items():
            section_data = section_data or {}
            unknown = set(section_data) - SECTION_KEYS
            if unknown:
                raise InvalidSchemaError(
                    f"Unknown keys in section '{section_name}': {sorted(unknown)}", source
                )
            sections[section_name] = SectionSchema(
                name=section_name,
                required=bool(section_data.get("required", False)),
                is_list=bool(section_data.get("is_list", False)),
                required_fields=tuple(section_data.get("required_fields") or ()),
                optional_fields=tuple(section_data.get("optional_fields") or ()),
                enums=_enum_table(section_data.get("enums")),
                id_prefix=section_data.get("id_prefix"),
                field_order=tuple(section_data.get("field_order") or ()),
            )

        return cls(
            name=data["name"],
            expected_type=data["expected_type"],
            missing_type_is_error=bool(data.get("missing_type_is_error", False)),
            top_level_required=tuple(data.get("top_level_required") or ()),
            top_level_optional=tuple(data.get("top_level_optional") or ()),
            enums=_enum_table(data.get("enums")),
            sections=sections,
            top_level_field_order=tuple(data.get("top_level_field_order") or ()),
        )


def _enum_table(raw: Optional[dict]) -> dict[str, tuple[str, ...]]:
    """Normalize an enum mapping to field -> tuple of allowed strings."""
    return {name: tuple(str(v) for v in values) for name, values in (raw or {}).items()}
