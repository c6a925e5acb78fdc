"""
Profile template data structure for the Intake context.

Provides ProfileTemplate class that wraps a parsed <PROFILE> document with
typed access to contact fields, education and experience entries.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from markdowndb.contexts.templating.document_data_structure import ParsedDocument
from markdowndb.contexts.templating.parser import (
    get_field,
    get_section_entries,
    get_section_list,
    parse_template,
)
from markdowndb.contexts.validation.diagnostics import ValidationResult
from markdowndb.contexts.validation.schema_registry import get_schema
from markdowndb.contexts.validation.validator import validate_template


@dataclass
class ProfileTemplate:
    """
    Parsed profile template with structured access methods.

    Factory methods:
        from_text(text) - Parse raw template text
        from_file(path) - Load from a template file
    """

    document: ParsedDocument
    source_path: Optional[Path] = None

    @classmethod
    def from_text(cls, text: str, source_path: Optional[Path] = None) -> "ProfileTemplate":
        """Parse profile template text and create a ProfileTemplate."""
        return cls(document=parse_template(text), source_path=source_path)

    @classmethod
    def from_file(cls, file_path: Path) -> "ProfileTemplate":
        """Load a profile template file and create a ProfileTemplate."""
        file_path = Path(file_path)
        return cls.from_text(file_path.read_text(encoding="utf-8"), source_path=file_path)

    @property
    def name(self) -> Optional[str]:
        return get_field(self.document, "NAME")

    @property
    def email(self) -> Optional[str]:
        return get_field(self.document, "EMAIL")

    @property
    def contact(self) -> dict[str, str]:
        """Non-empty contact fields in canonical order."""
        keys = ("ADDRESS", "EMAIL", "PHONE", "WEBSITE", "GITHUB", "LINKEDIN")
        return {key: value for key in keys if (value := get_field(self.document, key))}

    @property
    def education(self) -> list[dict[str, Any]]:
        """EDUCATION entries as field mappings with an 'id' key."""
        return get_section_entries(self.document, "EDUCATION")

    @property
    def experience(self) -> list[dict[str, Any]]:
        """EXPERIENCE entries as field mappings with an 'id' key."""
        return get_section_entries(self.document, "EXPERIENCE")

    def get_experience_bullets(self, entry_id: str) -> list[str]:
        """BULLETS of one experience entry; empty when the entry or list is absent."""
        section = self.document.sections.get("EXPERIENCE")
        if section is None or entry_id not in section.entries:
            return []
        return section.entries[entry_id].get_list("BULLETS")

    @property
    def interests(self) -> list[str]:
        return get_section_list(self.document, "INTERESTS")

    @property
    def skills(self) -> list[str]:
        return get_section_list(self.document, "SKILLS")

    @property
    def certifications(self) -> list[str]:
        return get_section_list(self.document, "CERTIFICATIONS")

    def validate(self) -> ValidationResult:
        """Validate against the profile schema."""
        return validate_template(self.document, get_schema("profile"))

    def __str__(self) -> str:
        return f"ProfileTemplate(name={self.name!r}, education={len(self.education)}, experience={len(self.experience)})"
