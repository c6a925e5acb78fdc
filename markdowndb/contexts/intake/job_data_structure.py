"""
Job template data structure for the Intake context.

Provides JobTemplate class that wraps a parsed <JOB> document with typed
access to its standard fields and list sections.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from markdowndb.contexts.templating.document_data_structure import ParsedDocument
from markdowndb.contexts.templating.parser import get_field, get_section_list, parse_template
from markdowndb.contexts.validation.diagnostics import ValidationResult
from markdowndb.contexts.validation.schema_registry import get_schema
from markdowndb.contexts.validation.validator import validate_template


@dataclass
class JobTemplate:
    """
    Parsed job template with structured access methods.

    Factory methods:
        from_text(text) - Parse raw template text
        from_file(path) - Load from a template file
    """

    document: ParsedDocument
    source_path: Optional[Path] = None

    # =========================================================================
    # FACTORY METHODS
    # =========================================================================

    @classmethod
    def from_text(cls, text: str, source_path: Optional[Path] = None) -> "JobTemplate":
        """
        Parse job template text and create a JobTemplate.

        Parsing never fails; use validate() to find structural problems.
        """
        return cls(document=parse_template(text), source_path=source_path)

    @classmethod
    def from_file(cls, file_path: Path) -> "JobTemplate":
        """
        Load a job template file and create a JobTemplate.

        Args:
            file_path: Path to template file

        Returns:
            JobTemplate instance
        """
        file_path = Path(file_path)
        return cls.from_text(file_path.read_text(encoding="utf-8"), source_path=file_path)

    # =========================================================================
    # PUBLIC API METHODS
    # =========================================================================

    @property
    def title(self) -> Optional[str]:
        return get_field(self.document, "TITLE")

    @property
    def company(self) -> Optional[str]:
        return get_field(self.document, "COMPANY")

    @property
    def address(self) -> Optional[str]:
        return get_field(self.document, "ADDRESS")

    @property
    def remote_type(self) -> Optional[str]:
        return get_field(self.document, "REMOTE_TYPE")

    @property
    def employment_type(self) -> Optional[str]:
        return get_field(self.document, "EMPLOYMENT_TYPE")

    @property
    def experience_level(self) -> Optional[str]:
        return get_field(self.document, "EXPERIENCE_LEVEL")

    @property
    def description(self) -> list[str]:
        return get_section_list(self.document, "DESCRIPTION")

    @property
    def required_skills(self) -> list[str]:
        return get_section_list(self.document, "REQUIRED_SKILLS")

    @property
    def preferred_skills(self) -> list[str]:
        return get_section_list(self.document, "PREFERRED_SKILLS")

    @property
    def about_company(self) -> list[str]:
        return get_section_list(self.document, "ABOUT_COMPANY")

    def validate(self) -> ValidationResult:
        """Validate against the job schema."""
        return validate_template(self.document, get_schema("job"))

    def __str__(self) -> str:
        return f"JobTemplate(title={self.title!r}, company={self.company!r})"
