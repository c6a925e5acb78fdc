"""
Validation Context

Responsibilities:
- Loads static validation schemas (job, profile) from YAML
- Validates parsed documents against a schema
- Classifies findings into errors, warnings and info
- Renders plain-text validation summaries

Owns: Schemas, diagnostic taxonomy, validation results
Never: Edits template text or blocks saving of invalid content
"""

from markdowndb.contexts.validation.diagnostics import (
    Diagnostic,
    DiagnosticType,
    ValidationResult,
)
from markdowndb.contexts.validation.exceptions import InvalidSchemaError, SchemaNotFoundError
from markdowndb.contexts.validation.schema import SectionSchema, ValidationSchema
from markdowndb.contexts.validation.schema_registry import (
    SchemaRegistry,
    get_schema,
    get_schema_for_type,
)
from markdowndb.contexts.validation.summary import get_validation_summary
from markdowndb.contexts.validation.validator import validate, validate_template

__all__ = [
    # Validation
    "validate_template",
    "validate",
    "get_validation_summary",
    # Results
    "Diagnostic",
    "DiagnosticType",
    "ValidationResult",
    # Schemas
    "ValidationSchema",
    "SectionSchema",
    "SchemaRegistry",
    "get_schema",
    "get_schema_for_type",
    # Exceptions
    "SchemaNotFoundError",
    "InvalidSchemaError",
]
