"""Custom exceptions for validation context with schema references."""

from pathlib import Path
from typing import Optional


class SchemaNotFoundError(FileNotFoundError):
    """
    Exception raised when no schema file exists for a requested schema name.

    Attributes:
        schema_name: Requested schema name (e.g., 'job')
        schema_path: Path that was searched
    """

    def __init__(self, schema_name: str, schema_path: Path):
        self.schema_name = schema_name
        self.schema_path = schema_path
        super().__init__(f"Validation schema '{schema_name}' not found at {schema_path}")


class InvalidSchemaError(ValueError):
    """
    Exception raised when a schema file doesn't conform to the expected structure.

    Attributes:
        message: Error description
        schema_path: Path to the offending schema file
    """

    def __init__(self, message: str, schema_path: Optional[Path] = None):
        self.message = message
        self.schema_path = schema_path

        parts = [message]
        if schema_path:
            parts.append(f"Schema file: {schema_path}")

        super().__init__("\n".join(parts))
