import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from omegaconf import OmegaConf

from markdowndb.contexts.validation.exceptions import SchemaNotFoundError
from markdowndb.contexts.validation.schema import ValidationSchema

load_dotenv()
DEFAULT_SCHEMAS_PATH = Path(__file__).parent / "schemas"
SCHEMAS_PATH = Path(os.getenv("MARKDOWNDB_SCHEMAS_PATH", str(DEFAULT_SCHEMAS_PATH)))


class SchemaRegistry:
    """
    Registry for loading and caching validation schemas.

    Schemas are stored as {schemas_path}/{name}.yaml and describe the required
    fields, enums and sections of one template kind.
    """

    def __init__(self, schemas_path: Optional[Path] = None):
        """
        Initialize the schema registry.

        Args:
            schemas_path: Directory holding schema YAML files. Defaults to
                          MARKDOWNDB_SCHEMAS_PATH from environment, else the packaged schemas
        """
        if schemas_path is None:
            schemas_path = SCHEMAS_PATH

        self.schemas_path = Path(schemas_path)
        self._cache: dict[str, ValidationSchema] = {}

    def get_schema(self, name: str) -> ValidationSchema:
        """
        Get a schema by name, loading and caching it if necessary.

        Args:
            name: Schema name (e.g., 'job', 'profile'; case-insensitive)

        Returns:
            ValidationSchema

        Raises:
            SchemaNotFoundError: If the schema file doesn't exist
            InvalidSchemaError: If the schema file is malformed
        """
        name = name.lower()
        if name in self._cache:
            return self._cache[name]

        schema_path = self.get_schema_path(name)
        if not schema_path.exists():
            raise SchemaNotFoundError(name, schema_path)

        config = OmegaConf.load(schema_path)
        schema_dict = OmegaConf.to_container(config, resolve=True)

        schema = ValidationSchema.from_dict(schema_dict, source=schema_path)
        self._cache[name] = schema
        return schema

    def get_schema_for_type(self, type_tag: Optional[str]) -> Optional[ValidationSchema]:
        """
        Find the schema whose expected type matches a document tag.

        Args:
            type_tag: Tag from a parsed document (e.g., 'JOB')

        Returns:
            Matching schema, or None when the tag is missing or unknown
        """
        if not type_tag:
            return None
        for name in self.available_schemas():
            schema = self.get_schema(name)
            if schema.expected_type == type_tag:
                return schema
        return None

    def get_schema_path(self, name: str) -> Path:
        """Path to a schema's YAML file."""
        return self.schemas_path / f"{name}.yaml"

    def available_schemas(self) -> list[str]:
        """Names of all schemas in the schemas directory, sorted."""
        return sorted(path.stem for path in self.schemas_path.glob("*.yaml"))

    def clear_cache(self):
        """Clear the schema cache."""
        self._cache.clear()

    def is_cached(self, name: str) -> bool:
        """Check if a schema is in the cache."""
        return name.lower() in self._cache


_default_registry = SchemaRegistry()


def get_schema(name: str) -> ValidationSchema:
    """Get a schema from the default registry (e.g., get_schema('job'))."""
    return _default_registry.get_schema(name)


def get_schema_for_type(type_tag: Optional[str]) -> Optional[ValidationSchema]:
    """Find the default-registry schema for a document tag (e.g., 'PROFILE')."""
    return _default_registry.get_schema_for_type(type_tag)
