"""Unit tests for SchemaRegistry class."""

from pathlib import Path

import pytest

from markdowndb.contexts.validation import (
    InvalidSchemaError,
    SchemaNotFoundError,
    SchemaRegistry,
    ValidationSchema,
    get_schema,
    get_schema_for_type,
)


@pytest.mark.unit
def test_schema_registry_init():
    """Test SchemaRegistry initialization."""
    registry = SchemaRegistry()
    assert registry.schemas_path.exists()
    assert registry._cache == {}


@pytest.mark.unit
def test_available_schemas():
    """Test that the packaged job and profile schemas are discovered."""
    registry = SchemaRegistry()
    assert registry.available_schemas() == ["job", "profile"]


@pytest.mark.unit
def test_get_job_schema():
    """Test loading the job schema."""
    schema = SchemaRegistry().get_schema("job")

    assert isinstance(schema, ValidationSchema)
    assert schema.expected_type == "JOB"
    assert schema.missing_type_is_error is True
    assert schema.top_level_required == ("TITLE", "COMPANY")
    assert schema.enums["REMOTE_TYPE"] == ("ONSITE", "REMOTE", "HYBRID")
    assert schema.section_names == ["DESCRIPTION", "REQUIRED_SKILLS", "PREFERRED_SKILLS", "ABOUT_COMPANY"]
    assert schema.sections["REQUIRED_SKILLS"].required is True
    assert schema.sections["REQUIRED_SKILLS"].is_list is True


@pytest.mark.unit
def test_get_profile_schema():
    """Test loading the profile schema and its entry contracts."""
    schema = SchemaRegistry().get_schema("PROFILE")

    assert schema.missing_type_is_error is False
    education = schema.get_section_schema("EDUCATION")
    assert education.id_prefix == "EDU_"
    assert education.required_fields == ("DEGREE", "SCHOOL")
    assert education.field_order == ("DEGREE", "SCHOOL", "LOCATION", "START", "END", "GPA")
    assert schema.get_section_schema("EXPERIENCE").enums["TYPE"] == ("PROFESSIONAL", "PROJECT", "VOLUNTEER")
    assert schema.get_section_schema("HOBBIES") is None


@pytest.mark.unit
def test_schema_caching():
    """Test that schemas are cached after first load."""
    registry = SchemaRegistry()

    schema1 = registry.get_schema("job")
    assert registry.is_cached("job")

    schema2 = registry.get_schema("Job")
    assert schema1 is schema2

    registry.clear_cache()
    assert not registry.is_cached("job")


@pytest.mark.unit
def test_get_schema_not_found():
    """Test error handling for a missing schema."""
    registry = SchemaRegistry()

    with pytest.raises(SchemaNotFoundError) as exc_info:
        registry.get_schema("resume")

    assert exc_info.value.schema_name == "resume"
    assert isinstance(exc_info.value, FileNotFoundError)


@pytest.mark.unit
def test_get_schema_path():
    """Test getting schema file path."""
    path = SchemaRegistry().get_schema_path("job")

    assert isinstance(path, Path)
    assert path.name == "job.yaml"


@pytest.mark.unit
def test_get_schema_for_type():
    """Test finding schemas by document tag."""
    assert get_schema_for_type("JOB").name == "job"
    assert get_schema_for_type("PROFILE") is get_schema("profile")
    assert get_schema_for_type("RESUME") is None
    assert get_schema_for_type(None) is None


@pytest.mark.unit
def test_custom_schemas_path(tmp_path):
    """Test loading schemas from a custom directory."""
    (tmp_path / "note.yaml").write_text(
        "name: note\n"
        "expected_type: NOTE\n"
        "top_level_required: [SUBJECT]\n"
        "sections:\n"
        "  TAGS:\n"
        "    is_list: true\n"
    )
    registry = SchemaRegistry(schemas_path=tmp_path)
    schema = registry.get_schema("note")

    assert schema.expected_type == "NOTE"
    assert schema.top_level_required == ("SUBJECT",)
    assert schema.sections["TAGS"].is_list is True
    assert registry.get_schema_for_type("NOTE") is schema


@pytest.mark.unit
def test_invalid_schema_unknown_key(tmp_path):
    """Test that misspelled schema keys are rejected."""
    (tmp_path / "bad.yaml").write_text("name: bad\nexpected_type: BAD\nrequired_fields: [X]\n")

    with pytest.raises(InvalidSchemaError) as exc_info:
        SchemaRegistry(schemas_path=tmp_path).get_schema("bad")

    assert "required_fields" in str(exc_info.value)


@pytest.mark.unit
def test_invalid_schema_missing_expected_type(tmp_path):
    """Test that a schema without a type tag is rejected."""
    (tmp_path / "bad.yaml").write_text("name: bad\n")

    with pytest.raises(InvalidSchemaError):
        SchemaRegistry(schemas_path=tmp_path).get_schema("bad")
