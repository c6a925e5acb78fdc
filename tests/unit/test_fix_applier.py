"""Unit tests for fix application on raw template text."""

import pytest

from markdowndb.contexts.fixing import FixDescriptor, FixResult, FixType, UnsupportedFixError, apply_fix
from markdowndb.contexts.fixing.text_positions import (
    end_of_scope,
    find_next_entry_number,
    find_smart_insert_position,
)

JOB_ORDER = ("TITLE", "COMPANY", "ADDRESS", "REMOTE_TYPE")
EDU_ORDER = ("DEGREE", "SCHOOL", "LOCATION", "START", "END", "GPA")


def _top_level(field, order=JOB_ORDER):
    return FixDescriptor(type=FixType.INSERT_TOP_LEVEL_FIELD, field=field, text=f"{field}: ", field_order=order)


def _entry(section, entry, field, order=EDU_ORDER):
    return FixDescriptor(
        type=FixType.INSERT_FIELD_IN_ENTRY,
        section=section,
        entry=entry,
        field=field,
        text=f"{field}: ",
        field_order=order,
    )


# =============================================================================
# INSERTIONS
# =============================================================================


@pytest.mark.unit
def test_insert_at_start():
    """Test the type tag is prepended."""
    fix = FixDescriptor(type=FixType.INSERT_AT_START, text="<PROFILE>\n")

    result = apply_fix(fix, "NAME: Jane\n")

    assert result == FixResult(new_content="<PROFILE>\nNAME: Jane\n", cursor_position=10)


@pytest.mark.unit
def test_insert_top_level_field_after_lower_ranked():
    """Test COMPANY lands right after TITLE and before the first section."""
    text = "<JOB>\nTITLE: Engineer\n# REQUIRED_SKILLS\n- Python\n"

    result = apply_fix(_top_level("COMPANY"), text)

    assert result.new_content == "<JOB>\nTITLE: Engineer\nCOMPANY: \n# REQUIRED_SKILLS\n- Python\n"
    assert result.cursor_position == len("<JOB>\nTITLE: Engineer\nCOMPANY: ")


@pytest.mark.unit
def test_insert_top_level_field_before_higher_ranked():
    """Test TITLE is placed before COMPANY when COMPANY already exists."""
    text = "<JOB>\nCOMPANY: Acme\nREMOTE_TYPE: HYBRID\n"

    result = apply_fix(_top_level("TITLE"), text)

    assert result.new_content == "<JOB>\nTITLE: \nCOMPANY: Acme\nREMOTE_TYPE: HYBRID\n"
    assert result.cursor_position == len("<JOB>\nTITLE: ")


@pytest.mark.unit
def test_insert_top_level_field_keeps_blank_lines_below():
    """Test insertion goes after the last non-blank line, above trailing blanks."""
    text = "<JOB>\nTITLE: Engineer\n\n\n# REQUIRED_SKILLS\n- Python\n"

    result = apply_fix(_top_level("COMPANY"), text)

    assert result.new_content == "<JOB>\nTITLE: Engineer\nCOMPANY: \n\n\n# REQUIRED_SKILLS\n- Python\n"


@pytest.mark.unit
def test_insert_top_level_field_unterminated_last_line():
    """Test a newline is added before inserting after an unterminated last line."""
    result = apply_fix(_top_level("COMPANY"), "<JOB>\nTITLE: Engineer")

    assert result.new_content == "<JOB>\nTITLE: Engineer\nCOMPANY: \n"
    assert result.cursor_position == len("<JOB>\nTITLE: Engineer\nCOMPANY: ")


@pytest.mark.unit
def test_insert_top_level_field_without_tag_is_stale():
    """Test there is no top-level anchor without a type tag."""
    assert apply_fix(_top_level("COMPANY"), "TITLE: Engineer\n") is None


@pytest.mark.unit
def test_insert_unranked_field_goes_to_end_of_scope():
    """Test fields outside the order table fall back to end of scope."""
    text = "<JOB>\nTITLE: Engineer\nCOMPANY: Acme\n# REQUIRED_SKILLS\n"

    result = apply_fix(_top_level("SALARY_RANGE_MIN", order=()), text)

    assert result.new_content == "<JOB>\nTITLE: Engineer\nCOMPANY: Acme\nSALARY_RANGE_MIN: \n# REQUIRED_SKILLS\n"


@pytest.mark.unit
def test_insert_reuses_existing_blank_field_line():
    """Test a present-but-blank field is completed in place, not duplicated."""
    text = "<JOB>\nTITLE: Engineer\nCOMPANY:\n# REQUIRED_SKILLS\n"

    result = apply_fix(_top_level("COMPANY"), text)

    assert result.new_content == "<JOB>\nTITLE: Engineer\nCOMPANY: \n# REQUIRED_SKILLS\n"
    assert result.new_content.count("COMPANY:") == 1
    assert result.cursor_position == len("<JOB>\nTITLE: Engineer\nCOMPANY: ")


@pytest.mark.unit
def test_insert_reuses_blank_field_with_comment():
    """Test a blank field followed by a comment keeps the comment."""
    text = "<JOB>\nTITLE: Engineer\nCOMPANY: // required\n"

    result = apply_fix(_top_level("COMPANY"), text)

    assert result.new_content == text
    assert result.cursor_position == len("<JOB>\nTITLE: Engineer\nCOMPANY: ")


@pytest.mark.unit
def test_insert_field_in_entry_by_order():
    """Test SCHOOL goes between DEGREE and LOCATION inside the right entry."""
    text = (
        "<PROFILE>\n# EDUCATION\n"
        "## EDU_1\nDEGREE: BSc\nSCHOOL: MIT\n"
        "## EDU_2\nDEGREE: MSc\nLOCATION: Pasadena\n"
        "# EXPERIENCE\n"
    )

    result = apply_fix(_entry("EDUCATION", "EDU_2", "SCHOOL"), text)

    expected_prefix = "<PROFILE>\n# EDUCATION\n## EDU_1\nDEGREE: BSc\nSCHOOL: MIT\n## EDU_2\nDEGREE: MSc\nSCHOOL: "
    assert result.new_content == expected_prefix + "\nLOCATION: Pasadena\n# EXPERIENCE\n"
    assert result.cursor_position == len(expected_prefix)


@pytest.mark.unit
def test_insert_field_in_entry_at_end_of_entry():
    """Test insertion stops at the next entry header."""
    text = "<PROFILE>\n# EDUCATION\n## EDU_1\nDEGREE: BSc\n\n## EDU_2\nDEGREE: MSc\n"

    result = apply_fix(_entry("EDUCATION", "EDU_1", "SCHOOL"), text)

    assert result.new_content == "<PROFILE>\n# EDUCATION\n## EDU_1\nDEGREE: BSc\nSCHOOL: \n\n## EDU_2\nDEGREE: MSc\n"


@pytest.mark.unit
def test_insert_field_in_empty_entry_at_end_of_text():
    """Test an entry header on the last line gets a newline before the field."""
    result = apply_fix(_entry("EDUCATION", "EDU_1", "DEGREE"), "<PROFILE>\n# EDUCATION\n## EDU_1")

    assert result.new_content == "<PROFILE>\n# EDUCATION\n## EDU_1\nDEGREE: \n"


@pytest.mark.unit
def test_insert_field_in_entry_scoped_to_section():
    """Test the same entry ID in another section is not touched."""
    text = "<PROFILE>\n# PROJECTS\n## EDU_1\nNOTE: x\n# EDUCATION\n## EDU_1\nDEGREE: BSc\n"

    result = apply_fix(_entry("EDUCATION", "EDU_1", "SCHOOL"), text)

    assert result.new_content == text + "SCHOOL: \n"


@pytest.mark.unit
def test_insert_field_in_missing_entry_is_stale():
    """Test a removed entry makes the fix stale."""
    text = "<PROFILE>\n# EDUCATION\n## EDU_2\nDEGREE: MSc\n"

    assert apply_fix(_entry("EDUCATION", "EDU_1", "SCHOOL"), text) is None
    assert apply_fix(_entry("EXPERIENCE", "EDU_2", "SCHOOL"), text) is None


# =============================================================================
# ENUM REPLACEMENT
# =============================================================================


def _enum_fix(field, current, section=None, entry=None, allowed=("ONSITE", "REMOTE", "HYBRID")):
    return FixDescriptor(
        type=FixType.REPLACE_ENUM_VALUE_MULTI,
        section=section,
        entry=entry,
        field=field,
        current_value=current,
        allowed_values=list(allowed),
    )


@pytest.mark.unit
def test_replace_top_level_enum_value():
    """Test only the value span is replaced and comments survive."""
    text = "<JOB>\nTITLE: Engineer\nREMOTE_TYPE: Remote // [ONSITE|REMOTE|HYBRID]\n"

    result = apply_fix(_enum_fix("REMOTE_TYPE", "Remote"), text, "REMOTE")

    assert result.new_content == "<JOB>\nTITLE: Engineer\nREMOTE_TYPE: REMOTE // [ONSITE|REMOTE|HYBRID]\n"
    assert result.cursor_position == len("<JOB>\nTITLE: Engineer\nREMOTE_TYPE: REMOTE")


@pytest.mark.unit
def test_replace_entry_enum_value_only_in_that_entry():
    """Test entry-scoped replacement leaves other entries alone."""
    text = "<PROFILE>\n# EXPERIENCE\n## EXP_1\nTYPE: Job\n## EXP_2\nTYPE: Job\n"
    fix = _enum_fix("TYPE", "Job", "EXPERIENCE", "EXP_2", ("PROFESSIONAL", "PROJECT", "VOLUNTEER"))

    result = apply_fix(fix, text, "PROFESSIONAL")

    assert result.new_content == "<PROFILE>\n# EXPERIENCE\n## EXP_1\nTYPE: Job\n## EXP_2\nTYPE: PROFESSIONAL\n"


@pytest.mark.unit
def test_replace_section_level_enum_value():
    """Test section-level fields are found before the first entry."""
    text = "<PROFILE>\n# NOTES\nMODE: loud\n## N_1\nMODE: loud\n"
    fix = _enum_fix("MODE", "loud", section="NOTES", allowed=("QUIET", "LOUD"))

    result = apply_fix(fix, text, "LOUD")

    assert result.new_content == "<PROFILE>\n# NOTES\nMODE: LOUD\n## N_1\nMODE: loud\n"


@pytest.mark.unit
def test_replace_enum_requires_allowed_choice():
    """Test missing or disallowed choices leave the text alone."""
    text = "<JOB>\nREMOTE_TYPE: Remote\n"
    fix = _enum_fix("REMOTE_TYPE", "Remote")

    assert apply_fix(fix, text) is None
    assert apply_fix(fix, text, "") is None
    assert apply_fix(fix, text, "remote") is None


@pytest.mark.unit
def test_replace_enum_stale_value():
    """Test a value edited since generation makes the fix stale."""
    fix = _enum_fix("REMOTE_TYPE", "Remote")

    assert apply_fix(fix, "<JOB>\nREMOTE_TYPE: HYBRID\n", "REMOTE") is None


# =============================================================================
# RENAMES
# =============================================================================


@pytest.mark.unit
def test_rename_duplicate_entry_renames_first():
    """Test the first of two same-named entries is renamed."""
    text = "<PROFILE>\n# EDUCATION\n## EDU_1 // first\nDEGREE: A\n## EDU_1\nDEGREE: B\n"
    fix = FixDescriptor(type=FixType.RENAME_ENTRY_ID, section="EDUCATION", entry="EDU_1", new_value="EDU_2")

    result = apply_fix(fix, text)

    assert result.new_content == "<PROFILE>\n# EDUCATION\n## EDU_2 // first\nDEGREE: A\n## EDU_1\nDEGREE: B\n"
    assert result.cursor_position == len("<PROFILE>\n# EDUCATION\n## EDU_2")


@pytest.mark.unit
def test_rename_entry_does_not_match_longer_ids():
    """Test EDU_1 doesn't match the header of EDU_10."""
    text = "<PROFILE>\n# EDUCATION\n## EDU_10\n## EDU_1\n"
    fix = FixDescriptor(type=FixType.RENAME_ENTRY_ID, section="EDUCATION", entry="EDU_1", new_value="EDU_11")

    result = apply_fix(fix, text)

    assert result.new_content == "<PROFILE>\n# EDUCATION\n## EDU_10\n## EDU_11\n"


@pytest.mark.unit
def test_rename_section_preserves_colon_and_comment():
    """Test the header keeps its colon, spacing and trailing comment."""
    text = "<PROFILE>\n# Interests:  // hobbies\n- Chess\n"
    fix = FixDescriptor(type=FixType.RENAME_SECTION, section="Interests", new_value="INTERESTS")

    result = apply_fix(fix, text)

    assert result.new_content == "<PROFILE>\n# INTERESTS:  // hobbies\n- Chess\n"
    assert result.cursor_position == len("<PROFILE>\n# INTERESTS")


@pytest.mark.unit
def test_rename_missing_section_is_stale():
    """Test renaming a section that is no longer present returns None."""
    fix = FixDescriptor(type=FixType.RENAME_SECTION, section="EXPERIANCE", new_value="EXPERIENCE")

    assert apply_fix(fix, "<PROFILE>\n# EXPERIENCE\n") is None


# =============================================================================
# DELETION
# =============================================================================


@pytest.mark.unit
def test_delete_empty_section():
    """Test an empty section and its comments are removed and blank runs collapse."""
    text = "<JOB>\nTITLE: T\n\n# PREFERRED_SKILLS\n// none yet\n\n# REQUIRED_SKILLS\n- Go\n"
    fix = FixDescriptor(type=FixType.DELETE_SECTION, section="PREFERRED_SKILLS")

    result = apply_fix(fix, text)

    assert result.new_content == "<JOB>\nTITLE: T\n\n# REQUIRED_SKILLS\n- Go\n"
    assert result.cursor_position == len("<JOB>\nTITLE: T\n\n")


@pytest.mark.unit
def test_delete_last_section():
    """Test deleting a trailing empty section."""
    text = "<JOB>\nTITLE: T\n# REQUIRED_SKILLS\n- Go\n# ABOUT_COMPANY\n"
    fix = FixDescriptor(type=FixType.DELETE_SECTION, section="ABOUT_COMPANY")

    assert apply_fix(fix, text).new_content == "<JOB>\nTITLE: T\n# REQUIRED_SKILLS\n- Go\n"


@pytest.mark.unit
def test_delete_guard_refuses_section_with_entry():
    """Test a section that gained an entry header is never deleted."""
    text = "<PROFILE>\n# EDUCATION\n## EDU_1\n"
    fix = FixDescriptor(type=FixType.DELETE_SECTION, section="EDUCATION")

    assert apply_fix(fix, text) is None


@pytest.mark.unit
def test_delete_guard_refuses_section_with_content():
    """Test a section that gained bullets is never deleted."""
    fix = FixDescriptor(type=FixType.DELETE_SECTION, section="SKILLS")

    assert apply_fix(fix, "<PROFILE>\n# SKILLS\n- Python\n") is None


# =============================================================================
# DISPATCH AND HELPERS
# =============================================================================


@pytest.mark.unit
def test_unsupported_fix_type():
    """Test unknown fix types raise instead of returning None."""
    fix = FixDescriptor(type="reformat_everything")

    with pytest.raises(UnsupportedFixError):
        apply_fix(fix, "<JOB>\n")


@pytest.mark.unit
def test_fix_type_accepts_plain_strings():
    """Test descriptors built from plain dict values still apply."""
    fix = FixDescriptor(type="insert_at_start", text="<JOB>\n")

    assert apply_fix(fix, "TITLE: x\n").new_content == "<JOB>\nTITLE: x\n"


@pytest.mark.unit
def test_find_next_entry_number():
    """Test next numbers come from the highest existing suffix."""
    assert find_next_entry_number("## EDU_1\n## EDU_7\n## EXP_9\n", "EDU_") == 8
    assert find_next_entry_number("## EDU_1\n", "EXP_") == 1
    assert find_next_entry_number("TEXT EDU_5\n", "EDU_") == 1


@pytest.mark.unit
def test_smart_insert_position_and_end_of_scope():
    """Test the raw position helpers on a small scope."""
    text = "A: 1\nC: 3\n\n"

    assert find_smart_insert_position(text, 0, len(text), "B", ("A", "B", "C")) == len("A: 1\n")
    assert find_smart_insert_position(text, 0, len(text), "D", ("A", "B", "C")) == len("A: 1\nC: 3\n")
    assert end_of_scope(text, 0, len(text)) == len("A: 1\nC: 3\n")
    assert end_of_scope("\n\n", 0, 2) == 0
