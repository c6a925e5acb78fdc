"""
Templating Context

Responsibilities:
- Defines the MarkdownDB line grammar (tags, sections, entries, fields, lists)
- Parses raw template text into a structured, ephemeral document tree
- Provides pure extraction helpers over the parsed tree
- Ships the canonical job and profile templates

Owns: Template grammar, ParsedDocument structure
Never: Validates against schemas or edits raw text
"""

from markdowndb.contexts.templating.document_data_structure import (
    ParsedDocument,
    TemplateEntry,
    TemplateSection,
)
from markdowndb.contexts.templating.parser import (
    get_entry_list,
    get_field,
    get_section,
    get_section_entries,
    get_section_list,
    has_section,
    is_section_empty,
    parse,
    parse_template,
)
from markdowndb.contexts.templating.templates import get_template

__all__ = [
    # Parsing
    "parse_template",
    "parse",
    # Extraction helpers
    "get_field",
    "get_section",
    "has_section",
    "get_section_list",
    "is_section_empty",
    "get_section_entries",
    "get_entry_list",
    # Data structures
    "ParsedDocument",
    "TemplateSection",
    "TemplateEntry",
    # Canonical templates
    "get_template",
]
