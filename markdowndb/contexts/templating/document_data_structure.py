"""
Template Document Data Structures

Defines the parsed, in-memory form of a MarkdownDB template: the document,
its sections, and the ## entries inside sections.

The parsed document is ephemeral. It is rebuilt from raw text on every read and
carries no source offsets; the raw text is the only persisted representation.
"""

from dataclasses import asdict, dataclass, field
from typing import Any, List, Optional


@dataclass
class TemplateEntry:
    """
    A ## sub-record within a section (e.g., one education entry).

    Attributes:
        entry_id: Identifier from the "## ID" header (e.g., "EDU_1")
        fields: KEY: value pairs inside the entry
        lists: Named bullet lists inside the entry (e.g., BULLETS)
    """

    entry_id: str
    fields: dict[str, str] = field(default_factory=dict)
    lists: dict[str, list[str]] = field(default_factory=dict)

    def get_list(self, list_name: str) -> list[str]:
        """Named list items, or an empty list when the entry has no such list."""
        return self.lists.get(list_name, [])


@dataclass
class TemplateSection:
    """
    A # grouping of bullets, fields, named lists and entries.

    Attributes:
        name: Section name as written in the header
        list: Bullets directly under the header (outside any entry or named list)
        fields: KEY: value pairs directly under the section
        lists: Named lists directly under the section
        entries: ## entries keyed by entry ID, in document order
    """

    name: str
    list: List[str] = field(default_factory=list)
    fields: dict[str, str] = field(default_factory=dict)
    lists: dict[str, List[str]] = field(default_factory=dict)
    entries: dict[str, TemplateEntry] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        """True when the section holds no bullets, fields, list items or entries."""
        has_list_items = any(items for items in self.lists.values())
        return not (self.list or self.fields or has_list_items or self.entries)


@dataclass
class ParsedDocument:
    """
    Structured view of one template.

    Attributes:
        type: Tag from the "<TAG>" line, or None when absent
        top_level_fields: KEY: value pairs before the first section header
        sections: Sections keyed by name, in document order
        raw: Original input text
        duplicate_entries: (section, entry ID) pairs whose ID was declared more than once
        warnings: Human-readable notes about lenient parsing decisions
    """

    type: Optional[str] = None
    top_level_fields: dict[str, str] = field(default_factory=dict)
    sections: dict[str, TemplateSection] = field(default_factory=dict)
    raw: str = ""
    duplicate_entries: list[tuple[str, str]] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Plain-dict form for JSON output."""
        return asdict(self)
