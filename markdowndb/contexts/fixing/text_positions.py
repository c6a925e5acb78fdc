"""
Offset scanning over raw template text.

The fixing context never works from parser output: every fix re-locates its
anchor in the current text, so a fix generated against an older revision either
still lands in the right place or is reported stale. The patterns below are the
multiline (MULTILINE, unstripped) counterparts of templating.patterns.LinePatterns
and must recognize the same header shapes.

Spans are half-open [start, end) character offsets. Scope starts are always
line starts.
"""

import re
from dataclasses import dataclass
from typing import Optional

from markdowndb.contexts.templating.patterns import is_comment_line


@dataclass(frozen=True)
class RawTextPatterns:
    """Multiline patterns applied to whole documents."""

    # <JOB> on its own line
    TYPE_TAG: str = r"^[ \t]*<([A-Z_]+)>[ \t]*$"

    # Any "# NAME" section header line
    ANY_SECTION_HEADER: str = r"^[ \t]*#[ \t]+\S"

    # Any section or entry header line
    ANY_HEADER: str = r"^[ \t]*##?[ \t]+\S"

    # "# NAME" with named parts; {name} is substituted escaped
    SECTION_HEADER: str = r"^(?P<lead>[ \t]*#[ \t]+){name}(?P<tail>:?[ \t]*(?://.*)?)$"

    # "## ID" with named parts; {entry_id} is substituted escaped
    ENTRY_HEADER: str = r"^(?P<lead>[ \t]*##[ \t]+){entry_id}(?P<tail>[ \t]*(?://.*)?)$"

    # Field or list-open line, capturing the key
    FIELD_KEY: str = r"^[ \t]*([A-Z_]+):"

    # "FIELD:" with nothing but whitespace and an optional comment after the colon
    BLANK_FIELD: str = r"^(?P<key>[ \t]*{field}:)(?P<space>[ \t]*)(?://.*)?$"

    # "FIELD: value" positioned at the value
    FIELD_VALUE: str = r"^[ \t]*{field}:[ \t]*"

    # Numbered entry header under a prefix; {prefix} is substituted escaped
    NUMBERED_ENTRY: str = r"^[ \t]*##[ \t]+{prefix}(\d+)\b"

    # Runs of blank lines left behind by deletions
    EXCESS_NEWLINES: str = r"\n{3,}"


def line_end(content: str, pos: int) -> int:
    """Offset of the start of the line after the one containing pos (or end of text)."""
    newline = content.find("\n", pos)
    return len(content) if newline == -1 else newline + 1


def find_type_tag(content: str) -> Optional[re.Match]:
    """First <TAG> line in the text, or None."""
    return re.search(RawTextPatterns.TYPE_TAG, content, re.MULTILINE)


def next_section_start(content: str, pos: int) -> int:
    """Start of the next section header line at or after pos, else end of text."""
    match = re.compile(RawTextPatterns.ANY_SECTION_HEADER, re.MULTILINE).search(content, pos)
    return match.start() if match else len(content)


def next_header_start(content: str, pos: int, end: int) -> int:
    """Start of the next section or entry header line in [pos, end), else end."""
    match = re.compile(RawTextPatterns.ANY_HEADER, re.MULTILINE).search(content, pos, end)
    return match.start() if match else end


def find_section_header(content: str, section_name: str) -> Optional[re.Match]:
    """First '# NAME' header line for an exact section name."""
    pattern = RawTextPatterns.SECTION_HEADER.format(name=re.escape(section_name))
    return re.search(pattern, content, re.MULTILINE)


def section_span(content: str, section_name: str) -> Optional[tuple[int, int]]:
    """
    Body span of a section: from the line after its header to the next section header.

    Returns:
        (body_start, body_end) or None if the section header is not present
    """
    header = find_section_header(content, section_name)
    if header is None:
        return None
    body_start = line_end(content, header.end())
    return body_start, next_section_start(content, body_start)


def find_entry_header(
    content: str, entry_id: str, start: int = 0, end: Optional[int] = None, last: bool = False
) -> Optional[re.Match]:
    """
    "## ID" header line for an exact entry ID inside [start, end).

    The first match by default; the last one when last=True.
    """
    end = len(content) if end is None else end
    pattern = re.compile(RawTextPatterns.ENTRY_HEADER.format(entry_id=re.escape(entry_id)), re.MULTILINE)
    if not last:
        return pattern.search(content, start, end)
    matches = list(pattern.finditer(content, start, end))
    return matches[-1] if matches else None


def entry_span(content: str, entry_id: str, section_name: Optional[str] = None) -> Optional[tuple[int, int]]:
    """
    Body span of an entry: from the line after its header to the next header.

    When section_name is given, the entry is only searched inside that section.
    A repeated ID resolves to its last header, the entry the parser keeps.

    Returns:
        (body_start, body_end) or None if the section or entry is not present
    """
    if section_name:
        span = section_span(content, section_name)
        if span is None:
            return None
        scope_start, scope_end = span
    else:
        scope_start, scope_end = 0, len(content)

    header = find_entry_header(content, entry_id, scope_start, scope_end, last=True)
    if header is None:
        return None
    body_start = min(line_end(content, header.end()), scope_end)
    return body_start, next_header_start(content, body_start, scope_end)


def top_level_span(content: str) -> Optional[tuple[int, int]]:
    """
    Top-level field span: from the line after the type tag to the first section header.

    Returns:
        (start, end) or None when the text has no type tag
    """
    tag = find_type_tag(content)
    if tag is None:
        return None
    start = line_end(content, tag.end())
    return start, next_section_start(content, start)


def section_field_span(content: str, section_name: str) -> Optional[tuple[int, int]]:
    """Section-level field span: section body up to its first entry header."""
    span = section_span(content, section_name)
    if span is None:
        return None
    start, end = span
    return start, next_header_start(content, start, end)


def end_of_scope(content: str, start: int, end: int) -> int:
    """
    Offset just after the last non-blank line in [start, end).

    Trailing blank lines stay below inserted text. Empty scopes return start.
    """
    trimmed = content[start:end].rstrip()
    if not trimmed:
        return start
    return min(line_end(content, start + len(trimmed) - 1), end)


def find_smart_insert_position(
    content: str, start: int, end: int, field_name: str, field_order: tuple[str, ...]
) -> int:
    """
    Where a new field line belongs inside [start, end).

    Before the first field line whose canonical rank is greater than the new
    field's rank; otherwise after the scope's last non-blank line. Fields not in
    the order table (and unranked neighbours) fall back to end of scope.
    """
    if field_name in field_order:
        rank = field_order.index(field_name)
        for match in re.compile(RawTextPatterns.FIELD_KEY, re.MULTILINE).finditer(content, start, end):
            key = match.group(1)
            if key in field_order and field_order.index(key) > rank:
                return match.start()
    return end_of_scope(content, start, end)


def find_blank_field(content: str, start: int, end: int, field_name: str) -> Optional[re.Match]:
    """An existing 'FIELD:' line with an empty value inside [start, end)."""
    pattern = RawTextPatterns.BLANK_FIELD.format(field=re.escape(field_name))
    return re.compile(pattern, re.MULTILINE).search(content, start, end)


def find_field_value(content: str, start: int, end: int, field_name: str) -> Optional[int]:
    """Offset where the value of 'FIELD:' begins inside [start, end)."""
    pattern = RawTextPatterns.FIELD_VALUE.format(field=re.escape(field_name))
    match = re.compile(pattern, re.MULTILINE).search(content, start, end)
    return match.end() if match else None


def find_next_entry_number(content: str, prefix: str) -> int:
    """
    One more than the highest numeric suffix among '## PREFIX<n>' headers.

    Examples:
        >>> find_next_entry_number("## EDU_1\\n## EDU_3\\n", "EDU_")
        4
        >>> find_next_entry_number("", "EXP_")
        1
    """
    pattern = RawTextPatterns.NUMBERED_ENTRY.format(prefix=re.escape(prefix))
    numbers = [int(n) for n in re.findall(pattern, content, re.MULTILINE)]
    return max(numbers, default=0) + 1


def span_has_only_comments(content: str, start: int, end: int) -> bool:
    """True if every line in [start, end) is blank or a full-line comment."""
    for line in content[start:end].splitlines():
        stripped = line.strip()
        if stripped and not is_comment_line(stripped):
            return False
    return True


def collapse_blank_lines(content: str) -> str:
    """Collapse three or more consecutive newlines to two."""
    return re.sub(RawTextPatterns.EXCESS_NEWLINES, "\n\n", content)
