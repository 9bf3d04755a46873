"""Map dotted field paths (``record.field``) to line/column ranges in YAML text.

Lookup is textual: the record is found by its top-level ``key:`` line and the
field by the first indented ``field:`` line inside that record's block. All
positions are 0-based.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List

MISSING_FIELD_MARKER = "Missing required field:"

_FIRST_NON_SPACE_RE = re.compile(r"\S|$")


@dataclass(frozen=True)
class SourceRange:
    start_line: int
    start_column: int
    end_line: int
    end_column: int


def _indent(line: str) -> int:
    return _FIRST_NON_SPACE_RE.search(line).start()


def key_line(lines: List[str], key: str) -> int:
    """Index of the first line whose stripped text starts with ``key:``, or -1."""
    prefix = f"{key}:"
    for i, line in enumerate(lines):
        if line.strip().startswith(prefix):
            return i
    return -1


def find_field_line(text: str, field_path: str) -> int:
    """Return the line for *field_path*.

    Falls back to the record's own line when the field is not written out
    (e.g. a missing required field), and to line 0 when the record is not found.
    """
    lines = text.split("\n")
    parts = field_path.split(".")
    root_key = parts[0]
    field_name = parts[-1]

    anchor = key_line(lines, root_key)

    if len(parts) == 1:
        return max(0, anchor)

    if anchor < 0:
        return 0

    field_re = re.compile(rf"\s+{re.escape(field_name)}\s*:", re.IGNORECASE)
    for i in range(anchor + 1, len(lines)):
        line = lines[i]
        # A non-blank line at column 0 starts the next record.
        if _indent(line) <= 0 and line.strip() != "":
            break
        if field_re.search(line):
            return i

    return anchor


def locate(text: str, field_path: str, message: str = "") -> SourceRange:
    """Resolve *field_path* to the range a diagnostic should underline."""
    lines = text.split("\n")
    line_number = find_field_line(text, field_path)
    line_text = lines[line_number] if line_number < len(lines) else ""

    start_column = 0
    end_column = len(line_text)

    if MISSING_FIELD_MARKER in message:
        start_column = _indent(line_text)
    else:
        field_name = field_path.split(".")[-1]
        index = line_text.find(field_name) if field_name else -1
        if index != -1:
            start_column = index
            end_column = index + len(field_name)

    return SourceRange(line_number, start_column, line_number, end_column)
