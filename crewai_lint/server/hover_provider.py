#!/usr/bin/env python3

import re
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

from lsprotocol import types as lsp

from .. import AGENTS_FILE_NAME, TASKS_FILE_NAME
from ..models.schema_types import RecordSchema, TypeTag
from ..schema.registry import SchemaRegistry
from ..schema.validator import format_type
from .uri_utils import uri_to_path

_KEY_RE = re.compile(r"^(\s*)([^:]+):")
_FIRST_NON_SPACE_RE = re.compile(r"\S|$")


@dataclass(frozen=True)
class FieldInfo:
    required: bool
    description: str
    type: TypeTag


def _is_word_char(char: str) -> bool:
    return char.isalnum() or char in '_-'


def get_word_range_at_position(line: str, character: int) -> Optional[Tuple[int, int]]:
    """Get the [start, end) range of the word at the given character position."""
    position = min(character, len(line))
    start = position
    while start > 0 and _is_word_char(line[start - 1]):
        start -= 1

    end = position
    while end < len(line) and _is_word_char(line[end]):
        end += 1

    if start == end:
        return None
    return start, end


def is_yaml_key(line_text: str, position: int) -> bool:
    """Check whether *position* lies within the key part of a ``key: value`` line."""
    colon_index = line_text.find(':', position)
    if colon_index == -1:
        return False

    text_before_colon = line_text[:colon_index].strip()
    return line_text[:position].strip() in text_before_colon


def get_yaml_path(lines: List[str], line_number: int) -> Optional[str]:
    """Build the dotted key path of the key on *line_number* from its parent keys."""
    line_text = lines[line_number]
    key_match = _KEY_RE.match(line_text)
    if not key_match:
        return None

    current_key = key_match.group(2).strip()
    indent = _FIRST_NON_SPACE_RE.search(line_text).start()

    parent_keys: List[str] = []
    for i in range(line_number - 1, -1, -1):
        if indent == 0:
            break
        parent_text = lines[i]
        if not parent_text.strip() or parent_text.lstrip().startswith('#'):
            continue
        parent_indent = _FIRST_NON_SPACE_RE.search(parent_text).start()
        if parent_indent < indent:
            parent_match = _KEY_RE.match(parent_text)
            if parent_match:
                parent_keys.insert(0, parent_match.group(2).strip())
                indent = parent_indent

    return ".".join(parent_keys + [current_key])


def get_field_info(field_path: str, schema: RecordSchema) -> Optional[FieldInfo]:
    """Get required/optional status, description and type for the last path segment."""
    name = field_path.split('.')[-1]
    field_def = schema.get_field(name)
    if field_def is None:
        return None

    return FieldInfo(
        required=schema.is_required(name),
        description=field_def.description,
        type=field_def.type,
    )


def build_hover_markdown(word: str, info: FieldInfo) -> str:
    hover_text = f"**{word}**\n\n"
    hover_text += "*Required field*\n\n" if info.required else "*Optional field*\n\n"
    if info.description:
        hover_text += f"{info.description}\n\n"
    if info.type:
        hover_text += f"Type: `{format_type(info.type)}`"
    return hover_text


class HoverProvider:
    """Provides schema documentation for field keys."""

    def __init__(self, registry: SchemaRegistry):
        self.registry = registry

    def get_hover(self, params: lsp.HoverParams, server) -> Optional[lsp.Hover]:
        """Handle hover requests."""
        document = server.workspace.get_text_document(params.text_document.uri)
        if not document:
            return None
        return self.hover_for_text(
            uri_to_path(params.text_document.uri),
            document.source,
            params.position.line,
            params.position.character,
        )

    def hover_for_text(self, file_path: str, text: str, line: int, character: int) -> Optional[lsp.Hover]:
        file_name = Path(file_path).name
        if file_name not in (AGENTS_FILE_NAME, TASKS_FILE_NAME):
            return None

        lines = text.split("\n")
        if line >= len(lines):
            return None
        line_text = lines[line]

        word_range = get_word_range_at_position(line_text, character)
        if word_range is None:
            return None
        start, end = word_range
        word = line_text[start:end]

        if not is_yaml_key(line_text, start):
            return None

        field_path = get_yaml_path(lines, line)
        if not field_path:
            return None

        schema = self.registry.get_current_schema()
        if schema is None:
            return None

        record_schema = schema.schema_for("agent" if file_name == AGENTS_FILE_NAME else "task")
        info = get_field_info(field_path, record_schema)
        if info is None:
            return None

        return lsp.Hover(
            contents=lsp.MarkupContent(
                kind=lsp.MarkupKind.Markdown,
                value=build_hover_markdown(word, info),
            ),
            range=lsp.Range(
                start=lsp.Position(line=line, character=start),
                end=lsp.Position(line=line, character=end),
            ),
        )
