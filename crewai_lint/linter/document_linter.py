# Copyright 2025 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Lint ``agents.yaml`` and ``tasks.yaml`` documents against the current schema."""

import logging
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Union

import yaml

from .. import AGENTS_FILE_NAME, RECOGNIZED_FILE_NAMES, TASKS_FILE_NAME
from ..exceptions import DocumentParseError
from ..models.schema_types import Severity, ValidationError
from ..schema.registry import SchemaRegistry
from ..utils.source_location import SourceRange, key_line, locate
from .report import Diagnostic, LintResult

logger = logging.getLogger(__name__)


class DocumentShape(str, Enum):
    NESTED = "nested"  # each top-level key names a record
    FLAT = "flat"  # the whole document is one record


# Presence of any of these in a top-level mapping marks an agents document as nested.
AGENT_MARKER_FIELDS = ("role", "goal")


def classify_agents_document(data: Dict[Any, Any]) -> DocumentShape:
    """Decide whether an agents document holds named agents or is a single agent.

    The document is nested if at least one top-level value is a mapping that
    contains ``role`` or ``goal``. A nested document whose agents omit both
    fields is therefore read as a single flat agent.
    """
    for value in data.values():
        if isinstance(value, dict) and any(marker in value for marker in AGENT_MARKER_FIELDS):
            return DocumentShape.NESTED
    return DocumentShape.FLAT


class AgentsCache:
    """Most recently linted agents document per directory.

    Tasks documents read it to check agent references. Entries are replaced
    each time an agents document in the same directory is linted.
    """

    def __init__(self):
        self._entries: Dict[str, Dict[Any, Any]] = {}

    @staticmethod
    def _key(directory: Union[str, Path]) -> str:
        return str(Path(directory))

    def set(self, directory: Union[str, Path], data: Dict[Any, Any]):
        self._entries[self._key(directory)] = data

    def get(self, directory: Union[str, Path]) -> Optional[Dict[Any, Any]]:
        return self._entries.get(self._key(directory))

    def __contains__(self, directory: Union[str, Path]) -> bool:
        return self._key(directory) in self._entries


def parse_document(text: str) -> Any:
    """Parse YAML text.

    Raises:
        DocumentParseError: If the text is not valid YAML.
    """
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as exc:
        line = column = None
        mark = getattr(exc, 'problem_mark', None)
        if mark is not None:
            line, column = mark.line, mark.column
        raise DocumentParseError(str(exc), line=line, column=column) from exc


class DocumentLinter:
    """Validates agents/tasks documents and converts findings to diagnostics."""

    def __init__(self, registry: SchemaRegistry, agents_cache: Optional[AgentsCache] = None):
        self.registry = registry
        self.agents_cache = agents_cache if agents_cache is not None else AgentsCache()

    @staticmethod
    def is_recognized(file_path: Union[str, Path]) -> bool:
        return Path(file_path).name in RECOGNIZED_FILE_NAMES

    def lint(self, file_path: Union[str, Path], text: str) -> Optional[LintResult]:
        """Lint one document.

        Returns:
            The complete diagnostic set for the document, or None if the file
            is not an agents/tasks document.
        """
        path = Path(file_path)
        if not self.is_recognized(path):
            return None

        result = LintResult(path)
        try:
            self._lint(path, text, result)
        except Exception as e:
            logger.error(f"Unexpected error while linting {path}: {e}")
            result.diagnostics = [
                Diagnostic(SourceRange(0, 0, 0, 1), f"Unexpected error during linting: {e}", Severity.ERROR)
            ]

        logger.debug(f"Linted {path}: {len(result.errors)} error(s), {len(result.warnings)} warning(s)")
        return result

    def _lint(self, path: Path, text: str, result: LintResult):
        try:
            data = parse_document(text)
        except DocumentParseError as e:
            line_count = len(text.split("\n"))
            result.add_error(f"Invalid YAML: {e}", SourceRange(0, 0, line_count, 0))
            return

        if not isinstance(data, dict):
            result.add_error("File must contain a valid YAML object", SourceRange(0, 0, 0, 1))
            return

        if path.name == AGENTS_FILE_NAME:
            self._lint_agents(path, text, data, result)
        elif path.name == TASKS_FILE_NAME:
            self._lint_tasks(path, text, data, result)

    def _lint_agents(self, path: Path, text: str, data: Dict[Any, Any], result: LintResult):
        self.agents_cache.set(path.parent, data)

        if classify_agents_document(data) == DocumentShape.FLAT:
            self._add_validation_errors(text, self.registry.validate_agent(data).errors, result)
            return

        for agent_name, agent_config in data.items():
            agent_name = str(agent_name)
            if isinstance(agent_config, dict):
                errors = self.registry.validate_agent(agent_config).errors
                self._add_validation_errors(text, (e.with_field_prefix(agent_name) for e in errors), result)
            else:
                result.add_error(
                    f"Agent '{agent_name}' must be an object with proper configuration",
                    self._key_range(text, agent_name),
                )

    def _lint_tasks(self, path: Path, text: str, data: Dict[Any, Any], result: LintResult):
        for task_name, task_config in data.items():
            task_name = str(task_name)
            if isinstance(task_config, dict):
                errors = self.registry.validate_task(task_config).errors
                self._add_validation_errors(text, (e.with_field_prefix(task_name) for e in errors), result)
                self._check_agent_reference(path, text, task_name, task_config, result)
            else:
                result.add_error(
                    f"Task '{task_name}' must be an object with proper configuration",
                    self._key_range(text, task_name),
                )

    def _check_agent_reference(
        self, path: Path, text: str, task_name: str, task_config: Dict[Any, Any], result: LintResult
    ):
        agent_name = task_config.get('agent')
        if not agent_name or not isinstance(agent_name, str):
            return

        # Without a linted agents.yaml in this directory there is nothing to check against.
        agents_data = self.agents_cache.get(path.parent)
        if agents_data is None:
            return

        # YAML may load agent names such as `2024:` as non-string keys.
        if agent_name in {str(name) for name in agents_data}:
            return

        result.add_error(
            f"Agent '{agent_name}' referenced in task '{task_name}' does not exist in agents.yaml",
            self._agent_reference_range(text, task_name, agent_name),
        )

    @staticmethod
    def _agent_reference_range(text: str, task_name: str, agent_name: str) -> SourceRange:
        needle = f"agent: {agent_name}"
        for i, line in enumerate(text.split("\n")):
            if needle in line:
                start = line.find(agent_name)
                return SourceRange(i, start, i, start + len(agent_name))
        # Quoted or otherwise formatted values: fall back to the task's agent key.
        return locate(text, f"{task_name}.agent")

    @staticmethod
    def _key_range(text: str, key: str) -> SourceRange:
        line = max(0, key_line(text.split("\n"), key))
        return SourceRange(line, 0, line, len(key))

    @staticmethod
    def _add_validation_errors(text: str, errors: Iterable[ValidationError], result: LintResult):
        for error in errors:
            source_range = locate(text, error.field, error.message)
            if error.severity == Severity.ERROR:
                result.add_error(error.message, source_range)
            else:
                result.add_warning(error.message, source_range)
