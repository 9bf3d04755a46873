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

"""Schema and validation result types shared by the validator, registry and linter."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Callable, Dict, Mapping, Optional, Sequence, Tuple, Union

# A single type tag ("string", "number", ...) or an ordered union of tags.
TypeTag = Union[str, Sequence[str]]


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass(frozen=True)
class FieldDefinition:
    type: TypeTag
    description: str = ""
    validator: Optional[Callable[[Any], bool]] = None


@dataclass(frozen=True)
class RecordSchema:
    """Required/optional field contract for one record kind (agent or task)."""

    required_fields: Tuple[str, ...] = ()
    optional_fields: Mapping[str, FieldDefinition] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if len(set(self.required_fields)) != len(self.required_fields):
            raise ValueError(f"Duplicate required fields: {list(self.required_fields)}")

    def is_required(self, name: str) -> bool:
        return name in self.required_fields

    def get_field(self, name: str) -> Optional[FieldDefinition]:
        return self.optional_fields.get(name)


@dataclass(frozen=True)
class ValidationError:
    field: str
    message: str
    severity: Severity = Severity.ERROR

    def with_field_prefix(self, prefix: str) -> "ValidationError":
        return replace(self, field=f"{prefix}.{self.field}")

    def with_message_prefix(self, prefix: str) -> "ValidationError":
        if self.message.startswith(prefix):
            return self
        return replace(self, message=f"{prefix}{self.message}")


@dataclass(frozen=True)
class ValidationResult:
    errors: Tuple[ValidationError, ...] = ()

    @property
    def valid(self) -> bool:
        return not self.errors


@dataclass(frozen=True)
class VersionedSchema:
    """Agent and task schemas for one CrewAI release."""

    version: str
    agent_schema: RecordSchema
    task_schema: RecordSchema

    def validate_agent(self, data: Any) -> ValidationResult:
        from ..schema.validator import create_validator

        return create_validator(self.agent_schema)(data)

    def validate_task(self, data: Any) -> ValidationResult:
        from ..schema.validator import create_validator

        return create_validator(self.task_schema)(data)

    def schema_for(self, kind: str) -> RecordSchema:
        """Return the record schema for ``"agent"`` or ``"task"``."""
        if kind == "agent":
            return self.agent_schema
        if kind == "task":
            return self.task_schema
        raise ValueError(f"Unknown record kind '{kind}'")


def field_table(entries: Dict[str, Tuple[TypeTag, str]]) -> Dict[str, FieldDefinition]:
    """Build an optional-field mapping from ``name -> (type, description)`` pairs."""
    return {name: FieldDefinition(type=type_tag, description=description) for name, (type_tag, description) in entries.items()}
