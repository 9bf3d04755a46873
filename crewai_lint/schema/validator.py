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

"""Flat structural validation of agent and task records.

A record is validated against a :class:`RecordSchema` in two passes:

1. every required field must be present with a truthy value;
2. every other key must be a known optional field (exact case), hold a value
   of one of the declared types, and satisfy the field's custom validator.

Only one level of fields is checked. Nested mappings and list items are not
inspected.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, List, Optional

from ..models.schema_types import (
    FieldDefinition,
    RecordSchema,
    Severity,
    TypeTag,
    ValidationError,
    ValidationResult,
)

logger = logging.getLogger(__name__)


Validator = Callable[[Any], ValidationResult]


def is_valid_type(value: Any, expected_type: TypeTag) -> bool:
    """Return True if *value* matches *expected_type* (or any member of a union)."""
    if not isinstance(expected_type, str):
        return any(is_valid_type(value, member) for member in expected_type)

    if expected_type == "string":
        return isinstance(value, str)
    if expected_type == "number":
        # bool is an int subclass in Python; YAML true/false must not pass as numbers.
        return isinstance(value, (int, float)) and not isinstance(value, bool)
    if expected_type == "boolean":
        return isinstance(value, bool)
    if expected_type == "array":
        return isinstance(value, (list, tuple))
    if expected_type == "object":
        return isinstance(value, dict)
    return False


def runtime_type_name(value: Any) -> str:
    """Name of the value's type using the schema's type vocabulary."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def format_type(type_tag: TypeTag) -> str:
    if isinstance(type_tag, str):
        return type_tag
    return " | ".join(type_tag)


def _find_case_insensitive(key: str, schema: RecordSchema) -> Optional[str]:
    lowered = key.lower()
    for candidate in schema.optional_fields:
        if candidate.lower() == lowered:
            return candidate
    return None


def _run_custom_validator(key: str, field_def: FieldDefinition, value: Any) -> bool:
    try:
        return bool(field_def.validator(value))
    except Exception as e:
        logger.warning(f"Custom validator for field '{key}' raised: {e}")
        return False


def create_validator(schema: RecordSchema) -> Validator:
    """Build a validator function for records of the given schema."""

    def validate(data: Any) -> ValidationResult:
        if not isinstance(data, dict):
            return ValidationResult(errors=(ValidationError(field="", message="Record must be a YAML object"),))

        errors: List[ValidationError] = []

        # Falsy values (empty string, 0, false) count as missing.
        for name in schema.required_fields:
            if not data.get(name):
                errors.append(ValidationError(field=name, message=f"Missing required field: {name}"))

        for key, value in data.items():
            key = str(key)
            if schema.is_required(key):
                continue

            field_def = schema.get_field(key)
            if field_def is None:
                canonical = _find_case_insensitive(key, schema)
                if canonical is not None:
                    errors.append(
                        ValidationError(
                            field=key,
                            message=f"Field '{key}' uses incorrect case. Use '{canonical}' instead.",
                        )
                    )
                else:
                    errors.append(
                        ValidationError(
                            field=key,
                            message=f"Unrecognized field: '{key}'. This field is not defined in the schema.",
                        )
                    )
                continue

            if not is_valid_type(value, field_def.type):
                errors.append(
                    ValidationError(
                        field=key,
                        message=(
                            f"Field '{key}' has invalid type. "
                            f"Expected {format_type(field_def.type)}, got {runtime_type_name(value)}."
                        ),
                        severity=Severity.WARNING,
                    )
                )

            if field_def.validator is not None and not _run_custom_validator(key, field_def, value):
                errors.append(
                    ValidationError(
                        field=key,
                        message=f"Field '{key}' failed validation.",
                        severity=Severity.WARNING,
                    )
                )

        return ValidationResult(errors=tuple(errors))

    return validate
