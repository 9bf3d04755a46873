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

"""Registry of versioned CrewAI schemas."""

import logging
from functools import cmp_to_key
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from .. import LATEST_ALIAS
from ..exceptions import SchemaError
from ..models.schema_types import Severity, ValidationError, ValidationResult, VersionedSchema
from ..utils.version import compare_versions
from ..utils.version_detection import detect_version
from .versions import SCHEMA_BUNDLES

logger = logging.getLogger(__name__)

MESSAGE_PREFIX = "CrewAI Lint: "

NO_SCHEMA_RESULT = ValidationResult(
    errors=(ValidationError(field="", message=f"{MESSAGE_PREFIX}No schema available", severity=Severity.ERROR),)
)


class SchemaRegistry:
    """Holds one schema per CrewAI version and resolves the schema in use."""

    def __init__(self, current_version: str = LATEST_ALIAS):
        self.schemas: Dict[str, VersionedSchema] = {}
        self.current_version = current_version

    def register_schema(self, schema: VersionedSchema):
        """Register a schema, replacing any earlier one with the same version."""
        if not isinstance(schema, VersionedSchema):
            raise SchemaError(f"Expected VersionedSchema, got {type(schema).__name__}")
        if schema.version == LATEST_ALIAS:
            raise SchemaError(f"'{LATEST_ALIAS}' is reserved and cannot be used as a schema version")

        self.schemas[schema.version] = schema
        self._bind_latest()
        logger.debug(f"Registered schema version {schema.version}")

    def load_bundles(self, bundles: Mapping[str, Callable[[], VersionedSchema]]):
        """Build and register every bundle. Bundles that fail to build are skipped."""
        for version, factory in bundles.items():
            try:
                schema = factory()
                if schema.version != version:
                    raise SchemaError(f"Bundle '{version}' built schema version '{schema.version}'")
                self.register_schema(schema)
            except Exception as e:
                logger.error(f"Error loading schema for version {version}: {e}")

    def _bind_latest(self):
        candidates = [schema for version, schema in self.schemas.items() if version != LATEST_ALIAS]
        if not candidates:
            self.schemas.pop(LATEST_ALIAS, None)
            return
        # sorted() is stable, so among equal versions the last registered stays last.
        ordered = sorted(candidates, key=cmp_to_key(lambda a, b: compare_versions(a.version, b.version)))
        self.schemas[LATEST_ALIAS] = ordered[-1]

    def set_current_version(self, version: str):
        """Select a version. Unknown versions fall back at lookup time."""
        self.current_version = version
        logger.info(f"Current schema version set to {version}")

    def set_version_from_workspace(self, workspace_path: Union[str, Path]):
        """Detect the CrewAI version from a project's manifests and select it."""
        self.set_current_version(detect_version(workspace_path))

    def get_current_schema(self) -> Optional[VersionedSchema]:
        """Return the selected schema, else ``latest``, else any registered one."""
        schema = self.schemas.get(self.current_version) or self.schemas.get(LATEST_ALIAS)
        if schema is not None:
            return schema
        if self.schemas:
            return list(self.schemas.values())[-1]
        return None

    def get_available_versions(self) -> List[str]:
        """Get all registered versions, excluding the ``latest`` alias."""
        versions = [v for v in self.schemas if v != LATEST_ALIAS]
        return sorted(versions, key=cmp_to_key(compare_versions))

    def validate_agent(self, data: Any) -> ValidationResult:
        schema = self.get_current_schema()
        if schema is None:
            return NO_SCHEMA_RESULT
        return self._prefix_messages(schema.validate_agent(data))

    def validate_task(self, data: Any) -> ValidationResult:
        schema = self.get_current_schema()
        if schema is None:
            return NO_SCHEMA_RESULT
        return self._prefix_messages(schema.validate_task(data))

    @staticmethod
    def _prefix_messages(result: ValidationResult) -> ValidationResult:
        return ValidationResult(errors=tuple(error.with_message_prefix(MESSAGE_PREFIX) for error in result.errors))


def load_default_schemas(current_version: str = LATEST_ALIAS) -> SchemaRegistry:
    """Create a registry holding every bundled schema version."""
    registry = SchemaRegistry(current_version=current_version)
    registry.load_bundles(SCHEMA_BUNDLES)
    logger.info(f"Loaded schema versions: {', '.join(registry.get_available_versions()) or 'none'}")
    return registry
