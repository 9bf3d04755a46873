"""Bundled schema versions.

Each entry maps a CrewAI version to a factory returning its
:class:`~crewai_lint.models.schema_types.VersionedSchema`. Add new releases here.
"""

from typing import Callable, Dict

from ...models.schema_types import VersionedSchema
from . import v0_102_0

SCHEMA_BUNDLES: Dict[str, Callable[[], VersionedSchema]] = {
    v0_102_0.VERSION: v0_102_0.build_schema,
}
