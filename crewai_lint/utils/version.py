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

"""Version utilities for CrewAI schema selection.

Schemas are versioned at minor granularity: ``0.102.5`` resolves to the
``0.102.0`` schema. Versions are compared component-wise as integers with
missing trailing components treated as ``0``.

Compatibility rule:
  * Exactly the earliest supported version → nothing to report.
  * Older than the earliest supported version → warning.
  * Newer → informational message naming the schema in use.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Tuple

from .. import EARLIEST_SUPPORTED_VERSION
from ..exceptions import VersionError
from ..models.schema_types import Severity


_VERSION_RE = re.compile(r"^v?(\d+)\.(\d+)(?:\.(\d+))?$")


def version_key(raw: str) -> Tuple[int, ...]:
    """Split a dotted version into integers. Non-numeric parts count as 0."""
    parts = []
    for token in str(raw).split("."):
        try:
            parts.append(int(token))
        except ValueError:
            parts.append(0)
    return tuple(parts)


def compare_versions(a: str, b: str) -> int:
    """Return -1 if a < b, 0 if equal, 1 if a > b."""
    a_parts = version_key(a)
    b_parts = version_key(b)
    for i in range(max(len(a_parts), len(b_parts))):
        a_val = a_parts[i] if i < len(a_parts) else 0
        b_val = b_parts[i] if i < len(b_parts) else 0
        if a_val < b_val:
            return -1
        if a_val > b_val:
            return 1
    return 0


def normalize_version(raw: str) -> str:
    """Truncate ``MAJOR.MINOR.PATCH`` to ``MAJOR.MINOR.0``.

    Raises:
        VersionError: If the string is not a dotted numeric version.
    """
    m = _VERSION_RE.match(raw.strip())
    if m is None:
        raise VersionError(
            f"Invalid version string: '{raw}'. Expected 'MAJOR.MINOR.PATCH' (e.g. '0.102.0')."
        )
    return f"{int(m.group(1))}.{int(m.group(2))}.0"


@dataclass(frozen=True)
class VersionCheckResult:
    """Message to surface after selecting a schema version."""

    severity: Severity
    message: str
    version: str


def check_version_compatibility(version: Optional[str]) -> Optional[VersionCheckResult]:
    """Check *version* against the earliest supported release.

    Returns:
        ``None`` when there is nothing to report (no version, or exactly the
        earliest supported one), otherwise a :class:`VersionCheckResult`.
    """
    if not version:
        return None

    if version == EARLIEST_SUPPORTED_VERSION:
        return None

    if compare_versions(version, EARLIEST_SUPPORTED_VERSION) < 0:
        return VersionCheckResult(
            severity=Severity.WARNING,
            message=(
                f"CrewAI version {version} is not supported. "
                f"The earliest supported version is {EARLIEST_SUPPORTED_VERSION}."
            ),
            version=version,
        )

    return VersionCheckResult(
        severity=Severity.INFO,
        message=f"Using CrewAI schema version {version}",
        version=version,
    )
