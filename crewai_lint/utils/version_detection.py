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

"""Detect the CrewAI version a project depends on from its manifest files."""

import logging
import re
from pathlib import Path
from typing import Callable, List, Optional, Tuple, Union

from .. import LATEST_ALIAS
from ..exceptions import VersionError
from .version import normalize_version

logger = logging.getLogger(__name__)


_REQUIREMENTS_RE = re.compile(r"crewai[=~<>]+([0-9]+\.[0-9]+\.[0-9]+)", re.IGNORECASE)
_PYPROJECT_QUOTED_RE = re.compile(r"crewai\s*=\s*[\"']([0-9]+\.[0-9]+\.[0-9]+)[\"']", re.IGNORECASE)
_PYPROJECT_BARE_RE = re.compile(r"crewai\s*=\s*([0-9]+\.[0-9]+\.[0-9]+)", re.IGNORECASE)
_POETRY_LOCK_RE = re.compile(r"\[\[package\]\]\r?\nname = \"crewai\"[\s\S]*?version = \"([0-9]+\.[0-9]+\.[0-9]+)\"")


def _from_requirements(content: str) -> Optional[str]:
    match = _REQUIREMENTS_RE.search(content)
    return match.group(1) if match else None


def _from_pyproject(content: str) -> Optional[str]:
    match = _PYPROJECT_QUOTED_RE.search(content) or _PYPROJECT_BARE_RE.search(content)
    return match.group(1) if match else None


def _from_poetry_lock(content: str) -> Optional[str]:
    match = _POETRY_LOCK_RE.search(content)
    return match.group(1) if match else None


# Checked in order; the first manifest declaring crewai wins.
MANIFEST_READERS: List[Tuple[str, Callable[[str], Optional[str]]]] = [
    ("requirements.txt", _from_requirements),
    ("pyproject.toml", _from_pyproject),
    ("poetry.lock", _from_poetry_lock),
]


def detect_version(project_root: Union[str, Path]) -> str:
    """Return the schema version for the project at *project_root*.

    Falls back to ``"latest"`` when no manifest declares crewai or a manifest
    cannot be read.
    """
    root = Path(project_root)
    try:
        for file_name, reader in MANIFEST_READERS:
            manifest = root / file_name
            if not manifest.is_file():
                continue

            content = manifest.read_text(encoding="utf-8")
            declared = reader(content)
            if declared:
                version = normalize_version(declared)
                logger.info(f"Detected CrewAI {declared} in {manifest}, using schema {version}")
                return version
    except (OSError, UnicodeDecodeError, VersionError) as e:
        logger.error(f"Error detecting CrewAI version in {root}: {e}")
        return LATEST_ALIAS

    logger.debug(f"No CrewAI version declared in {root}, using {LATEST_ALIAS}")
    return LATEST_ALIAS
