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

"""Linter package for CrewAI agents.yaml / tasks.yaml validation."""

import logging
from pathlib import Path
from typing import List, Optional

from .. import AGENTS_FILE_NAME
from ..schema.registry import SchemaRegistry, load_default_schemas
from ..utils.source_location import SourceRange
from .document_linter import AgentsCache, DocumentLinter, DocumentShape, classify_agents_document
from .report import Diagnostic, LintResult

__all__ = [
    'lint_files',
    'LintResult',
    'Diagnostic',
    'DocumentLinter',
    'AgentsCache',
    'DocumentShape',
    'classify_agents_document',
]

logger = logging.getLogger(__name__)


def _lint_order(file_path: Path):
    # agents.yaml first within each directory so task references can be checked.
    return (str(file_path.parent), file_path.name != AGENTS_FILE_NAME, file_path.name)


def lint_files(file_paths: List[Path], registry: Optional[SchemaRegistry] = None) -> List[LintResult]:
    """Lint a list of agents.yaml / tasks.yaml files.

    Args:
        file_paths: List of file paths to lint
        registry: Schema registry to validate against (defaults to the bundled schemas)

    Returns:
        List of LintResult objects, one per recognized file
    """
    if registry is None:
        registry = load_default_schemas()

    linter = DocumentLinter(registry, AgentsCache())
    results = []

    for file_path in sorted((Path(p) for p in file_paths), key=_lint_order):
        try:
            text = file_path.read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Failed to read {file_path}: {e}")
            result = LintResult(file_path)
            result.add_error(f"Failed to read file: {e}", SourceRange(0, 0, 0, 1))
            results.append(result)
            continue

        result = linter.lint(file_path, text)
        if result is not None:
            results.append(result)

    return results
