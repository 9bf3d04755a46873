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

"""Error reporting for the linter."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List

from ..models.schema_types import Severity
from ..utils.source_location import SourceRange


@dataclass(frozen=True)
class Diagnostic:
    """A positioned message ready to be shown inline."""

    range: SourceRange
    message: str
    severity: Severity = Severity.ERROR

    def to_dict(self) -> Dict[str, Any]:
        return {
            'message': self.message,
            'severity': self.severity.value,
            'line': self.range.start_line,
            'column': self.range.start_column,
            'end_line': self.range.end_line,
            'end_column': self.range.end_column,
        }


class LintResult:
    """Container for the diagnostics of a single document."""

    def __init__(self, file_path: Path):
        """Initialize lint result.

        Args:
            file_path: Path to the document being linted
        """
        self.file_path = Path(file_path)
        self.diagnostics: List[Diagnostic] = []

    def add(self, diagnostic: Diagnostic):
        self.diagnostics.append(diagnostic)

    def add_error(self, message: str, source_range: SourceRange):
        """Add an error diagnostic.

        Args:
            message: Error message
            source_range: 0-based range to underline
        """
        self.diagnostics.append(Diagnostic(range=source_range, message=message, severity=Severity.ERROR))

    def add_warning(self, message: str, source_range: SourceRange):
        """Add a warning diagnostic.

        Args:
            message: Warning message
            source_range: 0-based range to underline
        """
        self.diagnostics.append(Diagnostic(range=source_range, message=message, severity=Severity.WARNING))

    @property
    def errors(self) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.severity == Severity.ERROR]

    @property
    def warnings(self) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.severity != Severity.ERROR]
