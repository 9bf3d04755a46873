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

"""Custom exceptions for crewai_lint."""

from typing import Optional


class CrewAILintError(Exception):
    """Base exception for crewai_lint related errors."""
    pass


class SchemaError(CrewAILintError):
    """Exception raised when a schema bundle cannot be built or registered."""
    pass


class DocumentParseError(CrewAILintError):
    """Exception raised when a document is not valid YAML."""

    def __init__(self, message: str, line: Optional[int] = None, column: Optional[int] = None):
        super().__init__(message)
        self.line = line  # 0-based
        self.column = column  # 0-based


class VersionError(CrewAILintError):
    """Exception raised for version strings that cannot be parsed."""
    pass
