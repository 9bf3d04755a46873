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

"""Schema linting for CrewAI ``agents.yaml`` and ``tasks.yaml`` files."""

__version__ = "0.1.0"

# Earliest CrewAI release with a bundled schema.
EARLIEST_SUPPORTED_VERSION = "0.102.0"

# Alias bound to the newest registered schema.
LATEST_ALIAS = "latest"

AGENTS_FILE_NAME = "agents.yaml"
TASKS_FILE_NAME = "tasks.yaml"
RECOGNIZED_FILE_NAMES = (AGENTS_FILE_NAME, TASKS_FILE_NAME)
