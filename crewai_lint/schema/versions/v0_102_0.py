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

"""Agent and task schemas for CrewAI 0.102.x."""

from ...models.schema_types import RecordSchema, VersionedSchema, field_table

VERSION = "0.102.0"

# Required fields are also listed here so hover can describe them.
AGENT_SCHEMA = RecordSchema(
    required_fields=("role", "goal", "backstory"),
    optional_fields=field_table({
        "role": ("string", "The role or title of the agent that defines their responsibilities."),
        "goal": ("string", "The agent's primary objective or purpose within the crew."),
        "backstory": ("string", "Provides context and personality to the agent, enriching interactions."),
        "llm": (
            ("string", "object"),
            'Language model that powers the agent. Defaults to the model specified in OPENAI_MODEL_NAME or "gpt-4".',
        ),
        "tools": ("array", "Capabilities or functions available to the agent. Defaults to an empty list."),
        "function_calling_llm": ("object", "Language model for tool calling, overrides crew's LLM if specified."),
        "max_iter": ("number", "Maximum iterations before the agent must provide its best answer. Default is 20."),
        "max_rpm": ("number", "Maximum requests per minute to avoid rate limits."),
        "max_execution_time": ("number", "Maximum time (in seconds) for task execution."),
        "memory": ("boolean", "Whether the agent should maintain memory of interactions. Default is True."),
        "verbose": ("boolean", "Enable detailed execution logs for debugging. Default is False."),
        "allow_delegation": ("boolean", "Allow the agent to delegate tasks to other agents. Default is False."),
        "step_callback": ("object", "Function called after each agent step, overrides crew callback."),
        "cache": ("boolean", "Enable caching for tool usage. Default is True."),
        "system_template": ("string", "Custom system prompt template for the agent."),
        "prompt_template": ("string", "Custom prompt template for the agent."),
        "response_template": ("string", "Custom response template for the agent."),
        "allow_code_execution": ("boolean", "Enable code execution for the agent. Default is False."),
        "max_retry_limit": ("number", "Maximum number of retries when an error occurs. Default is 2."),
        "respect_context_window": (
            "boolean",
            "Keep messages under context window size by summarizing. Default is True.",
        ),
        "code_execution_mode": (
            "string",
            "Mode for code execution: 'safe' (using Docker) or 'unsafe' (direct). Default is 'safe'.",
        ),
        "embedder": ("object", "Configuration for the embedder used by the agent."),
        "knowledge_sources": ("array", "Knowledge sources available to the agent."),
        "use_system_prompt": ("boolean", "Whether to use system prompt (for o1 model support). Default is True."),
    }),
)

TASK_SCHEMA = RecordSchema(
    required_fields=("description", "expected_output"),
    optional_fields=field_table({
        "description": ("string", "A clear, concise statement of what the task entails."),
        "expected_output": ("string", "A detailed description of what the task's completion looks like."),
        "name": ("string", "A name identifier for the task."),
        "agent": (("string", "object"), "The agent responsible for executing the task."),
        "tools": ("array", "The tools/resources the agent is limited to use for this task."),
        "context": ("array", "Other tasks whose outputs will be used as context for this task."),
        "async_execution": ("boolean", "Whether the task should be executed asynchronously. Defaults to False."),
        "human_input": (
            "boolean",
            "Whether the task should have a human review the final answer of the agent. Defaults to False.",
        ),
        "config": ("object", "Task-specific configuration parameters."),
        "output_file": ("string", "File path for storing the task output."),
        "output_json": ("object", "A Pydantic model to structure the JSON output."),
        "output_pydantic": ("object", "A Pydantic model for task output."),
        "callback": ("object", "Function/object to be executed after task completion."),
    }),
)


def build_schema() -> VersionedSchema:
    return VersionedSchema(version=VERSION, agent_schema=AGENT_SCHEMA, task_schema=TASK_SCHEMA)
