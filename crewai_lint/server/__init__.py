"""Language server exposing crewai_lint diagnostics and field hovers to editors."""

from .base_server import CrewAILintLanguageServer, SET_VERSION_COMMAND
