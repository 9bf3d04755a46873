#!/usr/bin/env python3

"""Entry point for the CrewAI Lint Language Server."""

from ..utils.logging_utils import configure_server_logging
from .base_server import CrewAILintLanguageServer


def main():
    configure_server_logging()
    server = CrewAILintLanguageServer()
    server.start()


if __name__ == '__main__':
    main()
