import logging
import sys
from typing import Optional, TextIO

CLI_FORMAT = "%(name)s - %(levelname)s - %(message)s"
SERVER_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class _MaxLevelFilter(logging.Filter):
    def __init__(self, max_level: int) -> None:
        super().__init__()
        self._max_level = max_level

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno <= self._max_level


def _reset_root(level: int) -> logging.Logger:
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(level)
    return root


def _stream_handler(
    stream: TextIO,
    level: int,
    formatter: logging.Formatter,
    max_level: Optional[int] = None,
) -> logging.Handler:
    handler = logging.StreamHandler(stream=stream)
    handler.setLevel(level)
    if max_level is not None:
        handler.addFilter(_MaxLevelFilter(max_level))
    handler.setFormatter(formatter)
    return handler


def configure_cli_logging(
    *,
    verbose: bool = False,
    machine_output: bool = False,
    formatter: Optional[logging.Formatter] = None,
) -> None:
    """Configure root logging for ``crewai-lint``.

    Human-readable runs split the streams:

    - DEBUG/INFO go to stdout, next to the report (only with ``verbose``)
    - WARNING/ERROR/CRITICAL go to stderr

    With ``machine_output`` stdout carries nothing but the JSON or workflow
    command report, so every record goes to stderr.
    """
    root = _reset_root(logging.INFO if verbose else logging.WARNING)

    if formatter is None:
        formatter = logging.Formatter(CLI_FORMAT)

    if machine_output:
        root.addHandler(_stream_handler(sys.stderr, logging.DEBUG, formatter))
        return

    root.addHandler(_stream_handler(sys.stdout, logging.DEBUG, formatter, max_level=logging.WARNING - 1))
    root.addHandler(_stream_handler(sys.stderr, logging.WARNING, formatter))


def configure_server_logging(level: int = logging.INFO, stream: Optional[TextIO] = None) -> None:
    """Configure logging for the language server.

    stdout carries the LSP message stream, so everything is logged to stderr.
    """
    root = _reset_root(level)
    root.addHandler(_stream_handler(stream or sys.stderr, logging.DEBUG, logging.Formatter(SERVER_FORMAT)))
