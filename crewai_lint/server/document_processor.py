#!/usr/bin/env python3

import logging
from typing import List

from lsprotocol import types as lsp

from ..linter.document_linter import DocumentLinter
from ..linter.report import Diagnostic
from ..models.schema_types import Severity
from .uri_utils import uri_to_path

logger = logging.getLogger(__name__)

DIAGNOSTIC_SOURCE = "crewai-lint"

_SEVERITY_MAP = {
    Severity.ERROR: lsp.DiagnosticSeverity.Error,
    Severity.WARNING: lsp.DiagnosticSeverity.Warning,
    Severity.INFO: lsp.DiagnosticSeverity.Information,
}


def to_lsp_diagnostic(diagnostic: Diagnostic) -> lsp.Diagnostic:
    source_range = diagnostic.range
    return lsp.Diagnostic(
        range=lsp.Range(
            start=lsp.Position(line=source_range.start_line, character=source_range.start_column),
            end=lsp.Position(line=source_range.end_line, character=source_range.end_column),
        ),
        message=diagnostic.message,
        severity=_SEVERITY_MAP.get(diagnostic.severity, lsp.DiagnosticSeverity.Warning),
        source=DIAGNOSTIC_SOURCE,
    )


class DocumentProcessor:
    """Lints open documents and publishes their diagnostics."""

    def __init__(self, linter: DocumentLinter):
        self.linter = linter

    def build_diagnostics(self, uri: str, content: str) -> List[lsp.Diagnostic]:
        """Lint a document. Returns an empty list for unrecognized files."""
        result = self.linter.lint(uri_to_path(uri), content)
        if result is None:
            return []
        return [to_lsp_diagnostic(d) for d in result.diagnostics]

    def process_document(self, uri: str, content: str, server) -> bool:
        """Lint a document and replace its published diagnostics.

        Returns:
            True if the document is an agents/tasks file and was linted.
        """
        if not self.linter.is_recognized(uri_to_path(uri)):
            return False

        diagnostics = self.build_diagnostics(uri, content)

        try:
            logger.info(f"Publishing {len(diagnostics)} diagnostics for {uri}")
            server.publish_diagnostics(uri, diagnostics)
        except Exception as e:
            logger.error(f"Failed to publish diagnostics {uri}: {e}")
        return True

    def close_document(self, uri: str, server):
        """Clear diagnostics for a closed document."""
        if not self.linter.is_recognized(uri_to_path(uri)):
            return
        try:
            server.publish_diagnostics(uri, [])
        except Exception as e:
            logger.error(f"Failed to clear diagnostics {uri}: {e}")
