#!/usr/bin/env python3

import logging
from typing import List, Optional

from pygls.server import LanguageServer
from lsprotocol import types as lsp

from .. import __version__
from ..linter.document_linter import AgentsCache, DocumentLinter
from ..models.schema_types import Severity
from ..schema.registry import SchemaRegistry, load_default_schemas
from ..utils.version import check_version_compatibility
from .document_processor import DocumentProcessor
from .hover_provider import HoverProvider
from .uri_utils import uri_to_path

logger = logging.getLogger(__name__)

SET_VERSION_COMMAND = "crewai-lint.setVersion"


class CrewAILintLanguageServer:
    """Main language server class for CrewAI Lint."""

    def __init__(self, registry: Optional[SchemaRegistry] = None):
        self.server = LanguageServer("crewai-lint", __version__)

        # Initialize components
        self.registry = registry if registry is not None else load_default_schemas()
        self.agents_cache = AgentsCache()
        self.linter = DocumentLinter(self.registry, self.agents_cache)
        self.document_processor = DocumentProcessor(self.linter)
        self.hover_provider = HoverProvider(self.registry)
        self.workspace_paths: List[str] = []

        # Register handlers
        self._register_handlers()

    def _register_handlers(self):
        """Register all LSP handlers."""

        @self.server.feature(lsp.INITIALIZE)
        def initialize(ls, params):
            self._on_initialize(ls, params)

        @self.server.feature(lsp.INITIALIZED)
        def initialized(ls, params):
            self._on_initialized(ls, params)

        @self.server.feature(lsp.TEXT_DOCUMENT_DID_OPEN)
        def did_open(ls, params):
            self._on_text_document_did_open(ls, params)

        @self.server.feature(lsp.TEXT_DOCUMENT_DID_CHANGE)
        def did_change(ls, params):
            self._on_text_document_did_change(ls, params)

        @self.server.feature(lsp.TEXT_DOCUMENT_DID_SAVE)
        def did_save(ls, params):
            self._on_text_document_did_save(ls, params)

        @self.server.feature(lsp.TEXT_DOCUMENT_DID_CLOSE)
        def did_close(ls, params):
            self._on_text_document_did_close(ls, params)

        @self.server.feature(lsp.TEXT_DOCUMENT_HOVER)
        def hover(ls, params):
            return self._on_hover(ls, params)

        @self.server.command(SET_VERSION_COMMAND)
        def set_version(ls, args):
            return self.set_version(args)

    def start(self):
        """Start the language server."""
        self.server.start_io()

    def _on_initialize(self, ls, params: lsp.InitializeParams):
        """Remember workspace folders for version detection."""
        logger.info("Initializing CrewAI Lint Language Server")

        if params.workspace_folders:
            self.workspace_paths = [uri_to_path(folder.uri) for folder in params.workspace_folders]
        elif params.root_uri:
            self.workspace_paths = [uri_to_path(params.root_uri)]

    def _on_initialized(self, ls, params: lsp.InitializedParams):
        """Detect the CrewAI version of each workspace folder in turn."""
        for workspace_path in self.workspace_paths:
            self.registry.set_version_from_workspace(workspace_path)
            self.check_version_compatibility()

    def check_version_compatibility(self):
        """Tell the user which schema version is in use, or that it is unsupported."""
        schema = self.registry.get_current_schema()
        if schema is None:
            return

        result = check_version_compatibility(schema.version)
        if result is None:
            return

        message_type = lsp.MessageType.Warning if result.severity == Severity.WARNING else lsp.MessageType.Info
        self.server.show_message(result.message, message_type)

    def set_version(self, args) -> List[str]:
        """Select a schema version, or list the available ones when no version is given.

        Returns:
            The available schema versions.
        """
        versions = self.registry.get_available_versions()
        selected = args[0] if args else None
        if not selected:
            return versions

        self.registry.set_current_version(str(selected))
        self.server.show_message(f"Set CrewAI version to {selected}", lsp.MessageType.Info)

        # Re-lint open files with new schema
        self._revalidate_open_documents()
        self.check_version_compatibility()
        return versions

    def _on_text_document_did_open(self, ls, params: lsp.DidOpenTextDocumentParams):
        """Handle document open event."""
        self.document_processor.process_document(params.text_document.uri, params.text_document.text, self.server)

    def _on_text_document_did_change(self, ls, params: lsp.DidChangeTextDocumentParams):
        """Handle document change event."""
        document = self.server.workspace.get_text_document(params.text_document.uri)
        self.document_processor.process_document(document.uri, document.source, self.server)

    def _on_text_document_did_save(self, ls, params: lsp.DidSaveTextDocumentParams):
        """Handle document save event."""
        document = self.server.workspace.get_text_document(params.text_document.uri)
        self.document_processor.process_document(document.uri, document.source, self.server)

    def _on_text_document_did_close(self, ls, params: lsp.DidCloseTextDocumentParams):
        """Handle document close event."""
        self.document_processor.close_document(params.text_document.uri, self.server)

    def _revalidate_open_documents(self):
        """Re-validate all open documents."""
        try:
            for uri, document in list(self.server.workspace.text_documents.items()):
                self.document_processor.process_document(uri, document.source, self.server)
        except Exception as e:
            logger.error(f"Failed to revalidate open documents: {e}")

    def _on_hover(self, ls, params: lsp.HoverParams) -> Optional[lsp.Hover]:
        """Handle hover requests."""
        try:
            return self.hover_provider.get_hover(params, self.server)
        except Exception as e:
            logger.warning(f"Hover failed for {params.text_document.uri}: {e}")
            return None
