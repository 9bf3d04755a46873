"""Shared fixtures for crewai_lint tests."""

import pytest

from crewai_lint.linter.document_linter import AgentsCache, DocumentLinter
from crewai_lint.schema.registry import load_default_schemas


@pytest.fixture
def registry():
    return load_default_schemas()


@pytest.fixture
def agents_cache():
    return AgentsCache()


@pytest.fixture
def linter(registry, agents_cache):
    return DocumentLinter(registry, agents_cache)
