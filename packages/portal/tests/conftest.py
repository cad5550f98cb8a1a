"""Shared fixtures for portal tests."""

import os

import pytest

from taxdesk_portal.memory_store import InMemoryDocumentRepository


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Run every test without TAXDESK_ variables or a stray .env file."""
    for key in list(os.environ):
        if key.startswith("TAXDESK_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def repository():
    """An empty in-memory repository."""
    return InMemoryDocumentRepository()
