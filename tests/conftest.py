"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from pathlib import Path

import pytest
from lowdocdb.backend import LocalBackend, MemoryBackend
from lowdocdb.core.config import StoreConfig
from lowdocdb.store import DocumentStore


@pytest.fixture
def local_store(tmp_path: Path) -> DocumentStore:
    """Document store on a temporary directory."""
    return DocumentStore(tmp_path / "doc.db", StoreConfig(), LocalBackend())


@pytest.fixture
def memory_store() -> DocumentStore:
    """Document store on an in-memory backend."""
    return DocumentStore("doc.db", StoreConfig(), MemoryBackend())


@pytest.fixture(params=["local", "memory"])
def store(request: pytest.FixtureRequest, tmp_path: Path) -> DocumentStore:
    """Document store on each available backend."""
    if request.param == "local":
        return DocumentStore(tmp_path / "doc.db", StoreConfig(), LocalBackend())
    return DocumentStore("doc.db", StoreConfig(), MemoryBackend())


@pytest.fixture
def sample_tree(store: DocumentStore) -> DocumentStore:
    """Store with folder f holding x.txt, y.txt and subfolder g/z.txt."""
    store.add_document("f/x.txt", b"x")
    store.add_document("f/y.txt", b"yy")
    store.add_document("f/g/z.txt", b"zzz")
    return store
