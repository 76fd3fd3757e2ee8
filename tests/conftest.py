"""
Shared test fixtures and configuration for mockrest tests.
"""
from typing import Generator

import pytest
from flask import Flask
from flask.testing import FlaskClient

from mockrest import create_app
from mockrest.config import TestConfig
from mockrest.storage.document_store import DocumentStore


@pytest.fixture
def store() -> DocumentStore:
    """A fresh, empty store for each test."""
    return DocumentStore(lock_timeout=1.0)


@pytest.fixture
def app(store: DocumentStore) -> Generator[Flask, None, None]:
    """Create a test Flask application backed by the per-test store."""
    app = create_app(TestConfig, store=store)
    yield app


@pytest.fixture
def client(app: Flask) -> FlaskClient:
    """Create a Flask test client."""
    return app.test_client()


@pytest.fixture
def john() -> dict:
    return {"firstName": "John", "lastName": "Doe"}
