"""
Central pytest configuration for the UnisoVet console tests.

This file provides common fixtures, test markers, and environment setup
for both unit and integration tests.
"""

import os
import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest

# Add backend/ to sys.path so `unisovet` imports without an editable install
backend_root = Path(__file__).parent.parent
sys.path.insert(0, str(backend_root))

# Test environment (set early so import-time configuration uses it)
TEST_DATABASE_URL = "sqlite:///:memory:"  # In-memory SQLite for fast tests
os.environ["DATABASE_URL"] = TEST_DATABASE_URL
os.environ["TESTING"] = "true"
os.environ["RATE_LIMIT_ENABLED"] = "0"  # Disable rate limiting in tests
os.environ["LOG_TO_FILE"] = "0"  # Console logging only
os.environ.pop("GEMINI_API_KEY", None)
os.environ.pop("API_KEY", None)
os.environ.pop("SENTRY_DSN", None)

from tests.config.markers import (  # noqa: E402,F401
    pytest_collection_modifyitems,
    pytest_configure,
)
from tests.factories.fakes import (  # noqa: E402
    FakeCompletionService,
    InMemoryKeyValueStore,
)
from unisovet.core.exceptions import AssistantServiceError  # noqa: E402

FIXED_NOW = datetime(2024, 6, 10, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def fixed_now():
    return FIXED_NOW


@pytest.fixture
def kv_store():
    return InMemoryKeyValueStore()


@pytest.fixture
def fake_completion():
    return FakeCompletionService()


@pytest.fixture
def failing_completion():
    service = FakeCompletionService()
    service.error = AssistantServiceError("Gemini request failed: 503")
    return service


@pytest.fixture
def persistent_store():
    """SQL-backed store on a fresh in-memory database."""
    from unisovet.db.session import create_tables, dispose_engine
    from unisovet.repositories.persistent_store import PersistentStore

    dispose_engine()
    create_tables()
    yield PersistentStore()
    dispose_engine()


@pytest.fixture
def shell(kv_store, fake_completion):
    """Clinic shell over an in-memory key/value store and a fake assistant."""
    from unisovet.services.shell import ClinicShell

    return ClinicShell(kv_store, fake_completion)


@pytest.fixture
def app(persistent_store, fake_completion):
    """Create a Flask application backed by the in-memory SQLite database."""
    from unisovet.main import create_app

    app = create_app(
        persistent_store=persistent_store, completion_service=fake_completion
    )
    app.config.update({"TESTING": True, "PROPAGATE_EXCEPTIONS": True})
    return app


@pytest.fixture
def app_shell(app):
    from unisovet.controllers.record_helpers import SHELL_EXTENSION

    return app.extensions[SHELL_EXTENSION]


@pytest.fixture
def client(app):
    """Create a test client for Flask application with proper context."""
    with app.test_client() as client:
        with app.app_context():
            yield client
