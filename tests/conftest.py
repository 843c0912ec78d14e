"""Test configuration for the shared-context API."""

import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from ctxapi.api.dependencies import get_todo_repository, get_user_store  # noqa: E402
from ctxapi.main import create_app  # noqa: E402
from ctxapi.repositories.todo_repository import InMemoryTodoRepository  # noqa: E402
from ctxapi.settings import Settings  # noqa: E402


@pytest.fixture
def settings() -> Settings:
    return Settings(
        environment="test",
        log_level="INFO",
        host="127.0.0.1",
        port=3000,
        database_url=None,
        db_max_connections=1,
        gbp_to_usd_rate=1.3,
        eur_to_usd_rate=1.2,
    )


@pytest.fixture
def todo_repository() -> InMemoryTodoRepository:
    return InMemoryTodoRepository()


@pytest.fixture(autouse=True)
def reset_user_store():
    """Reset the shared user store between tests."""
    get_user_store().clear()
    yield
    get_user_store().clear()


@pytest.fixture
def app(settings, todo_repository):
    application = create_app(settings)
    application.dependency_overrides[get_todo_repository] = lambda: todo_repository
    return application


@pytest.fixture
def client(app) -> TestClient:
    """Provide a TestClient for integration tests."""
    return TestClient(app)
