"""Shared pytest fixtures.

Provides isolated persistence backends (in-memory and SQLite in-memory via
SQLAlchemy) seeded with the sample blueprints, and a Flask app factory bound
to a throwaway data directory.
"""

import pytest

from blueprints_service import create_app
from blueprints_service.config import Config
from blueprints_service.services.persistence import InMemoryBlueprintPersistence, sample_blueprints
from blueprints_service.services.sql_persistence import SqlBlueprintPersistence


@pytest.fixture
def memory_store():
    return InMemoryBlueprintPersistence(sample_blueprints())


@pytest.fixture
def sql_store():
    store = SqlBlueprintPersistence.from_url("sqlite://")
    store.create_schema()
    store.seed(sample_blueprints())
    yield store
    store.engine.dispose()


@pytest.fixture(params=["memory", "sql"])
def store(request):
    """Each contract test runs once per backend."""
    return request.getfixturevalue(f"{request.param}_store")


def make_config(tmp_path, **overrides):
    attrs = {
        "TESTING": True,
        "DATA_DIR": str(tmp_path),
        "DB_DIR": str(tmp_path / "db"),
        "PERSISTENCE": "memory",
        "DATABASE_URL": "sqlite://",
        "SQL_ECHO": False,
        "SEED_SAMPLE_DATA": True,
        "FILTER": "identity",
        "API_PREFIX": "/api/v1",
    }
    attrs.update(overrides)
    return type("TestConfig", (Config,), attrs)


@pytest.fixture
def make_app(tmp_path):
    def _make(**overrides):
        return create_app(make_config(tmp_path, **overrides))

    return _make


@pytest.fixture
def client(make_app):
    return make_app().test_client()
