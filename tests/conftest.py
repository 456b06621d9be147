"""Test fixtures: config, callers, stores and vaults.

All tests should use these fixtures for consistency.
"""

import pytest

from securecreds.config import SecureCredsConfig
from securecreds.credentials.store import InMemoryVaultStore
from securecreds.credentials.vault import CredentialVault
from securecreds.db.database import build_engine, build_session_factory, init_db
from securecreds.db.repository import SqlVaultStore
from securecreds.types import CallerContext


@pytest.fixture
def config():
    """Test configuration with safe defaults."""
    return SecureCredsConfig(
        debug=False,
        store_backend="memory",
        database_url="sqlite:///:memory:",
        audit_log_enabled=False,
    )


@pytest.fixture
def owner():
    return CallerContext(identity="0xowner")


@pytest.fixture
def alice():
    return CallerContext(identity="0xalice")


@pytest.fixture
def bob():
    return CallerContext(identity="0xbob")


@pytest.fixture
def session_factory():
    """In-memory SQLite session factory with schema created."""
    engine = build_engine("sqlite:///:memory:")
    init_db(engine)
    yield build_session_factory(engine)
    engine.dispose()


@pytest.fixture
def sql_store(session_factory):
    return SqlVaultStore(session_factory)


@pytest.fixture(params=["memory", "sql"])
def store(request):
    """Every vault behaviour test runs against both persistence backends."""
    if request.param == "memory":
        return InMemoryVaultStore()
    return request.getfixturevalue("sql_store")


@pytest.fixture
def vault(store, owner):
    return CredentialVault(store, owner=owner)
