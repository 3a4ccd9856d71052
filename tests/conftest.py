# tests/conftest.py

"""
Pytest configuration and shared fixtures for testing.
"""

import os

# Settings are read at import time; startup validation needs these
os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "test-service-role-key")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")

import pytest
from fastapi.testclient import TestClient
from unittest.mock import MagicMock, Mock
from typing import Generator

from main import create_app
from dependencies.auth import CurrentUser, get_current_user
from models.snapshot import TenantContext


SOCIETY_ID = "society-1"

QUERY_METHODS = [
    "select", "eq", "neq", "in_", "or_", "gte", "gt", "lte", "order", "limit",
    "insert", "update", "upsert", "delete",
]


def make_query(data=None, count=None, error: Exception = None):
    """
    Chainable stand-in for a PostgREST query builder.
    Every builder call returns the same object; execute() returns the rows.
    """
    query = MagicMock()
    for method in QUERY_METHODS:
        getattr(query, method).return_value = query

    if error is not None:
        query.execute.side_effect = error
    else:
        query.execute.return_value = Mock(data=data if data is not None else [], count=count)
    return query


def make_client(tables: dict = None):
    """Supabase client whose table(name) returns tables[name] (empty query otherwise)."""
    tables = tables or {}
    client = MagicMock()
    client.table.side_effect = lambda name: tables.setdefault(name, make_query())
    return client


@pytest.fixture(scope="function")
def app():
    """Create a test FastAPI application instance."""
    return create_app()


@pytest.fixture(scope="function")
def client(app) -> Generator[TestClient, None, None]:
    """Create a test client for the FastAPI application."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def mock_admin_user():
    return CurrentUser(
        id="admin-user-id",
        auth_user_id="admin-user-id",
        email="admin@example.com",
        role="society_admin",
        full_name="Society Admin",
        profile_id="admin-profile",
        society_id=SOCIETY_ID,
        permissions=[],
    )


@pytest.fixture
def mock_resident_user():
    return CurrentUser(
        id="resident-user-id",
        auth_user_id="resident-user-id",
        email="resident@example.com",
        role="resident",
        full_name="Asha Resident",
        profile_id="resident-profile",
        society_id=SOCIETY_ID,
        unit_number="A-101",
        permissions=[],
    )


@pytest.fixture
def mock_homeless_user():
    """Authenticated but not linked to any society."""
    return CurrentUser(
        id="new-user-id",
        auth_user_id="new-user-id",
        email="new@example.com",
        role="resident",
        profile_id="new-profile",
        society_id=None,
        permissions=[],
    )


@pytest.fixture
def mock_super_admin_user():
    """Platform operator; belongs to no society."""
    return CurrentUser(
        id="super-user-id",
        auth_user_id="super-user-id",
        email="root@example.com",
        role="super_admin",
        profile_id="super-profile",
        society_id=None,
        permissions=[],
    )


@pytest.fixture
def admin_context():
    return TenantContext(society_id=SOCIETY_ID, profile_id="admin-profile", role="society_admin")


@pytest.fixture
def resident_context():
    return TenantContext(society_id=SOCIETY_ID, profile_id="resident-profile", role="resident")


@pytest.fixture
def login_as(app):
    """login_as(user) makes every request authenticate as `user`."""
    def _login(user: CurrentUser):
        app.dependency_overrides[get_current_user] = lambda: user
    yield _login
    app.dependency_overrides.clear()


@pytest.fixture(autouse=True)
def reset_rate_limits():
    """Reset rate limiter before each test."""
    from core.rate_limiter import reset_rate_limits as reset
    reset()
    yield
    reset()


@pytest.fixture(autouse=True)
def reset_supabase_clients():
    from core.supabase_client import reset_clients
    reset_clients()
    yield
    reset_clients()
