"""Shared pytest fixtures and configuration."""

import os
import pytest
from unittest.mock import AsyncMock, MagicMock, patch
from freezegun import freeze_time

# Set test environment variables
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "test-key")
os.environ.setdefault("LOG_FORMAT", "text")

from src.models.user import AuthUser
from tests.utils.fake_supabase import FakeSupabaseClient


@pytest.fixture
def fake_supabase(monkeypatch):
    """In-memory Supabase data client installed as the singleton."""
    from src.services import supabase_client

    client = FakeSupabaseClient()
    monkeypatch.setattr(supabase_client, "_client", client)
    return client


@pytest.fixture
def tasks_table(fake_supabase):
    return fake_supabase.table("tasks")


@pytest.fixture
def user():
    return AuthUser(id="u1", name="Ada Lovelace", email="ada@example.com")


@pytest.fixture
def other_user():
    return AuthUser(id="u2", name="Grace Hopper", email="grace@example.com")


@pytest.fixture
def signed_in(user):
    """Every access token resolves to ``user``."""
    with patch("src.views.session.get_current_user", new=AsyncMock(return_value=user)) as mock:
        yield mock


@pytest.fixture
def signed_out():
    """No access token resolves to a user."""
    with patch("src.views.session.get_current_user", new=AsyncMock(return_value=None)) as mock:
        yield mock


@pytest.fixture
def mock_auth_client():
    """Mock Supabase client returned for auth calls."""
    client = MagicMock()
    with patch("src.services.auth.get_auth_client", return_value=client):
        yield client


@pytest.fixture
def freeze_time_fixture():
    """Fixture for freezing time in tests."""
    with freeze_time("2024-12-09 12:00:00") as frozen_time:
        yield frozen_time
