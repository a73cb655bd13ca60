# tests/conftest.py

"""
Pytest configuration and shared fixtures for testing.
"""

import pytest
from fastapi.testclient import TestClient
from unittest.mock import Mock, patch
from typing import Generator

from main import create_app
from core.rate_limiter import reset_rate_limits
from dependencies.auth import StaffUser


@pytest.fixture(scope="function")
def app():
    """Create a test FastAPI application instance."""
    return create_app()


@pytest.fixture(scope="function")
def client(app) -> Generator[TestClient, None, None]:
    """Test client that reports redirects instead of following them."""
    with TestClient(app, follow_redirects=False) as test_client:
        yield test_client


def make_staff_user(role: str, **overrides) -> StaffUser:
    data = {
        "id": f"{role or 'norole'}-user-id",
        "email": f"{role or 'norole'}@clubatletico.com.ar",
        "name": f"{role.title() or 'Usuario'} Test",
        "role": role,
    }
    data.update(overrides)
    return StaffUser(**data)


@pytest.fixture
def medico_user():
    return make_staff_user("medico")


@pytest.fixture
def entrenador_user():
    return make_staff_user("entrenador")


@pytest.fixture
def administrador_user():
    return make_staff_user("administrador")


@pytest.fixture
def psicologo_user():
    return make_staff_user("psicologo")


@pytest.fixture
def norole_user():
    """Authenticated account whose metadata carries no known role."""
    return make_staff_user("")


@pytest.fixture
def staff_session():
    """
    Make every staff identity lookup return `user` (or None).
    Patches both the route guard and the request dependency.
    """
    patchers = []

    def _login(user):
        for target in ("core.route_guard.resolve_staff_user", "dependencies.auth.resolve_staff_user"):
            patcher = patch(target, return_value=user)
            patcher.start()
            patchers.append(patcher)
        return user

    yield _login

    for patcher in reversed(patchers):
        patcher.stop()


@pytest.fixture
def mock_supabase_client():
    """Create a mock Supabase client."""
    mock_client = Mock()
    mock_table = Mock()
    mock_client.table.return_value = mock_table
    return mock_client


@pytest.fixture(autouse=True)
def reset_login_throttle():
    """Reset rate limiter state before each test."""
    reset_rate_limits()
    yield
    reset_rate_limits()
