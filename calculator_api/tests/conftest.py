"""
Pytest configuration and fixtures.

Provides shared fixtures for testing.
"""

import pytest
from fastapi.testclient import TestClient

from calculator_api.main import app, get_calculator_service_dep
from calculator_api.repositories import InMemorySessionRepository
from calculator_api.services import CalculatorService


@pytest.fixture
def session_repository() -> InMemorySessionRepository:
    """Empty session repository with a small session limit"""
    return InMemorySessionRepository(max_sessions=3)


@pytest.fixture
def calculator_service(session_repository) -> CalculatorService:
    """Calculator service keeping at most two history entries per session"""
    return CalculatorService(session_repository, history_limit=2)


@pytest.fixture
def client(calculator_service) -> TestClient:
    """FastAPI test client backed by a fresh repository"""
    app.dependency_overrides[get_calculator_service_dep] = lambda: calculator_service
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def session_id(client) -> str:
    """ID of a freshly created session"""
    response = client.post("/sessions")
    return response.json()["session_id"]
