"""Test harness for unit, integration and E2E tests.

Unit tests run against the in-memory store and need no services. Tests
that unmock "persistence" assume a migrated PostgreSQL is reachable at
DATABASE__URL.
"""

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from forum.config import AuthSettings, Settings
from forum.domain.model import User
from forum.domain.service import JWTService
from forum.interface.api.app import create_app
from forum.persistence.repository.inmemory import InMemoryStore
from forum.util.di import Component
from forum.util.di.container import setup_di
from tests.di import TEST_JWT_SECRET, build_test_container


def create_env_fixture(
    unmock: set[Component] | None = None,
    settings: Settings | None = None,
):
    """Factory for creating test environment fixtures.

    Creates a pytest fixture that:
    - Builds a test container with specified unmocking
    - Yields a request-scoped container for service access
    - Closes the container afterwards

    Args:
        unmock: Components to use real implementations for
        settings: Settings override (defaults to test settings)

    Returns:
        Pytest fixture function that yields AsyncContainer

    Usage:
        # Unit tests - everything mocked, no docker needed
        unit_env = create_env_fixture()

        # Integration tests - real persistence, assumes postgres running
        integration_env = create_env_fixture(unmock={"persistence"})

        @pytest.mark.asyncio
        async def test_cast_vote(unit_env):
            vote_service = await unit_env.get(VoteService)
            outcome = await vote_service.cast_vote(...)
            assert outcome == VoteOutcome.CREATED
    """

    @pytest_asyncio.fixture
    async def _test_environment():
        container = build_test_container(unmock=unmock or set(), settings=settings)

        async with container() as request_container:
            yield request_container

        await container.close()

    return _test_environment


def create_client_fixture(settings: Settings | None = None):
    """Factory for HTTP test client fixtures.

    The app is wired to a test container (in-memory persistence); its
    store lives as long as the client, so data written by one request is
    visible to the next.

    Usage:
        client = create_client_fixture()

        def test_health(client):
            assert client.get("/health").status_code == 200
    """

    @pytest.fixture
    def _client():
        app_instance = create_app()
        setup_di(app_instance, build_test_container(settings=settings))
        with TestClient(app_instance) as test_client:
            yield test_client

    return _client


def get_store(client: TestClient) -> InMemoryStore:
    """Fetch the in-memory store behind a test client's app."""
    container = client.app.state.dishka_container
    return client.portal.call(container.get, InMemoryStore)


def login_as(client: TestClient, user: User) -> dict[str, str]:
    """Register ``user`` in the client's store and return auth headers."""
    get_store(client).users[user.id] = user
    token = JWTService(AuthSettings(jwt_secret=TEST_JWT_SECRET)).create_token(user)
    return {"Authorization": f"Bearer {token}"}
