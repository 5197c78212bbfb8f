"""Pytest configuration and fixtures."""
import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from app.main import app
from app.repositories.goal_repository import InMemoryGoalRepository
from app.repositories.user_repository import InMemoryUserRepository
from app.services.profile_lookup import FixedAgeProfileLookup, RegistryProfileLookup
from app.utils.locks import KeyedLocks


@pytest_asyncio.fixture
async def app_client():
    """
    Create a test client backed by fresh in-memory repositories.

    This fixture:
    - Installs empty goal and user repositories on app.state
    - Resolves ages from registered users
    - Yields an async HTTP client for testing
    """
    users = InMemoryUserRepository()
    app.state.user_repository = users
    app.state.goal_repository = InMemoryGoalRepository()
    app.state.profile_lookup = RegistryProfileLookup(users)
    app.state.goal_locks = KeyedLocks()

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as client:
        yield client


@pytest.fixture
def goal_repository():
    """Empty in-memory goal repository."""
    return InMemoryGoalRepository()


@pytest.fixture
def adult_profiles():
    """Profile lookup resolving every user to age 30."""
    return FixedAgeProfileLookup(30)
