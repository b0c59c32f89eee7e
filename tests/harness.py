"""Test harness.

Unit tests run with every component mocked. Integration tests unmock
persistence and expect PostgreSQL at DATABASE__URL.
"""

import pytest_asyncio

from idlink.util.di import Component
from tests.di import build_test_container


def create_env_fixture(unmock: set[Component] | None = None):
    """Factory for creating test environment fixtures.

    The fixture yields a request-scoped container, so repositories and
    services obtained in one test share state and nothing leaks between
    tests.

    Args:
        unmock: Components to use real implementations for

    Returns:
        Pytest fixture function that yields AsyncContainer

    Usage:
        unit_env = create_env_fixture()

        @pytest.mark.asyncio
        async def test_preferences(unit_env):
            repo = await unit_env.get(AccountRepository)
            await repo.save(make_account(...))
    """

    @pytest_asyncio.fixture
    async def _test_environment():
        container = build_test_container(unmock=unmock or set())

        async with container() as request_container:
            yield request_container

        await container.close()

    return _test_environment
