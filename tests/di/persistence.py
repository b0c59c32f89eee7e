"""Mock persistence providers for testing."""

from dishka import Scope, provide

from idlink.domain.repository import AccountRepository
from idlink.persistence.repository.inmemory import InMemoryAccountRepository
from idlink.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Mock persistence provider using in-memory repositories.

    REQUEST scope gives every test a fresh repository.
    """

    __is_mock__ = True

    @provide(scope=Scope.REQUEST)
    def get_account_repository(self) -> AccountRepository:
        """Provide in-memory account repository."""
        return InMemoryAccountRepository()
