"""In-memory repository implementations for testing."""

from .account import InMemoryAccountRepository

__all__ = ["InMemoryAccountRepository"]
