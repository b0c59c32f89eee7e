"""PostgreSQL repository implementations."""

from idlink.persistence.repository.account import PostgresAccountRepository

__all__ = ["PostgresAccountRepository"]
