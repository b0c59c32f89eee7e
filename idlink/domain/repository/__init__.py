"""Repository interfaces."""

from idlink.domain.repository.account import AccountRepository

__all__ = ["AccountRepository"]
