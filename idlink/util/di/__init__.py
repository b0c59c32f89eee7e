"""Dependency injection module."""

from typing import Type

from idlink.util.di.application import ProdApplicationProvider
from idlink.util.di.base import Component, ProviderBase
from idlink.util.di.core import ProdConfigProvider
from idlink.util.di.domain import ProdDomainProvider
from idlink.util.di.infrastructure import (
    GitHubProvider,
    PersistenceProvider,
    ProdGitHubProvider,
    ProdPersistenceProvider,
)
from idlink.util.error import DependencyInjectionError

PROVIDERS: list[Type[ProviderBase]] = [
    # Core providers (not mockable)
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    # Infrastructure components (mockable)
    GitHubProvider,
    PersistenceProvider,
]


def get_provider(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Select the provider class to instantiate for a base.

    A base without subclasses is concrete and used as-is. A base with
    subclasses is a mockable component; the subclass whose __is_mock__
    flag matches use_mock is selected.

    Args:
        base: Provider base class
        use_mock: Whether to use the mock implementation

    Returns:
        Provider class (not instantiated)

    Raises:
        DependencyInjectionError: If no matching implementation is registered
    """
    subclasses = base.__subclasses__()
    if not subclasses:
        return base

    impl = next(
        (c for c in subclasses if getattr(c, "__is_mock__", False) == use_mock),
        None,
    )
    if not impl:
        kind = "mock" if use_mock else "production"
        component_name = getattr(base, "__mock_component__", None) or base.__name__
        raise DependencyInjectionError(f"No {kind} implementation for {component_name}")

    return impl


__all__ = [
    "Component",
    "GitHubProvider",
    "PROVIDERS",
    "PersistenceProvider",
    "ProdApplicationProvider",
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdGitHubProvider",
    "ProdPersistenceProvider",
    "ProviderBase",
    "get_provider",
]
