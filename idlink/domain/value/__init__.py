"""Domain value objects for idlink."""

from idlink.domain.value.identifiers import AccountId, IdentityId
from idlink.domain.value.types import (
    FALLBACK_ORDER,
    LINKABLE_PROVIDERS,
    LinkAction,
    LinkProviderConfig,
    NostrPubkey,
    ProfileSource,
    ProviderKind,
)

__all__ = [
    # Identifiers
    "AccountId",
    "IdentityId",
    # Types
    "FALLBACK_ORDER",
    "LINKABLE_PROVIDERS",
    "LinkAction",
    "LinkProviderConfig",
    "NostrPubkey",
    "ProfileSource",
    "ProviderKind",
]
