"""Domain value objects for identity linking.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

import re
from enum import Enum

from pydantic import field_validator

from idlink.domain.value.common import RootValueObject, ValueObject


class ProfileSource(str, Enum):
    """Which family of identities is authoritative for profile fields.

    - NOSTR: the user's own signed kind-0 metadata wins.
    - OAUTH: the platform-verified provider profile wins.
    """

    NOSTR = "nostr"
    OAUTH = "oauth"


class ProviderKind(str, Enum):
    """Kinds of identity an account can link."""

    NOSTR = "nostr"
    GITHUB = "github"
    EMAIL = "email"
    ANONYMOUS = "anonymous"

    @property
    def profile_source(self) -> ProfileSource:
        """Profile source this kind belongs to.

        Anonymous accounts are backed by a generated Nostr key, so they
        count as Nostr-first.
        """
        if self in (ProviderKind.NOSTR, ProviderKind.ANONYMOUS):
            return ProfileSource.NOSTR
        return ProfileSource.OAUTH

    @property
    def rank(self) -> int:
        """Position in the fixed fallback order (lower wins)."""
        return FALLBACK_ORDER.index(self)


# Stable order used when no preference decides between sources
FALLBACK_ORDER: tuple[ProviderKind, ...] = (
    ProviderKind.NOSTR,
    ProviderKind.GITHUB,
    ProviderKind.EMAIL,
    ProviderKind.ANONYMOUS,
)

# Providers a signed-in user may link through the OAuth redirect flow
LINKABLE_PROVIDERS: frozenset[ProviderKind] = frozenset({ProviderKind.GITHUB})


class LinkAction(str, Enum):
    """Action carried in a link state token."""

    LINK = "link"


class NostrPubkey(RootValueObject[str]):
    """Nostr public key in hex form (32 bytes, 64 lowercase hex characters)."""

    @field_validator("root")
    @classmethod
    def validate_pubkey_format(cls, v: str) -> str:
        """Validate pubkey is 64 hex characters and normalize case."""
        v = v.strip().lower()
        if not re.fullmatch(r"[0-9a-f]{64}", v):
            raise ValueError("Nostr pubkey must be 64 hex characters")
        return v


class LinkProviderConfig(ValueObject):
    """Client configuration needed to send a user to a provider for linking.

    Fields are optional so that an incomplete deployment can be described
    and rejected with a configuration error at link time.
    """

    client_id: str | None = None
    redirect_base_url: str | None = None
    authorize_url: str = "https://github.com/login/oauth/authorize"
    scope: str = "user:email"
