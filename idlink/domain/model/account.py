"""Account aggregate root.

An account is the platform-level user. It owns every identity linked to
it and the user's choice of which identity source is authoritative for
the profile.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field, model_validator

from idlink.domain.model.common import DomainModel
from idlink.domain.model.identity import Identity
from idlink.domain.model.profile import Preference
from idlink.domain.value import AccountId, ProfileSource, ProviderKind


class Account(DomainModel):
    """Account aggregate root - provider-agnostic.

    Invariants:
    - at most one identity per provider kind;
    - primary_provider_id, when set, names an identity this account owns.
    """

    id: AccountId
    preferred_source: Optional[ProfileSource] = None
    primary_provider_id: Optional[str] = None
    email: Optional[str] = None
    username: Optional[str] = None
    avatar_url: Optional[str] = None
    identities: tuple[Identity, ...] = ()
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @model_validator(mode="after")
    def check_identities(self) -> "Account":
        """Enforce identity ownership and uniqueness."""
        kinds = [identity.provider_kind for identity in self.identities]
        if len(kinds) != len(set(kinds)):
            raise ValueError("An account can link at most one identity per provider")

        for identity in self.identities:
            if identity.account_id != self.id:
                raise ValueError(
                    f"Identity {identity.id} belongs to account {identity.account_id}"
                )

        if (
            self.primary_provider_id is not None
            and self.find_identity(self.primary_provider_id) is None
        ):
            raise ValueError(
                f"Primary provider {self.primary_provider_id} is not linked to this account"
            )
        return self

    @property
    def preference(self) -> Preference:
        """Profile source preference consumed by the profile merger."""
        return Preference(
            preferred_source=self.preferred_source,
            primary_provider_id=self.primary_provider_id,
        )

    @property
    def nostr_identity(self) -> Identity | None:
        """The linked Nostr identity, if any."""
        return self.find_identity(ProviderKind.NOSTR.value)

    def find_identity(self, provider_id: str) -> Identity | None:
        """Find the linked identity a preference value refers to."""
        for identity in self.identities:
            if identity.provider_id == provider_id:
                return identity
        return None

    def has_provider(self, provider_id: str) -> bool:
        """Whether an identity with this provider id is linked."""
        return self.find_identity(provider_id) is not None
