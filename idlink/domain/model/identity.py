"""Identity entity.

One login method linked to an account.
"""

import json
from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import Field, model_validator

from idlink.domain.model.common import DomainModel
from idlink.domain.value import AccountId, IdentityId, NostrPubkey, ProviderKind


class Identity(DomainModel):
    """External identity linked to an account.

    Nostr identities are proven by a keypair and carry a pubkey instead of
    a provider user id. GitHub and email identities always carry a
    provider user id (GitHub user id, email address).

    Identities are hashable, so a fragment mapping can be keyed by them.
    """

    id: IdentityId
    account_id: AccountId
    provider_kind: ProviderKind
    provider_user_id: Optional[str] = None
    pubkey: Optional[NostrPubkey] = None
    # OAuth access token used to fetch the provider profile
    access_token: Optional[str] = Field(default=None, repr=False)
    # Last kind-0 content seen for this key (JSON object string)
    nostr_metadata: Optional[str] = None
    linked_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @model_validator(mode="after")
    def check_provider_reference(self) -> "Identity":
        """Require the reference each provider kind is identified by."""
        if self.provider_kind == ProviderKind.NOSTR and self.pubkey is None:
            raise ValueError("Nostr identities require a pubkey")
        if (
            self.provider_kind in (ProviderKind.GITHUB, ProviderKind.EMAIL)
            and not self.provider_user_id
        ):
            raise ValueError(
                f"{self.provider_kind.value} identities require a provider user id"
            )
        return self

    @property
    def provider_id(self) -> str:
        """Identifier account preferences use to refer to this identity.

        An account links at most one identity per kind, so the kind value
        is unique within the account.
        """
        return self.provider_kind.value

    @property
    def external_id(self) -> str | None:
        """Provider-side identifier: the pubkey for Nostr, else the user id."""
        if self.pubkey is not None:
            return self.pubkey.root
        return self.provider_user_id

    def metadata(self) -> dict[str, Any] | None:
        """Cached kind-0 metadata as a dict, if any was stored."""
        if not self.nostr_metadata:
            return None
        parsed = json.loads(self.nostr_metadata)
        return parsed if isinstance(parsed, dict) else None
