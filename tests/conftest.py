"""Test configuration and shared builders."""

import json
from typing import Any

from idlink.domain.model import Account, Identity
from idlink.domain.value import (
    AccountId,
    IdentityId,
    NostrPubkey,
    ProfileSource,
    ProviderKind,
)

ALICE_PUBKEY = "ab" * 32
BOB_PUBKEY = "cd" * 32


def make_identity(
    account_id: str,
    kind: ProviderKind,
    *,
    provider_user_id: str | None = None,
    pubkey: str | None = None,
    access_token: str | None = None,
    metadata: dict[str, Any] | None = None,
) -> Identity:
    """Build an identity with the reference its kind requires."""
    if kind == ProviderKind.NOSTR and pubkey is None:
        pubkey = ALICE_PUBKEY
    if kind == ProviderKind.GITHUB and provider_user_id is None:
        provider_user_id = "1001"
    if kind == ProviderKind.EMAIL and provider_user_id is None:
        provider_user_id = "alice@example.com"

    return Identity(
        id=IdentityId(f"{account_id}-{kind.value}"),
        account_id=AccountId(account_id),
        provider_kind=kind,
        provider_user_id=provider_user_id,
        pubkey=NostrPubkey(pubkey) if pubkey else None,
        access_token=access_token,
        nostr_metadata=json.dumps(metadata) if metadata is not None else None,
    )


def make_account(
    account_id: str = "acct-1",
    identities: list[Identity] | None = None,
    preferred_source: ProfileSource | None = None,
    primary_provider_id: str | None = None,
    username: str | None = None,
    avatar_url: str | None = None,
) -> Account:
    """Build an account owning the given identities."""
    return Account(
        id=AccountId(account_id),
        identities=tuple(identities or ()),
        preferred_source=preferred_source,
        primary_provider_id=primary_provider_id,
        username=username,
        avatar_url=avatar_url,
    )
