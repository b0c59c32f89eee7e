"""Mappers for converting between database rows and domain models.

Domain models are immutable pydantic models, so rows are mapped by hand
instead of through SQLAlchemy's ORM mapping.
"""

from typing import Any, Dict, Iterable

from idlink.domain.model import Account, Identity
from idlink.domain.value import (
    AccountId,
    IdentityId,
    NostrPubkey,
    ProfileSource,
    ProviderKind,
)


def row_to_identity(row: Dict[str, Any]) -> Identity:
    """Convert database row to Identity domain model.

    Args:
        row: Database row as dict

    Returns:
        Identity domain model
    """
    return Identity(
        id=IdentityId(row["id"]),
        account_id=AccountId(row["account_id"]),
        provider_kind=ProviderKind(row["provider"]),
        provider_user_id=row.get("provider_user_id"),
        pubkey=NostrPubkey(row["pubkey"]) if row.get("pubkey") else None,
        access_token=row.get("access_token"),
        nostr_metadata=row.get("nostr_metadata"),
        linked_at=row["linked_at"],
    )


def identity_to_dict(identity: Identity) -> Dict[str, Any]:
    """Convert Identity domain model to database dict."""
    return {
        "id": identity.id,
        "account_id": identity.account_id,
        "provider": identity.provider_kind.value,
        "provider_user_id": identity.provider_user_id,
        "pubkey": identity.pubkey.root if identity.pubkey else None,
        "access_token": identity.access_token,
        "nostr_metadata": identity.nostr_metadata,
        "linked_at": identity.linked_at,
    }


def row_to_account(
    row: Dict[str, Any], identity_rows: Iterable[Dict[str, Any]]
) -> Account:
    """Convert an account row and its identity rows to an Account.

    Args:
        row: Account row as dict
        identity_rows: Rows of identities linked to the account

    Returns:
        Account domain model
    """
    return Account(
        id=AccountId(row["id"]),
        preferred_source=(
            ProfileSource(row["profile_source"]) if row.get("profile_source") else None
        ),
        primary_provider_id=row.get("primary_provider"),
        email=row.get("email"),
        username=row.get("username"),
        avatar_url=row.get("avatar_url"),
        identities=tuple(row_to_identity(r) for r in identity_rows),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def account_to_dict(account: Account) -> Dict[str, Any]:
    """Convert Account domain model to database dict (identities excluded)."""
    return {
        "id": account.id,
        "profile_source": (
            account.preferred_source.value if account.preferred_source else None
        ),
        "primary_provider": account.primary_provider_id,
        "email": account.email,
        "username": account.username,
        "avatar_url": account.avatar_url,
        "created_at": account.created_at,
        "updated_at": account.updated_at,
    }
