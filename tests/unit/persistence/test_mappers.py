"""Unit tests for row mappers."""

from datetime import datetime, timezone

from idlink.domain.value import ProfileSource, ProviderKind
from idlink.persistence.mappers import account_to_dict, identity_to_dict, row_to_account
from tests.conftest import ALICE_PUBKEY, make_account, make_identity

NOW = datetime(2026, 1, 1, tzinfo=timezone.utc)


def test_account_row_columns():
    account = make_account(
        identities=[make_identity("acct-1", ProviderKind.GITHUB)],
        preferred_source=ProfileSource.OAUTH,
        primary_provider_id="github",
    )

    row = account_to_dict(account)

    assert row["profile_source"] == "oauth"
    assert row["primary_provider"] == "github"
    assert "identities" not in row


def test_identity_row_stores_plain_pubkey():
    row = identity_to_dict(make_identity("acct-1", ProviderKind.NOSTR))

    assert row["provider"] == "nostr"
    assert row["pubkey"] == ALICE_PUBKEY


def test_row_to_account_with_identities():
    identity_row = identity_to_dict(
        make_identity("acct-1", ProviderKind.NOSTR, metadata={"name": "alice"})
    )

    account = row_to_account(
        {
            "id": "acct-1",
            "profile_source": None,
            "primary_provider": "nostr",
            "email": None,
            "username": "alice",
            "avatar_url": None,
            "created_at": NOW,
            "updated_at": NOW,
        },
        [identity_row],
    )

    assert account.preferred_source is None
    assert account.nostr_identity.metadata() == {"name": "alice"}
    assert account.primary_provider_id == "nostr"
