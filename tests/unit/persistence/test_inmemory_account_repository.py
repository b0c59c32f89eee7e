"""Unit tests for InMemoryAccountRepository."""

import pytest

from idlink.domain.error import NotFoundError
from idlink.domain.value import AccountId, IdentityId, ProfileSource, ProviderKind
from idlink.persistence.repository.inmemory import InMemoryAccountRepository
from tests.conftest import make_account, make_identity


@pytest.mark.asyncio
async def test_update_preferences_leaves_unset_fields():
    repo = InMemoryAccountRepository()
    await repo.save(
        make_account(
            identities=[make_identity("acct-1", ProviderKind.GITHUB)],
            primary_provider_id="github",
        )
    )

    updated = await repo.update_preferences(
        AccountId("acct-1"), profile_source=ProfileSource.NOSTR
    )

    assert updated.preferred_source == ProfileSource.NOSTR
    assert updated.primary_provider_id == "github"


@pytest.mark.asyncio
async def test_update_nostr_metadata():
    repo = InMemoryAccountRepository()
    await repo.save(make_account(identities=[make_identity("acct-1", ProviderKind.NOSTR)]))

    identity = await repo.update_nostr_metadata(
        IdentityId("acct-1-nostr"), '{"name":"alice"}'
    )

    assert identity.metadata() == {"name": "alice"}
    stored = await repo.find_by_id(AccountId("acct-1"))
    assert stored.nostr_identity.metadata() == {"name": "alice"}


@pytest.mark.asyncio
async def test_missing_identity():
    with pytest.raises(NotFoundError):
        await InMemoryAccountRepository().update_nostr_metadata(
            IdentityId("nope"), "{}"
        )
