"""Unit tests for the account preference use cases."""

import pytest

from idlink.application.usecase.account import (
    GetPreferencesUseCase,
    UpdatePreferencesUseCase,
)
from idlink.application.usecase.account.get_preferences import GetPreferencesRequest
from idlink.application.usecase.account.update_preferences import (
    UpdatePreferencesRequest,
)
from idlink.domain.error import (
    NotFoundError,
    PreferencesValidationError,
    ProviderNotLinkedError,
)
from idlink.domain.repository import AccountRepository
from idlink.domain.service import PreferenceService
from idlink.domain.value import AccountId, ProfileSource, ProviderKind
from idlink.persistence.repository.inmemory import InMemoryAccountRepository
from tests.conftest import make_account, make_identity
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class SpyAccountRepository(InMemoryAccountRepository):
    """Records preference writes."""

    def __init__(self) -> None:
        super().__init__()
        self.preference_writes: list[dict] = []

    async def update_preferences(self, account_id, profile_source=None, primary_provider=None):
        self.preference_writes.append(
            {"profile_source": profile_source, "primary_provider": primary_provider}
        )
        return await super().update_preferences(
            account_id, profile_source=profile_source, primary_provider=primary_provider
        )


class SpyPreferenceService(PreferenceService):
    """Records build_update calls."""

    def __init__(self) -> None:
        self.build_update_calls = 0

    def build_update(self, validated):
        self.build_update_calls += 1
        return super().build_update(validated)


def _linked_account():
    return make_account(
        identities=[
            make_identity("acct-1", ProviderKind.NOSTR),
            make_identity("acct-1", ProviderKind.GITHUB),
        ]
    )


class TestGetPreferencesUseCase:
    """Tests for GetPreferencesUseCase."""

    @pytest.mark.asyncio
    async def test_defaults(self, unit_env):
        repo = await unit_env.get(AccountRepository)
        await repo.save(_linked_account())
        use_case = await unit_env.get(GetPreferencesUseCase)

        response = await use_case.execute(GetPreferencesRequest(account_id="acct-1"))

        assert response.profile_source == ProfileSource.OAUTH
        assert response.primary_provider == "nostr"

    @pytest.mark.asyncio
    async def test_defaults_without_identities(self, unit_env):
        repo = await unit_env.get(AccountRepository)
        await repo.save(make_account())
        use_case = await unit_env.get(GetPreferencesUseCase)

        response = await use_case.execute(GetPreferencesRequest(account_id="acct-1"))

        assert response.primary_provider == "email"

    @pytest.mark.asyncio
    async def test_stored_values(self, unit_env):
        repo = await unit_env.get(AccountRepository)
        account = _linked_account().model_copy(
            update={
                "preferred_source": ProfileSource.NOSTR,
                "primary_provider_id": "github",
            }
        )
        await repo.save(account)
        use_case = await unit_env.get(GetPreferencesUseCase)

        response = await use_case.execute(GetPreferencesRequest(account_id="acct-1"))

        assert response.profile_source == ProfileSource.NOSTR
        assert response.primary_provider == "github"

    @pytest.mark.asyncio
    async def test_unknown_account(self, unit_env):
        use_case = await unit_env.get(GetPreferencesUseCase)

        with pytest.raises(NotFoundError):
            await use_case.execute(GetPreferencesRequest(account_id="missing"))


class TestUpdatePreferencesUseCase:
    """Tests for UpdatePreferencesUseCase."""

    @pytest.mark.asyncio
    async def test_updates_both_fields(self, unit_env):
        repo = await unit_env.get(AccountRepository)
        await repo.save(_linked_account())
        use_case = await unit_env.get(UpdatePreferencesUseCase)

        response = await use_case.execute(
            UpdatePreferencesRequest(
                account_id="acct-1",
                payload={"profileSource": "nostr", "primaryProvider": "github"},
            )
        )

        assert response.success is True
        stored = await repo.find_by_id(AccountId("acct-1"))
        assert stored.preferred_source == ProfileSource.NOSTR
        assert stored.primary_provider_id == "github"

    @pytest.mark.asyncio
    async def test_invalid_source_writes_nothing(self):
        """An unknown profile source fails before any update is built or stored."""
        repo = SpyAccountRepository()
        await repo.save(_linked_account())
        preference_service = SpyPreferenceService()
        use_case = UpdatePreferencesUseCase(preference_service, repo)

        with pytest.raises(PreferencesValidationError):
            await use_case.execute(
                UpdatePreferencesRequest(
                    account_id="acct-1", payload={"profileSource": "carrier-pigeon"}
                )
            )

        assert preference_service.build_update_calls == 0
        assert repo.preference_writes == []

    @pytest.mark.asyncio
    async def test_blank_primary_keeps_stored_value(self):
        repo = SpyAccountRepository()
        await repo.save(
            _linked_account().model_copy(update={"primary_provider_id": "github"})
        )
        use_case = UpdatePreferencesUseCase(PreferenceService(), repo)

        response = await use_case.execute(
            UpdatePreferencesRequest(account_id="acct-1", payload={"primaryProvider": ""})
        )

        assert repo.preference_writes == []
        assert response.primary_provider == "github"

    @pytest.mark.asyncio
    async def test_unlinked_primary_rejected(self):
        repo = SpyAccountRepository()
        await repo.save(make_account(identities=[make_identity("acct-1", ProviderKind.NOSTR)]))
        use_case = UpdatePreferencesUseCase(PreferenceService(), repo)

        with pytest.raises(ProviderNotLinkedError):
            await use_case.execute(
                UpdatePreferencesRequest(
                    account_id="acct-1", payload={"primaryProvider": "github"}
                )
            )

        assert repo.preference_writes == []

    @pytest.mark.asyncio
    async def test_unknown_account(self, unit_env):
        use_case = await unit_env.get(UpdatePreferencesUseCase)

        with pytest.raises(NotFoundError):
            await use_case.execute(
                UpdatePreferencesRequest(
                    account_id="missing", payload={"profileSource": "oauth"}
                )
            )
