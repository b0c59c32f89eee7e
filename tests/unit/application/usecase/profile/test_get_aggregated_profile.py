"""Unit tests for GetAggregatedProfileUseCase."""

import pytest

from idlink.adapter.github import MockGitHubProfileClient
from idlink.application.usecase.profile import GetAggregatedProfileUseCase
from idlink.application.usecase.profile.get_aggregated_profile import (
    GetAggregatedProfileRequest,
)
from idlink.domain.error import NotFoundError
from idlink.domain.repository import AccountRepository
from idlink.domain.service import ProfileMerger
from idlink.domain.value import ProfileSource, ProviderKind
from tests.conftest import ALICE_PUBKEY, make_account, make_identity
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


def _account(github_token: str = "mock-github-token", **kwargs):
    return make_account(
        identities=[
            make_identity(
                "acct-1",
                ProviderKind.NOSTR,
                metadata={"name": "alice", "picture": "https://n/alice.png"},
            ),
            make_identity("acct-1", ProviderKind.GITHUB, access_token=github_token),
            make_identity("acct-1", ProviderKind.EMAIL),
        ],
        **kwargs,
    )


class TestGetAggregatedProfileUseCase:
    """Tests for GetAggregatedProfileUseCase."""

    @pytest.mark.asyncio
    async def test_merges_all_sources(self, unit_env):
        repo = await unit_env.get(AccountRepository)
        await repo.save(_account())
        use_case = await unit_env.get(GetAggregatedProfileUseCase)

        response = await use_case.execute(
            GetAggregatedProfileRequest(account_id="acct-1")
        )

        attributes = response.attributes
        assert attributes["display_name"].value == "alice"
        assert attributes["display_name"].source == "nostr"
        assert attributes["avatar_url"].value == "https://n/alice.png"
        assert attributes["about"].value == "Mock bio"
        assert attributes["about"].source == "github"
        assert attributes["email"].value == "mock@github.com"
        assert attributes["email"].alternatives == {"email": "alice@example.com"}
        assert attributes["display_name"].alternatives == {
            "github": "Mock GitHub User"
        }
        assert attributes["pubkey"].value == ALICE_PUBKEY
        assert response.total_linked_accounts == 3
        assert all(a.has_profile for a in response.linked_accounts)

    @pytest.mark.asyncio
    async def test_oauth_preference(self, unit_env):
        repo = await unit_env.get(AccountRepository)
        await repo.save(_account(preferred_source=ProfileSource.OAUTH))
        use_case = await unit_env.get(GetAggregatedProfileUseCase)

        response = await use_case.execute(
            GetAggregatedProfileRequest(account_id="acct-1")
        )

        assert response.attributes["display_name"].value == "Mock GitHub User"
        assert response.attributes["display_name"].source == "github"
        assert response.preferred_source == ProfileSource.OAUTH

    @pytest.mark.asyncio
    async def test_failed_github_fetch_is_skipped(self, unit_env):
        """A revoked token drops GitHub's fields, not the whole profile."""
        repo = await unit_env.get(AccountRepository)
        await repo.save(_account(github_token="revoked"))
        use_case = await unit_env.get(GetAggregatedProfileUseCase)

        response = await use_case.execute(
            GetAggregatedProfileRequest(account_id="acct-1")
        )

        assert "about" not in response.attributes
        assert response.attributes["email"].value == "alice@example.com"
        assert response.attributes["email"].source == "email"
        github = next(a for a in response.linked_accounts if a.provider == "github")
        assert github.has_profile is False

    @pytest.mark.asyncio
    async def test_account_without_identities(self, unit_env):
        repo = await unit_env.get(AccountRepository)
        await repo.save(make_account(account_id="acct-2"))
        use_case = GetAggregatedProfileUseCase(
            repo, ProfileMerger("https://seed/"), MockGitHubProfileClient()
        )

        response = await use_case.execute(
            GetAggregatedProfileRequest(account_id="acct-2")
        )

        assert response.attributes["avatar_url"].value == "https://seed/acct-2"
        assert response.attributes["avatar_url"].source == "platform"
        assert response.linked_accounts == []

    @pytest.mark.asyncio
    async def test_unknown_account(self, unit_env):
        use_case = await unit_env.get(GetAggregatedProfileUseCase)

        with pytest.raises(NotFoundError):
            await use_case.execute(GetAggregatedProfileRequest(account_id="missing"))
