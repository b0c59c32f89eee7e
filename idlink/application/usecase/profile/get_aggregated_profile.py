"""Get aggregated profile use case."""

from typing import Optional

import logfire
from pydantic import BaseModel

from idlink.adapter.error import ProviderError
from idlink.adapter.github import GitHubProfileClient
from idlink.domain.error import NotFoundError
from idlink.domain.model import Account, Identity, ProfileFragment
from idlink.domain.repository import AccountRepository
from idlink.domain.service import ProfileMerger
from idlink.domain.value import AccountId, ProfileSource, ProviderKind


class GetAggregatedProfileRequest(BaseModel):
    """Get aggregated profile request."""

    account_id: str


class AttributeInfo(BaseModel):
    """One merged attribute and the provider it came from."""

    value: str
    source: str
    alternatives: dict[str, str] = {}


class LinkedAccountInfo(BaseModel):
    """Linked identity summary for response."""

    provider: str
    provider_user_id: Optional[str]
    is_primary: bool
    has_profile: bool


class GetAggregatedProfileResponse(BaseModel):
    """Aggregated profile response."""

    account_id: str
    attributes: dict[str, AttributeInfo]
    linked_accounts: list[LinkedAccountInfo]
    preferred_source: Optional[ProfileSource]
    primary_provider: Optional[str]
    total_linked_accounts: int


class GetAggregatedProfileUseCase:
    """Use case for building the single profile shown for an account."""

    def __init__(
        self,
        account_repository: AccountRepository,
        profile_merger: ProfileMerger,
        github_client: GitHubProfileClient,
    ) -> None:
        """Initialize get aggregated profile use case.

        Args:
            account_repository: Account repository
            profile_merger: Profile merging domain service
            github_client: Client for linked GitHub profiles
        """
        self.account_repository = account_repository
        self.profile_merger = profile_merger
        self.github_client = github_client

    async def execute(
        self, request: GetAggregatedProfileRequest
    ) -> GetAggregatedProfileResponse:
        """Execute aggregated profile flow.

        Steps:
        1. Load the account and its identities
        2. Fetch a fragment per identity (failed fetches are skipped)
        3. Merge fragments by preference

        Raises:
            NotFoundError: If the account does not exist
        """
        account = await self.account_repository.find_by_id(
            AccountId(request.account_id)
        )
        if account is None:
            raise NotFoundError("Account", request.account_id)

        with logfire.span(
            "get_aggregated_profile",
            account_id=request.account_id,
            identities=len(account.identities),
        ):
            fragments = await self.fetch_fragments(account)
            profile = self.profile_merger.aggregate(
                account.id, account.identities, fragments, account.preference
            )

        return GetAggregatedProfileResponse(
            account_id=str(profile.account_id),
            attributes={
                name: AttributeInfo(
                    value=attr.value,
                    source=attr.source,
                    alternatives=attr.alternatives,
                )
                for name, attr in profile.attributes.items()
            },
            linked_accounts=[
                LinkedAccountInfo(
                    provider=summary.provider_kind.value,
                    provider_user_id=summary.provider_user_id,
                    is_primary=summary.is_primary,
                    has_profile=summary.has_fragment,
                )
                for summary in profile.linked_accounts
            ],
            preferred_source=profile.preferred_source,
            primary_provider=profile.primary_provider_id,
            total_linked_accounts=profile.total_linked_accounts,
        )

    async def fetch_fragments(
        self, account: Account
    ) -> dict[Identity, ProfileFragment]:
        """Fetch what each linked provider knows about the user."""
        fragments: dict[Identity, ProfileFragment] = {}
        for identity in account.identities:
            fragment = await self.fetch_fragment(identity)
            if fragment is not None:
                fragments[identity] = fragment
        return fragments

    async def fetch_fragment(self, identity: Identity) -> ProfileFragment | None:
        """Fetch one identity's fragment, or None if unavailable."""
        kind = identity.provider_kind

        if kind in (ProviderKind.NOSTR, ProviderKind.ANONYMOUS):
            metadata = identity.metadata()
            pubkey = identity.pubkey.root if identity.pubkey is not None else None
            if metadata is None:
                return ProfileFragment(pubkey=pubkey) if pubkey else None
            return ProfileFragment.from_nostr_metadata(metadata, pubkey)

        if kind == ProviderKind.GITHUB:
            if not identity.access_token:
                logfire.warn(
                    "GitHub identity has no access token",
                    identity_id=str(identity.id),
                )
                return None
            try:
                return await self.github_client.fetch_profile(identity.access_token)
            except ProviderError as e:
                logfire.warn(
                    "Skipping GitHub profile",
                    identity_id=str(identity.id),
                    reason=str(e),
                )
                return None

        if kind == ProviderKind.EMAIL:
            return ProfileFragment(email=identity.provider_user_id)

        return None
