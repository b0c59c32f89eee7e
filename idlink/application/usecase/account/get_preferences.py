"""Get account preferences use case."""

from pydantic import BaseModel

from idlink.domain.error import NotFoundError
from idlink.domain.repository import AccountRepository
from idlink.domain.value import AccountId, ProfileSource, ProviderKind


class GetPreferencesRequest(BaseModel):
    """Get preferences request."""

    account_id: str


class PreferencesResponse(BaseModel):
    """Account preferences as shown to the user."""

    profile_source: ProfileSource
    primary_provider: str


class GetPreferencesUseCase:
    """Use case for reading an account's profile preferences.

    Unset values are reported with defaults: OAuth-first, and the first
    linked provider (or email) as primary.
    """

    def __init__(self, account_repository: AccountRepository) -> None:
        self.account_repository = account_repository

    async def execute(self, request: GetPreferencesRequest) -> PreferencesResponse:
        """Read preferences.

        Raises:
            NotFoundError: If the account does not exist
        """
        account = await self.account_repository.find_by_id(
            AccountId(request.account_id)
        )
        if account is None:
            raise NotFoundError("Account", request.account_id)

        primary = account.primary_provider_id
        if primary is None:
            primary = (
                account.identities[0].provider_id
                if account.identities
                else ProviderKind.EMAIL.value
            )

        return PreferencesResponse(
            profile_source=account.preferred_source or ProfileSource.OAUTH,
            primary_provider=primary,
        )
