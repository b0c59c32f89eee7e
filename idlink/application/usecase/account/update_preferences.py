"""Update account preferences use case."""

from typing import Any, Optional

import logfire
from pydantic import BaseModel

from idlink.application.usecase.base import BaseUseCase
from idlink.domain.error import NotFoundError
from idlink.domain.repository import AccountRepository
from idlink.domain.service import PreferenceService
from idlink.domain.value import AccountId, ProfileSource


class UpdatePreferencesRequest(BaseModel):
    """Update preferences request."""

    account_id: str  # From authenticated session
    payload: Any  # Raw request body, validated by the preference service


class UpdatePreferencesResponse(BaseModel):
    """Update preferences response."""

    success: bool
    profile_source: Optional[ProfileSource]
    primary_provider: Optional[str]


class UpdatePreferencesUseCase(BaseUseCase):
    """Use case for changing the profile source and primary provider."""

    def __init__(
        self,
        preference_service: PreferenceService,
        account_repository: AccountRepository,
    ) -> None:
        """Initialize update preferences use case.

        Args:
            preference_service: Preference validation service
            account_repository: Account repository (durable write)
        """
        self.preference_service = preference_service
        self.account_repository = account_repository

    async def execute(
        self, request: UpdatePreferencesRequest
    ) -> UpdatePreferencesResponse:
        """Validate and store preference changes.

        Steps:
        1. Validate the payload (nothing is written if this fails)
        2. Derive the storage update
        3. Check the primary provider is linked
        4. Write the changed fields

        Raises:
            PreferencesValidationError: If the payload is invalid
            ProviderNotLinkedError: If the primary provider is not linked
            NotFoundError: If the account does not exist
        """
        validated = self.preference_service.validate(request.payload)
        update = self.preference_service.build_update(validated)

        account_id = AccountId(request.account_id)
        account = await self.account_repository.find_by_id(account_id)
        if account is None:
            raise NotFoundError("Account", request.account_id)

        self.preference_service.ensure_provider_linked(update, account)

        with logfire.span(
            "update_preferences",
            account_id=request.account_id,
            changes=str(update.changes()),
        ):
            if not update.is_empty():
                account = await self.account_repository.update_preferences(
                    account_id,
                    profile_source=update.profile_source,
                    primary_provider=update.primary_provider,
                )
                logfire.info("Preferences updated", account_id=request.account_id)

        return UpdatePreferencesResponse(
            success=True,
            profile_source=account.preferred_source,
            primary_provider=account.primary_provider_id,
        )
