"""Account preference validation.

Durable storage is the repository's job; this service decides what is
allowed to reach it.
"""

from typing import Any, Optional

import logfire
import pydantic
from pydantic import BaseModel, ConfigDict, Field

from idlink.domain.error import PreferencesValidationError, ProviderNotLinkedError
from idlink.domain.model import Account
from idlink.domain.value import ProfileSource

from .base import Service


class PreferencesInput(BaseModel):
    """Validated preferences payload (wire names are camelCase)."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    profile_source: Optional[ProfileSource] = Field(default=None, alias="profileSource")
    primary_provider: Optional[str] = Field(default=None, alias="primaryProvider")


class PreferencesUpdate(BaseModel):
    """Fields to write to storage. Unset fields are left untouched."""

    model_config = ConfigDict(frozen=True)

    profile_source: Optional[ProfileSource] = None
    primary_provider: Optional[str] = None

    def is_empty(self) -> bool:
        """Whether there is nothing to write."""
        return not self.model_fields_set

    def changes(self) -> dict[str, Any]:
        """Only the fields that were set."""
        return self.model_dump(exclude_unset=True)


class PreferenceService(Service):
    """Validates preference changes and derives storage updates."""

    def validate(self, payload: Any) -> PreferencesInput:
        """Validate a preferences payload.

        Args:
            payload: Request body

        Returns:
            Validated input

        Raises:
            PreferencesValidationError: If the payload is not an object or a
                field is invalid (for example an unknown profile source)
        """
        try:
            validated = PreferencesInput.model_validate(payload)
        except pydantic.ValidationError as e:
            details = e.errors(include_url=False, include_context=False)
            logfire.warn("Preferences validation failed", errors=str(details))
            raise PreferencesValidationError("Invalid preferences", details) from e
        return validated

    def build_update(self, validated: PreferencesInput) -> PreferencesUpdate:
        """Keep only fields that are present and pass their checks.

        A blank primary provider counts as not provided; this path cannot
        clear the primary provider.

        Args:
            validated: Output of validate()

        Returns:
            Storage update
        """
        changes: dict[str, Any] = {}

        if validated.profile_source is not None and isinstance(
            validated.profile_source, ProfileSource
        ):
            changes["profile_source"] = validated.profile_source

        if validated.primary_provider is not None:
            primary = validated.primary_provider.strip()
            if primary:
                changes["primary_provider"] = primary

        return PreferencesUpdate(**changes)

    def ensure_provider_linked(
        self, update: PreferencesUpdate, account: Account
    ) -> PreferencesUpdate:
        """Reject a primary provider the account has not linked.

        Raises:
            ProviderNotLinkedError: If the named provider is not linked
        """
        if update.primary_provider is not None and not account.has_provider(
            update.primary_provider
        ):
            raise ProviderNotLinkedError(update.primary_provider)
        return update
