"""Confirm Nostr profile update use case."""

from typing import Any

import logfire
import pydantic
from pydantic import BaseModel

from idlink.adapter.nostr import PresignedEventSigner
from idlink.domain.error import MissingIdentityError, NotFoundError, ValidationError
from idlink.domain.model import UnsignedProfileEvent
from idlink.domain.repository import AccountRepository
from idlink.domain.service import SignedUpdateCoordinator
from idlink.domain.value import AccountId


class ConfirmProfileUpdateRequest(BaseModel):
    """Confirm profile update request."""

    account_id: str
    unsigned_event: dict[str, Any]  # As returned by the prepare step
    signed_event: dict[str, Any]  # As returned by the client's signer


class ConfirmProfileUpdateResponse(BaseModel):
    """Signed event ready for relays, plus the stored metadata."""

    signed_event: dict[str, Any]
    updated_profile: dict[str, Any]


class ConfirmProfileUpdateUseCase:
    """Use case for accepting a client-signed profile event.

    The event must be signed by the account's own Nostr key and must match
    the prepared event exactly. The new metadata is stored only once a
    signature has been obtained.
    """

    def __init__(
        self,
        account_repository: AccountRepository,
        coordinator: SignedUpdateCoordinator,
    ) -> None:
        """Initialize confirm profile update use case.

        Args:
            account_repository: Account repository
            coordinator: Signed update coordinator
        """
        self.account_repository = account_repository
        self.coordinator = coordinator

    async def execute(
        self, request: ConfirmProfileUpdateRequest
    ) -> ConfirmProfileUpdateResponse:
        """Execute confirm flow.

        Raises:
            NotFoundError: If the account does not exist
            MissingIdentityError: If the account has no Nostr identity
            ValidationError: If the prepared event is invalid or was built
                for another key
            SigningRejectedError: If the signed event does not match
        """
        account = await self.account_repository.find_by_id(
            AccountId(request.account_id)
        )
        if account is None:
            raise NotFoundError("Account", request.account_id)

        identity = account.nostr_identity
        if identity is None or identity.pubkey is None:
            raise MissingIdentityError()

        try:
            unsigned = UnsignedProfileEvent.model_validate(request.unsigned_event)
        except pydantic.ValidationError as e:
            raise ValidationError(f"Invalid profile event: {e}") from e

        if unsigned.pubkey != identity.pubkey.root:
            raise ValidationError("Profile event is not for this account's Nostr key")

        signed = await self.coordinator.request_signature(
            unsigned, PresignedEventSigner(request.signed_event)
        )

        await self.account_repository.update_nostr_metadata(
            identity.id, unsigned.content
        )
        logfire.info(
            "Nostr profile updated",
            account_id=request.account_id,
            event_id=signed.id,
        )

        return ConfirmProfileUpdateResponse(
            signed_event=signed.model_dump(mode="json"),
            updated_profile=unsigned.metadata(),
        )
