"""Prepare Nostr profile update use case."""

from typing import Any

from pydantic import BaseModel

from idlink.domain.error import MissingIdentityError, NotFoundError, ValidationError
from idlink.domain.model import ProfileUpdate
from idlink.domain.repository import AccountRepository
from idlink.domain.service import SignedUpdateCoordinator
from idlink.domain.value import AccountId


class PrepareProfileUpdateRequest(BaseModel):
    """Prepare profile update request."""

    account_id: str
    # Body as sent: a missing key keeps the field, null clears it
    changes: dict[str, Any]


class PrepareProfileUpdateResponse(BaseModel):
    """Unsigned event for the client's signer, plus the metadata it carries."""

    unsigned_event: dict[str, Any]
    event_id: str
    updated_profile: dict[str, Any]


class PrepareProfileUpdateUseCase:
    """Use case for building the kind-0 event a client signer should sign."""

    def __init__(
        self,
        account_repository: AccountRepository,
        coordinator: SignedUpdateCoordinator,
    ) -> None:
        self.account_repository = account_repository
        self.coordinator = coordinator

    async def execute(
        self, request: PrepareProfileUpdateRequest
    ) -> PrepareProfileUpdateResponse:
        """Apply requested edits to the stored Nostr metadata.

        Raises:
            NotFoundError: If the account does not exist
            MissingIdentityError: If the account has no Nostr identity
            ValidationError: If a field value is not a string or null
        """
        account = await self.account_repository.find_by_id(
            AccountId(request.account_id)
        )
        if account is None:
            raise NotFoundError("Account", request.account_id)

        identity = account.nostr_identity
        if identity is None or identity.pubkey is None:
            raise MissingIdentityError(
                "Missing Nostr public key. Please reconnect your Nostr session."
            )

        try:
            updates = ProfileUpdate.from_payload(request.changes)
        except ValueError as e:
            raise ValidationError(str(e)) from e

        unsigned = self.coordinator.prepare_update(
            identity.metadata(),
            identity.pubkey.root,
            account.username,
            account.avatar_url,
            updates,
        )

        return PrepareProfileUpdateResponse(
            unsigned_event=unsigned.to_wire(),
            event_id=unsigned.event_id(),
            updated_profile=unsigned.metadata(),
        )
