"""Delegated signing of Nostr profile updates.

The private key never reaches this service. Signing is handed to an
external signer (a NIP-07 style agent) that may be missing, may lack the
operation, may prompt a human, and may refuse.
"""

import asyncio
import time
from collections.abc import Callable, Mapping
from typing import Any

import logfire
import pydantic

from idlink.domain.error import (
    MissingIdentityError,
    SignerCapabilityMissingError,
    SignerUnavailableError,
    SigningRejectedError,
    SigningTimeoutError,
)
from idlink.domain.model import (
    ProfileUpdate,
    SignedProfileEvent,
    SignedProfileUpdate,
    UnsignedProfileEvent,
)
from idlink.domain.model.profile_event import serialize_content

from .base import Service


class EventSigner:
    """Signer capability interface.

    Implementations hold the private key (or reach something that does)
    and expose only the signing operation.
    """

    async def sign_event(self, event: dict[str, Any]) -> dict[str, Any]:
        """Sign an unsigned event.

        Args:
            event: Unsigned event fields (kind, tags, content, created_at, pubkey)

        Returns:
            The event with "id" and "sig" added
        """
        raise NotImplementedError


class SignedUpdateCoordinator(Service):
    """Builds unsigned kind-0 events and obtains signatures for them.

    Each request_signature call is one outstanding operation with no
    retry: retrying a rejected signature would prompt the user again.
    """

    def __init__(
        self,
        timeout: float | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize coordinator.

        Args:
            timeout: Longest wait for a signer, in seconds (None waits
                as long as the surrounding request does)
            clock: Source of the current time in seconds since epoch
        """
        self.timeout = timeout
        self.clock = clock

    def prepare_update(
        self,
        current_metadata: Mapping[str, Any] | None,
        identity_pubkey: str | None,
        fallback_display_name: str | None,
        fallback_avatar_url: str | None,
        updates: ProfileUpdate,
    ) -> UnsignedProfileEvent:
        """Apply edits to the current metadata and build the unsigned event.

        Args:
            current_metadata: Current kind-0 content, if any; not modified
            identity_pubkey: Hex pubkey of the account's Nostr identity
            fallback_display_name: Name to use when the profile has none
            fallback_avatar_url: Picture to use when the profile has none
            updates: Requested edits

        Returns:
            Unsigned profile metadata event

        Raises:
            MissingIdentityError: If identity_pubkey is absent
        """
        if not identity_pubkey:
            raise MissingIdentityError(
                "Missing Nostr public key. Please reconnect your Nostr session."
            )

        metadata: dict[str, Any] = (
            dict(current_metadata) if isinstance(current_metadata, Mapping) else {}
        )

        for name, update in updates.items():
            if update.op == "clear":
                metadata.pop(name, None)
            elif update.op == "set":
                metadata[name] = update.value

        if not metadata.get("name") and fallback_display_name:
            metadata["name"] = fallback_display_name
        if not metadata.get("display_name") and fallback_display_name:
            metadata["display_name"] = fallback_display_name
        if not metadata.get("picture") and fallback_avatar_url:
            metadata["picture"] = fallback_avatar_url

        return UnsignedProfileEvent(
            tags=[],
            content=serialize_content(metadata),
            created_at=int(self.clock()),
            pubkey=identity_pubkey,
        )

    async def request_signature(
        self, unsigned: UnsignedProfileEvent, signer: EventSigner | None
    ) -> SignedProfileEvent:
        """Ask the external signer to sign an event.

        The signature is not verified here; relays and consumers do that.

        Args:
            unsigned: Event to sign
            signer: Signer capability found in the environment, if any

        Returns:
            Signed event

        Raises:
            SignerUnavailableError: If no signer is present
            SignerCapabilityMissingError: If the signer cannot sign events
            SigningRejectedError: If the signer refuses or fails
            SigningTimeoutError: If the signer does not answer in time
        """
        if signer is None:
            raise SignerUnavailableError()

        sign_event = getattr(signer, "sign_event", None)
        if not callable(sign_event):
            raise SignerCapabilityMissingError()

        with logfire.span(
            "signed_update_coordinator.request_signature",
            pubkey=unsigned.pubkey,
            created_at=unsigned.created_at,
        ):
            deadline = asyncio.timeout(self.timeout)
            try:
                async with deadline:
                    result = await sign_event(unsigned.to_wire())
            except TimeoutError as e:
                if not deadline.expired():
                    logfire.warn("Signer rejected event", error=str(e))
                    raise SigningRejectedError(f"Failed to sign event: {e}") from e
                logfire.warn("Signer timed out", timeout=self.timeout)
                raise SigningTimeoutError(self.timeout or 0) from None
            except Exception as e:
                logfire.warn("Signer rejected event", error=str(e))
                raise SigningRejectedError(f"Failed to sign event: {e}") from e

            signed = self._bundle(unsigned, result)
            logfire.info("Profile event signed", event_id=signed.id)
            return signed

    async def publish_update(
        self,
        current_metadata: Mapping[str, Any] | None,
        identity_pubkey: str | None,
        fallback_display_name: str | None,
        fallback_avatar_url: str | None,
        updates: ProfileUpdate,
        signer: EventSigner | None,
    ) -> SignedProfileUpdate:
        """Prepare and sign a profile update in one step.

        Returns:
            Signed event plus the metadata it carries, for immediate display
        """
        unsigned = self.prepare_update(
            current_metadata,
            identity_pubkey,
            fallback_display_name,
            fallback_avatar_url,
            updates,
        )
        signed = await self.request_signature(unsigned, signer)
        return SignedProfileUpdate(
            signed_event=signed, updated_profile=unsigned.metadata()
        )

    @staticmethod
    def _bundle(unsigned: UnsignedProfileEvent, result: Any) -> SignedProfileEvent:
        """Attach the signer's signature to the original unsigned fields."""
        if not isinstance(result, Mapping):
            raise SigningRejectedError("Signer returned no event")

        sig = result.get("sig")
        if not isinstance(sig, str) or not sig:
            raise SigningRejectedError("Signer returned no signature")

        event_id = result.get("id")
        if not isinstance(event_id, str) or not event_id:
            event_id = unsigned.event_id()

        try:
            return SignedProfileEvent(
                **unsigned.model_dump(), id=event_id, sig=sig
            )
        except pydantic.ValidationError as e:
            raise SigningRejectedError(f"Signer returned an invalid event: {e}") from e
