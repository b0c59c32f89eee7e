"""Signer capabilities for Nostr profile events.

The server never holds user keys. In a web deployment the browser's
NIP-07 extension signs the event the server prepared, and the signed
event is handed back; PresignedEventSigner presents that result to the
coordinator as a signer capability.
"""

import hashlib
from typing import Any, Mapping

import logfire

from idlink.adapter.error import ProviderError
from idlink.domain.model import UnsignedProfileEvent
from idlink.domain.service.signing_service import EventSigner

# Fields a signature commits to
_COMMITTED_FIELDS = ("kind", "pubkey", "created_at", "tags", "content")


class SignatureMismatchError(ProviderError):
    """Client-signed event does not match the event that was prepared."""

    pass


class PresignedEventSigner(EventSigner):
    """Signer backed by an event the client already signed.

    sign_event() returns the client's event only when it commits to the
    exact fields being signed.
    """

    def __init__(self, signed_event: Mapping[str, Any]) -> None:
        """Initialize with the client-signed event.

        Args:
            signed_event: Event returned by the client's signer
        """
        self.signed_event = dict(signed_event)

    async def sign_event(self, event: dict[str, Any]) -> dict[str, Any]:
        """Return the presigned event if it matches the requested one.

        Raises:
            SignatureMismatchError: If any committed field differs, or the
                event id is not the id of the requested event
        """
        for field in _COMMITTED_FIELDS:
            if self.signed_event.get(field) != event.get(field):
                logfire.warn("Presigned event mismatch", field=field)
                raise SignatureMismatchError(
                    f"Signed event does not match prepared event: {field} differs"
                )

        expected_id = UnsignedProfileEvent.model_validate(event).event_id()
        if self.signed_event.get("id") != expected_id:
            raise SignatureMismatchError("Signed event id does not match its content")

        return self.signed_event


class MockEventSigner(EventSigner):
    """Deterministic signer for tests.

    Produces a fake signature from the event id. Records every event it
    was asked to sign.
    """

    def __init__(self) -> None:
        self.requests: list[dict[str, Any]] = []

    async def sign_event(self, event: dict[str, Any]) -> dict[str, Any]:
        """Return the event with a deterministic id and signature."""
        self.requests.append(event)
        event_id = UnsignedProfileEvent.model_validate(event).event_id()
        sig = hashlib.sha512(event_id.encode("ascii")).hexdigest()
        return {**event, "id": event_id, "sig": sig}
