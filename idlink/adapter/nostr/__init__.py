"""Nostr signer adapters."""

from .signer import MockEventSigner, PresignedEventSigner, SignatureMismatchError

__all__ = ["MockEventSigner", "PresignedEventSigner", "SignatureMismatchError"]
