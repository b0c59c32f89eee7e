"""Unit tests for Nostr signer adapters."""

import pytest

from idlink.adapter.nostr import (
    MockEventSigner,
    PresignedEventSigner,
    SignatureMismatchError,
)
from idlink.domain.error import SigningRejectedError
from idlink.domain.model import UnsignedProfileEvent
from idlink.domain.service import SignedUpdateCoordinator
from tests.conftest import ALICE_PUBKEY, BOB_PUBKEY


@pytest.fixture
def unsigned() -> UnsignedProfileEvent:
    return UnsignedProfileEvent(
        content='{"name":"alice"}', created_at=1_700_000_000, pubkey=ALICE_PUBKEY
    )


async def _client_signed(event: UnsignedProfileEvent) -> dict:
    """What a browser extension would hand back for the event."""
    return await MockEventSigner().sign_event(event.to_wire())


class TestPresignedEventSigner:
    """Tests for PresignedEventSigner."""

    @pytest.mark.asyncio
    async def test_returns_matching_event(self, unsigned):
        signed = await _client_signed(unsigned)

        result = await PresignedEventSigner(signed).sign_event(unsigned.to_wire())

        assert result == signed

    @pytest.mark.asyncio
    async def test_content_mismatch(self, unsigned):
        signed = await _client_signed(unsigned)
        signed["content"] = '{"name":"mallory"}'

        with pytest.raises(SignatureMismatchError):
            await PresignedEventSigner(signed).sign_event(unsigned.to_wire())

    @pytest.mark.asyncio
    async def test_other_key(self, unsigned):
        other = unsigned.model_copy(update={"pubkey": BOB_PUBKEY})
        signed = await _client_signed(other)

        with pytest.raises(SignatureMismatchError):
            await PresignedEventSigner(signed).sign_event(unsigned.to_wire())

    @pytest.mark.asyncio
    async def test_forged_id(self, unsigned):
        signed = await _client_signed(unsigned)
        signed["id"] = "0" * 64

        with pytest.raises(SignatureMismatchError):
            await PresignedEventSigner(signed).sign_event(unsigned.to_wire())

    @pytest.mark.asyncio
    async def test_mismatch_surfaces_as_rejection(self, unsigned):
        """Through the coordinator a mismatch is a rejected signature."""
        signed = await _client_signed(unsigned)
        signed["created_at"] = 1

        with pytest.raises(SigningRejectedError) as exc_info:
            await SignedUpdateCoordinator().request_signature(
                unsigned, PresignedEventSigner(signed)
            )

        assert "created_at" in str(exc_info.value)


class TestMockEventSigner:
    """Tests for MockEventSigner."""

    @pytest.mark.asyncio
    async def test_deterministic(self, unsigned):
        first = await MockEventSigner().sign_event(unsigned.to_wire())
        second = await MockEventSigner().sign_event(unsigned.to_wire())

        assert first == second
        assert first["id"] == unsigned.event_id()
