"""Unit tests for profile events and edit requests."""

import pydantic
import pytest

from idlink.domain.model import FieldUpdate, ProfileUpdate, UnsignedProfileEvent
from tests.conftest import ALICE_PUBKEY


class TestFieldUpdate:
    """Tests for FieldUpdate."""

    def test_set_trims(self):
        assert FieldUpdate.set_to("  alice@example.com ") == FieldUpdate(
            op="set", value="alice@example.com"
        )

    def test_blank_set_is_clear(self):
        assert FieldUpdate.set_to("   ").op == "clear"

    def test_from_raw_none_is_clear(self):
        assert FieldUpdate.from_raw(None).op == "clear"

    def test_direct_set_trims(self):
        update = FieldUpdate(op="set", value="  a@b.c  ")

        assert update.value == "a@b.c"

    def test_direct_blank_set_rejected(self):
        with pytest.raises(pydantic.ValidationError):
            FieldUpdate(op="set", value="   ")

    def test_set_requires_value(self):
        with pytest.raises(pydantic.ValidationError):
            FieldUpdate(op="set")

    def test_clear_takes_no_value(self):
        with pytest.raises(pydantic.ValidationError):
            FieldUpdate(op="clear", value="x")


class TestProfileUpdateFromPayload:
    """Tests for ProfileUpdate.from_payload."""

    def test_missing_null_and_string(self):
        update = ProfileUpdate.from_payload({"nip05": None, "lud16": " a@b.c "})

        assert update.nip05.op == "clear"
        assert update.lud16 == FieldUpdate(op="set", value="a@b.c")
        assert update.banner.op == "keep"

    def test_empty_payload_keeps_everything(self):
        assert all(u.op == "keep" for _, u in ProfileUpdate.from_payload({}).items())

    def test_unrelated_keys_ignored(self):
        update = ProfileUpdate.from_payload({"name": "mallory"})

        assert [name for name, _ in update.items()] == ["nip05", "lud16", "banner"]

    def test_non_string_rejected(self):
        with pytest.raises(ValueError):
            ProfileUpdate.from_payload({"nip05": 42})


class TestUnsignedProfileEvent:
    """Tests for UnsignedProfileEvent."""

    def test_content_must_be_json_object(self):
        with pytest.raises(pydantic.ValidationError):
            UnsignedProfileEvent(content="[1, 2]", created_at=1, pubkey=ALICE_PUBKEY)

    def test_content_must_be_json(self):
        with pytest.raises(pydantic.ValidationError):
            UnsignedProfileEvent(content="{nope", created_at=1, pubkey=ALICE_PUBKEY)

    def test_event_id_depends_on_content(self):
        first = UnsignedProfileEvent(
            content='{"name":"a"}', created_at=1, pubkey=ALICE_PUBKEY
        )
        second = UnsignedProfileEvent(
            content='{"name":"b"}', created_at=1, pubkey=ALICE_PUBKEY
        )

        assert len(first.event_id()) == 64
        assert first.event_id() == first.model_copy().event_id()
        assert first.event_id() != second.event_id()

    def test_only_kind_zero(self):
        with pytest.raises(pydantic.ValidationError):
            UnsignedProfileEvent(
                kind=1, content="{}", created_at=1, pubkey=ALICE_PUBKEY
            )
