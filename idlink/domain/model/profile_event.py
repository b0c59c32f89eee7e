"""Nostr profile metadata (kind-0) events and the edits that produce them."""

import hashlib
import json
from typing import Any, Literal, Mapping

from pydantic import Field, field_validator, model_validator

from idlink.domain.model.common import DomainModel
from idlink.domain.value.common import ValueObject

PROFILE_METADATA_KIND = 0


def serialize_content(metadata: Mapping[str, Any]) -> str:
    """Serialize a metadata bag the way Nostr clients do (compact, UTF-8)."""
    return json.dumps(dict(metadata), ensure_ascii=False, separators=(",", ":"))


class UnsignedProfileEvent(DomainModel):
    """Profile metadata event awaiting a signature."""

    kind: Literal[0] = PROFILE_METADATA_KIND
    tags: list[list[str]] = Field(default_factory=list)
    content: str
    created_at: int = Field(ge=0)
    pubkey: str

    @field_validator("content")
    @classmethod
    def validate_content(cls, v: str) -> str:
        """Content must be a serialized JSON object."""
        try:
            parsed = json.loads(v)
        except json.JSONDecodeError as e:
            raise ValueError(f"content is not valid JSON: {e}") from e
        if not isinstance(parsed, dict):
            raise ValueError("content must be a JSON object")
        return v

    def metadata(self) -> dict[str, Any]:
        """Attribute bag carried in content."""
        return json.loads(self.content)

    def event_id(self) -> str:
        """NIP-01 event id: sha256 over the canonical serialization."""
        serialized = json.dumps(
            [0, self.pubkey, self.created_at, self.kind, self.tags, self.content],
            ensure_ascii=False,
            separators=(",", ":"),
        )
        return hashlib.sha256(serialized.encode("utf-8")).hexdigest()

    def to_wire(self) -> dict[str, Any]:
        """Plain dict handed to a signer."""
        return self.model_dump(mode="json")


class SignedProfileEvent(UnsignedProfileEvent):
    """Profile metadata event with an externally produced signature."""

    id: str
    sig: str

    def unsigned(self) -> UnsignedProfileEvent:
        """The fields the signature commits to."""
        return UnsignedProfileEvent(
            kind=self.kind,
            tags=self.tags,
            content=self.content,
            created_at=self.created_at,
            pubkey=self.pubkey,
        )


class SignedProfileUpdate(DomainModel):
    """Result of a completed profile edit: the event and the new metadata."""

    signed_event: SignedProfileEvent
    updated_profile: dict[str, Any]


class FieldUpdate(ValueObject):
    """Requested change to one profile attribute.

    - keep: no change requested, leave the current value
    - clear: remove the attribute
    - set: store value (already trimmed, never blank)

    Keeping this as an explicit tag means "not provided" and "clear it"
    survive any serialization boundary.
    """

    op: Literal["keep", "clear", "set"] = "keep"
    value: str | None = None

    @field_validator("value")
    @classmethod
    def trim_value(cls, v: str | None) -> str | None:
        return v.strip() if v is not None else None

    @model_validator(mode="after")
    def check_value(self) -> "FieldUpdate":
        """Only set carries a value, and it is never blank."""
        if self.op == "set":
            if not self.value:
                raise ValueError("set requires a non-blank value")
        elif self.value is not None:
            raise ValueError(f"{self.op} does not take a value")
        return self

    @classmethod
    def keep(cls) -> "FieldUpdate":
        return cls(op="keep")

    @classmethod
    def clear(cls) -> "FieldUpdate":
        return cls(op="clear")

    @classmethod
    def set_to(cls, value: str) -> "FieldUpdate":
        """Set a value; blank after trimming means clear."""
        trimmed = value.strip()
        if not trimmed:
            return cls.clear()
        return cls(op="set", value=trimmed)

    @classmethod
    def from_raw(cls, value: str | None) -> "FieldUpdate":
        """Interpret a value that was present in a request body."""
        if value is None:
            return cls.clear()
        return cls.set_to(value)


class ProfileUpdate(ValueObject):
    """Requested edits to the Nostr profile, one tri-state per attribute.

    Attribute names are the kind-0 content keys.
    """

    nip05: FieldUpdate = FieldUpdate()
    lud16: FieldUpdate = FieldUpdate()
    banner: FieldUpdate = FieldUpdate()

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "ProfileUpdate":
        """Build from a request body where a missing key means keep.

        Args:
            payload: Body with only the keys the client sent

        Returns:
            Profile update

        Raises:
            ValueError: If a present value is neither a string nor null
        """
        updates: dict[str, FieldUpdate] = {}
        for name in cls.model_fields:
            if name not in payload:
                continue
            value = payload[name]
            if value is not None and not isinstance(value, str):
                raise ValueError(f"{name} must be a string or null")
            updates[name] = FieldUpdate.from_raw(value)
        return cls(**updates)

    def items(self) -> list[tuple[str, FieldUpdate]]:
        """Attribute name and requested change, in declaration order."""
        return [(name, getattr(self, name)) for name in type(self).model_fields]
