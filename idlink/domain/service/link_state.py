"""Link state token codec.

The token carries which account started a link attempt across the OAuth
redirect. It is base64 of a canonical JSON object and is NOT integrity
protected: whoever redeems it must compare the decoded account id with
the authenticated session (see verify_link_state) before trusting it.
"""

import base64
import binascii
import json
import re

import pydantic

from idlink.domain.error import (
    LinkStateMismatchError,
    MalformedTokenError,
    UnknownFieldError,
)
from idlink.domain.model.link_state import LinkState
from idlink.domain.value import AccountId, LinkAction, ProviderKind

MAX_STATE_PARAM_LENGTH = 4096
MAX_STATE_DECODED_BYTES = 4096

# base64 and base64url alphabets, padding only at the end
_BASE64_SHAPE = re.compile(r"^[A-Za-z0-9+/_-]+={0,2}$")


def encode_link_state(
    account_id: AccountId | str,
    action: LinkAction | str,
    target_provider_kind: ProviderKind | str,
) -> str:
    """Encode link state into an opaque token.

    Args:
        account_id: Account starting the link
        action: Link action (currently only "link")
        target_provider_kind: Provider being linked

    Returns:
        Standard base64 of the canonical JSON payload

    Raises:
        MalformedTokenError: If action or provider is not a known value
    """
    state = _build_state(
        {"userId": account_id, "action": action, "provider": target_provider_kind}
    )
    payload = json.dumps(
        state.model_dump(mode="json", by_alias=True),
        sort_keys=True,
        separators=(",", ":"),
    )
    return base64.b64encode(payload.encode("utf-8")).decode("ascii")


def decode_link_state(token: str) -> LinkState:
    """Decode a link state token.

    Accepts base64 and base64url, with or without padding. Unknown extra
    fields are ignored.

    Args:
        token: Token from the OAuth callback

    Returns:
        Decoded link state

    Raises:
        MalformedTokenError: If the token is not base64-encoded JSON object
            or a field has an invalid value
        UnknownFieldError: If required fields are absent
    """
    raw = _decode_base64(token)
    try:
        text = raw.decode("utf-8")
        parsed = json.loads(text)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise MalformedTokenError("State is not valid JSON") from e

    if not isinstance(parsed, dict):
        raise MalformedTokenError("State is not a JSON object")

    return _build_state(parsed)


def verify_link_state(state: LinkState, session_account_id: str) -> LinkState:
    """Check a decoded state against the authenticated session.

    Must run before a callback acts on a decoded state.

    Args:
        state: Decoded link state
        session_account_id: Account id of the current session

    Returns:
        The same state

    Raises:
        LinkStateMismatchError: If the state names another account
    """
    if state.account_id != session_account_id:
        raise LinkStateMismatchError()
    return state


def _decode_base64(token: str) -> bytes:
    if not isinstance(token, str) or not token:
        raise MalformedTokenError("Missing state")
    if len(token) > MAX_STATE_PARAM_LENGTH:
        raise MalformedTokenError("State too large")
    if not _BASE64_SHAPE.match(token):
        raise MalformedTokenError("Invalid characters in state")

    normalized = token.rstrip("=").replace("-", "+").replace("_", "/")
    remainder = len(normalized) % 4
    if remainder == 1:
        raise MalformedTokenError("Invalid base64 length")
    normalized += "=" * (-len(normalized) % 4)

    try:
        raw = base64.b64decode(normalized, validate=True)
    except binascii.Error as e:
        raise MalformedTokenError(f"Invalid base64: {e}") from e

    if not raw:
        raise MalformedTokenError("Empty decoded state")
    if len(raw) > MAX_STATE_DECODED_BYTES:
        raise MalformedTokenError("Decoded state too large")
    return raw


def _build_state(data: dict) -> LinkState:
    try:
        return LinkState.model_validate(data)
    except pydantic.ValidationError as e:
        missing = [
            str(error["loc"][0]) for error in e.errors() if error["type"] == "missing"
        ]
        if missing:
            raise UnknownFieldError(missing) from e
        raise MalformedTokenError(f"Invalid state field: {e.errors()[0]['msg']}") from e
