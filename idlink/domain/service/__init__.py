"""Domain services."""

from .base import Service
from .jwt_service import JWTService
from .link_service import AccountLinkService
from .link_state import decode_link_state, encode_link_state, verify_link_state
from .preference_service import PreferenceService, PreferencesInput, PreferencesUpdate
from .profile_merger import ProfileMerger
from .signing_service import EventSigner, SignedUpdateCoordinator

__all__ = [
    "AccountLinkService",
    "EventSigner",
    "JWTService",
    "PreferenceService",
    "PreferencesInput",
    "PreferencesUpdate",
    "ProfileMerger",
    "Service",
    "SignedUpdateCoordinator",
    "decode_link_state",
    "encode_link_state",
    "verify_link_state",
]
