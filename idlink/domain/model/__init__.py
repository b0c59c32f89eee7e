"""Domain model entities for idlink."""

from idlink.domain.model.account import Account
from idlink.domain.model.identity import Identity
from idlink.domain.model.link_state import LinkState
from idlink.domain.model.profile import (
    AggregatedProfile,
    AttributeValue,
    LinkedAccountSummary,
    Preference,
    ProfileFragment,
)
from idlink.domain.model.profile_event import (
    FieldUpdate,
    ProfileUpdate,
    SignedProfileEvent,
    SignedProfileUpdate,
    UnsignedProfileEvent,
)

__all__ = [
    "Account",
    "AggregatedProfile",
    "AttributeValue",
    "FieldUpdate",
    "Identity",
    "LinkState",
    "LinkedAccountSummary",
    "Preference",
    "ProfileFragment",
    "ProfileUpdate",
    "SignedProfileEvent",
    "SignedProfileUpdate",
    "UnsignedProfileEvent",
]
