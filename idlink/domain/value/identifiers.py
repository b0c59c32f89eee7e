"""Strongly typed identifiers.

Account and identity ids are opaque strings issued by the storage layer,
so NewType over str keeps them from being mixed up without forcing a
particular id format.
"""

from typing import NewType

AccountId = NewType("AccountId", str)
IdentityId = NewType("IdentityId", str)
