"""Profile fragments and the aggregated profile built from them."""

from typing import Any, Mapping, Optional

from idlink.domain.model.common import DomainModel
from idlink.domain.value import AccountId, ProfileSource, ProviderKind


def _text(value: Any) -> str | None:
    """Keep string values only; provider payloads are loosely typed."""
    return value if isinstance(value, str) else None


class ProfileFragment(DomainModel):
    """Profile attributes obtainable from one linked identity."""

    display_name: Optional[str] = None
    username: Optional[str] = None
    email: Optional[str] = None
    avatar_url: Optional[str] = None
    banner_url: Optional[str] = None
    about: Optional[str] = None
    website: Optional[str] = None
    nip05: Optional[str] = None
    lightning_address: Optional[str] = None
    location: Optional[str] = None
    github: Optional[str] = None
    twitter: Optional[str] = None
    company: Optional[str] = None
    pubkey: Optional[str] = None

    def defined(self) -> dict[str, str]:
        """Attributes with a usable value.

        None, empty and whitespace-only strings are treated as undefined.
        """
        return {
            name: value
            for name, value in self.model_dump().items()
            if isinstance(value, str) and value.strip()
        }

    @classmethod
    def from_nostr_metadata(
        cls, metadata: Mapping[str, Any], pubkey: str | None = None
    ) -> "ProfileFragment":
        """Build a fragment from kind-0 metadata content.

        Args:
            metadata: Parsed kind-0 content
            pubkey: Hex pubkey the metadata was published under

        Returns:
            Profile fragment
        """
        name = _text(metadata.get("name"))
        return cls(
            display_name=_text(metadata.get("display_name")) or name,
            username=name,
            avatar_url=_text(metadata.get("picture")),
            banner_url=_text(metadata.get("banner")),
            about=_text(metadata.get("about")),
            website=_text(metadata.get("website")),
            nip05=_text(metadata.get("nip05")),
            lightning_address=_text(metadata.get("lud16")),
            location=_text(metadata.get("location")),
            github=_text(metadata.get("github")),
            twitter=_text(metadata.get("twitter")),
            pubkey=pubkey,
        )

    @classmethod
    def from_github_user(cls, data: Mapping[str, Any]) -> "ProfileFragment":
        """Build a fragment from a GitHub REST user object."""
        login = _text(data.get("login"))
        return cls(
            display_name=_text(data.get("name")),
            email=_text(data.get("email")),
            username=login,
            avatar_url=_text(data.get("avatar_url")),
            about=_text(data.get("bio")),
            website=_text(data.get("blog")),
            location=_text(data.get("location")),
            company=_text(data.get("company")),
            twitter=_text(data.get("twitter_username")),
            github=login,
        )


class Preference(DomainModel):
    """User's declared profile source preference."""

    preferred_source: Optional[ProfileSource] = None
    primary_provider_id: Optional[str] = None


class AttributeValue(DomainModel):
    """A merged attribute and the source it was taken from.

    source is a provider kind value, or "platform" for defaults.
    alternatives holds the values lower-precedence sources also defined,
    by provider kind, highest precedence first.
    """

    value: str
    source: str
    alternatives: dict[str, str] = {}


class LinkedAccountSummary(DomainModel):
    """What the aggregated view reports about each linked identity."""

    provider_kind: ProviderKind
    provider_user_id: Optional[str] = None
    is_primary: bool = False
    has_fragment: bool = False


class AggregatedProfile(DomainModel):
    """Union of profile fragments under the merge policy.

    Derived on request and never mutated independently.
    Attributes no source defines are absent from `attributes`.
    """

    account_id: AccountId
    attributes: dict[str, AttributeValue] = {}
    linked_accounts: list[LinkedAccountSummary] = []
    preferred_source: Optional[ProfileSource] = None
    primary_provider_id: Optional[str] = None
    total_linked_accounts: int = 0

    def value(self, name: str) -> str | None:
        """Merged value of one attribute, None when omitted."""
        attribute = self.attributes.get(name)
        return attribute.value if attribute else None

    def source(self, name: str) -> str | None:
        """Source of one attribute, None when omitted."""
        attribute = self.attributes.get(name)
        return attribute.source if attribute else None

    def values(self) -> dict[str, str]:
        """Merged attributes as plain values."""
        return {name: attribute.value for name, attribute in self.attributes.items()}
