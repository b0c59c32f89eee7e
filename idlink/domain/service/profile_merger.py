"""Profile merging domain service."""

from collections.abc import Iterable, Mapping

from idlink.domain.model import (
    AggregatedProfile,
    AttributeValue,
    Identity,
    LinkedAccountSummary,
    Preference,
    ProfileFragment,
)
from idlink.domain.value import AccountId

from .base import Service

PLATFORM_SOURCE = "platform"


class ProfileMerger(Service):
    """Combines per-identity profile fragments into one profile.

    Precedence, highest first:
    1. identities belonging to the preferred source, if any is linked;
    2. the identity named as primary, if linked;
    3. every other linked identity in the fixed order
       nostr, github, email, anonymous.

    The first source defining an attribute wins; values from the sources
    it outranked are kept as alternatives. Attributes no source defines
    are left out of the result. Aggregation is pure: fragments
    are fetched by the caller and nothing here performs I/O.
    """

    def __init__(self, default_avatar_base: str) -> None:
        """Initialize profile merger.

        Args:
            default_avatar_base: URL prefix for the placeholder avatar shown
                for accounts with no linked identities
        """
        self.default_avatar_base = default_avatar_base

    def aggregate(
        self,
        account_id: AccountId | str,
        identities: Iterable[Identity],
        fragments: Mapping[Identity, ProfileFragment],
        preference: Preference,
    ) -> AggregatedProfile:
        """Merge fragments from linked identities.

        Args:
            account_id: Account the profile belongs to
            identities: Identities currently linked to the account
            fragments: Fetched fragment per identity; identities without
                an entry contribute nothing, entries for unlinked
                identities are ignored
            preference: Preferred source and primary provider

        Returns:
            Aggregated profile
        """
        linked = sorted(
            set(identities),
            key=lambda identity: (identity.provider_kind.rank, str(identity.id)),
        )

        if not linked:
            return AggregatedProfile(
                account_id=AccountId(str(account_id)),
                attributes=self.platform_defaults(account_id),
                preferred_source=preference.preferred_source,
                primary_provider_id=preference.primary_provider_id,
            )

        winners: dict[str, tuple[str, str]] = {}
        alternatives: dict[str, dict[str, str]] = {}
        for identity in self.precedence(linked, preference):
            fragment = fragments.get(identity)
            if fragment is None:
                continue
            source = identity.provider_kind.value
            for name, value in fragment.defined().items():
                if name not in winners:
                    winners[name] = (value, source)
                else:
                    alternatives.setdefault(name, {})[source] = value

        attributes = {
            name: AttributeValue(
                value=value, source=source, alternatives=alternatives.get(name, {})
            )
            for name, (value, source) in winners.items()
        }

        return AggregatedProfile(
            account_id=AccountId(str(account_id)),
            attributes=attributes,
            linked_accounts=[
                LinkedAccountSummary(
                    provider_kind=identity.provider_kind,
                    provider_user_id=identity.external_id,
                    is_primary=identity.provider_id == preference.primary_provider_id,
                    has_fragment=identity in fragments,
                )
                for identity in linked
            ],
            preferred_source=preference.preferred_source,
            primary_provider_id=preference.primary_provider_id,
            total_linked_accounts=len(linked),
        )

    @staticmethod
    def precedence(linked: list[Identity], preference: Preference) -> list[Identity]:
        """Order linked identities by merge precedence.

        Args:
            linked: Linked identities, already in fallback order

        Returns:
            Same identities, highest precedence first
        """
        ordered: list[Identity] = []

        if preference.preferred_source is not None:
            ordered.extend(
                identity
                for identity in linked
                if identity.provider_kind.profile_source == preference.preferred_source
            )

        if preference.primary_provider_id is not None:
            for identity in linked:
                if (
                    identity.provider_id == preference.primary_provider_id
                    and identity not in ordered
                ):
                    ordered.append(identity)

        ordered.extend(identity for identity in linked if identity not in ordered)
        return ordered

    def platform_defaults(self, account_id: AccountId | str) -> dict[str, AttributeValue]:
        """Attributes the platform knows without any linked identity."""
        return {
            "avatar_url": AttributeValue(
                value=f"{self.default_avatar_base}{account_id}",
                source=PLATFORM_SOURCE,
            )
        }
