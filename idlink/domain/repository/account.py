"""Account repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from idlink.domain.model import Account, Identity
from idlink.domain.value import AccountId, IdentityId, ProfileSource


class AccountRepository(ABC):
    """Repository for the Account aggregate and its linked identities."""

    @abstractmethod
    async def find_by_id(self, account_id: AccountId) -> Optional[Account]:
        """Find an account, with its identities, by ID.

        Args:
            account_id: The account's unique identifier

        Returns:
            The account if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, account: Account) -> Account:
        """Save an account and its identities (create or update).

        Identities no longer on the account are unlinked.

        Args:
            account: The account to save

        Returns:
            The saved account
        """
        pass

    @abstractmethod
    async def update_preferences(
        self,
        account_id: AccountId,
        profile_source: Optional[ProfileSource] = None,
        primary_provider: Optional[str] = None,
    ) -> Account:
        """Write preference fields. None leaves a field unchanged.

        Args:
            account_id: Account to update
            profile_source: New preferred profile source
            primary_provider: New primary provider id

        Returns:
            The updated account

        Raises:
            NotFoundError: If the account does not exist
        """
        pass

    @abstractmethod
    async def update_nostr_metadata(
        self, identity_id: IdentityId, content: str
    ) -> Identity:
        """Cache the latest kind-0 content for a Nostr identity.

        Args:
            identity_id: Identity to update
            content: Kind-0 content (JSON object string)

        Returns:
            The updated identity

        Raises:
            NotFoundError: If the identity does not exist
        """
        pass
