"""In-memory account repository for testing."""

from datetime import datetime, timezone
from typing import Optional

from idlink.domain.error import NotFoundError
from idlink.domain.model import Account, Identity
from idlink.domain.repository.account import AccountRepository
from idlink.domain.value import AccountId, IdentityId, ProfileSource


class InMemoryAccountRepository(AccountRepository):
    """In-memory implementation of AccountRepository for testing."""

    def __init__(self) -> None:
        self._accounts: dict[AccountId, Account] = {}

    async def find_by_id(self, account_id: AccountId) -> Optional[Account]:
        """Find account by ID."""
        return self._accounts.get(account_id)

    async def save(self, account: Account) -> Account:
        """Save account."""
        self._accounts[account.id] = account
        return account

    async def update_preferences(
        self,
        account_id: AccountId,
        profile_source: Optional[ProfileSource] = None,
        primary_provider: Optional[str] = None,
    ) -> Account:
        """Update preference fields."""
        account = self._accounts.get(account_id)
        if account is None:
            raise NotFoundError("Account", str(account_id))

        changes: dict = {"updated_at": datetime.now(timezone.utc)}
        if profile_source is not None:
            changes["preferred_source"] = profile_source
        if primary_provider is not None:
            changes["primary_provider_id"] = primary_provider

        updated = Account.model_validate({**account.model_dump(), **changes})
        self._accounts[account_id] = updated
        return updated

    async def update_nostr_metadata(
        self, identity_id: IdentityId, content: str
    ) -> Identity:
        """Store kind-0 content on the identity."""
        for account_id, account in self._accounts.items():
            for index, identity in enumerate(account.identities):
                if identity.id != identity_id:
                    continue
                updated = identity.model_copy(update={"nostr_metadata": content})
                identities = list(account.identities)
                identities[index] = updated
                self._accounts[account_id] = account.model_copy(
                    update={"identities": tuple(identities)}
                )
                return updated
        raise NotFoundError("Identity", str(identity_id))
