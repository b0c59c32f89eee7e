"""Account repository implementation using PostgreSQL."""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from idlink.domain.error import NotFoundError
from idlink.domain.model import Account, Identity
from idlink.domain.repository.account import AccountRepository
from idlink.domain.value import AccountId, IdentityId, ProfileSource
from idlink.persistence.mappers import (
    account_to_dict,
    identity_to_dict,
    row_to_account,
    row_to_identity,
)
from idlink.persistence.tables import accounts_table, identities_table


class PostgresAccountRepository(AccountRepository):
    """PostgreSQL implementation of AccountRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, account_id: AccountId) -> Optional[Account]:
        """Get account and its identities by ID.

        Args:
            account_id: Account ID to look up

        Returns:
            Account if found, None otherwise
        """
        stmt = select(accounts_table).where(accounts_table.c.id == account_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()

        if not row:
            return None

        identity_stmt = (
            select(identities_table)
            .where(identities_table.c.account_id == account_id)
            .order_by(identities_table.c.linked_at)
        )
        identity_result = await self.session.execute(identity_stmt)
        identity_rows = [dict(r) for r in identity_result.mappings().all()]

        return row_to_account(dict(row), identity_rows)

    async def save(self, account: Account) -> Account:
        """Save account and identities to database.

        Args:
            account: Account to save

        Returns:
            Saved account
        """
        account_dict = account_to_dict(account)

        exists = await self.session.execute(
            select(accounts_table.c.id).where(accounts_table.c.id == account.id)
        )
        if exists.first():
            stmt = (
                accounts_table.update()
                .where(accounts_table.c.id == account.id)
                .values(**account_dict)
            )
        else:
            stmt = accounts_table.insert().values(**account_dict)
        await self.session.execute(stmt)

        # Replace the linked identity set
        await self.session.execute(
            identities_table.delete().where(
                identities_table.c.account_id == account.id
            )
        )
        if account.identities:
            await self.session.execute(
                identities_table.insert(),
                [identity_to_dict(identity) for identity in account.identities],
            )

        await self.session.flush()
        return account

    async def update_preferences(
        self,
        account_id: AccountId,
        profile_source: Optional[ProfileSource] = None,
        primary_provider: Optional[str] = None,
    ) -> Account:
        """Write preference columns.

        Args:
            account_id: Account to update
            profile_source: New profile source, None to leave unchanged
            primary_provider: New primary provider, None to leave unchanged

        Returns:
            Updated account

        Raises:
            NotFoundError: If the account does not exist
        """
        values: dict = {"updated_at": datetime.now(timezone.utc)}
        if profile_source is not None:
            values["profile_source"] = profile_source.value
        if primary_provider is not None:
            values["primary_provider"] = primary_provider

        stmt = (
            accounts_table.update()
            .where(accounts_table.c.id == account_id)
            .values(**values)
        )
        result = await self.session.execute(stmt)
        if result.rowcount == 0:
            raise NotFoundError("Account", str(account_id))

        await self.session.flush()

        account = await self.find_by_id(account_id)
        if account is None:
            raise NotFoundError("Account", str(account_id))
        return account

    async def update_nostr_metadata(
        self, identity_id: IdentityId, content: str
    ) -> Identity:
        """Store the latest kind-0 content on an identity.

        Args:
            identity_id: Identity to update
            content: Kind-0 content

        Returns:
            Updated identity

        Raises:
            NotFoundError: If the identity does not exist
        """
        stmt = (
            identities_table.update()
            .where(identities_table.c.id == identity_id)
            .values(nostr_metadata=content)
            .returning(*identities_table.c)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        if not row:
            raise NotFoundError("Identity", str(identity_id))

        await self.session.flush()
        return row_to_identity(dict(row))
