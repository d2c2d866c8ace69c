"""PostgreSQL implementation of Account repository."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from unify.domain.model import Account
from unify.domain.repository import AccountRepository
from unify.domain.value import AccountId
from unify.persistence.mappers import account_to_dict, row_to_account
from unify.persistence.tables import accounts_table


class PostgresAccountRepository(AccountRepository):
    """PostgreSQL implementation of AccountRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, account_id: AccountId) -> Optional[Account]:
        """Find an account by ID."""
        stmt = select(accounts_table).where(accounts_table.c.id == account_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_account(dict(row)) if row else None

    async def lock_for_update(self, account_id: AccountId) -> Optional[Account]:
        """Find an account and lock its row until the request transaction ends."""
        stmt = (
            select(accounts_table)
            .where(accounts_table.c.id == account_id)
            .with_for_update()
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_account(dict(row)) if row else None

    async def save(self, account: Account) -> Account:
        """Save account (create or update)."""
        account_dict = account_to_dict(account)

        existing = await self.find_by_id(account.id)
        if existing:
            stmt = (
                accounts_table.update()
                .where(accounts_table.c.id == account.id)
                .values(**account_dict)
            )
        else:
            stmt = accounts_table.insert().values(**account_dict)
        await self.session.execute(stmt)
        await self.session.flush()
        return account
