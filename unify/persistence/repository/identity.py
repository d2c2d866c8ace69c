"""Identity repository implementation using PostgreSQL."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from unify.domain.model import Identity
from unify.domain.repository import IdentityRepository
from unify.domain.value import AccountId, AuthProvider, IdentityId
from unify.persistence.mappers import identity_to_dict, row_to_identity
from unify.persistence.tables import identities_table


class PostgresIdentityRepository(IdentityRepository):
    """PostgreSQL implementation of IdentityRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, identity_id: IdentityId) -> Optional[Identity]:
        """Get identity by ID."""
        stmt = select(identities_table).where(identities_table.c.id == identity_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_identity(dict(row)) if row else None

    async def find_by_provider(
        self, provider: AuthProvider, external_id: str
    ) -> Optional[Identity]:
        """Get identity by provider and external subject ID."""
        stmt = select(identities_table).where(
            identities_table.c.provider == provider.value,
            identities_table.c.external_id == external_id,
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_identity(dict(row)) if row else None

    async def find_all_by_account_id(self, account_id: AccountId) -> list[Identity]:
        """Find all identities of an account, oldest link first."""
        stmt = (
            select(identities_table)
            .where(identities_table.c.account_id == account_id)
            .order_by(identities_table.c.linked_at, identities_table.c.id)
        )
        result = await self.session.execute(stmt)
        return [row_to_identity(dict(row)) for row in result.mappings().all()]

    async def save(self, identity: Identity) -> Identity:
        """Save identity (create or update).

        Runs in a savepoint so a uniqueness violation leaves the request
        transaction usable.

        Raises:
            IntegrityError: If (provider, external_id) is already linked
        """
        async with self.session.begin_nested():
            await self._write(identity)
        return identity

    async def save_all(self, identities: list[Identity]) -> None:
        """Save several identities in one savepoint.

        Identities losing the primary flag are written first so the
        one-primary-per-account index holds after every statement.
        """
        ordered = sorted(identities, key=lambda i: i.is_primary)
        async with self.session.begin_nested():
            for identity in ordered:
                await self._write(identity)

    async def delete(self, identity_id: IdentityId) -> None:
        """Delete identity."""
        stmt = identities_table.delete().where(identities_table.c.id == identity_id)
        await self.session.execute(stmt)
        await self.session.flush()

    async def _write(self, identity: Identity) -> None:
        identity_dict = identity_to_dict(identity)

        existing = await self.find_by_id(identity.id)
        if existing:
            stmt = (
                identities_table.update()
                .where(identities_table.c.id == identity.id)
                .values(**identity_dict)
            )
        else:
            stmt = identities_table.insert().values(**identity_dict)
        await self.session.execute(stmt)
        await self.session.flush()
