"""PostgreSQL unit of work over the request session."""

import logfire
from sqlalchemy.ext.asyncio import AsyncSession

from unify.domain.repository import UnitOfWork


class PostgresUnitOfWork(UnitOfWork):
    """Commits the session shared by the request's repositories.

    After a commit or rollback the session starts a new transaction on its
    next statement, so the request keeps working with the same repositories.
    Row locks taken with ``SELECT ... FOR UPDATE`` end with the transaction.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize unit of work with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def commit(self) -> None:
        """Commit the current transaction."""
        await self.session.commit()
        logfire.debug("Checkpoint committed")

    async def rollback(self) -> None:
        """Roll back the current transaction."""
        await self.session.rollback()
        logfire.debug("Checkpoint rolled back")
