"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import logfire
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from unify.config import Settings
from unify.domain.repository import (
    AccountRepository,
    BalanceRepository,
    IdentityRepository,
    MergeRecordRepository,
    OwnedItemRepository,
    UnitOfWork,
)
from unify.persistence.database import create_engine, create_session_factory
from unify.persistence.repository import (
    PostgresAccountRepository,
    PostgresBalanceRepository,
    PostgresIdentityRepository,
    PostgresMergeRecordRepository,
    PostgresOwnedItemRepository,
    PostgresUnitOfWork,
)
from unify.util.di.base import ProviderBase
from unify.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using PostgreSQL."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    def get_engine(self, settings: Settings) -> AsyncEngine:
        """Provide database engine."""
        engine = create_engine(settings)
        # Instrument SQLAlchemy for observability
        instrument_sqlalchemy(engine)
        return engine

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AsyncSession]:
        """Provide database session for request scope.

        The session is automatically committed at the end of the request
        if no exception occurred, or rolled back if an exception was raised.
        Work already committed through the UnitOfWork (merge ledger
        checkpoints) survives the rollback.
        """
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
                logfire.info("Session committed")
            except Exception as e:
                logfire.warn("Session rollback", error=str(e))
                await session.rollback()
                raise

    @provide(scope=Scope.REQUEST)
    def get_account_repository(self, session: AsyncSession) -> AccountRepository:
        """Provide Account repository."""
        return PostgresAccountRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_identity_repository(self, session: AsyncSession) -> IdentityRepository:
        """Provide Identity repository."""
        return PostgresIdentityRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_merge_record_repository(
        self, session: AsyncSession
    ) -> MergeRecordRepository:
        """Provide merge ledger repository."""
        return PostgresMergeRecordRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_owned_item_repository(self, session: AsyncSession) -> OwnedItemRepository:
        """Provide owned item repository."""
        return PostgresOwnedItemRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_balance_repository(self, session: AsyncSession) -> BalanceRepository:
        """Provide balance repository."""
        return PostgresBalanceRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_unit_of_work(self, session: AsyncSession) -> UnitOfWork:
        """Provide the request's transaction boundary."""
        return PostgresUnitOfWork(session)
