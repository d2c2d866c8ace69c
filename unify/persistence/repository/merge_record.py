"""PostgreSQL implementation of the merge ledger."""

from typing import Optional

from sqlalchemy import or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from unify.domain.model import MergeRecord
from unify.domain.repository import MergeRecordRepository
from unify.domain.value import AccountId, MergeFingerprint, MergeStatus
from unify.persistence.mappers import merge_record_to_dict, row_to_merge_record
from unify.persistence.tables import merge_records_table


class PostgresMergeRecordRepository(MergeRecordRepository):
    """PostgreSQL implementation of MergeRecordRepository.

    Records are written in the request transaction. The merge orchestrator
    commits them at each checkpoint so they outlive a failed request.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_fingerprint(
        self, fingerprint: MergeFingerprint
    ) -> Optional[MergeRecord]:
        """Find a record by fingerprint."""
        stmt = select(merge_records_table).where(
            merge_records_table.c.fingerprint == fingerprint
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_merge_record(dict(row)) if row else None

    async def find_committed_by_source(
        self, source_account_id: AccountId
    ) -> Optional[MergeRecord]:
        """Find the committed record that consumed an account."""
        stmt = select(merge_records_table).where(
            merge_records_table.c.source_account_id == source_account_id,
            merge_records_table.c.status == MergeStatus.COMMITTED.value,
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_merge_record(dict(row)) if row else None

    async def find_by_account(self, account_id: AccountId) -> list[MergeRecord]:
        """Find records where the account is target or source, newest first."""
        stmt = (
            select(merge_records_table)
            .where(
                or_(
                    merge_records_table.c.target_account_id == account_id,
                    merge_records_table.c.source_account_id == account_id,
                )
            )
            .order_by(merge_records_table.c.created_at.desc())
        )
        result = await self.session.execute(stmt)
        return [row_to_merge_record(dict(row)) for row in result.mappings().all()]

    async def insert(self, record: MergeRecord) -> MergeRecord:
        """Insert a record in a savepoint.

        Raises:
            IntegrityError: If the fingerprint already exists
        """
        async with self.session.begin_nested():
            stmt = merge_records_table.insert().values(**merge_record_to_dict(record))
            await self.session.execute(stmt)
        return record

    async def transition(self, expected: MergeRecord, record: MergeRecord) -> bool:
        """Conditionally replace a record (compare-and-set on status and attempt)."""
        stmt = (
            update(merge_records_table)
            .where(
                merge_records_table.c.fingerprint == expected.fingerprint,
                merge_records_table.c.status == expected.status.value,
                merge_records_table.c.attempts == expected.attempts,
            )
            .values(**merge_record_to_dict(record))
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount == 1  # type: ignore[attr-defined]
