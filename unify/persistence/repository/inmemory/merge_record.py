"""In-memory merge ledger for testing."""

from typing import Optional

from sqlalchemy.exc import IntegrityError

from unify.domain.model import MergeRecord
from unify.domain.repository import MergeRecordRepository
from unify.domain.value import AccountId, MergeFingerprint, MergeStatus


class InMemoryMergeRecordRepository(MergeRecordRepository):
    """In-memory implementation of MergeRecordRepository for testing."""

    def __init__(self) -> None:
        self._records: dict[MergeFingerprint, MergeRecord] = {}

    async def find_by_fingerprint(
        self, fingerprint: MergeFingerprint
    ) -> Optional[MergeRecord]:
        """Find record by fingerprint."""
        return self._records.get(fingerprint)

    async def find_committed_by_source(
        self, source_account_id: AccountId
    ) -> Optional[MergeRecord]:
        """Find the committed record that consumed an account."""
        for record in self._records.values():
            if (
                record.source_account_id == source_account_id
                and record.status == MergeStatus.COMMITTED
            ):
                return record
        return None

    async def find_by_account(self, account_id: AccountId) -> list[MergeRecord]:
        """Find records where the account is target or source, newest first."""
        matches = [
            r
            for r in self._records.values()
            if account_id in (r.target_account_id, r.source_account_id)
        ]
        matches.sort(key=lambda r: r.created_at, reverse=True)
        return matches

    async def insert(self, record: MergeRecord) -> MergeRecord:
        """Insert record.

        Raises:
            IntegrityError: If the fingerprint already exists
        """
        if record.fingerprint in self._records:
            raise IntegrityError("Duplicate merge fingerprint", None, Exception())
        self._records[record.fingerprint] = record
        return record

    async def transition(self, expected: MergeRecord, record: MergeRecord) -> bool:
        """Replace record if status and attempt still match."""
        current = self._records.get(expected.fingerprint)
        if (
            current is None
            or current.status != expected.status
            or current.attempts != expected.attempts
        ):
            return False
        self._records[expected.fingerprint] = record
        return True
