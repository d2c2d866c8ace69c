"""Merge ledger repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from unify.domain.model.merge_record import MergeRecord
from unify.domain.value import AccountId, MergeFingerprint


class MergeRecordRepository(ABC):
    """Append/update-only store of merge attempts keyed by fingerprint.

    This is the sole source of truth for merge idempotency.
    """

    @abstractmethod
    async def find_by_fingerprint(
        self, fingerprint: MergeFingerprint
    ) -> Optional[MergeRecord]:
        """Find a record by fingerprint.

        Args:
            fingerprint: The merge fingerprint

        Returns:
            The record if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_committed_by_source(
        self, source_account_id: AccountId
    ) -> Optional[MergeRecord]:
        """Find the committed record that consumed an account, if any.

        Args:
            source_account_id: The account merged away

        Returns:
            The committed record if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_account(self, account_id: AccountId) -> list[MergeRecord]:
        """Find records where the account is target or source, newest first.

        Args:
            account_id: The account's unique identifier

        Returns:
            List of records (may be empty)
        """
        pass

    @abstractmethod
    async def insert(self, record: MergeRecord) -> MergeRecord:
        """Insert a new record if its fingerprint is absent.

        Args:
            record: The record to insert

        Returns:
            The inserted record

        Raises:
            IntegrityError: If a record with this fingerprint exists
        """
        pass

    @abstractmethod
    async def transition(self, expected: MergeRecord, record: MergeRecord) -> bool:
        """Replace a record only if the stored copy still matches ``expected``.

        The stored record must have the same fingerprint, status and attempt
        number as ``expected``; otherwise another attempt has written to it.

        Args:
            expected: The state this attempt last read or wrote
            record: The new state of the record

        Returns:
            True if the record was updated, False if the condition failed
        """
        pass
