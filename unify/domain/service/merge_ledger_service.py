"""Merge ledger domain service."""

import hashlib

import logfire
from sqlalchemy.exc import IntegrityError

from unify.config import MergeSettings
from unify.domain.error import MergeInProgressError
from unify.domain.model import MergeRecord
from unify.domain.model.account import utcnow
from unify.domain.repository import MergeRecordRepository
from unify.domain.value import AccountId, MergeFingerprint, MergeStatus

from .base import Service


def merge_fingerprint(target_id: AccountId, source_id: AccountId) -> MergeFingerprint:
    """Stable key of the logical merge of ``source_id`` into ``target_id``."""
    digest = hashlib.sha256(f"{target_id}:{source_id}".encode("utf-8")).hexdigest()
    return MergeFingerprint(digest)


class MergeLedgerService(Service):
    """Domain service over the append/update-only merge ledger.

    Every state change is a conditional write against the record's status
    and attempt number, so an attempt that was superseded can no longer
    write to the record.
    """

    def __init__(
        self,
        merge_record_repository: MergeRecordRepository,
        merge_settings: MergeSettings,
    ) -> None:
        """Initialize merge ledger service.

        Args:
            merge_record_repository: Merge record repository
            merge_settings: Merge configuration (staleness threshold)
        """
        self.merge_record_repository = merge_record_repository
        self.merge_settings = merge_settings

    async def find(self, fingerprint: MergeFingerprint) -> MergeRecord | None:
        """Find a record by fingerprint."""
        return await self.merge_record_repository.find_by_fingerprint(fingerprint)

    async def find_committed_by_source(
        self, source_id: AccountId
    ) -> MergeRecord | None:
        """Find the committed record that consumed an account, if any."""
        return await self.merge_record_repository.find_committed_by_source(source_id)

    async def history(self, account_id: AccountId) -> list[MergeRecord]:
        """Records where the account is target or source, newest first."""
        with logfire.span("merge_ledger.history", account_id=str(account_id)):
            records = await self.merge_record_repository.find_by_account(account_id)
            logfire.info(
                "Merge history retrieved",
                account_id=str(account_id),
                count=len(records),
            )
            return records

    def is_in_flight(self, record: MergeRecord) -> bool:
        """Whether another attempt is actively working on this record.

        A pending record with a recorded error belongs to an attempt that
        already gave up, and a pending record not touched within the
        staleness threshold belongs to one that died.
        """
        return (
            record.status == MergeStatus.PENDING
            and record.last_error is None
            and not record.is_stale(
                utcnow(), self.merge_settings.pending_stale_after_seconds
            )
        )

    async def claim(
        self,
        fingerprint: MergeFingerprint,
        target_id: AccountId,
        source_id: AccountId,
    ) -> MergeRecord:
        """Take exclusive ownership of a merge for this attempt.

        Inserts a ``pending`` record, or reclaims a failed, abandoned or
        stale one keeping its progress journal.

        Returns:
            The claimed pending record, or the committed record if another
            attempt finished first

        Raises:
            MergeInProgressError: If another attempt holds the record
        """
        with logfire.span("merge_ledger.claim", fingerprint=fingerprint[:12]):
            existing = await self.merge_record_repository.find_by_fingerprint(
                fingerprint
            )
            if existing is None:
                record = MergeRecord(
                    fingerprint=fingerprint,
                    target_account_id=target_id,
                    source_account_id=source_id,
                )
                try:
                    inserted = await self.merge_record_repository.insert(record)
                    logfire.info("Merge claimed", fingerprint=fingerprint[:12])
                    return inserted
                except IntegrityError:
                    logfire.warn("Lost merge claim race", fingerprint=fingerprint[:12])
                    existing = await self.merge_record_repository.find_by_fingerprint(
                        fingerprint
                    )
                    if existing is None:
                        raise

            if existing.status == MergeStatus.COMMITTED:
                return existing
            if self.is_in_flight(existing):
                raise MergeInProgressError(fingerprint)

            reclaimed = existing.model_copy(
                update={
                    "status": MergeStatus.PENDING,
                    "attempts": existing.attempts + 1,
                    "last_error": None,
                    "updated_at": utcnow(),
                    "completed_at": None,
                }
            )
            if not await self.merge_record_repository.transition(existing, reclaimed):
                raise MergeInProgressError(fingerprint)
            logfire.info(
                "Merge reclaimed",
                fingerprint=fingerprint[:12],
                previous_status=existing.status.value,
                attempts=reclaimed.attempts,
                completed_steps=list(reclaimed.summary),
            )
            return reclaimed

    async def record_progress(
        self, record: MergeRecord, summary: dict[str, int]
    ) -> MergeRecord:
        """Journal the per-aggregate counts merged so far.

        Raises:
            MergeInProgressError: If this attempt was superseded
        """
        updated = record.model_copy(
            update={"summary": dict(summary), "updated_at": utcnow()}
        )
        if not await self.merge_record_repository.transition(record, updated):
            raise MergeInProgressError(record.fingerprint)
        return updated

    async def note_failure(self, record: MergeRecord, error: str) -> MergeRecord:
        """Leave the record ``pending`` with the error so a retry can resume."""
        updated = record.model_copy(
            update={"last_error": error, "updated_at": utcnow()}
        )
        if not await self.merge_record_repository.transition(record, updated):
            logfire.warn(
                "Merge failure not recorded, attempt superseded",
                fingerprint=record.fingerprint[:12],
            )
            return record
        logfire.warn(
            "Merge attempt failed, left pending",
            fingerprint=record.fingerprint[:12],
            error=error,
        )
        return updated

    async def commit(self, record: MergeRecord, summary: dict[str, int]) -> MergeRecord:
        """Transition ``pending -> committed``.

        Raises:
            MergeInProgressError: If this attempt was superseded
        """
        now = utcnow()
        committed = record.model_copy(
            update={
                "status": MergeStatus.COMMITTED,
                "summary": dict(summary),
                "last_error": None,
                "updated_at": now,
                "completed_at": now,
            }
        )
        if not await self.merge_record_repository.transition(record, committed):
            raise MergeInProgressError(record.fingerprint)
        logfire.info(
            "Merge committed",
            fingerprint=record.fingerprint[:12],
            target_id=str(record.target_account_id),
            source_id=str(record.source_account_id),
            summary=committed.summary,
        )
        return committed

    async def fail(self, record: MergeRecord, error: str) -> MergeRecord:
        """Transition a non-committed record to terminal ``failed``."""
        if record.status == MergeStatus.COMMITTED:
            return record
        now = utcnow()
        failed = record.model_copy(
            update={
                "status": MergeStatus.FAILED,
                "last_error": error,
                "updated_at": now,
                "completed_at": now,
            }
        )
        if not await self.merge_record_repository.transition(record, failed):
            logfire.warn(
                "Merge failure not recorded, record changed concurrently",
                fingerprint=record.fingerprint[:12],
            )
            return record
        logfire.warn("Merge failed", fingerprint=record.fingerprint[:12], error=error)
        return failed
