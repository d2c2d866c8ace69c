"""Merge ledger record."""

from datetime import datetime

from pydantic import Field

from unify.domain.model.account import utcnow
from unify.domain.model.common import DomainModel
from unify.domain.value import AccountId, MergeFingerprint, MergeStatus


class MergeRecord(DomainModel):
    """One attempted consolidation of a source account into a target.

    While ``pending`` the summary doubles as a progress journal: an
    aggregate whose name is present has already been merged and is skipped
    when the same fingerprint is retried.
    """

    fingerprint: MergeFingerprint
    target_account_id: AccountId
    source_account_id: AccountId
    status: MergeStatus = MergeStatus.PENDING
    summary: dict[str, int] = Field(default_factory=dict)
    attempts: int = Field(default=1, ge=1)
    last_error: str | None = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
    completed_at: datetime | None = None

    def is_stale(self, now: datetime, threshold_seconds: float) -> bool:
        """Whether a pending record is old enough to be superseded."""
        return (
            self.status == MergeStatus.PENDING
            and (now - self.updated_at).total_seconds() > threshold_seconds
        )
