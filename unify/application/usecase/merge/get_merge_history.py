"""Get merge history use case."""

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel

from unify.application.usecase.base import BaseUseCase
from unify.domain.service import MergeOrchestrator
from unify.domain.value import AccountId, MergeStatus


class GetMergeHistoryRequest(BaseModel):
    """Get merge history request."""

    account_id: str  # From authenticated account


class MergeRecordItem(BaseModel):
    """One merge the account took part in."""

    fingerprint: str
    role: Literal["target", "source"]
    counterpart_account_id: str
    status: MergeStatus
    summary: dict[str, int]
    attempts: int
    last_error: str | None
    created_at: datetime
    completed_at: datetime | None


class GetMergeHistoryResponse(BaseModel):
    """Get merge history response, most recent first."""

    records: list[MergeRecordItem]


class GetMergeHistoryUseCase(BaseUseCase):
    """Use case for listing merges an account was target or source of."""

    def __init__(self, merge_orchestrator: MergeOrchestrator) -> None:
        """Initialize get merge history use case.

        Args:
            merge_orchestrator: Merge orchestrator domain service
        """
        self.merge_orchestrator = merge_orchestrator

    async def execute(self, request: GetMergeHistoryRequest) -> GetMergeHistoryResponse:
        """Execute get merge history flow.

        Raises:
            NotFoundError: If the account does not exist
        """
        account_id = AccountId(UUID(request.account_id))
        records = await self.merge_orchestrator.get_merge_history(account_id)

        items = []
        for record in records:
            is_target = record.target_account_id == account_id
            counterpart = (
                record.source_account_id if is_target else record.target_account_id
            )
            items.append(
                MergeRecordItem(
                    fingerprint=record.fingerprint,
                    role="target" if is_target else "source",
                    counterpart_account_id=str(counterpart),
                    status=record.status,
                    summary=record.summary,
                    attempts=record.attempts,
                    last_error=record.last_error,
                    created_at=record.created_at,
                    completed_at=record.completed_at,
                )
            )
        return GetMergeHistoryResponse(records=items)
