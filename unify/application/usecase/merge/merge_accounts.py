"""Merge accounts use case."""

from datetime import datetime

from pydantic import BaseModel, Field

from unify.application.usecase.base import BaseUseCase
from unify.application.usecase.merge.common import MergeSummary
from unify.domain.service import MergeOrchestrator


class MergeAccountsRequest(BaseModel):
    """Merge accounts request.

    Both accounts must be authenticated: the caller's own session token and
    the session token obtained by signing in to the second account.
    """

    target_token: str = Field(min_length=1)  # Account that survives
    source_token: str = Field(min_length=1)  # Account merged away


class MergeAccountsResponse(BaseModel):
    """Merge accounts response."""

    success: bool
    summary: MergeSummary
    message: str
    replayed: bool
    target_account_id: str
    source_account_id: str
    merged_at: datetime | None


class MergeAccountsUseCase(BaseUseCase):
    """Use case for merging a second account into the signed-in one."""

    def __init__(self, merge_orchestrator: MergeOrchestrator) -> None:
        """Initialize merge accounts use case.

        Args:
            merge_orchestrator: Merge orchestrator domain service
        """
        self.merge_orchestrator = merge_orchestrator

    async def execute(self, request: MergeAccountsRequest) -> MergeAccountsResponse:
        """Execute merge flow.

        Resubmitting an identical request after success returns the original
        summary with ``replayed`` set; after a retryable failure it resumes
        the merge.

        Raises:
            UnauthenticatedError: If either token is invalid
            MergeError: If the merge is rejected or a step failed
            NotFoundError: If either account does not exist
        """
        outcome = await self.merge_orchestrator.request_merge(
            request.target_token, request.source_token
        )
        record = outcome.record
        message = (
            "Accounts were already merged" if outcome.replayed else "Accounts merged"
        )
        return MergeAccountsResponse(
            success=True,
            summary=MergeSummary.from_counts(record.summary),
            message=message,
            replayed=outcome.replayed,
            target_account_id=str(record.target_account_id),
            source_account_id=str(record.source_account_id),
            merged_at=record.completed_at,
        )
