"""Preview merge use case."""

from pydantic import BaseModel, Field

from unify.application.usecase.base import BaseUseCase
from unify.application.usecase.merge.common import MergeSummary
from unify.domain.service import MergeOrchestrator


class PreviewMergeRequest(BaseModel):
    """Preview merge request."""

    target_token: str = Field(min_length=1)
    source_token: str = Field(min_length=1)


class PreviewMergeResponse(BaseModel):
    """What the source account currently holds, per aggregate."""

    summary: MergeSummary


class PreviewMergeUseCase(BaseUseCase):
    """Use case for showing what a merge would bring over before confirming."""

    def __init__(self, merge_orchestrator: MergeOrchestrator) -> None:
        """Initialize preview merge use case.

        Args:
            merge_orchestrator: Merge orchestrator domain service
        """
        self.merge_orchestrator = merge_orchestrator

    async def execute(self, request: PreviewMergeRequest) -> PreviewMergeResponse:
        """Execute preview flow; nothing is written."""
        counts = await self.merge_orchestrator.preview_merge(
            request.target_token, request.source_token
        )
        return PreviewMergeResponse(summary=MergeSummary.from_counts(counts))
