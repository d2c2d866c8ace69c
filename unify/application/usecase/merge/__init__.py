"""Account merge use cases."""

from .get_merge_history import GetMergeHistoryUseCase
from .merge_accounts import MergeAccountsUseCase
from .preview_merge import PreviewMergeUseCase

__all__ = ["GetMergeHistoryUseCase", "MergeAccountsUseCase", "PreviewMergeUseCase"]
