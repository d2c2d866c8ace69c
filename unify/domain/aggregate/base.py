"""Capability shared by every data domain that takes part in a merge."""

from abc import ABC, abstractmethod
from typing import ClassVar

from unify.domain.value import AccountId


class MergeableAggregate(ABC):
    """A data owner that knows how to count and merge its own records.

    Each aggregate owns its storage and merge semantics; the orchestrator
    treats all of them uniformly. ``merge_into`` must be safe to replay
    after a crash: running it again for the same pair never double counts.
    """

    name: ClassVar[str]

    @abstractmethod
    async def count_owned_by(self, account_id: AccountId) -> int:
        """Count the records (or units) owned by an account."""
        pass

    @abstractmethod
    async def merge_into(self, target_id: AccountId, source_id: AccountId) -> int:
        """Move or sum the source's data into the target.

        Returns:
            Number of newly added items, or the amount summed
        """
        pass
