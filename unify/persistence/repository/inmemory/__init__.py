"""In-memory repository implementations for testing."""

from .account import InMemoryAccountRepository
from .identity import InMemoryIdentityRepository
from .merge_record import InMemoryMergeRecordRepository
from .owned_item import InMemoryBalanceRepository, InMemoryOwnedItemRepository
from .unit_of_work import InMemoryUnitOfWork

__all__ = [
    "InMemoryAccountRepository",
    "InMemoryBalanceRepository",
    "InMemoryIdentityRepository",
    "InMemoryMergeRecordRepository",
    "InMemoryOwnedItemRepository",
    "InMemoryUnitOfWork",
]
