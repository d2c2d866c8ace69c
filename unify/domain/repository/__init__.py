"""Repository interfaces for the unify domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from unify.domain.repository.account import AccountRepository
from unify.domain.repository.identity import IdentityRepository
from unify.domain.repository.merge_record import MergeRecordRepository
from unify.domain.repository.owned_item import BalanceRepository, OwnedItemRepository
from unify.domain.repository.unit_of_work import UnitOfWork

__all__ = [
    "AccountRepository",
    "IdentityRepository",
    "MergeRecordRepository",
    "OwnedItemRepository",
    "BalanceRepository",
    "UnitOfWork",
]
