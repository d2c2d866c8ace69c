"""PostgreSQL repository implementations."""

from unify.persistence.repository.account import PostgresAccountRepository
from unify.persistence.repository.identity import PostgresIdentityRepository
from unify.persistence.repository.merge_record import PostgresMergeRecordRepository
from unify.persistence.repository.owned_item import (
    PostgresBalanceRepository,
    PostgresOwnedItemRepository,
)
from unify.persistence.repository.unit_of_work import PostgresUnitOfWork

__all__ = [
    "PostgresAccountRepository",
    "PostgresBalanceRepository",
    "PostgresIdentityRepository",
    "PostgresMergeRecordRepository",
    "PostgresOwnedItemRepository",
    "PostgresUnitOfWork",
]
