"""Domain model entities for unify."""

from unify.domain.model.account import Account
from unify.domain.model.identity import Identity
from unify.domain.model.merge_record import MergeRecord
from unify.domain.model.owned_item import Balance, OwnedItem

__all__ = [
    "Account",
    "Identity",
    "MergeRecord",
    "OwnedItem",
    "Balance",
]
