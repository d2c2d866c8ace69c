"""Domain value objects for unify."""

from unify.domain.value.identifiers import (
    AccountId,
    IdentityId,
    MergeFingerprint,
    OwnedItemId,
)
from unify.domain.value.types import (
    AuthProvider,
    BalanceKind,
    DisabledReason,
    ItemKind,
    MergeStatus,
    VerifiedCredential,
)

__all__ = [
    # Identifiers
    "AccountId",
    "IdentityId",
    "OwnedItemId",
    "MergeFingerprint",
    # Types
    "AuthProvider",
    "BalanceKind",
    "DisabledReason",
    "ItemKind",
    "MergeStatus",
    "VerifiedCredential",
]
