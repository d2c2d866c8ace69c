"""Strongly typed identifiers for unify domain entities.

Using NewType for strong typing prevents mixing up different entity IDs
and makes the code more self-documenting.
"""

from typing import NewType
from uuid import UUID

# Core domain entity identifiers
AccountId = NewType("AccountId", UUID)
IdentityId = NewType("IdentityId", UUID)
OwnedItemId = NewType("OwnedItemId", UUID)

# Deterministic key of one logical merge attempt (hex sha256)
MergeFingerprint = NewType("MergeFingerprint", str)
