"""Domain value objects for unify.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

from enum import Enum

from pydantic import field_validator

from unify.domain.value.common import ValueObject


class AuthProvider(str, Enum):
    """Supported external identity providers."""

    APPLE = "apple"
    GOOGLE = "google"


class DisabledReason(str, Enum):
    """Why an account was disabled."""

    MERGED = "merged"
    DELETED = "deleted"


class MergeStatus(str, Enum):
    """Status of a merge ledger record."""

    PENDING = "pending"
    COMMITTED = "committed"
    FAILED = "failed"


class ItemKind(str, Enum):
    """Owned item collections merged by set union."""

    COLLECTION = "collection"
    ITINERARY = "itinerary"
    FAVORITE = "favorite"
    ACHIEVEMENT = "achievement"


class BalanceKind(str, Enum):
    """Numeric balances merged by summation."""

    EXPERIENCE = "experience"
    COINS = "coins"


class VerifiedCredential(ValueObject):
    """Result of verifying an external credential with its provider.

    Generic structure for the subject returned from any identity provider.
    """

    provider: AuthProvider
    external_id: str  # Permanent subject ID ("sub" claim)
    email: str | None = None

    @field_validator("external_id")
    @classmethod
    def validate_external_id(cls, v: str) -> str:
        """Validate external ID is not empty and within length limits."""
        if len(v) < 1 or len(v) > 255:
            raise ValueError("External ID must be 1-255 characters")
        return v
