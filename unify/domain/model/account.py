"""Account aggregate root.

An account is the durable container that external identities and all
user-owned data (collections, itineraries, balances, ...) hang off.
"""

from datetime import datetime, timezone

from pydantic import Field

from unify.domain.model.common import DomainModel
from unify.domain.value import AccountId, DisabledReason


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Account(DomainModel):
    """Account aggregate root - provider-agnostic.

    Accounts are never deleted. They are disabled either as the source of a
    committed merge or by account deletion elsewhere, and disabled is a
    terminal state.
    """

    id: AccountId
    is_active: bool = True
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
    disabled_at: datetime | None = None
    disabled_reason: DisabledReason | None = None
    merged_into: AccountId | None = None  # Set only when disabled by a merge

    def disable(
        self,
        reason: DisabledReason,
        at: datetime | None = None,
        merged_into: AccountId | None = None,
    ) -> "Account":
        """Return a disabled copy of this account."""
        when = at or utcnow()
        return self.model_copy(
            update={
                "is_active": False,
                "disabled_at": when,
                "disabled_reason": reason,
                "merged_into": merged_into,
                "updated_at": when,
            }
        )
