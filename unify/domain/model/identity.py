"""Identity entity.

Links external authentication providers to accounts.
"""

from datetime import datetime

from pydantic import Field

from unify.domain.model.account import utcnow
from unify.domain.model.common import DomainModel
from unify.domain.value import AccountId, AuthProvider, IdentityId


class Identity(DomainModel):
    """External authentication identity linked to an account.

    An account can have several identities (Apple, Google) but exactly one
    of them is primary while the account is active. ``(provider,
    external_id)`` is unique across all accounts.
    """

    id: IdentityId
    account_id: AccountId
    provider: AuthProvider
    external_id: str  # Permanent subject ID from the provider
    email: str | None = None
    is_primary: bool = False
    linked_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
