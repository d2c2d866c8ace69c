"""Account-owned data that takes part in merges."""

from datetime import datetime

from pydantic import Field

from unify.domain.model.account import utcnow
from unify.domain.model.common import DomainModel
from unify.domain.value import AccountId, BalanceKind, ItemKind, OwnedItemId


class OwnedItem(DomainModel):
    """A collected place, saved itinerary, favorite or unlocked achievement.

    ``natural_key`` identifies the item within its kind (place ID, itinerary
    ID, achievement code); an owner holds at most one item per natural key.
    """

    id: OwnedItemId
    owner_id: AccountId
    kind: ItemKind
    natural_key: str
    acquired_at: datetime = Field(default_factory=utcnow)


class Balance(DomainModel):
    """Numeric balance (experience points, coins) held by an account."""

    owner_id: AccountId
    kind: BalanceKind
    amount: int = Field(default=0, ge=0)
    updated_at: datetime = Field(default_factory=utcnow)
