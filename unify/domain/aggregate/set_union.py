"""Aggregates that merge by set union on a natural key."""

from typing import ClassVar

import logfire

from unify.domain.aggregate.base import MergeableAggregate
from unify.domain.repository import OwnedItemRepository
from unify.domain.value import AccountId, ItemKind


class SetUnionAggregate(MergeableAggregate):
    """Moves the source's items to the target, de-duplicated by natural key.

    An item the target already holds is not double counted; the returned
    count reflects only newly added items. Moved items stop being owned by
    the source, so a replay only sees what is left.
    """

    kind: ClassVar[ItemKind]

    def __init__(self, item_repository: OwnedItemRepository) -> None:
        self.item_repository = item_repository

    async def count_owned_by(self, account_id: AccountId) -> int:
        return await self.item_repository.count_by_owner(account_id, self.kind)

    async def merge_into(self, target_id: AccountId, source_id: AccountId) -> int:
        with logfire.span(
            "aggregate.merge_into",
            aggregate=self.name,
            target_id=str(target_id),
            source_id=str(source_id),
        ):
            added = await self.item_repository.move_all(source_id, target_id, self.kind)
            logfire.info("Items merged", aggregate=self.name, added=added)
            return added


class CollectionsAggregate(SetUnionAggregate):
    """Collected places, keyed by place ID."""

    name = "collections"
    kind = ItemKind.COLLECTION


class ItinerariesAggregate(SetUnionAggregate):
    """Saved trip itineraries, keyed by itinerary ID."""

    name = "itineraries"
    kind = ItemKind.ITINERARY


class FavoritesAggregate(SetUnionAggregate):
    """Favorite places, keyed by place ID."""

    name = "favorites"
    kind = ItemKind.FAVORITE


class AchievementsAggregate(SetUnionAggregate):
    """Unlocked achievements, keyed by achievement code."""

    name = "achievements"
    kind = ItemKind.ACHIEVEMENT
