"""Ordered registry of mergeable aggregates."""

from collections.abc import Iterable, Iterator

from unify.domain.aggregate.base import MergeableAggregate
from unify.domain.aggregate.set_union import (
    AchievementsAggregate,
    CollectionsAggregate,
    FavoritesAggregate,
    ItinerariesAggregate,
)
from unify.domain.aggregate.summation import BalanceAggregate, ExperienceAggregate
from unify.domain.repository import BalanceRepository, OwnedItemRepository


class AggregateRegistry:
    """Fixed, ordered list of aggregates consulted by the merge orchestrator.

    Order only makes the merge summary deterministic; each aggregate merges
    independently. Adding a data domain means registering one more
    implementation, the orchestrator does not change.
    """

    def __init__(self, aggregates: Iterable[MergeableAggregate] = ()) -> None:
        self._aggregates: list[MergeableAggregate] = []
        for aggregate in aggregates:
            self.register(aggregate)

    def register(self, aggregate: MergeableAggregate) -> None:
        """Append an aggregate.

        Raises:
            ValueError: If an aggregate with the same name is registered
        """
        if aggregate.name in self.names:
            raise ValueError(f"Aggregate already registered: {aggregate.name}")
        self._aggregates.append(aggregate)

    @property
    def names(self) -> list[str]:
        return [a.name for a in self._aggregates]

    def __iter__(self) -> Iterator[MergeableAggregate]:
        return iter(self._aggregates)

    def __len__(self) -> int:
        return len(self._aggregates)


def default_registry(
    item_repository: OwnedItemRepository, balance_repository: BalanceRepository
) -> AggregateRegistry:
    """Build the registry of every data domain a merge consolidates."""
    return AggregateRegistry(
        [
            CollectionsAggregate(item_repository),
            ItinerariesAggregate(item_repository),
            FavoritesAggregate(item_repository),
            AchievementsAggregate(item_repository),
            ExperienceAggregate(balance_repository),
            BalanceAggregate(balance_repository),
        ]
    )
