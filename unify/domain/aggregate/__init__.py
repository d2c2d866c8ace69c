"""Mergeable data aggregates."""

from .base import MergeableAggregate
from .registry import AggregateRegistry, default_registry
from .set_union import (
    AchievementsAggregate,
    CollectionsAggregate,
    FavoritesAggregate,
    ItinerariesAggregate,
    SetUnionAggregate,
)
from .summation import BalanceAggregate, ExperienceAggregate, SummationAggregate

__all__ = [
    "AchievementsAggregate",
    "AggregateRegistry",
    "BalanceAggregate",
    "CollectionsAggregate",
    "ExperienceAggregate",
    "FavoritesAggregate",
    "ItinerariesAggregate",
    "MergeableAggregate",
    "SetUnionAggregate",
    "SummationAggregate",
    "default_registry",
]
