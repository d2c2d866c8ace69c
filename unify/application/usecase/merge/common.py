"""Response models shared by merge use cases."""

from pydantic import BaseModel, ConfigDict, Field


class MergeSummary(BaseModel):
    """Per-aggregate counts of what a merge brought into the target.

    Item counts are newly added items only; ``expMerged`` and
    ``balanceMerged`` are the summed amounts.
    """

    model_config = ConfigDict(populate_by_name=True)

    collections: int = 0
    itineraries: int = 0
    favorites: int = 0
    achievements: int = 0
    exp_merged: int = Field(default=0, alias="expMerged")
    balance_merged: int = Field(default=0, alias="balanceMerged")

    @classmethod
    def from_counts(cls, counts: dict[str, int]) -> "MergeSummary":
        """Build from aggregate name -> count."""
        return cls(
            collections=counts.get("collections", 0),
            itineraries=counts.get("itineraries", 0),
            favorites=counts.get("favorites", 0),
            achievements=counts.get("achievements", 0),
            exp_merged=counts.get("experience", 0),
            balance_merged=counts.get("balance", 0),
        )
