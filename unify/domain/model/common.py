"""Base model for all domain entities."""

from pydantic import BaseModel, ConfigDict


class DomainModel(BaseModel):
    """Base class for domain models.

    Models are immutable; state changes go through ``model_copy(update=...)``.
    """

    model_config = ConfigDict(frozen=True)
