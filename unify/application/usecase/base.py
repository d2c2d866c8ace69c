"""Base use case."""

from abc import ABC, abstractmethod
from typing import Any


class BaseUseCase(ABC):
    """Base use case for orchestrating domain services.

    Use cases take a pydantic request model and return a pydantic response
    model; domain errors propagate to the caller unchanged.
    """

    @abstractmethod
    async def execute(self, request: Any) -> Any:
        pass
