"""Transaction boundary interface."""

from abc import ABC, abstractmethod


class UnitOfWork(ABC):
    """Commits or discards everything the request's repositories wrote.

    Repositories of one request share a single transaction. Services that
    must make part of their work durable before the request ends (the merge
    ledger's checkpoints) commit it through this interface.
    """

    @abstractmethod
    async def commit(self) -> None:
        """Make all writes since the last commit or rollback durable."""
        pass

    @abstractmethod
    async def rollback(self) -> None:
        """Discard all writes since the last commit or rollback."""
        pass
