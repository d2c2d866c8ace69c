"""In-memory unit of work for testing."""

from unify.domain.repository import UnitOfWork


class InMemoryUnitOfWork(UnitOfWork):
    """Counts commits and rollbacks.

    In-memory repositories apply writes immediately, so nothing is undone
    on rollback.
    """

    def __init__(self) -> None:
        self.commits = 0
        self.rollbacks = 0

    async def commit(self) -> None:
        self.commits += 1

    async def rollback(self) -> None:
        self.rollbacks += 1
