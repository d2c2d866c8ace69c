"""In-memory account repository for testing."""

from typing import Optional

from unify.domain.model import Account
from unify.domain.repository import AccountRepository
from unify.domain.value import AccountId


class InMemoryAccountRepository(AccountRepository):
    """In-memory implementation of AccountRepository for testing."""

    def __init__(self) -> None:
        self._accounts: dict[AccountId, Account] = {}

    async def find_by_id(self, account_id: AccountId) -> Optional[Account]:
        """Find account by ID."""
        return self._accounts.get(account_id)

    async def lock_for_update(self, account_id: AccountId) -> Optional[Account]:
        """Find account by ID; in-process locks are the only locks here."""
        return self._accounts.get(account_id)

    async def save(self, account: Account) -> Account:
        """Save account."""
        self._accounts[account.id] = account
        return account
