"""Account repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from unify.domain.model.account import Account
from unify.domain.value import AccountId


class AccountRepository(ABC):
    """Repository for Account aggregate.

    Defines the contract for account persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, account_id: AccountId) -> Optional[Account]:
        """Find an account by ID.

        Args:
            account_id: The account's unique identifier

        Returns:
            The account if found, None otherwise
        """
        pass

    @abstractmethod
    async def lock_for_update(self, account_id: AccountId) -> Optional[Account]:
        """Find an account and hold a row lock on it until the transaction ends.

        Args:
            account_id: The account's unique identifier

        Returns:
            The account if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, account: Account) -> Account:
        """Save an account (create or update).

        Args:
            account: The account to save

        Returns:
            The saved account
        """
        pass
