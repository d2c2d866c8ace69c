"""Owned item and balance repository interfaces."""

from abc import ABC, abstractmethod

from unify.domain.model.owned_item import Balance, OwnedItem
from unify.domain.value import AccountId, BalanceKind, ItemKind


class OwnedItemRepository(ABC):
    """Repository for items that merge by set union."""

    @abstractmethod
    async def find_by_owner(self, owner_id: AccountId, kind: ItemKind) -> list[OwnedItem]:
        """Get all items of a kind owned by an account.

        Args:
            owner_id: The owning account
            kind: Item kind

        Returns:
            List of items (may be empty)
        """
        pass

    @abstractmethod
    async def count_by_owner(self, owner_id: AccountId, kind: ItemKind) -> int:
        """Count items of a kind owned by an account."""
        pass

    @abstractmethod
    async def save(self, item: OwnedItem) -> OwnedItem:
        """Save an item (create or update).

        Raises:
            IntegrityError: If the owner already holds this natural key
        """
        pass

    @abstractmethod
    async def move_all(
        self, source_id: AccountId, target_id: AccountId, kind: ItemKind
    ) -> int:
        """Move every source item of a kind to the target.

        Items whose natural key the target already holds are dropped from
        the source instead of moved. The operation is atomic: either all
        items are processed or none.

        Args:
            source_id: Account giving up its items
            target_id: Account receiving them
            kind: Item kind

        Returns:
            Number of items newly added to the target
        """
        pass


class BalanceRepository(ABC):
    """Repository for balances that merge by summation."""

    @abstractmethod
    async def get(self, owner_id: AccountId, kind: BalanceKind) -> Balance:
        """Get a balance, zero if the account never held one."""
        pass

    @abstractmethod
    async def save(self, balance: Balance) -> Balance:
        """Save a balance."""
        pass

    @abstractmethod
    async def transfer_all(
        self, source_id: AccountId, target_id: AccountId, kind: BalanceKind
    ) -> int:
        """Add the whole source balance to the target and zero the source.

        Both sides change in one atomic step, so replaying a transfer moves
        nothing.

        Returns:
            Amount transferred
        """
        pass
