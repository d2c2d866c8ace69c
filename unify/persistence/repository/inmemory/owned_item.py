"""In-memory owned item and balance repositories for testing."""

from sqlalchemy.exc import IntegrityError

from unify.domain.model import Balance, OwnedItem
from unify.domain.model.account import utcnow
from unify.domain.repository import BalanceRepository, OwnedItemRepository
from unify.domain.value import AccountId, BalanceKind, ItemKind


class InMemoryOwnedItemRepository(OwnedItemRepository):
    """In-memory implementation of OwnedItemRepository for testing."""

    def __init__(self) -> None:
        self._items: list[OwnedItem] = []

    async def find_by_owner(self, owner_id: AccountId, kind: ItemKind) -> list[OwnedItem]:
        """Get all items of a kind owned by an account."""
        matches = [i for i in self._items if i.owner_id == owner_id and i.kind == kind]
        matches.sort(key=lambda i: i.acquired_at)
        return matches

    async def count_by_owner(self, owner_id: AccountId, kind: ItemKind) -> int:
        """Count items of a kind owned by an account."""
        return sum(1 for i in self._items if i.owner_id == owner_id and i.kind == kind)

    async def save(self, item: OwnedItem) -> OwnedItem:
        """Save item.

        Raises:
            IntegrityError: If the owner already holds this natural key
        """
        for existing in self._items:
            if (
                existing.id != item.id
                and existing.owner_id == item.owner_id
                and existing.kind == item.kind
                and existing.natural_key == item.natural_key
            ):
                raise IntegrityError("Duplicate owned item", None, Exception())

        for i, existing in enumerate(self._items):
            if existing.id == item.id:
                self._items[i] = item
                return item
        self._items.append(item)
        return item

    async def move_all(
        self, source_id: AccountId, target_id: AccountId, kind: ItemKind
    ) -> int:
        """Move source items to the target, dropping natural-key duplicates."""
        held = {
            i.natural_key
            for i in self._items
            if i.owner_id == target_id and i.kind == kind
        }
        kept: list[OwnedItem] = []
        added = 0
        for item in self._items:
            if item.owner_id != source_id or item.kind != kind:
                kept.append(item)
            elif item.natural_key not in held:
                kept.append(item.model_copy(update={"owner_id": target_id}))
                held.add(item.natural_key)
                added += 1
        self._items = kept
        return added


class InMemoryBalanceRepository(BalanceRepository):
    """In-memory implementation of BalanceRepository for testing."""

    def __init__(self) -> None:
        self._balances: dict[tuple[AccountId, BalanceKind], Balance] = {}

    async def get(self, owner_id: AccountId, kind: BalanceKind) -> Balance:
        """Get a balance, zero if the account never held one."""
        return self._balances.get(
            (owner_id, kind), Balance(owner_id=owner_id, kind=kind)
        )

    async def save(self, balance: Balance) -> Balance:
        """Save balance."""
        self._balances[(balance.owner_id, balance.kind)] = balance
        return balance

    async def transfer_all(
        self, source_id: AccountId, target_id: AccountId, kind: BalanceKind
    ) -> int:
        """Add the source balance to the target and zero the source."""
        source = await self.get(source_id, kind)
        if source.amount == 0:
            return 0
        target = await self.get(target_id, kind)
        now = utcnow()
        self._balances[(target_id, kind)] = target.model_copy(
            update={"amount": target.amount + source.amount, "updated_at": now}
        )
        self._balances[(source_id, kind)] = source.model_copy(
            update={"amount": 0, "updated_at": now}
        )
        return source.amount
