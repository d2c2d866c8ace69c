"""PostgreSQL implementations of owned item and balance repositories."""

from sqlalchemy import delete, exists, func, select, update
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from unify.domain.model import Balance, OwnedItem
from unify.domain.model.account import utcnow
from unify.domain.repository import BalanceRepository, OwnedItemRepository
from unify.domain.value import AccountId, BalanceKind, ItemKind
from unify.persistence.mappers import (
    owned_item_to_dict,
    row_to_balance,
    row_to_owned_item,
)
from unify.persistence.tables import balances_table, owned_items_table


class PostgresOwnedItemRepository(OwnedItemRepository):
    """PostgreSQL implementation of OwnedItemRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_owner(self, owner_id: AccountId, kind: ItemKind) -> list[OwnedItem]:
        """Get all items of a kind owned by an account."""
        stmt = (
            select(owned_items_table)
            .where(
                owned_items_table.c.owner_id == owner_id,
                owned_items_table.c.kind == kind.value,
            )
            .order_by(owned_items_table.c.acquired_at)
        )
        result = await self.session.execute(stmt)
        return [row_to_owned_item(dict(row)) for row in result.mappings().all()]

    async def count_by_owner(self, owner_id: AccountId, kind: ItemKind) -> int:
        """Count items of a kind owned by an account."""
        stmt = select(func.count()).where(
            owned_items_table.c.owner_id == owner_id,
            owned_items_table.c.kind == kind.value,
        )
        result = await self.session.execute(stmt)
        return result.scalar_one()

    async def save(self, item: OwnedItem) -> OwnedItem:
        """Save an item in a savepoint.

        Raises:
            IntegrityError: If the owner already holds this natural key
        """
        item_dict = owned_item_to_dict(item)
        async with self.session.begin_nested():
            stmt = (
                insert(owned_items_table)
                .values(**item_dict)
                .on_conflict_do_update(
                    index_elements=[owned_items_table.c.id], set_=item_dict
                )
            )
            await self.session.execute(stmt)
        return item

    async def move_all(
        self, source_id: AccountId, target_id: AccountId, kind: ItemKind
    ) -> int:
        """Drop the source's duplicates, then re-own the rest to the target."""
        held = owned_items_table.alias("held")
        already_held = exists(
            select(held.c.id).where(
                held.c.owner_id == target_id,
                held.c.kind == kind.value,
                held.c.natural_key == owned_items_table.c.natural_key,
            )
        )
        async with self.session.begin_nested():
            await self.session.execute(
                delete(owned_items_table).where(
                    owned_items_table.c.owner_id == source_id,
                    owned_items_table.c.kind == kind.value,
                    already_held,
                )
            )
            result = await self.session.execute(
                update(owned_items_table)
                .where(
                    owned_items_table.c.owner_id == source_id,
                    owned_items_table.c.kind == kind.value,
                )
                .values(owner_id=target_id)
            )
        return result.rowcount  # type: ignore[attr-defined]


class PostgresBalanceRepository(BalanceRepository):
    """PostgreSQL implementation of BalanceRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def get(self, owner_id: AccountId, kind: BalanceKind) -> Balance:
        """Get a balance, zero if the account never held one."""
        stmt = select(balances_table).where(
            balances_table.c.owner_id == owner_id,
            balances_table.c.kind == kind.value,
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        if not row:
            return Balance(owner_id=owner_id, kind=kind)
        return row_to_balance(dict(row))

    async def save(self, balance: Balance) -> Balance:
        """Upsert a balance."""
        stmt = (
            insert(balances_table)
            .values(
                owner_id=balance.owner_id,
                kind=balance.kind.value,
                amount=balance.amount,
                updated_at=balance.updated_at,
            )
            .on_conflict_do_update(
                index_elements=[balances_table.c.owner_id, balances_table.c.kind],
                set_={"amount": balance.amount, "updated_at": balance.updated_at},
            )
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return balance

    async def transfer_all(
        self, source_id: AccountId, target_id: AccountId, kind: BalanceKind
    ) -> int:
        """Zero the source row under a row lock and add its amount to the target."""
        now = utcnow()
        async with self.session.begin_nested():
            result = await self.session.execute(
                select(balances_table.c.amount)
                .where(
                    balances_table.c.owner_id == source_id,
                    balances_table.c.kind == kind.value,
                )
                .with_for_update()
            )
            amount = result.scalar_one_or_none() or 0
            if amount == 0:
                return 0

            await self.session.execute(
                update(balances_table)
                .where(
                    balances_table.c.owner_id == source_id,
                    balances_table.c.kind == kind.value,
                )
                .values(amount=0, updated_at=now)
            )
            stmt = insert(balances_table).values(
                owner_id=target_id, kind=kind.value, amount=amount, updated_at=now
            )
            await self.session.execute(
                stmt.on_conflict_do_update(
                    index_elements=[balances_table.c.owner_id, balances_table.c.kind],
                    set_={
                        "amount": balances_table.c.amount + stmt.excluded.amount,
                        "updated_at": now,
                    },
                )
            )
        return amount
