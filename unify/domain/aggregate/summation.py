"""Aggregates that merge by summation."""

from typing import ClassVar

import logfire

from unify.domain.aggregate.base import MergeableAggregate
from unify.domain.repository import BalanceRepository
from unify.domain.value import AccountId, BalanceKind


class SummationAggregate(MergeableAggregate):
    """Adds the source balance to the target balance.

    ``target_after == target_before + source_before``. The source is zeroed
    in the same step, so a replay transfers nothing.
    """

    kind: ClassVar[BalanceKind]

    def __init__(self, balance_repository: BalanceRepository) -> None:
        self.balance_repository = balance_repository

    async def count_owned_by(self, account_id: AccountId) -> int:
        balance = await self.balance_repository.get(account_id, self.kind)
        return balance.amount

    async def merge_into(self, target_id: AccountId, source_id: AccountId) -> int:
        with logfire.span(
            "aggregate.merge_into",
            aggregate=self.name,
            target_id=str(target_id),
            source_id=str(source_id),
        ):
            amount = await self.balance_repository.transfer_all(
                source_id, target_id, self.kind
            )
            logfire.info("Balance merged", aggregate=self.name, amount=amount)
            return amount


class ExperienceAggregate(SummationAggregate):
    """Experience points."""

    name = "experience"
    kind = BalanceKind.EXPERIENCE


class BalanceAggregate(SummationAggregate):
    """Spendable coin balance."""

    name = "balance"
    kind = BalanceKind.COINS
