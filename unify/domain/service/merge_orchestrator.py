"""Merge orchestrator domain service."""

from dataclasses import dataclass

import logfire

from unify.domain.aggregate import AggregateRegistry
from unify.domain.error import (
    AggregateMergeFailure,
    MergeError,
    MergeInProgressError,
    NotFoundError,
    SelfMergeError,
    SourceAlreadyDisabledError,
    TargetDisabledError,
)
from unify.domain.model import Account, MergeRecord
from unify.domain.repository import AccountRepository, UnitOfWork
from unify.domain.value import AccountId, DisabledReason, MergeStatus
from unify.util.locks import AccountLocks

from .account_service import AccountService
from .auth_service import AccountAuthenticator
from .base import Service
from .identity_service import IdentityService
from .merge_ledger_service import MergeLedgerService, merge_fingerprint


@dataclass
class MergeOutcome:
    """Result of a merge request.

    ``replayed`` is True when the request matched an already committed
    merge and nothing was changed.
    """

    record: MergeRecord
    replayed: bool = False


class MergeOrchestrator(Service):
    """Consolidates a source account into a target account.

    The merge ledger is the only source of idempotency: a request for a
    pair that already committed returns the stored record, and a pair that
    failed half way resumes from the first aggregate missing from the
    record's progress journal.

    Ledger writes are committed as checkpoints: the claim on its own, each
    aggregate merge together with its journal entry, and the final
    identity move, disable and commit as one step. A failed step is rolled
    back and the failure is committed on the record, so the ledger outlives
    the failed request.
    """

    def __init__(
        self,
        authenticator: AccountAuthenticator,
        account_repository: AccountRepository,
        identity_service: IdentityService,
        account_service: AccountService,
        ledger: MergeLedgerService,
        registry: AggregateRegistry,
        locks: AccountLocks,
        unit_of_work: UnitOfWork,
    ) -> None:
        """Initialize merge orchestrator.

        Args:
            authenticator: Resolves session credentials to accounts
            account_repository: Account repository
            identity_service: Identity store
            account_service: Account lifecycle service
            ledger: Merge ledger
            registry: Aggregates to merge, in order
            locks: Per-account locks
            unit_of_work: Transaction boundary for ledger checkpoints
        """
        self.authenticator = authenticator
        self.account_repository = account_repository
        self.identity_service = identity_service
        self.account_service = account_service
        self.ledger = ledger
        self.registry = registry
        self.locks = locks
        self.unit_of_work = unit_of_work

    async def request_merge(
        self, target_credential: str, source_credential: str
    ) -> MergeOutcome:
        """Merge the account behind ``source_credential`` into the target.

        Args:
            target_credential: Session token of the surviving account
            source_credential: Session token of the account to merge away

        Returns:
            The committed merge record and whether it was a replay

        Raises:
            UnauthenticatedError: If either credential is invalid
            SelfMergeError: If both credentials belong to the same account
            NotFoundError: If either account does not exist
            TargetDisabledError: If the target account is disabled
            SourceAlreadyDisabledError: If the source is disabled or was
                already merged elsewhere
            MergeInProgressError: If another attempt holds the same merge
            AggregateMergeFailure: If a step failed; retrying resumes it
        """
        with logfire.span("merge_orchestrator.request_merge"):
            target_id = await self.authenticator.authenticate(target_credential)
            source_id = await self.authenticator.authenticate(source_credential)
            logfire.info(
                "Merge requested", target_id=str(target_id), source_id=str(source_id)
            )

            if target_id == source_id:
                logfire.warn("Self merge rejected", account_id=str(target_id))
                raise SelfMergeError(str(target_id))

            fingerprint = merge_fingerprint(target_id, source_id)
            existing = await self.ledger.find(fingerprint)
            if existing and existing.status == MergeStatus.COMMITTED:
                logfire.info("Merge replayed", fingerprint=fingerprint[:12])
                return MergeOutcome(record=existing, replayed=True)

            try:
                await self._validate(target_id, source_id)
            except (NotFoundError, MergeError) as e:
                if existing and not self.ledger.is_in_flight(existing):
                    await self._fail(existing, str(e))
                raise

            record = await self.ledger.claim(fingerprint, target_id, source_id)
            if record.status == MergeStatus.COMMITTED:
                logfire.info(
                    "Merge committed concurrently, replaying",
                    fingerprint=fingerprint[:12],
                )
                return MergeOutcome(record=record, replayed=True)
            await self.unit_of_work.commit()

            committed = await self._execute(record)
            await self.account_service.revoke_sessions(source_id)
            return MergeOutcome(record=committed, replayed=False)

    async def preview_merge(
        self, target_credential: str, source_credential: str
    ) -> dict[str, int]:
        """Count what the source account would bring into a merge.

        Nothing is written; the counts are the source's current holdings per
        aggregate, before de-duplication against the target.

        Raises:
            UnauthenticatedError: If either credential is invalid
            SelfMergeError: If both credentials belong to the same account
            NotFoundError: If either account does not exist
            TargetDisabledError: If the target account is disabled
            SourceAlreadyDisabledError: If the source account is disabled
        """
        with logfire.span("merge_orchestrator.preview_merge"):
            target_id = await self.authenticator.authenticate(target_credential)
            source_id = await self.authenticator.authenticate(source_credential)
            if target_id == source_id:
                raise SelfMergeError(str(target_id))

            source = await self._validate(target_id, source_id)
            if not source.is_active:
                # Resumable merge: the source has already been emptied
                raise SourceAlreadyDisabledError(str(source_id))

            return {
                aggregate.name: await aggregate.count_owned_by(source_id)
                for aggregate in self.registry
            }

    async def get_merge_history(self, account_id: AccountId) -> list[MergeRecord]:
        """Merge records where the account is target or source, newest first.

        Raises:
            NotFoundError: If the account does not exist
        """
        account = await self.account_repository.find_by_id(account_id)
        if not account:
            raise NotFoundError("Account", str(account_id))
        return await self.ledger.history(account_id)

    async def _execute(self, record: MergeRecord) -> MergeRecord:
        target_id = record.target_account_id
        source_id = record.source_account_id
        fingerprint = record.fingerprint

        async with self.locks.hold(target_id, source_id):
            await self._lock_rows(target_id, source_id)

            try:
                source = await self._validate(target_id, source_id)
            except (NotFoundError, MergeError) as e:
                await self._fail(record, str(e))
                raise

            summary = dict(record.summary)
            for aggregate in self.registry:
                if aggregate.name in summary:
                    continue
                try:
                    summary[aggregate.name] = await aggregate.merge_into(
                        target_id, source_id
                    )
                    record = await self.ledger.record_progress(record, summary)
                except MergeInProgressError:
                    await self.unit_of_work.rollback()
                    raise
                except Exception as e:
                    await self._leave_pending(record, f"{aggregate.name}: {e}")
                    logfire.error(
                        "Aggregate merge failed",
                        aggregate=aggregate.name,
                        fingerprint=fingerprint[:12],
                        error=str(e),
                    )
                    raise AggregateMergeFailure(aggregate.name, fingerprint, str(e)) from e
                await self.unit_of_work.commit()
                await self._lock_rows(target_id, source_id)

            try:
                await self.identity_service.reassign_all(source_id, target_id)
                if source.is_active:
                    await self.account_service.deactivate(
                        source_id, DisabledReason.MERGED, merged_into=target_id
                    )
                committed = await self.ledger.commit(record, summary)
            except MergeInProgressError:
                await self.unit_of_work.rollback()
                raise
            except Exception as e:
                await self._leave_pending(record, f"finalize: {e}")
                logfire.error(
                    "Merge finalization failed",
                    fingerprint=fingerprint[:12],
                    error=str(e),
                )
                raise AggregateMergeFailure("finalize", fingerprint, str(e)) from e
            await self.unit_of_work.commit()
            return committed

    async def _lock_rows(self, target_id: AccountId, source_id: AccountId) -> None:
        # Row locks end with each checkpoint's transaction
        for account_id in sorted((target_id, source_id), key=str):
            await self.account_repository.lock_for_update(account_id)

    async def _leave_pending(self, record: MergeRecord, error: str) -> None:
        """Discard the failed step and commit the error on the pending record."""
        await self.unit_of_work.rollback()
        await self.ledger.note_failure(record, error)
        await self.unit_of_work.commit()

    async def _fail(self, record: MergeRecord, error: str) -> None:
        """Discard uncommitted work and commit the record as ``failed``."""
        await self.unit_of_work.rollback()
        await self.ledger.fail(record, error)
        await self.unit_of_work.commit()

    async def _validate(self, target_id: AccountId, source_id: AccountId) -> Account:
        """Check both accounts can take part in the merge; return the source.

        A source already disabled by an unfinished merge into this same
        target is accepted so the merge can finish.
        """
        target = await self.account_repository.find_by_id(target_id)
        if not target:
            raise NotFoundError("Account", str(target_id))
        if not target.is_active:
            raise TargetDisabledError(str(target_id))

        source = await self.account_repository.find_by_id(source_id)
        if not source:
            raise NotFoundError("Account", str(source_id))
        if not source.is_active:
            if (
                source.disabled_reason == DisabledReason.MERGED
                and source.merged_into == target_id
            ):
                return source
            raise SourceAlreadyDisabledError(str(source_id))

        if await self.ledger.find_committed_by_source(source_id):
            raise SourceAlreadyDisabledError(str(source_id))
        return source
