"""Identity domain service (the identity store)."""

from dataclasses import dataclass
from uuid import uuid4

import logfire
from sqlalchemy.exc import IntegrityError

from unify.domain.error import (
    CannotUnlinkPrimaryError,
    IdentityConflictError,
    LastIdentityError,
    NotFoundError,
    SourceAlreadyDisabledError,
)
from unify.domain.model import Account, Identity
from unify.domain.model.account import utcnow
from unify.domain.repository import AccountRepository, IdentityRepository
from unify.domain.value import AccountId, AuthProvider, IdentityId
from unify.util.locks import AccountLocks

from .auth_service import AuthService
from .base import Service


@dataclass
class IdentityListing:
    """Identities of an account, oldest link first, plus the primary's ID."""

    identities: list[Identity]
    primary_id: IdentityId | None


class IdentityService(Service):
    """Domain service for linking external identities to accounts.

    Every mutation runs under the account's lock and validates the
    single-primary and last-identity rules before touching storage, so a
    rejected request leaves no partial state.
    """

    def __init__(
        self,
        identity_repository: IdentityRepository,
        account_repository: AccountRepository,
        auth_service: AuthService,
        locks: AccountLocks,
    ) -> None:
        """Initialize identity service.

        Args:
            identity_repository: Identity repository
            account_repository: Account repository
            auth_service: Credential verification service
            locks: Per-account locks
        """
        self.identity_repository = identity_repository
        self.account_repository = account_repository
        self.auth_service = auth_service
        self.locks = locks

    async def bind_identity(
        self, account_id: AccountId, provider: AuthProvider, credential: str
    ) -> Identity:
        """Link a new external identity to an account.

        Binding an identity the account already owns is a no-op that returns
        the existing identity.

        Args:
            account_id: Account to link to
            provider: Identity provider
            credential: Provider identity token

        Returns:
            The linked identity

        Raises:
            UnauthenticatedError: If the provider rejects the credential
            IdentityConflictError: If the identity belongs to another account
            SourceAlreadyDisabledError: If the account is disabled
        """
        with logfire.span(
            "identity_service.bind_identity",
            account_id=str(account_id),
            provider=provider.value,
        ):
            # Provider round trip happens before taking the account lock
            verified = await self.auth_service.verify_credential(provider, credential)

            async with self.locks.hold(account_id):
                await self._require_active(account_id)

                existing = await self.identity_repository.find_by_provider(
                    provider, verified.external_id
                )
                if existing:
                    if existing.account_id == account_id:
                        logfire.info(
                            "Identity already linked to this account",
                            identity_id=str(existing.id),
                        )
                        return existing
                    logfire.warn(
                        "Identity conflict",
                        provider=provider.value,
                        external_id=verified.external_id,
                        owner_id=str(existing.account_id),
                    )
                    raise IdentityConflictError(provider.value, verified.external_id)

                current = await self.identity_repository.find_all_by_account_id(
                    account_id
                )
                identity = Identity(
                    id=IdentityId(uuid4()),
                    account_id=account_id,
                    provider=provider,
                    external_id=verified.external_id,
                    email=verified.email,
                    is_primary=not current,
                )
                try:
                    saved = await self.identity_repository.save(identity)
                except IntegrityError:
                    # Another account linked the same identity concurrently
                    raise IdentityConflictError(provider.value, verified.external_id)

                logfire.info(
                    "Identity linked",
                    identity_id=str(saved.id),
                    account_id=str(account_id),
                    provider=provider.value,
                    is_primary=saved.is_primary,
                )
                return saved

    async def list_identities(self, account_id: AccountId) -> IdentityListing:
        """List identities linked to an account.

        Raises:
            NotFoundError: If the account does not exist
        """
        with logfire.span(
            "identity_service.list_identities", account_id=str(account_id)
        ):
            account = await self.account_repository.find_by_id(account_id)
            if not account:
                raise NotFoundError("Account", str(account_id))

            identities = await self.identity_repository.find_all_by_account_id(
                account_id
            )
            primary_id = next((i.id for i in identities if i.is_primary), None)
            logfire.info(
                "Identities retrieved for account",
                account_id=str(account_id),
                count=len(identities),
            )
            return IdentityListing(identities=identities, primary_id=primary_id)

    async def unlink_identity(
        self, account_id: AccountId, identity_id: IdentityId
    ) -> None:
        """Remove an identity from an account.

        Raises:
            NotFoundError: If the identity does not belong to the account
            LastIdentityError: If it is the account's only identity
            CannotUnlinkPrimaryError: If it is the primary identity
            SourceAlreadyDisabledError: If the account is disabled
        """
        with logfire.span(
            "identity_service.unlink_identity",
            account_id=str(account_id),
            identity_id=str(identity_id),
        ):
            async with self.locks.hold(account_id):
                await self._require_active(account_id)

                identities = await self.identity_repository.find_all_by_account_id(
                    account_id
                )
                identity = next((i for i in identities if i.id == identity_id), None)
                if not identity:
                    raise NotFoundError("Identity", str(identity_id))
                if len(identities) == 1:
                    logfire.warn("Unlink of last identity rejected", identity_id=str(identity_id))
                    raise LastIdentityError(str(identity_id))
                if identity.is_primary:
                    logfire.warn("Unlink of primary identity rejected", identity_id=str(identity_id))
                    raise CannotUnlinkPrimaryError(str(identity_id))

                await self.identity_repository.delete(identity_id)
                logfire.info(
                    "Identity unlinked",
                    account_id=str(account_id),
                    identity_id=str(identity_id),
                    provider=identity.provider.value,
                )

    async def set_primary(
        self, account_id: AccountId, identity_id: IdentityId
    ) -> IdentityListing:
        """Make an identity the account's primary identity.

        Raises:
            NotFoundError: If the identity does not belong to the account
            SourceAlreadyDisabledError: If the account is disabled
        """
        with logfire.span(
            "identity_service.set_primary",
            account_id=str(account_id),
            identity_id=str(identity_id),
        ):
            async with self.locks.hold(account_id):
                await self._require_active(account_id)

                identities = await self.identity_repository.find_all_by_account_id(
                    account_id
                )
                if not any(i.id == identity_id for i in identities):
                    raise NotFoundError("Identity", str(identity_id))

                now = utcnow()
                changed = [
                    i.model_copy(
                        update={"is_primary": i.id == identity_id, "updated_at": now}
                    )
                    for i in identities
                    if i.is_primary != (i.id == identity_id)
                ]
                if changed:
                    await self.identity_repository.save_all(changed)
                    logfire.info(
                        "Primary identity changed",
                        account_id=str(account_id),
                        identity_id=str(identity_id),
                    )

                updated = await self.identity_repository.find_all_by_account_id(
                    account_id
                )
                return IdentityListing(identities=updated, primary_id=identity_id)

    async def reassign_all(
        self, source_id: AccountId, target_id: AccountId
    ) -> list[Identity]:
        """Move every identity of the source account to the target.

        Moved identities lose their primary flag; the target keeps its own
        primary. Replaying after a partial move only moves what is left.

        Returns:
            The moved identities
        """
        with logfire.span(
            "identity_service.reassign_all",
            source_id=str(source_id),
            target_id=str(target_id),
        ):
            async with self.locks.hold(source_id, target_id):
                identities = await self.identity_repository.find_all_by_account_id(
                    source_id
                )
                now = utcnow()
                moved = [
                    i.model_copy(
                        update={
                            "account_id": target_id,
                            "is_primary": False,
                            "updated_at": now,
                        }
                    )
                    for i in identities
                ]
                if moved:
                    await self.identity_repository.save_all(moved)
                logfire.info(
                    "Identities reassigned",
                    source_id=str(source_id),
                    target_id=str(target_id),
                    count=len(moved),
                )
                return moved

    async def _require_active(self, account_id: AccountId) -> Account:
        account = await self.account_repository.lock_for_update(account_id)
        if not account:
            raise NotFoundError("Account", str(account_id))
        if not account.is_active:
            logfire.warn("Operation on disabled account", account_id=str(account_id))
            raise SourceAlreadyDisabledError(str(account_id))
        return account
