"""Account domain service."""

from dataclasses import dataclass
from uuid import uuid4

import logfire
from sqlalchemy.exc import IntegrityError

from unify.adapter.error import SessionRevocationError
from unify.domain.error import (
    IdentityConflictError,
    NotFoundError,
    SourceAlreadyDisabledError,
)
from unify.domain.model import Account, Identity
from unify.domain.repository import AccountRepository, IdentityRepository
from unify.domain.value import AccountId, AuthProvider, DisabledReason, IdentityId
from unify.util.locks import AccountLocks

from .auth_service import AuthService, SessionRevoker
from .base import Service


@dataclass
class RegisteredAccount:
    """A freshly created account and its primary identity."""

    account: Account
    identity: Identity


class AccountService(Service):
    """Domain service for account lifecycle: registration and disabling."""

    def __init__(
        self,
        account_repository: AccountRepository,
        identity_repository: IdentityRepository,
        auth_service: AuthService,
        session_revoker: SessionRevoker,
        locks: AccountLocks,
    ) -> None:
        """Initialize account service.

        Args:
            account_repository: Account repository
            identity_repository: Identity repository
            auth_service: Credential verification service
            session_revoker: Session invalidation collaborator
            locks: Per-account locks
        """
        self.account_repository = account_repository
        self.identity_repository = identity_repository
        self.auth_service = auth_service
        self.session_revoker = session_revoker
        self.locks = locks

    async def register(
        self, provider: AuthProvider, credential: str
    ) -> RegisteredAccount:
        """Create an account whose first identity is the verified credential.

        The first identity of an account is always its primary identity.

        Raises:
            UnauthenticatedError: If the provider rejects the credential
            IdentityConflictError: If the identity is already linked
        """
        with logfire.span("account_service.register", provider=provider.value):
            verified = await self.auth_service.verify_credential(provider, credential)

            if await self.identity_repository.find_by_provider(
                provider, verified.external_id
            ):
                raise IdentityConflictError(provider.value, verified.external_id)

            account = Account(id=AccountId(uuid4()))
            identity = Identity(
                id=IdentityId(uuid4()),
                account_id=account.id,
                provider=provider,
                external_id=verified.external_id,
                email=verified.email,
                is_primary=True,
            )
            async with self.locks.hold(account.id):
                saved = await self.account_repository.save(account)
                try:
                    saved_identity = await self.identity_repository.save(identity)
                except IntegrityError:
                    raise IdentityConflictError(provider.value, verified.external_id)

            logfire.info(
                "Account registered",
                account_id=str(saved.id),
                provider=provider.value,
            )
            return RegisteredAccount(account=saved, identity=saved_identity)

    async def get_account(self, account_id: AccountId) -> Account:
        """Get account by ID.

        Raises:
            NotFoundError: If the account does not exist
        """
        account = await self.account_repository.find_by_id(account_id)
        if not account:
            raise NotFoundError("Account", str(account_id))
        return account

    async def disable(
        self,
        account_id: AccountId,
        reason: DisabledReason,
        merged_into: AccountId | None = None,
    ) -> Account:
        """Disable an account for good and revoke its sessions.

        Disabled is terminal; disabling twice is rejected.

        Args:
            account_id: Account to disable
            reason: Why the account is disabled
            merged_into: Surviving account when disabled by a merge

        Raises:
            NotFoundError: If the account does not exist
            SourceAlreadyDisabledError: If the account is already disabled
        """
        disabled = await self.deactivate(account_id, reason, merged_into=merged_into)
        await self.revoke_sessions(account_id)
        return disabled

    async def deactivate(
        self,
        account_id: AccountId,
        reason: DisabledReason,
        merged_into: AccountId | None = None,
    ) -> Account:
        """Mark an account disabled without notifying the session service.

        Callers holding other locks use this and call ``revoke_sessions``
        once they have released them.

        Raises:
            NotFoundError: If the account does not exist
            SourceAlreadyDisabledError: If the account is already disabled
        """
        with logfire.span(
            "account_service.deactivate",
            account_id=str(account_id),
            reason=reason.value,
        ):
            async with self.locks.hold(account_id):
                account = await self.account_repository.lock_for_update(account_id)
                if not account:
                    raise NotFoundError("Account", str(account_id))
                if not account.is_active:
                    raise SourceAlreadyDisabledError(str(account_id))

                disabled = await self.account_repository.save(
                    account.disable(reason, merged_into=merged_into)
                )
                logfire.info(
                    "Account disabled", account_id=str(account_id), reason=reason.value
                )
                return disabled

    async def revoke_sessions(self, account_id: AccountId) -> None:
        """Ask the session service to drop the account's sessions.

        Best effort: sessions still expire on their own, so a failure is
        logged and the account stays disabled.
        """
        with logfire.span("account_service.revoke_sessions", account_id=str(account_id)):
            try:
                await self.session_revoker.revoke_all(account_id)
            except SessionRevocationError as e:
                logfire.error(
                    "Session revocation failed",
                    account_id=str(account_id),
                    error=str(e),
                )
