"""Domain layer DI providers."""

from dishka import Scope, provide

from unify.config import AuthSettings, MergeSettings
from unify.domain.aggregate import AggregateRegistry, default_registry
from unify.domain.repository import (
    AccountRepository,
    BalanceRepository,
    IdentityRepository,
    MergeRecordRepository,
    OwnedItemRepository,
    UnitOfWork,
)
from unify.domain.service import (
    AccountAuthenticator,
    AccountService,
    AuthService,
    CredentialVerifier,
    IdentityService,
    JWTService,
    MergeLedgerService,
    MergeOrchestrator,
    SessionRevoker,
)
from unify.domain.value import AuthProvider
from unify.util.di.base import ProviderBase
from unify.util.locks import AccountLocks


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_auth_service(
        self, verifiers: dict[AuthProvider, CredentialVerifier]
    ) -> AuthService:
        """Provide multi-provider credential verification service.

        Args:
            verifiers: Dictionary mapping providers to their credential verifiers

        Returns:
            AuthService configured with all available verifiers
        """
        return AuthService(verifiers=verifiers)

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_account_authenticator(self, jwt_service: JWTService) -> AccountAuthenticator:
        """Provide session token authenticator."""
        return jwt_service

    @provide
    def get_identity_service(
        self,
        identity_repository: IdentityRepository,
        account_repository: AccountRepository,
        auth_service: AuthService,
        locks: AccountLocks,
    ) -> IdentityService:
        """Provide identity store domain service."""
        return IdentityService(
            identity_repository=identity_repository,
            account_repository=account_repository,
            auth_service=auth_service,
            locks=locks,
        )

    @provide
    def get_account_service(
        self,
        account_repository: AccountRepository,
        identity_repository: IdentityRepository,
        auth_service: AuthService,
        session_revoker: SessionRevoker,
        locks: AccountLocks,
    ) -> AccountService:
        """Provide account lifecycle domain service."""
        return AccountService(
            account_repository=account_repository,
            identity_repository=identity_repository,
            auth_service=auth_service,
            session_revoker=session_revoker,
            locks=locks,
        )

    @provide
    def get_merge_ledger_service(
        self,
        merge_record_repository: MergeRecordRepository,
        merge_settings: MergeSettings,
    ) -> MergeLedgerService:
        """Provide merge ledger domain service."""
        return MergeLedgerService(
            merge_record_repository=merge_record_repository,
            merge_settings=merge_settings,
        )

    @provide
    def get_aggregate_registry(
        self,
        owned_item_repository: OwnedItemRepository,
        balance_repository: BalanceRepository,
    ) -> AggregateRegistry:
        """Provide the ordered registry of mergeable aggregates."""
        return default_registry(owned_item_repository, balance_repository)

    @provide
    def get_merge_orchestrator(
        self,
        authenticator: AccountAuthenticator,
        account_repository: AccountRepository,
        identity_service: IdentityService,
        account_service: AccountService,
        ledger: MergeLedgerService,
        registry: AggregateRegistry,
        locks: AccountLocks,
        unit_of_work: UnitOfWork,
    ) -> MergeOrchestrator:
        """Provide merge orchestrator domain service."""
        return MergeOrchestrator(
            authenticator=authenticator,
            account_repository=account_repository,
            identity_service=identity_service,
            account_service=account_service,
            ledger=ledger,
            registry=registry,
            locks=locks,
            unit_of_work=unit_of_work,
        )
