"""Application layer DI providers."""

from dishka import Scope, provide

from unify.application.usecase.account import RegisterAccountUseCase
from unify.application.usecase.identity import (
    BindIdentityUseCase,
    GetIdentitiesUseCase,
    SetPrimaryIdentityUseCase,
    UnlinkIdentityUseCase,
)
from unify.application.usecase.merge import (
    GetMergeHistoryUseCase,
    MergeAccountsUseCase,
    PreviewMergeUseCase,
)
from unify.domain.service import AccountService, IdentityService, MergeOrchestrator
from unify.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Account use cases
    @provide(scope=Scope.REQUEST)
    def get_register_account_use_case(
        self, account_service: AccountService
    ) -> RegisterAccountUseCase:
        """Provide register account use case."""
        return RegisterAccountUseCase(account_service=account_service)

    # Identity use cases
    @provide(scope=Scope.REQUEST)
    def get_get_identities_use_case(
        self, identity_service: IdentityService
    ) -> GetIdentitiesUseCase:
        """Provide get identities use case."""
        return GetIdentitiesUseCase(identity_service=identity_service)

    @provide(scope=Scope.REQUEST)
    def get_bind_identity_use_case(
        self, identity_service: IdentityService
    ) -> BindIdentityUseCase:
        """Provide bind identity use case."""
        return BindIdentityUseCase(identity_service=identity_service)

    @provide(scope=Scope.REQUEST)
    def get_unlink_identity_use_case(
        self, identity_service: IdentityService
    ) -> UnlinkIdentityUseCase:
        """Provide unlink identity use case."""
        return UnlinkIdentityUseCase(identity_service=identity_service)

    @provide(scope=Scope.REQUEST)
    def get_set_primary_identity_use_case(
        self, identity_service: IdentityService
    ) -> SetPrimaryIdentityUseCase:
        """Provide set primary identity use case."""
        return SetPrimaryIdentityUseCase(identity_service=identity_service)

    # Merge use cases
    @provide(scope=Scope.REQUEST)
    def get_merge_accounts_use_case(
        self, merge_orchestrator: MergeOrchestrator
    ) -> MergeAccountsUseCase:
        """Provide merge accounts use case."""
        return MergeAccountsUseCase(merge_orchestrator=merge_orchestrator)

    @provide(scope=Scope.REQUEST)
    def get_preview_merge_use_case(
        self, merge_orchestrator: MergeOrchestrator
    ) -> PreviewMergeUseCase:
        """Provide preview merge use case."""
        return PreviewMergeUseCase(merge_orchestrator=merge_orchestrator)

    @provide(scope=Scope.REQUEST)
    def get_get_merge_history_use_case(
        self, merge_orchestrator: MergeOrchestrator
    ) -> GetMergeHistoryUseCase:
        """Provide get merge history use case."""
        return GetMergeHistoryUseCase(merge_orchestrator=merge_orchestrator)
