"""Tests for account merge use cases."""

from uuid import UUID

import pytest

from unify.application.usecase.merge.common import MergeSummary
from unify.application.usecase.merge.get_merge_history import (
    GetMergeHistoryRequest,
    GetMergeHistoryUseCase,
)
from unify.application.usecase.merge.merge_accounts import (
    MergeAccountsRequest,
    MergeAccountsUseCase,
)
from unify.application.usecase.merge.preview_merge import (
    PreviewMergeRequest,
    PreviewMergeUseCase,
)
from unify.domain.model import Balance
from unify.domain.repository import BalanceRepository, OwnedItemRepository
from unify.domain.service import AccountService, JWTService
from unify.domain.value import AccountId, AuthProvider, BalanceKind, ItemKind, MergeStatus
from tests.conftest import make_items
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


async def _account_with_token(unit_env, provider: AuthProvider, credential: str):
    account_service = await unit_env.get(AccountService)
    jwt_service = await unit_env.get(JWTService)
    registered = await account_service.register(provider, credential)
    return registered.account.id, jwt_service.create_token(registered.account.id)


async def _seed_source(unit_env, source_id: AccountId) -> None:
    item_repo = await unit_env.get(OwnedItemRepository)
    balance_repo = await unit_env.get(BalanceRepository)
    for item in make_items(source_id, ItemKind.COLLECTION, "kyoto", "nara", "kobe"):
        await item_repo.save(item)
    for item in make_items(source_id, ItemKind.ACHIEVEMENT, "first-trip"):
        await item_repo.save(item)
    await balance_repo.save(
        Balance(owner_id=source_id, kind=BalanceKind.EXPERIENCE, amount=50)
    )
    await balance_repo.save(Balance(owner_id=source_id, kind=BalanceKind.COINS, amount=7))


class TestMergeSummary:
    """Tests for MergeSummary."""

    def test_from_counts_maps_summation_keys(self):
        """Summation aggregates are reported under their merged-amount keys."""
        summary = MergeSummary.from_counts(
            {"collections": 3, "experience": 50, "balance": 7}
        )

        payload = summary.model_dump(by_alias=True)
        assert payload["collections"] == 3
        assert payload["expMerged"] == 50
        assert payload["balanceMerged"] == 7
        assert payload["itineraries"] == 0


class TestMergeAccountsUseCase:
    """Tests for MergeAccountsUseCase."""

    @pytest.mark.asyncio
    async def test_merge_returns_summary(self, unit_env):
        """A successful merge reports what moved."""
        # Arrange
        target_id, target_token = await _account_with_token(
            unit_env, AuthProvider.APPLE, "apple-a"
        )
        source_id, source_token = await _account_with_token(
            unit_env, AuthProvider.GOOGLE, "google-b"
        )
        await _seed_source(unit_env, source_id)
        use_case = await unit_env.get(MergeAccountsUseCase)

        # Act
        response = await use_case.execute(
            MergeAccountsRequest(target_token=target_token, source_token=source_token)
        )

        # Assert
        assert response.success is True
        assert response.replayed is False
        assert response.message == "Accounts merged"
        assert UUID(response.target_account_id) == target_id
        assert UUID(response.source_account_id) == source_id
        assert response.merged_at is not None
        assert response.summary.collections == 3
        assert response.summary.achievements == 1
        assert response.summary.exp_merged == 50
        assert response.summary.balance_merged == 7

    @pytest.mark.asyncio
    async def test_resubmitted_merge_is_replayed(self, unit_env):
        """An identical request after success returns the same summary."""
        # Arrange
        _, target_token = await _account_with_token(
            unit_env, AuthProvider.APPLE, "apple-a"
        )
        source_id, source_token = await _account_with_token(
            unit_env, AuthProvider.GOOGLE, "google-b"
        )
        await _seed_source(unit_env, source_id)
        use_case = await unit_env.get(MergeAccountsUseCase)
        request = MergeAccountsRequest(
            target_token=target_token, source_token=source_token
        )
        first = await use_case.execute(request)

        # Act
        second = await use_case.execute(request)

        # Assert
        assert second.replayed is True
        assert second.message == "Accounts were already merged"
        assert second.summary == first.summary
        assert second.merged_at == first.merged_at


class TestPreviewMergeUseCase:
    """Tests for PreviewMergeUseCase."""

    @pytest.mark.asyncio
    async def test_preview_reports_source_holdings(self, unit_env):
        """Preview shows the source's current data."""
        # Arrange
        _, target_token = await _account_with_token(
            unit_env, AuthProvider.APPLE, "apple-a"
        )
        source_id, source_token = await _account_with_token(
            unit_env, AuthProvider.GOOGLE, "google-b"
        )
        await _seed_source(unit_env, source_id)
        use_case = await unit_env.get(PreviewMergeUseCase)

        # Act
        response = await use_case.execute(
            PreviewMergeRequest(target_token=target_token, source_token=source_token)
        )

        # Assert
        assert response.summary.collections == 3
        assert response.summary.exp_merged == 50
        assert response.summary.balance_merged == 7


class TestGetMergeHistoryUseCase:
    """Tests for GetMergeHistoryUseCase."""

    @pytest.mark.asyncio
    async def test_history_reports_role_and_counterpart(self, unit_env):
        """Each side of a merge sees it from its own perspective."""
        # Arrange
        target_id, target_token = await _account_with_token(
            unit_env, AuthProvider.APPLE, "apple-a"
        )
        source_id, source_token = await _account_with_token(
            unit_env, AuthProvider.GOOGLE, "google-b"
        )
        merge = await unit_env.get(MergeAccountsUseCase)
        await merge.execute(
            MergeAccountsRequest(target_token=target_token, source_token=source_token)
        )
        use_case = await unit_env.get(GetMergeHistoryUseCase)

        # Act
        target_history = await use_case.execute(
            GetMergeHistoryRequest(account_id=str(target_id))
        )
        source_history = await use_case.execute(
            GetMergeHistoryRequest(account_id=str(source_id))
        )

        # Assert
        assert len(target_history.records) == 1
        target_item = target_history.records[0]
        assert target_item.role == "target"
        assert target_item.counterpart_account_id == str(source_id)
        assert target_item.status == MergeStatus.COMMITTED

        source_item = source_history.records[0]
        assert source_item.role == "source"
        assert source_item.counterpart_account_id == str(target_id)
        assert source_item.fingerprint == target_item.fingerprint
