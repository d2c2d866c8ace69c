"""Tests for identity linking use cases."""

import pytest

from unify.application.usecase.account.register_account import (
    RegisterAccountRequest,
    RegisterAccountUseCase,
)
from unify.application.usecase.identity.bind_identity import (
    BindIdentityRequest,
    BindIdentityUseCase,
)
from unify.application.usecase.identity.get_identities import (
    GetIdentitiesRequest,
    GetIdentitiesUseCase,
)
from unify.application.usecase.identity.set_primary_identity import (
    SetPrimaryIdentityRequest,
    SetPrimaryIdentityUseCase,
)
from unify.application.usecase.identity.unlink_identity import (
    UnlinkIdentityRequest,
    UnlinkIdentityUseCase,
)
from unify.domain.error import CannotUnlinkPrimaryError
from unify.domain.value import AuthProvider
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


async def _register(unit_env, provider: AuthProvider, token: str) -> str:
    use_case = await unit_env.get(RegisterAccountUseCase)
    response = await use_case.execute(
        RegisterAccountRequest(provider=provider, identity_token=token)
    )
    return response.account_id


class TestRegisterAccountUseCase:
    """Tests for RegisterAccountUseCase."""

    @pytest.mark.asyncio
    async def test_register_creates_primary_identity(self, unit_env):
        """The first identity of a new account is primary."""
        # Arrange
        use_case = await unit_env.get(RegisterAccountUseCase)

        # Act
        response = await use_case.execute(
            RegisterAccountRequest(
                provider=AuthProvider.APPLE, identity_token="apple-a|a@example.com"
            )
        )

        # Assert
        assert response.identity.provider == AuthProvider.APPLE
        assert response.identity.provider_id == "apple-a"
        assert response.identity.email == "a@example.com"
        assert response.identity.is_primary is True


class TestBindAndListIdentities:
    """Tests for BindIdentityUseCase and GetIdentitiesUseCase."""

    @pytest.mark.asyncio
    async def test_bound_identity_is_listed(self, unit_env):
        """Linked identities are listed with camelCase keys."""
        # Arrange
        account_id = await _register(unit_env, AuthProvider.APPLE, "apple-a")
        bind = await unit_env.get(BindIdentityUseCase)
        get_identities = await unit_env.get(GetIdentitiesUseCase)

        # Act
        bound = await bind.execute(
            BindIdentityRequest(
                account_id=account_id,
                provider=AuthProvider.GOOGLE,
                identity_token="google-a|a@gmail.com",
            )
        )
        listing = await get_identities.execute(
            GetIdentitiesRequest(account_id=account_id)
        )

        # Assert
        assert bound.success is True
        assert bound.identity.is_primary is False
        assert len(listing.identities) == 2
        primary = next(i for i in listing.identities if i.is_primary)
        assert listing.primary == primary.id

        payload = listing.identities[1].model_dump(by_alias=True)
        assert payload["providerId"] == "google-a"
        assert payload["isPrimary"] is False
        assert "linkedAt" in payload


class TestUnlinkAndSetPrimary:
    """Tests for UnlinkIdentityUseCase and SetPrimaryIdentityUseCase."""

    @pytest.mark.asyncio
    async def test_reassign_primary_then_unlink_old_primary(self, unit_env):
        """The old primary can be unlinked after another one is chosen."""
        # Arrange
        account_id = await _register(unit_env, AuthProvider.APPLE, "apple-a")
        bind = await unit_env.get(BindIdentityUseCase)
        unlink = await unit_env.get(UnlinkIdentityUseCase)
        set_primary = await unit_env.get(SetPrimaryIdentityUseCase)
        get_identities = await unit_env.get(GetIdentitiesUseCase)
        google = (
            await bind.execute(
                BindIdentityRequest(
                    account_id=account_id,
                    provider=AuthProvider.GOOGLE,
                    identity_token="google-a",
                )
            )
        ).identity
        apple_id = (
            await get_identities.execute(GetIdentitiesRequest(account_id=account_id))
        ).primary

        # Act & Assert - primary cannot be unlinked
        with pytest.raises(CannotUnlinkPrimaryError):
            await unlink.execute(
                UnlinkIdentityRequest(account_id=account_id, identity_id=apple_id)
            )

        # Act
        switched = await set_primary.execute(
            SetPrimaryIdentityRequest(account_id=account_id, identity_id=google.id)
        )
        unlinked = await unlink.execute(
            UnlinkIdentityRequest(account_id=account_id, identity_id=apple_id)
        )

        # Assert
        assert switched.primary == google.id
        assert unlinked.success is True
        listing = await get_identities.execute(
            GetIdentitiesRequest(account_id=account_id)
        )
        assert [i.id for i in listing.identities] == [google.id]
        assert listing.primary == google.id
