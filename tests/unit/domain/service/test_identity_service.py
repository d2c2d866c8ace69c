"""Unit tests for IdentityService."""

from uuid import uuid4

import pytest

from unify.domain.error import (
    CannotUnlinkPrimaryError,
    IdentityConflictError,
    LastIdentityError,
    NotFoundError,
    SourceAlreadyDisabledError,
    UnauthenticatedError,
)
from unify.domain.service import AccountService, IdentityService
from unify.domain.value import AccountId, AuthProvider, DisabledReason, IdentityId
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no database needed
unit_env = create_env_fixture()


class TestBindIdentity:
    """Tests for bind_identity method."""

    @pytest.mark.asyncio
    async def test_bind_adds_non_primary_identity(self, unit_env):
        """Binding a second provider should keep the first identity primary."""
        # Arrange
        account_service = await unit_env.get(AccountService)
        identity_service = await unit_env.get(IdentityService)
        registered = await account_service.register(
            AuthProvider.APPLE, "apple-a|a@example.com"
        )
        account_id = registered.account.id

        # Act
        identity = await identity_service.bind_identity(
            account_id, AuthProvider.GOOGLE, "google-a|a@gmail.com"
        )

        # Assert
        assert identity.account_id == account_id
        assert identity.provider == AuthProvider.GOOGLE
        assert identity.external_id == "google-a"
        assert identity.email == "a@gmail.com"
        assert identity.is_primary is False

        listing = await identity_service.list_identities(account_id)
        assert len(listing.identities) == 2
        assert listing.primary_id == registered.identity.id

    @pytest.mark.asyncio
    async def test_rebinding_own_identity_is_noop(self, unit_env):
        """Binding an identity the account already owns returns it unchanged."""
        # Arrange
        account_service = await unit_env.get(AccountService)
        identity_service = await unit_env.get(IdentityService)
        registered = await account_service.register(AuthProvider.APPLE, "apple-a")

        # Act
        identity = await identity_service.bind_identity(
            registered.account.id, AuthProvider.APPLE, "apple-a"
        )

        # Assert
        assert identity == registered.identity
        listing = await identity_service.list_identities(registered.account.id)
        assert len(listing.identities) == 1

    @pytest.mark.asyncio
    async def test_bind_identity_of_other_account_raises_conflict(self, unit_env):
        """An identity linked elsewhere cannot be bound."""
        # Arrange
        account_service = await unit_env.get(AccountService)
        identity_service = await unit_env.get(IdentityService)
        first = await account_service.register(AuthProvider.APPLE, "apple-a")
        await account_service.register(AuthProvider.GOOGLE, "google-b")

        # Act & Assert
        with pytest.raises(IdentityConflictError) as exc_info:
            await identity_service.bind_identity(
                first.account.id, AuthProvider.GOOGLE, "google-b"
            )
        assert exc_info.value.code == "E1016"

        listing = await identity_service.list_identities(first.account.id)
        assert len(listing.identities) == 1

    @pytest.mark.asyncio
    async def test_bind_with_rejected_credential_raises_unauthenticated(
        self, unit_env
    ):
        """A credential the provider rejects should not link anything."""
        # Arrange
        account_service = await unit_env.get(AccountService)
        identity_service = await unit_env.get(IdentityService)
        registered = await account_service.register(AuthProvider.APPLE, "apple-a")

        # Act & Assert
        with pytest.raises(UnauthenticatedError):
            await identity_service.bind_identity(
                registered.account.id, AuthProvider.GOOGLE, "invalid-token"
            )

    @pytest.mark.asyncio
    async def test_bind_to_disabled_account_raises_error(self, unit_env):
        """Disabled accounts accept no identity changes."""
        # Arrange
        account_service = await unit_env.get(AccountService)
        identity_service = await unit_env.get(IdentityService)
        registered = await account_service.register(AuthProvider.APPLE, "apple-a")
        await account_service.disable(registered.account.id, DisabledReason.DELETED)

        # Act & Assert
        with pytest.raises(SourceAlreadyDisabledError):
            await identity_service.bind_identity(
                registered.account.id, AuthProvider.GOOGLE, "google-a"
            )

    @pytest.mark.asyncio
    async def test_bind_to_missing_account_raises_not_found(self, unit_env):
        """Binding to an unknown account should raise NotFoundError."""
        identity_service = await unit_env.get(IdentityService)

        with pytest.raises(NotFoundError):
            await identity_service.bind_identity(
                AccountId(uuid4()), AuthProvider.GOOGLE, "google-a"
            )


class TestUnlinkIdentity:
    """Tests for unlink_identity method."""

    @pytest.mark.asyncio
    async def test_unlink_only_identity_raises_error(self, unit_env):
        """The last login method of an account cannot be removed."""
        # Arrange
        account_service = await unit_env.get(AccountService)
        identity_service = await unit_env.get(IdentityService)
        registered = await account_service.register(AuthProvider.APPLE, "apple-a")

        # Act & Assert
        with pytest.raises(LastIdentityError) as exc_info:
            await identity_service.unlink_identity(
                registered.account.id, registered.identity.id
            )
        assert exc_info.value.code == "E1015"

    @pytest.mark.asyncio
    async def test_unlink_primary_raises_error(self, unit_env):
        """The primary identity cannot be removed while it is primary."""
        # Arrange
        account_service = await unit_env.get(AccountService)
        identity_service = await unit_env.get(IdentityService)
        registered = await account_service.register(AuthProvider.APPLE, "apple-a")
        await identity_service.bind_identity(
            registered.account.id, AuthProvider.GOOGLE, "google-a"
        )

        # Act & Assert
        with pytest.raises(CannotUnlinkPrimaryError) as exc_info:
            await identity_service.unlink_identity(
                registered.account.id, registered.identity.id
            )
        assert exc_info.value.code == "E1017"

    @pytest.mark.asyncio
    async def test_unlink_secondary_identity(self, unit_env):
        """A non-primary identity can be removed."""
        # Arrange
        account_service = await unit_env.get(AccountService)
        identity_service = await unit_env.get(IdentityService)
        registered = await account_service.register(AuthProvider.APPLE, "apple-a")
        google = await identity_service.bind_identity(
            registered.account.id, AuthProvider.GOOGLE, "google-a"
        )

        # Act
        await identity_service.unlink_identity(registered.account.id, google.id)

        # Assert
        listing = await identity_service.list_identities(registered.account.id)
        assert [i.id for i in listing.identities] == [registered.identity.id]
        assert listing.primary_id == registered.identity.id

    @pytest.mark.asyncio
    async def test_unlink_identity_of_other_account_raises_not_found(self, unit_env):
        """Identities can only be unlinked by the account that owns them."""
        # Arrange
        account_service = await unit_env.get(AccountService)
        identity_service = await unit_env.get(IdentityService)
        first = await account_service.register(AuthProvider.APPLE, "apple-a")
        second = await account_service.register(AuthProvider.APPLE, "apple-b")

        # Act & Assert
        with pytest.raises(NotFoundError):
            await identity_service.unlink_identity(
                first.account.id, second.identity.id
            )


class TestSetPrimary:
    """Tests for set_primary method."""

    @pytest.mark.asyncio
    async def test_set_primary_moves_flag(self, unit_env):
        """Exactly one identity stays primary after reassignment."""
        # Arrange
        account_service = await unit_env.get(AccountService)
        identity_service = await unit_env.get(IdentityService)
        registered = await account_service.register(AuthProvider.APPLE, "apple-a")
        google = await identity_service.bind_identity(
            registered.account.id, AuthProvider.GOOGLE, "google-a"
        )

        # Act
        listing = await identity_service.set_primary(registered.account.id, google.id)

        # Assert
        primaries = [i for i in listing.identities if i.is_primary]
        assert [i.id for i in primaries] == [google.id]
        assert listing.primary_id == google.id

        # The former primary can now be unlinked
        await identity_service.unlink_identity(
            registered.account.id, registered.identity.id
        )
        listing = await identity_service.list_identities(registered.account.id)
        assert [i.id for i in listing.identities] == [google.id]

    @pytest.mark.asyncio
    async def test_set_primary_on_current_primary_is_noop(self, unit_env):
        """Selecting the current primary changes nothing."""
        account_service = await unit_env.get(AccountService)
        identity_service = await unit_env.get(IdentityService)
        registered = await account_service.register(AuthProvider.APPLE, "apple-a")

        listing = await identity_service.set_primary(
            registered.account.id, registered.identity.id
        )

        assert listing.primary_id == registered.identity.id
        assert listing.identities == [registered.identity]

    @pytest.mark.asyncio
    async def test_set_primary_unknown_identity_raises_not_found(self, unit_env):
        """Unknown identity IDs are rejected."""
        account_service = await unit_env.get(AccountService)
        identity_service = await unit_env.get(IdentityService)
        registered = await account_service.register(AuthProvider.APPLE, "apple-a")

        with pytest.raises(NotFoundError):
            await identity_service.set_primary(
                registered.account.id, IdentityId(uuid4())
            )


class TestReassignAll:
    """Tests for reassign_all method."""

    @pytest.mark.asyncio
    async def test_reassign_moves_identities_as_non_primary(self, unit_env):
        """Moved identities join the target without taking its primary."""
        # Arrange
        account_service = await unit_env.get(AccountService)
        identity_service = await unit_env.get(IdentityService)
        target = await account_service.register(AuthProvider.APPLE, "apple-a")
        source = await account_service.register(AuthProvider.GOOGLE, "google-b")

        # Act
        moved = await identity_service.reassign_all(source.account.id, target.account.id)

        # Assert
        assert [i.id for i in moved] == [source.identity.id]
        listing = await identity_service.list_identities(target.account.id)
        assert len(listing.identities) == 2
        assert listing.primary_id == target.identity.id
        assert sum(1 for i in listing.identities if i.is_primary) == 1

        source_listing = await identity_service.list_identities(source.account.id)
        assert source_listing.identities == []
        assert source_listing.primary_id is None
