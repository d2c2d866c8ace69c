"""Unit tests for AuthService and JWTService."""

from datetime import timedelta
from uuid import uuid4

import pytest

from unify.adapter.apple import MockAppleCredentialVerifier
from unify.adapter.google import MockGoogleCredentialVerifier
from unify.config import AuthSettings
from unify.domain.error import UnauthenticatedError, ValidationError
from unify.domain.service import AuthService, JWTService
from unify.domain.value import AccountId, AuthProvider
from unify.util.jwt import JWTError, create_token, verify_token
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no database needed
unit_env = create_env_fixture()

SETTINGS = AuthSettings(jwt_secret="test-secret-with-enough-length-for-hs256")


class TestAuthService:
    """Tests for AuthService."""

    @pytest.mark.asyncio
    async def test_verify_credential_with_provider(self, unit_env):
        """Credentials are verified by the named provider."""
        auth_service = await unit_env.get(AuthService)

        verified = await auth_service.verify_credential(
            AuthProvider.APPLE, "apple-a|a@example.com"
        )

        assert verified.provider == AuthProvider.APPLE
        assert verified.external_id == "apple-a"

    @pytest.mark.asyncio
    async def test_rejected_credential_raises_unauthenticated(self, unit_env):
        """Provider rejections become authentication errors."""
        auth_service = await unit_env.get(AuthService)

        with pytest.raises(UnauthenticatedError) as exc_info:
            await auth_service.verify_credential(AuthProvider.GOOGLE, "invalid")
        assert exc_info.value.code == "E1003"

    @pytest.mark.asyncio
    async def test_token_from_other_provider_rejected(self):
        """A Google token presented as Apple is rejected."""
        auth_service = AuthService(
            verifiers={AuthProvider.APPLE: MockGoogleCredentialVerifier()}
        )

        with pytest.raises(UnauthenticatedError, match="not a apple token"):
            await auth_service.verify_credential(AuthProvider.APPLE, "google-a")

    @pytest.mark.asyncio
    async def test_unsupported_provider_rejected(self):
        """Providers without a verifier are rejected."""
        auth_service = AuthService(
            verifiers={AuthProvider.APPLE: MockAppleCredentialVerifier()}
        )

        with pytest.raises(ValidationError, match="Unsupported provider"):
            await auth_service.verify_credential(AuthProvider.GOOGLE, "google-a")


class TestJWTService:
    """Tests for JWTService."""

    @pytest.mark.asyncio
    async def test_authenticate_round_trips_account_id(self):
        """A token issued for an account authenticates as that account."""
        jwt_service = JWTService(auth_settings=SETTINGS)
        account_id = AccountId(uuid4())

        assert await jwt_service.authenticate(jwt_service.create_token(account_id)) == account_id

    @pytest.mark.asyncio
    async def test_expired_token_rejected(self):
        """Expired session tokens do not authenticate."""
        jwt_service = JWTService(auth_settings=SETTINGS)
        token = create_token(str(uuid4()), SETTINGS, expires_in=timedelta(seconds=-1))

        with pytest.raises(UnauthenticatedError, match="expired"):
            await jwt_service.authenticate(token)

    @pytest.mark.asyncio
    async def test_token_signed_with_other_secret_rejected(self):
        """Tokens from another issuer do not authenticate."""
        jwt_service = JWTService(auth_settings=SETTINGS)
        other = AuthSettings(jwt_secret="another-secret-with-enough-length-too")
        token = create_token(str(uuid4()), other)

        with pytest.raises(UnauthenticatedError, match="Invalid token"):
            await jwt_service.authenticate(token)

    @pytest.mark.asyncio
    async def test_empty_credential_rejected(self):
        """Missing tokens do not authenticate."""
        jwt_service = JWTService(auth_settings=SETTINGS)

        with pytest.raises(UnauthenticatedError, match="Missing credential"):
            await jwt_service.authenticate("")

    @pytest.mark.asyncio
    async def test_non_uuid_subject_rejected(self):
        """Tokens must carry an account UUID."""
        jwt_service = JWTService(auth_settings=SETTINGS)
        token = create_token("not-a-uuid", SETTINGS)

        with pytest.raises(UnauthenticatedError):
            await jwt_service.authenticate(token)


class TestJWTUtil:
    """Tests for token helpers."""

    def test_verify_token_returns_payload(self):
        """Payload carries the account ID."""
        token = create_token("abc", SETTINGS)

        assert verify_token(token, SETTINGS).account_id == "abc"

    def test_verify_garbage_raises(self):
        """Malformed tokens raise JWTError."""
        with pytest.raises(JWTError):
            verify_token("garbage", SETTINGS)
