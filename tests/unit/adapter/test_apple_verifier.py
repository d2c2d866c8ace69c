"""Unit tests for Sign in with Apple identity token verification."""

from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import jwt
import pytest
from cryptography.hazmat.primitives.asymmetric import rsa

from unify.adapter.apple import RealAppleCredentialVerifier
from unify.adapter.error import ProviderError
from unify.domain.value import AuthProvider

CLIENT_ID = "com.example.unify"
ISSUER = "https://appleid.apple.com"


@pytest.fixture
def signing_key():
    """RSA key standing in for one of Apple's published keys."""
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture
def verifier(signing_key):
    """Verifier whose JWKS lookup returns the test key."""
    verifier = RealAppleCredentialVerifier(
        client_id=CLIENT_ID,
        issuer=ISSUER,
        keys_url="https://appleid.apple.com/auth/keys",
    )
    verifier._jwk_client = MagicMock()
    verifier._jwk_client.get_signing_key_from_jwt.return_value = MagicMock(
        key=signing_key.public_key()
    )
    return verifier


def _token(signing_key, **overrides) -> str:
    claims = {
        "iss": ISSUER,
        "aud": CLIENT_ID,
        "sub": "001234.abcdef.0420",
        "email": "a@privaterelay.appleid.com",
        "exp": datetime.now(timezone.utc) + timedelta(minutes=5),
    }
    claims.update(overrides)
    return jwt.encode(claims, signing_key, algorithm="RS256")


class TestRealAppleCredentialVerifier:
    """Tests for RealAppleCredentialVerifier."""

    @pytest.mark.asyncio
    async def test_verifies_signed_token(self, verifier, signing_key):
        """Should return the stable subject and email."""
        result = await verifier.verify(_token(signing_key))

        assert result.provider == AuthProvider.APPLE
        assert result.external_id == "001234.abcdef.0420"
        assert result.email == "a@privaterelay.appleid.com"

    @pytest.mark.asyncio
    async def test_rejects_token_for_other_client(self, verifier, signing_key):
        """Audience must be this app."""
        with pytest.raises(ProviderError, match="Invalid Apple identity token"):
            await verifier.verify(_token(signing_key, aud="com.example.other"))

    @pytest.mark.asyncio
    async def test_rejects_expired_token(self, verifier, signing_key):
        """Expired tokens are rejected."""
        expired = datetime.now(timezone.utc) - timedelta(minutes=5)

        with pytest.raises(ProviderError):
            await verifier.verify(_token(signing_key, exp=expired))

    @pytest.mark.asyncio
    async def test_rejects_token_signed_by_other_key(self, verifier):
        """Signature must match Apple's key."""
        other_key = rsa.generate_private_key(public_exponent=65537, key_size=2048)

        with pytest.raises(ProviderError):
            await verifier.verify(_token(other_key))

    @pytest.mark.asyncio
    async def test_key_lookup_failure_becomes_provider_error(self, verifier, signing_key):
        """JWKS outages surface as provider errors."""
        verifier._jwk_client.get_signing_key_from_jwt.side_effect = jwt.PyJWKClientError(
            "Fail to fetch data from the url"
        )

        with pytest.raises(ProviderError, match="signing key unavailable"):
            await verifier.verify(_token(signing_key))
