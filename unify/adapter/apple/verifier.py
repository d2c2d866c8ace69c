"""Sign in with Apple identity token verification.

Apple identity tokens are RS256 JWTs signed with one of the keys published
at https://appleid.apple.com/auth/keys. The ``sub`` claim is the stable,
team-scoped user identifier.
"""

import asyncio

import jwt
import logfire

from unify.adapter.error import ProviderError
from unify.domain.service.auth_service import CredentialVerifier
from unify.domain.value import AuthProvider, VerifiedCredential


class AppleCredentialVerifier(CredentialVerifier):
    """Base class for Apple credential verifiers.

    Provides type distinction for dependency injection.
    """

    pass


class RealAppleCredentialVerifier(AppleCredentialVerifier):
    """Verifies Apple identity tokens against Apple's published JWKS."""

    def __init__(self, client_id: str, issuer: str, keys_url: str) -> None:
        """Initialize Apple verifier.

        Args:
            client_id: Services ID or bundle ID the token must be issued for
            issuer: Expected ``iss`` claim
            keys_url: Apple JWKS endpoint
        """
        self.client_id = client_id
        self.issuer = issuer
        # PyJWKClient caches fetched keys between calls
        self._jwk_client = jwt.PyJWKClient(keys_url, cache_keys=True)

    async def verify(self, credential: str) -> VerifiedCredential:
        """Verify an Apple identity token.

        Raises:
            ProviderError: If the token is malformed, expired, not signed by
                Apple or issued for another client
        """
        try:
            # Key lookup does blocking HTTP on a cache miss
            signing_key = await asyncio.to_thread(
                self._jwk_client.get_signing_key_from_jwt, credential
            )
            claims = jwt.decode(
                credential,
                signing_key.key,
                algorithms=["RS256"],
                audience=self.client_id,
                issuer=self.issuer,
            )
        except jwt.PyJWKClientError as e:
            logfire.error("Apple signing key lookup failed", error=str(e))
            raise ProviderError(f"Apple signing key unavailable: {e}") from e
        except jwt.InvalidTokenError as e:
            logfire.warn("Apple identity token rejected", error=str(e))
            raise ProviderError(f"Invalid Apple identity token: {e}") from e

        subject = claims.get("sub")
        if not subject:
            raise ProviderError("Apple identity token has no subject")

        return VerifiedCredential(
            provider=AuthProvider.APPLE,
            external_id=subject,
            # Only present on first sign-in or when the user shares it
            email=claims.get("email"),
        )


class MockAppleCredentialVerifier(AppleCredentialVerifier):
    """Mock Apple verifier for testing.

    Accepts credentials of the form ``"<sub>"`` or ``"<sub>|<email>"``.
    Credentials starting with ``"invalid"`` are rejected.
    """

    def __init__(self):
        """Initialize mock verifier without Apple configuration."""
        pass

    async def verify(self, credential: str) -> VerifiedCredential:
        if not credential or credential.startswith("invalid"):
            raise ProviderError("Mock Apple token rejected")
        subject, _, email = credential.partition("|")
        return VerifiedCredential(
            provider=AuthProvider.APPLE,
            external_id=subject,
            email=email or None,
        )
