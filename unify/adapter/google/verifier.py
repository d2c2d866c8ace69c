"""Google ID token verification via the tokeninfo endpoint."""

import httpx
import logfire

from unify.adapter.error import ProviderError
from unify.domain.service.auth_service import CredentialVerifier
from unify.domain.value import AuthProvider, VerifiedCredential

GOOGLE_ISSUERS = ("accounts.google.com", "https://accounts.google.com")


class GoogleCredentialVerifier(CredentialVerifier):
    """Base class for Google credential verifiers.

    Provides type distinction for dependency injection.
    """

    pass


class RealGoogleCredentialVerifier(GoogleCredentialVerifier):
    """Verifies Google ID tokens with Google's tokeninfo endpoint.

    Google checks signature and expiry; this side checks the audience and
    issuer.
    """

    def __init__(
        self, client_ids: list[str], tokeninfo_url: str, timeout: float = 10.0
    ) -> None:
        """Initialize Google verifier.

        Args:
            client_ids: OAuth client IDs accepted as the token audience
            tokeninfo_url: Google tokeninfo endpoint
            timeout: Request timeout in seconds
        """
        self.client_ids = client_ids
        self.tokeninfo_url = tokeninfo_url
        self.timeout = timeout

    async def verify(self, credential: str) -> VerifiedCredential:
        """Verify a Google ID token.

        Raises:
            ProviderError: If Google rejects the token, it was issued for
                another client, or Google cannot be reached
        """
        claims = await self._fetch_token_info(credential)

        if claims.get("aud") not in self.client_ids:
            logfire.warn("Google token audience mismatch", aud=claims.get("aud"))
            raise ProviderError("Google ID token issued for another client")
        if claims.get("iss") not in GOOGLE_ISSUERS:
            raise ProviderError(f"Unexpected Google token issuer: {claims.get('iss')}")

        subject = claims.get("sub")
        if not subject:
            raise ProviderError("Google ID token has no subject")

        # tokeninfo returns booleans as strings
        email_verified = str(claims.get("email_verified", "false")).lower() == "true"
        return VerifiedCredential(
            provider=AuthProvider.GOOGLE,
            external_id=subject,
            email=claims.get("email") if email_verified else None,
        )

    async def _fetch_token_info(self, credential: str) -> dict:
        """Ask Google to validate the token.

        Raises:
            ProviderError: If the request fails or the token is rejected
        """
        try:
            async with httpx.AsyncClient() as client:
                response = await client.get(
                    self.tokeninfo_url,
                    params={"id_token": credential},
                    timeout=self.timeout,
                )
        except httpx.HTTPError as e:
            logfire.error("Google tokeninfo HTTP error", error=str(e))
            raise ProviderError(f"HTTP error verifying Google token: {e}") from e

        if response.status_code != 200:
            logfire.warn(
                "Google token rejected",
                status_code=response.status_code,
                error=response.text,
            )
            raise ProviderError(f"Google token rejected: {response.status_code}")

        return response.json()


class MockGoogleCredentialVerifier(GoogleCredentialVerifier):
    """Mock Google verifier for testing.

    Accepts credentials of the form ``"<sub>"`` or ``"<sub>|<email>"``.
    Credentials starting with ``"invalid"`` are rejected.
    """

    def __init__(self):
        """Initialize mock verifier without Google configuration."""
        pass

    async def verify(self, credential: str) -> VerifiedCredential:
        if not credential or credential.startswith("invalid"):
            raise ProviderError("Mock Google token rejected")
        subject, _, email = credential.partition("|")
        return VerifiedCredential(
            provider=AuthProvider.GOOGLE,
            external_id=subject,
            email=email or None,
        )
