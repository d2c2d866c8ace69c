"""Authentication domain service and its external collaborators."""

import logfire

from unify.adapter.error import ProviderError
from unify.domain.error import UnauthenticatedError, ValidationError
from unify.domain.value import AccountId, AuthProvider, VerifiedCredential

from .base import Service


class CredentialVerifier:
    """Generic credential verifier interface for all identity providers."""

    async def verify(self, credential: str) -> VerifiedCredential:
        """Verify a provider-issued credential (identity token).

        Args:
            credential: Opaque credential obtained by the client from the provider

        Returns:
            Verified subject information

        Raises:
            UnauthenticatedError: If the provider rejects the credential
        """
        raise NotImplementedError


class AccountAuthenticator:
    """Resolves a session credential to the account it was issued for."""

    async def authenticate(self, credential: str) -> AccountId:
        """Authenticate a session credential.

        Args:
            credential: Session token presented by the client

        Returns:
            ID of the authenticated account

        Raises:
            UnauthenticatedError: If the credential is invalid or expired
        """
        raise NotImplementedError


class SessionRevoker:
    """Revokes every live session of an account once it is disabled."""

    async def revoke_all(self, account_id: AccountId) -> None:
        """Revoke all sessions of an account.

        Args:
            account_id: Account that was disabled
        """
        raise NotImplementedError


class AuthService(Service):
    """Domain service for multi-provider credential verification.

    Coordinates verification across identity providers (Apple, Google).
    """

    def __init__(self, verifiers: dict[AuthProvider, CredentialVerifier]) -> None:
        """Initialize auth service.

        Args:
            verifiers: Map of provider to credential verifier implementation
        """
        self.verifiers = verifiers

    async def verify_credential(
        self, provider: AuthProvider, credential: str
    ) -> VerifiedCredential:
        """Verify a credential with the named provider.

        Args:
            provider: Identity provider that issued the credential
            credential: Provider identity token

        Returns:
            Verified subject information

        Raises:
            ValidationError: If provider not supported
            UnauthenticatedError: If the credential is rejected
        """
        verifier = self.verifiers.get(provider)
        if not verifier:
            raise ValidationError(f"Unsupported provider: {provider}")

        with logfire.span("auth_service.verify_credential", provider=provider.value):
            try:
                verified = await verifier.verify(credential)
            except ProviderError as e:
                logfire.warn(
                    "Credential rejected by provider",
                    provider=provider.value,
                    error=str(e),
                )
                raise UnauthenticatedError(str(e)) from e
            if verified.provider != provider:
                logfire.warn(
                    "Credential issued by another provider",
                    expected=provider.value,
                    actual=verified.provider.value,
                )
                raise UnauthenticatedError(f"Credential is not a {provider.value} token")
            logfire.info(
                "Credential verified",
                provider=provider.value,
                external_id=verified.external_id,
            )
            return verified
