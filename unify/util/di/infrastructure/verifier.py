"""Credential verifier provider for multi-provider identity linking."""

from dishka import Scope, provide

from unify.adapter.apple import AppleCredentialVerifier
from unify.adapter.google import GoogleCredentialVerifier
from unify.domain.service import CredentialVerifier
from unify.domain.value import AuthProvider
from unify.util.di.base import ProviderBase


class VerifierAggregatorProvider(ProviderBase):
    """Provider that aggregates all credential verifiers into a dictionary."""

    scope = Scope.APP

    @provide(scope=Scope.APP)
    def get_credential_verifiers(
        self,
        apple_verifier: AppleCredentialVerifier,
        google_verifier: GoogleCredentialVerifier,
    ) -> dict[AuthProvider, CredentialVerifier]:
        """Provide dictionary of all credential verifiers by provider.

        This allows the AuthService to support multiple identity providers.

        Args:
            apple_verifier: Apple verifier (specific type)
            google_verifier: Google verifier (specific type)

        Returns:
            Dictionary mapping AuthProvider to CredentialVerifier
        """
        return {
            AuthProvider.APPLE: apple_verifier,
            AuthProvider.GOOGLE: google_verifier,
        }
