"""Google infrastructure providers."""

from dishka import Scope, provide

from unify.adapter.google import GoogleCredentialVerifier, RealGoogleCredentialVerifier
from unify.config import Settings
from unify.util.di.base import ProviderBase
from unify.util.error import ConfigurationError


class GoogleProvider(ProviderBase):
    """Google component base."""

    __mock_component__ = "google"


class ProdGoogleProvider(GoogleProvider):
    """Production Google provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_google_verifier(self, settings: Settings) -> GoogleCredentialVerifier:
        """Provide Google ID token verifier.

        Raises:
            ConfigurationError: If no Google client ID is configured
        """
        google = settings.auth.google
        if not google.client_ids:
            raise ConfigurationError("At least one Google client ID must be configured")

        return RealGoogleCredentialVerifier(
            client_ids=google.client_ids,
            tokeninfo_url=google.tokeninfo_url,
            timeout=google.timeout_seconds,
        )
