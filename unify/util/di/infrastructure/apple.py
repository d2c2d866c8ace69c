"""Apple infrastructure providers."""

from dishka import Scope, provide

from unify.adapter.apple import AppleCredentialVerifier, RealAppleCredentialVerifier
from unify.config import Settings
from unify.util.di.base import ProviderBase
from unify.util.error import ConfigurationError


class AppleProvider(ProviderBase):
    """Apple component base."""

    __mock_component__ = "apple"


class ProdAppleProvider(AppleProvider):
    """Production Apple provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_apple_verifier(self, settings: Settings) -> AppleCredentialVerifier:
        """Provide Apple identity token verifier.

        Raises:
            ConfigurationError: If the Apple client ID is not configured
        """
        apple = settings.auth.apple
        if not apple.client_id:
            raise ConfigurationError("Apple client ID must be configured")

        return RealAppleCredentialVerifier(
            client_id=apple.client_id,
            issuer=apple.issuer,
            keys_url=apple.keys_url,
        )
