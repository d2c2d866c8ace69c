"""Session revocation infrastructure providers."""

from dishka import Scope, provide

from unify.adapter.session import HttpSessionRevoker
from unify.config import Settings
from unify.domain.service import SessionRevoker
from unify.util.di.base import ProviderBase


class SessionProvider(ProviderBase):
    """Session revocation component base."""

    __mock_component__ = "session"


class ProdSessionProvider(SessionProvider):
    """Production session revocation provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_session_revoker(self, settings: Settings) -> SessionRevoker:
        """Provide HTTP session revoker."""
        return HttpSessionRevoker(
            revocation_url=settings.session.revocation_url,
            service_token=settings.session.service_token,
            timeout=settings.session.timeout_seconds,
        )
