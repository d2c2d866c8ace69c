"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from unify.config import AuthSettings, MergeSettings, Settings
from unify.util.di.base import ProviderBase
from unify.util.error import ConfigurationError
from unify.util.locks import AccountLocks


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        settings = Settings()
        if (
            settings.environment == "production"
            and settings.auth.jwt_secret == "CHANGE_ME_IN_PRODUCTION"
        ):
            raise ConfigurationError("AUTH__JWT_SECRET must be set in production")
        return settings

    @provide(scope=Scope.APP)
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        """Provide auth settings."""
        return settings.auth

    @provide(scope=Scope.APP)
    def provide_merge_settings(self, settings: Settings) -> MergeSettings:
        """Provide merge settings."""
        return settings.merge

    @provide(scope=Scope.APP)
    def provide_account_locks(self) -> AccountLocks:
        """Provide per-account locks shared by every request in the process."""
        return AccountLocks()
