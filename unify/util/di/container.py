"""Dependency injection container."""

from dishka import AsyncContainer, make_async_container

from unify.config import Settings
from unify.util.di import PROVIDERS, get_provider
from unify.util.observability import configure_logfire, instrument_httpx


def create_container() -> AsyncContainer:
    """Build production container (all prod implementations).

    Settings are loaded from environment variables automatically. Logfire
    is configured here, so the host application only needs to build the
    container and open a request scope per call.

    Returns:
        Configured DI container with production providers
    """
    configure_logfire(Settings())

    # Instrument httpx for outbound provider and revocation requests
    instrument_httpx()

    # Get provider instances - all are instantiated without arguments
    provider_instances = [get_provider(base, use_mock=False)() for base in PROVIDERS]
    return make_async_container(*provider_instances)
