"""Logfire setup for the account service.

Domain services open one span per operation, named
``<service>.<operation>`` (``merge_orchestrator.request_merge``,
``identity_service.bind_identity``), and emit events inside it:

    with logfire.span("identity_service.unlink_identity", account_id=str(account_id)):
        logfire.info("Identity unlinked", identity_id=str(identity_id))

Merge events carry the first 12 characters of the fingerprint so a merge
can be followed across retries.
"""

import logfire
from sqlalchemy.ext.asyncio import AsyncEngine

from unify.config import Settings

SERVICE_NAME = "unify-accounts"


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire once per process.

    Called by ``create_container`` and by the scripts before they do any
    work. Telemetry is sent to Logfire cloud when explicitly enabled, or
    when a token is configured and sending is not explicitly disabled.
    The console shows everything in development and only warnings and
    above elsewhere.

    Args:
        settings: Application settings
    """
    observability = settings.observability
    send_to_logfire = (
        observability.send_to_logfire
        if observability.send_to_logfire is not None
        else bool(observability.logfire_token)
    )

    console = logfire.ConsoleOptions(
        colors="auto",
        span_style="show-parents",
        include_timestamps=True,
        verbose=settings.debug,
        min_log_level="debug" if settings.environment == "development" else "warn",
    )

    logfire.configure(
        service_name=SERVICE_NAME,
        # Deployed images ship their commit in /app/version.txt
        service_version=settings.git_sha,
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
        token=observability.logfire_token,
        console=console,
    )

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        version=settings.git_sha,
        send_to_logfire=send_to_logfire,
    )


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace every statement the ledger and repositories run on ``engine``.

    Checkpoint commits of the merge orchestrator show up as separate
    transactions under the merge span.
    """
    logfire.instrument_sqlalchemy(
        engine=engine.sync_engine,
        enable_commenter=True,  # Add SQL comments with span context
    )
    logfire.info("SQLAlchemy instrumented")


def instrument_httpx() -> None:
    """Trace outbound calls to Google tokeninfo and the session service."""
    logfire.instrument_httpx()
    logfire.info("httpx instrumented")
