"""Observability configuration using Logfire.

Services and use cases call logfire directly:

    with logfire.span("account_link_service.build_authorization_url", provider=kind):
        ...
    logfire.warn("Skipping GitHub profile", identity_id=..., reason=str(e))
"""

from typing import Any

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from idlink.config import Settings


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire.

    Telemetry is sent to Logfire cloud when OBSERVABILITY__SEND_TO_LOGFIRE
    is true, or when it is unset and OBSERVABILITY__LOGFIRE_TOKEN is
    present. Otherwise output is console-only.

    Args:
        settings: Application settings
    """
    if settings.observability.send_to_logfire is not None:
        send_to_logfire = settings.observability.send_to_logfire
    else:
        send_to_logfire = bool(settings.observability.logfire_token)

    config_kwargs: dict[str, Any] = {
        "service_name": "idlink",
        "service_version": settings.git_sha,
        "environment": settings.environment,
        "send_to_logfire": send_to_logfire,
        "console": logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    }
    if settings.observability.logfire_token:
        config_kwargs["token"] = settings.observability.logfire_token

    logfire.configure(**config_kwargs)

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
    )


def instrument_fastapi(app: FastAPI) -> None:
    """Trace every HTTP request handled by the app.

    Headers are not captured: requests carry the session cookie.
    """
    logfire.instrument_fastapi(app, capture_headers=False)
    logfire.info("FastAPI instrumented")


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace SQL queries issued through the engine."""
    logfire.instrument_sqlalchemy(engine=engine.sync_engine)
    logfire.info("SQLAlchemy instrumented")


def instrument_httpx() -> None:
    """Trace outbound provider requests (GitHub profile fetches)."""
    logfire.instrument_httpx()
    logfire.info("httpx instrumented")
