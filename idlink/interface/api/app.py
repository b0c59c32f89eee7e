"""FastAPI application."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from idlink.config import Settings
from idlink.interface.api.routes import account, health, profile
from idlink.util.di.container import create_container, setup_di
from idlink.util.observability import instrument_fastapi, instrument_httpx


def create_app() -> FastAPI:
    """Create FastAPI application.

    Logfire must be configured before this is called (scripts/start_app.py
    does so).
    """
    settings = Settings()

    instrument_httpx()

    app_instance = FastAPI(
        title="idlink",
        description="Identity linking and aggregated profiles across Nostr and OAuth providers",
        version="0.1.0",
    )

    instrument_fastapi(app_instance)

    # Cookie sessions need credentials and an explicit origin
    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.api.frontend_url],
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Accept", "Origin"],
        max_age=600,
    )

    container = create_container()
    setup_di(app_instance, container)

    app_instance.include_router(health.router)
    app_instance.include_router(account.router)
    app_instance.include_router(profile.router)

    return app_instance
