"""
app.py

Responsibility: Builds the FastAPI application: the lifespan that owns the
shared httpx.AsyncClient and the AppContext, and the update router.
Does NOT: parse the command line, configure logging, or run the server.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI

from config import Settings
from context import build_context, build_security_config
from providers.digitalocean_client import DigitalOceanClient
from providers.dns_provider import RecordStore
from routes.ddns_routes import build_router
from services.rate_limiter import TokenBucket

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Application version: update here on every release
# ---------------------------------------------------------------------------

APP_VERSION = "v1.0.0"


def create_app(
    settings: Settings,
    store: RecordStore | None = None,
    rate_limiter: TokenBucket | None = None,
) -> FastAPI:
    """
    Creates the FastAPI application for the given settings.

    The security token is resolved here, once, so a derived token is logged
    a single time per process.

    Args:
        settings: Validated process settings.
        store: RecordStore to use instead of the DigitalOcean client.
        rate_limiter: Token bucket to use instead of one built from settings.

    Returns:
        The configured FastAPI application.
    """
    security = build_security_config(settings)
    limiter = rate_limiter
    if limiter is None:
        limiter = TokenBucket(settings.limit_rps, settings.limit_burst)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        # One client for the process lifetime; its timeout backs up the
        # per-call deadline enforced by DnsService.
        async with httpx.AsyncClient(timeout=settings.request_timeout) as http_client:
            record_store = store
            if record_store is None:
                record_store = DigitalOceanClient(http_client, security.api_token)
            context = build_context(settings, record_store, limiter, security)
            app.state.context = context
            logger.info(
                "DDNS updater %s serving updates at %s", APP_VERSION, context.settings.endpoint
            )
            yield
        logger.info("Server shutdown gracefully")

    app = FastAPI(
        title="DigitalOcean DDNS updater",
        version=APP_VERSION,
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        # /ddns/ must not redirect to /ddns around the rate limiter
        redirect_slashes=False,
    )
    app.include_router(build_router(settings.endpoint))
    return app
