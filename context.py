"""
context.py

Responsibility: Declares the AppContext, the single bundle of process-wide
state (settings and the update pipeline built on the rate limiter, security
token and record store), and builds it at boot.
Does NOT: open network connections, read the environment, or route requests.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from config import Settings
from providers.dns_provider import RecordStore
from services.auth_service import AuthService, resolve_security_token
from services.dispatch_service import DispatchService
from services.dns_service import DnsService
from services.rate_limiter import TokenBucket

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SecurityConfig:
    """Tokens fixed at startup; read without synchronisation afterwards."""

    security_token: str
    api_token: str


@dataclass(frozen=True)
class AppContext:
    """
    Everything a request handler needs, constructed once per process.

    Stored on app.state.context by the FastAPI lifespan in app.py and
    handed to route handlers through dependencies.get_app_context.
    """

    settings: Settings
    dispatch_service: DispatchService


def build_security_config(settings: Settings) -> SecurityConfig:
    """Resolves the security token, deriving it when unset."""
    return SecurityConfig(
        security_token=resolve_security_token(settings.security_token, settings.api_token),
        api_token=settings.api_token,
    )


def build_context(
    settings: Settings,
    store: RecordStore,
    rate_limiter: TokenBucket,
    security: SecurityConfig,
) -> AppContext:
    """
    Wires the update pipeline around the given collaborators.

    Args:
        settings: Validated process settings.
        store: The RecordStore used for lookups and edits.
        rate_limiter: The process-wide token bucket.
        security: Resolved tokens.

    Returns:
        A ready AppContext.
    """
    dispatch_service = DispatchService(
        rate_limiter=rate_limiter,
        auth_service=AuthService(security.security_token),
        dns_service=DnsService(store, timeout=settings.request_timeout),
    )
    logger.debug(
        "Update pipeline ready: endpoint=%s limit_rps=%s limit_burst=%d",
        settings.endpoint,
        settings.limit_rps,
        settings.limit_burst,
    )
    return AppContext(
        settings=settings,
        dispatch_service=dispatch_service,
    )
