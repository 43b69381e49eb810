"""
routes/ddns_routes.py

Responsibility: Exposes the update endpoint and writes the DispatchService
result as a single plain-text HTTP response.
Does NOT: validate input, authenticate, rate limit, or call the DNS provider
(DispatchService owns all of that).
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse

from dependencies import get_dispatch_service
from services.dispatch_service import DispatchService

logger = logging.getLogger(__name__)

# Every method is routed; only the query string is consulted.
_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]

_SECURITY_HEADERS = {"X-Content-Type-Options": "nosniff"}


async def update_record(
    request: Request,
    dispatch_service: DispatchService = Depends(get_dispatch_service),
) -> PlainTextResponse:
    """
    Handles one dynamic DNS update.

    Args:
        request: The incoming FastAPI request; its body is never read.
        dispatch_service: Runs the rate limit / parse / auth / update pipeline.

    Returns:
        A PlainTextResponse whose status, body and headers come from the
        pipeline result.
    """
    query = request.query_params
    params = {key: query.getlist(key) for key in query.keys()}

    result = await dispatch_service.dispatch(params)
    return PlainTextResponse(
        result.body,
        status_code=result.status_code,
        headers={**_SECURITY_HEADERS, **result.headers},
    )


def build_router(endpoint: str) -> APIRouter:
    """
    Builds the router serving the update endpoint at the configured path.

    Args:
        endpoint: URL path of the endpoint, e.g. "/ddns".

    Returns:
        An APIRouter with a single route.
    """
    router = APIRouter()
    router.add_api_route(
        endpoint,
        update_record,
        methods=_METHODS,
        response_class=PlainTextResponse,
        include_in_schema=False,
    )
    logger.debug("Update endpoint mounted at %s", endpoint)
    return router
