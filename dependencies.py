"""
dependencies.py

Responsibility: Declares the FastAPI Depends() provider functions that hand
the process-wide AppContext and its services to route handlers.
Does NOT: contain business logic, HTTP handlers, or build the context.
"""

from __future__ import annotations

from fastapi import Depends, Request

from context import AppContext
from services.dispatch_service import DispatchService


def get_app_context(request: Request) -> AppContext:
    """
    Returns the AppContext stored on app.state.

    The context is built once during the FastAPI lifespan and reused for
    all requests.

    Args:
        request: The current FastAPI Request (injected automatically).

    Returns:
        The application-level AppContext.
    """
    return request.app.state.context


def get_dispatch_service(
    context: AppContext = Depends(get_app_context),
) -> DispatchService:
    """
    Provides the DispatchService wired at startup.

    Args:
        context: The AppContext injected by get_app_context.

    Returns:
        The shared DispatchService instance.
    """
    return context.dispatch_service
