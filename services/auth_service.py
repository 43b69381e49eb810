"""
services/auth_service.py

Responsibility: Checks the token presented by a client against the
configured security token, and derives that token from the DigitalOcean
API token when none is configured.
Does NOT: parse requests, rate limit, or log tokens on the request path.
"""

from __future__ import annotations

import hashlib
import hmac
import logging

from exceptions import AuthenticationError

logger = logging.getLogger(__name__)


def derive_security_token(api_token: str) -> str:
    """
    Derives a stable security token from the provider API token.

    The same API token always yields the same security token, so clients
    keep working across restarts without an operator setting one.

    Args:
        api_token: The DigitalOcean API token.

    Returns:
        The lowercase hex encoding of SHA-512/256 over the API token.
    """
    return hashlib.new("sha512_256", api_token.encode("utf-8")).hexdigest()


def resolve_security_token(security_token: str, api_token: str) -> str:
    """
    Returns the configured security token, or a derived one if it is empty.

    The derived token is logged once so the operator can hand it to clients.
    """
    if security_token:
        return security_token
    derived = derive_security_token(api_token)
    logger.info("New auth token: %s", derived)
    return derived


class AuthService:
    """
    Authenticates update requests by their security token.

    The comparison runs in constant time with respect to the position of
    the first differing byte.
    """

    def __init__(self, security_token: str) -> None:
        self._expected = security_token.encode("utf-8")

    def is_valid(self, token: str) -> bool:
        return hmac.compare_digest(token.encode("utf-8"), self._expected)

    def authenticate(self, token: str) -> None:
        """
        Raises AuthenticationError unless token equals the security token.

        Args:
            token: The token presented by the client.

        Raises:
            AuthenticationError: On any mismatch.
        """
        if not self.is_valid(token):
            raise AuthenticationError("Authentication failed")
