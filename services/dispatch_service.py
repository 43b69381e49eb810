"""
services/dispatch_service.py

Responsibility: Runs the per-request update pipeline (rate limit, parse,
authenticate, reconcile) and reduces it to a single DispatchResult that the
route writes out exactly once.
Does NOT: touch the HTTP framework, read the request body, or retry.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from http import HTTPStatus

from exceptions import AuthenticationError, RequestParseError
from models import OutcomeKind
from services.auth_service import AuthService
from services.dns_service import DnsService
from services.rate_limiter import TokenBucket
from services.request_parser import parse_update_request

logger = logging.getLogger(__name__)

_OUTCOME_STATUS = {
    OutcomeKind.UPDATED: HTTPStatus.OK,
    OutcomeKind.RECORD_MISSING: HTTPStatus.NOT_FOUND,
    OutcomeKind.LOOKUP_FAILED: HTTPStatus.NOT_FOUND,
    OutcomeKind.EDIT_FAILED: HTTPStatus.FAILED_DEPENDENCY,
}


@dataclass(frozen=True)
class DispatchResult:
    """Status, body and extra headers of one update response."""

    status_code: int
    body: str
    headers: dict[str, str] = field(default_factory=dict)


class DispatchService:
    """
    Sequences the update pipeline for one HTTP request.

    Admitted → Parsed → Authenticated → LookedUp → Edited → Done, with
    429 / 400 / 401 / 404 / 424 as the exits of the respective steps.

    Collaborators:
        - TokenBucket: shared process-wide admission control
        - AuthService: security token check
        - DnsService: lookup/edit against the RecordStore
    """

    def __init__(
        self,
        rate_limiter: TokenBucket,
        auth_service: AuthService,
        dns_service: DnsService,
    ) -> None:
        self._limiter = rate_limiter
        self._auth = auth_service
        self._dns = dns_service

    async def dispatch(self, params: Mapping[str, Sequence[str]]) -> DispatchResult:
        """
        Handles one update request given its query parameters.

        Args:
            params: Mapping of query parameter name to its list of values.

        Returns:
            The DispatchResult to send back to the client.
        """
        decision = self._limiter.acquire()
        if not decision.allowed:
            return DispatchResult(
                HTTPStatus.TOO_MANY_REQUESTS,
                HTTPStatus.TOO_MANY_REQUESTS.phrase,
                {"Retry-After": str(decision.retry_after)},
            )

        try:
            request = parse_update_request(params)
        except RequestParseError as exc:
            logger.info("Rejected update request: %s", exc)
            return DispatchResult(HTTPStatus.BAD_REQUEST, str(exc))

        try:
            self._auth.authenticate(request.token)
        except AuthenticationError as exc:
            logger.info("Authentication failed for %s", request.name)
            return DispatchResult(HTTPStatus.UNAUTHORIZED, str(exc))

        outcome = await self._dns.reconcile(request)
        if outcome.ok:
            return DispatchResult(HTTPStatus.OK, "Done\n")
        return DispatchResult(_OUTCOME_STATUS[outcome.kind], outcome.reason)
