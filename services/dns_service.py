"""
services/dns_service.py

Responsibility: Reconciles a validated UpdateRequest against the DNS
provider. It looks up the record id, replaces the record data and
maps every outcome to a ReconcileOutcome.
Does NOT: validate input, authenticate, retry, or build HTTP responses.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable

from exceptions import DnsProviderError
from models import ReconcileOutcome, UpdateRequest
from providers.dns_provider import ProviderResponse, RecordStore

logger = logging.getLogger(__name__)

DEFAULT_REQUEST_TIMEOUT = 5.0


class DnsService:
    """
    Runs the two-step lookup/edit sequence for one update request.

    Each provider call gets its own deadline. Nothing is retried and the
    pair of calls is not atomic at the provider: concurrent updates of the
    same record race and the last write wins.

    Collaborators:
        - RecordStore: abstract interface satisfied by DigitalOceanClient
    """

    def __init__(self, store: RecordStore, timeout: float = DEFAULT_REQUEST_TIMEOUT) -> None:
        """
        Initialises the service with a record store and a per-call timeout.

        Args:
            store: Any RecordStore implementation (e.g. DigitalOceanClient).
            timeout: Deadline in seconds applied to each provider call.
        """
        self._store = store
        self._timeout = timeout

    # ---------------------------------------------------------------------------
    # Public API
    # ---------------------------------------------------------------------------

    async def reconcile(self, request: UpdateRequest) -> ReconcileOutcome:
        """
        Points the record named by the request at the request's address.

        Args:
            request: A validated UpdateRequest.

        Returns:
            ReconcileOutcome.updated() on success;
            record_missing() when no record matches;
            lookup_failed(reason) when the lookup call fails;
            edit_failed(reason) when the edit call fails.
        """
        zone = request.zone()
        if zone is None:
            return ReconcileOutcome.lookup_failed("Invalid domain name")

        kind = request.kind.value
        logger.info("Updating [%s] %s to %s", kind, request.name, request.addr)

        # --- Lookup ---
        try:
            found = await self._call(self._store.find_records(zone, kind, request.name))
        except DnsProviderError as exc:
            logger.info("Cannot get a DNS record identifier: %s", exc)
            return ReconcileOutcome.lookup_failed(str(exc))

        if found.status_code != 200:
            reason = _unexpected(found)
            logger.info("Cannot get a DNS record identifier: %s", reason)
            return ReconcileOutcome.lookup_failed(reason)

        # NOTE: The store is expected to return at most one record for a
        # (zone, type, name) triple; the first one is used as-is.
        if not found.records or found.records[0].id < 0:
            logger.info("No [%s] record for %s in zone %s", kind, request.name, zone)
            return ReconcileOutcome.record_missing()
        record_id = found.records[0].id

        # --- Edit ---
        try:
            edited = await self._call(self._store.update_record(zone, record_id, request.addr))
        except DnsProviderError as exc:
            logger.info("Cannot update a DNS record: %s", exc)
            return ReconcileOutcome.edit_failed(str(exc))

        if edited.status_code != 200:
            reason = _unexpected(edited)
            logger.info("Cannot update a DNS record: %s", reason)
            return ReconcileOutcome.edit_failed(reason)

        logger.info("Updated [%s] %s (id %d) to %s", kind, request.name, record_id, request.addr)
        return ReconcileOutcome.updated()

    # ---------------------------------------------------------------------------
    # Internal helpers
    # ---------------------------------------------------------------------------

    async def _call(self, call: Awaitable[ProviderResponse]) -> ProviderResponse:
        """
        Awaits one provider call under a fresh deadline.

        Raises:
            DnsProviderError: If the call fails or the deadline elapses; the
                call is cancelled in the latter case.
        """
        try:
            return await asyncio.wait_for(call, timeout=self._timeout)
        except asyncio.TimeoutError as exc:
            raise DnsProviderError(
                f"DNS provider did not answer within {self._timeout:g} s"
            ) from exc


def _unexpected(response: ProviderResponse) -> str:
    return f"Unexpected response: {response.status}"
