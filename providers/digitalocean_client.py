"""
providers/digitalocean_client.py

Responsibility: Implements the RecordStore protocol using the DigitalOcean
domain records REST API (v2). All DigitalOcean HTTP calls are concentrated
here; no other file may call the DigitalOcean API directly.
Does NOT: validate input, enforce timeouts per pipeline step, or decide
HTTP statuses for the client.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from exceptions import DnsProviderError
from providers.dns_provider import DnsRecord, ProviderResponse

logger = logging.getLogger(__name__)

_DIGITALOCEAN_BASE = "https://api.digitalocean.com/v2"


class DigitalOceanClient:
    """
    Implements RecordStore for the DigitalOcean domain records API.

    All outbound requests go through the injected httpx.AsyncClient, making
    this class fully testable without real network calls (use respx.mock).

    Collaborators:
        - httpx.AsyncClient: injected HTTP client; must be kept alive externally
        - RecordStore: this class satisfies the protocol contract
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        api_token: str,
        base_url: str = _DIGITALOCEAN_BASE,
    ) -> None:
        """
        Initialises the client with an HTTP client and a DigitalOcean API token.

        Args:
            http_client: A long-lived httpx.AsyncClient instance.
            api_token: A DigitalOcean personal access token with write scope.
            base_url: API root; overridable for tests.
        """
        self._client = http_client
        self._base = base_url.rstrip("/")
        self._headers = {
            "Authorization": f"Bearer {api_token}",
            "Content-Type": "application/json",
        }

    # ---------------------------------------------------------------------------
    # RecordStore implementation
    # ---------------------------------------------------------------------------

    async def find_records(self, zone: str, kind: str, name: str) -> ProviderResponse:
        """
        Lists the records of one type and name within a DigitalOcean domain.

        Args:
            zone: The DigitalOcean domain, e.g. "example.com".
            kind: Record type, "A" or "AAAA".
            name: Fully-qualified record name, e.g. "home.example.com".

        Returns:
            A ProviderResponse. On HTTP 200 its records list is populated
            from the "domain_records" array; otherwise it is empty.

        Raises:
            DnsProviderError: On network failure or an unparseable 200 body.
        """
        url = f"{self._base}/domains/{zone}/records"
        params = {"type": kind, "name": name}

        logger.debug("GET %s params=%s", url, params)
        response = await self._request("GET", url, params=params)

        result = ProviderResponse(response.status_code, response.reason_phrase)
        if response.status_code == 200:
            body = self._json(response, "GET", url)
            result.records = [self._parse_record(r) for r in body.get("domain_records", [])]
        return result

    async def update_record(self, zone: str, record_id: int, data: str) -> ProviderResponse:
        """
        Replaces the data of an existing record.

        Args:
            zone: The DigitalOcean domain, e.g. "example.com".
            record_id: The DigitalOcean record identifier.
            data: The new IP literal.

        Returns:
            A ProviderResponse carrying the status of the PUT; records holds
            the updated record when the API echoes it back.

        Raises:
            DnsProviderError: On network failure or an unparseable 200 body.
        """
        url = f"{self._base}/domains/{zone}/records/{record_id}"
        payload: dict[str, Any] = {"data": data}

        logger.debug("PUT %s payload=%s", url, payload)
        response = await self._request("PUT", url, json=payload)

        result = ProviderResponse(response.status_code, response.reason_phrase)
        if response.status_code == 200:
            body = self._json(response, "PUT", url)
            if "domain_record" in body:
                result.records = [self._parse_record(body["domain_record"])]
        return result

    # ---------------------------------------------------------------------------
    # Internal helpers
    # ---------------------------------------------------------------------------

    async def _request(
        self,
        method: str,
        url: str,
        *,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> httpx.Response:
        """
        Sends an authenticated HTTP request to the DigitalOcean API.

        Args:
            method: HTTP verb ("GET", "PUT").
            url: Full URL of the API endpoint.
            params: Optional query-string parameters.
            json: Optional JSON request body.

        Returns:
            The raw httpx.Response, whatever its status.

        Raises:
            DnsProviderError: If the request could not be sent or timed out.
        """
        try:
            response = await self._client.request(
                method, url, headers=self._headers, params=params, json=json
            )
        except httpx.TimeoutException as exc:
            raise DnsProviderError(
                f"Timed out calling DigitalOcean API ({method} {url})"
            ) from exc
        except httpx.RequestError as exc:
            raise DnsProviderError(
                f"Network error calling DigitalOcean API ({method} {url}): {exc}"
            ) from exc

        logger.debug("%s %s -> %s", method, url, response.status_code)
        return response

    @staticmethod
    def _json(response: httpx.Response, method: str, url: str) -> dict[str, Any]:
        try:
            body = response.json()
        except ValueError as exc:
            raise DnsProviderError(
                f"DigitalOcean API returned a malformed body for {method} {url}"
            ) from exc
        if not isinstance(body, dict):
            raise DnsProviderError(
                f"DigitalOcean API returned a malformed body for {method} {url}"
            )
        return body

    @staticmethod
    def _parse_record(raw: dict[str, Any]) -> DnsRecord:
        """
        Converts a raw DigitalOcean domain_record dict into a typed DnsRecord.

        Args:
            raw: A single record object from the API response.

        Returns:
            A DnsRecord populated from the raw dict.
        """
        try:
            return DnsRecord(
                id=int(raw["id"]),
                type=raw.get("type", ""),
                name=raw.get("name", ""),
                data=raw.get("data", ""),
                ttl=raw.get("ttl", 1800),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise DnsProviderError(f"DigitalOcean API returned a malformed record: {raw!r}") from exc
