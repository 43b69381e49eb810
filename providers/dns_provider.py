"""
providers/dns_provider.py

Responsibility: Defines the RecordStore Protocol and the value objects it
returns (DnsRecord, ProviderResponse).
Does NOT: make HTTP calls, read configuration, or interpret status codes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable


# ---------------------------------------------------------------------------
# Value objects: stable shapes returned by all RecordStore implementations
# ---------------------------------------------------------------------------


@dataclass
class DnsRecord:
    """
    Represents a single domain record as returned by a RecordStore.
    """

    # Provider-assigned numeric identifier
    id: int

    # Record type, "A" or "AAAA"
    type: str

    # Record name as stored by the provider (DigitalOcean stores the
    # relative name, e.g. "home" for home.example.com)
    name: str

    # Current record value (the IP literal)
    data: str

    ttl: int = 1800


@dataclass
class ProviderResponse:
    """
    Status and payload of one provider call.

    A RecordStore returns this for every HTTP response it receives,
    including non-2xx ones; only transport failures are raised.
    """

    status_code: int

    # HTTP reason phrase, e.g. "Internal Server Error"
    reason: str = ""

    records: list[DnsRecord] = field(default_factory=list)

    @property
    def status(self) -> str:
        return f"{self.status_code} {self.reason}".strip()


# ---------------------------------------------------------------------------
# Abstract interface: the whole dependency on the DNS provider
# ---------------------------------------------------------------------------


@runtime_checkable
class RecordStore(Protocol):
    """
    Abstract protocol for the remote DNS control plane.

    DnsService depends on this abstraction only; supporting another DNS
    provider means implementing these two coroutines.
    """

    async def find_records(self, zone: str, kind: str, name: str) -> ProviderResponse:
        """
        Lists the records of the given type and fully-qualified name.

        Args:
            zone: The apex domain managed by the provider, e.g. "example.com".
            kind: Record type, "A" or "AAAA".
            name: Fully-qualified record name, e.g. "home.example.com".

        Returns:
            A ProviderResponse whose records list holds zero or more matches.

        Raises:
            DnsProviderError: If the call could not be completed.
        """
        ...

    async def update_record(self, zone: str, record_id: int, data: str) -> ProviderResponse:
        """
        Replaces the value of an existing record.

        Args:
            zone: The apex domain managed by the provider.
            record_id: The provider-assigned record identifier.
            data: The new record value (an IP literal).

        Returns:
            A ProviderResponse carrying the provider's status.

        Raises:
            DnsProviderError: If the call could not be completed.
        """
        ...
