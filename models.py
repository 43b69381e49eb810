"""
models.py

Responsibility: Defines the immutable value objects that flow through the
update pipeline: the validated UpdateRequest and the ReconcileOutcome.
Does NOT: validate input, talk to the DNS provider, or build HTTP responses.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

# ---------------------------------------------------------------------------
# Record kinds
# ---------------------------------------------------------------------------


class RecordKind(str, Enum):
    """DNS record types this service is allowed to update."""

    A = "A"
    AAAA = "AAAA"


DEFAULT_KIND = RecordKind.A


# ---------------------------------------------------------------------------
# UpdateRequest: output of the request parser
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class UpdateRequest:
    """
    A fully validated update instruction.

    Instances are only produced by services.request_parser, so every field
    already satisfies the address and name rules for its kind.
    """

    kind: RecordKind

    # Fully-qualified record name, e.g. "home.example.com"
    name: str

    # Token presented by the client; compared against the security token
    token: str = ""

    # IPv4 or IPv6 literal matching kind
    addr: str = ""

    def zone(self) -> str | None:
        """
        Returns the apex zone of the record name (its last two labels).

        Returns:
            The zone, e.g. "example.com", or None if the name has fewer
            than two labels.
        """
        return zone_of(self.name)


def zone_of(name: str) -> str | None:
    """Joins the last two labels of name, or returns None if there are fewer."""
    labels = name.split(".")
    if len(labels) < 2:
        return None
    return ".".join(labels[-2:])


# ---------------------------------------------------------------------------
# ReconcileOutcome: tagged result of the lookup/edit sequence
# ---------------------------------------------------------------------------


class OutcomeKind(str, Enum):
    UPDATED = "updated"
    RECORD_MISSING = "record_missing"
    LOOKUP_FAILED = "lookup_failed"
    EDIT_FAILED = "edit_failed"


RECORD_NOT_FOUND = "Record not found"


@dataclass(frozen=True)
class ReconcileOutcome:
    """
    Result of one reconciliation against the RecordStore.

    Exactly one kind is set; reason carries the error detail for the
    failure kinds and is empty for UPDATED.
    """

    kind: OutcomeKind
    reason: str = ""

    @classmethod
    def updated(cls) -> ReconcileOutcome:
        return cls(OutcomeKind.UPDATED)

    @classmethod
    def record_missing(cls) -> ReconcileOutcome:
        return cls(OutcomeKind.RECORD_MISSING, RECORD_NOT_FOUND)

    @classmethod
    def lookup_failed(cls, reason: str) -> ReconcileOutcome:
        return cls(OutcomeKind.LOOKUP_FAILED, reason)

    @classmethod
    def edit_failed(cls, reason: str) -> ReconcileOutcome:
        return cls(OutcomeKind.EDIT_FAILED, reason)

    @property
    def ok(self) -> bool:
        return self.kind is OutcomeKind.UPDATED
