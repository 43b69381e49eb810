"""
services/request_parser.py

Responsibility: Turns the raw query-parameter map of an update request into
a validated UpdateRequest, or raises a typed RequestParseError.
Does NOT: authenticate the token, contact the DNS provider, or build
HTTP responses.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence

from exceptions import EmptyFieldError, InvalidAddressError, InvalidNameError, InvalidTypeError
from models import DEFAULT_KIND, RecordKind, UpdateRequest

# ---------------------------------------------------------------------------
# Grammars
# ---------------------------------------------------------------------------

# A usual record name: two or more labels, no trailing dot, no single word.
_DNS_NAME = re.compile(
    r"[a-zA-Z0-9_][a-zA-Z0-9_-]{0,62}(?:\.[a-zA-Z0-9_][a-zA-Z0-9_-]{0,62})+",
    re.ASCII,
)

_OCTET = r"(?:25[0-5]|(?:2[0-4]|1\d|[1-9]|)\d)"
_IPV4_ADDR = re.compile(rf"(?:{_OCTET}\.){{3}}{_OCTET}", re.ASCII)

# Embedded IPv4 tails follow "::" or at most four groups and "::";
# uncompressed forms such as 1:2:3:4:5:6:1.2.3.4 are rejected.
_H16 = r"[0-9a-fA-F]{1,4}"
_V4_TAIL = r"(?:(?:25[0-5]|(?:2[0-4]|1?[0-9])?[0-9])\.){3}(?:25[0-5]|(?:2[0-4]|1?[0-9])?[0-9])"
_IPV6_ADDR = re.compile(
    "|".join(
        [
            rf"(?:{_H16}:){{7}}{_H16}",
            rf"(?:{_H16}:){{1,7}}:",
            rf"(?:{_H16}:){{1,6}}:{_H16}",
            rf"(?:{_H16}:){{1,5}}(?::{_H16}){{1,2}}",
            rf"(?:{_H16}:){{1,4}}(?::{_H16}){{1,3}}",
            rf"(?:{_H16}:){{1,3}}(?::{_H16}){{1,4}}",
            rf"(?:{_H16}:){{1,2}}(?::{_H16}){{1,5}}",
            rf"{_H16}:(?:(?::{_H16}){{1,6}})",
            rf":(?:(?::{_H16}){{1,7}}|:)",
            # link-local with a zone index
            r"fe80:(?::[0-9a-fA-F]{0,4}){0,4}%[0-9a-zA-Z]+",
            # IPv4-mapped and IPv4-translated tails
            rf"::(?:ffff(?::0{{1,4}})?:)?{_V4_TAIL}",
            rf"(?:{_H16}:){{1,4}}:{_V4_TAIL}",
        ]
    ),
    re.ASCII,
)

_FIELDS = ("type", "domain", "token", "ip")


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def is_dns_name(value: str) -> bool:
    return _DNS_NAME.fullmatch(value) is not None


def is_ipv4(value: str) -> bool:
    return _IPV4_ADDR.fullmatch(value) is not None


def is_ipv6(value: str) -> bool:
    return _IPV6_ADDR.fullmatch(value) is not None


def parse_update_request(params: Mapping[str, Sequence[str]]) -> UpdateRequest:
    """
    Validates the query parameters of an update request.

    Only the type, domain, token and ip keys are read. Each value is the
    first entry of its list, stripped of surrounding whitespace; type is
    also uppercased. Checks run in a fixed order and the first failure
    wins: empty fields, record type, address family, record name.

    Args:
        params: Mapping of parameter name to the list of its values, as
            presented by the HTTP layer.

    Returns:
        An UpdateRequest whose fields satisfy every validation rule.

    Raises:
        EmptyFieldError: If domain, token, or ip is empty.
        InvalidTypeError: If type is set to anything but A or AAAA.
        InvalidAddressError: If ip is not a literal of the requested family.
        InvalidNameError: If domain is not a valid multi-label record name.
    """
    kind, name, token, addr = (_first(params, key) for key in _FIELDS)
    kind = kind.upper()

    if not name or not token or not addr:
        raise EmptyFieldError("Empty domain, token, or IP value")

    if not kind:
        record_kind = DEFAULT_KIND
    elif kind in RecordKind.__members__:
        record_kind = RecordKind(kind)
    else:
        raise InvalidTypeError("Invalid type")

    if record_kind is RecordKind.A and not is_ipv4(addr):
        raise InvalidAddressError("Invalid IPv4 address")
    if record_kind is RecordKind.AAAA and not is_ipv6(addr):
        raise InvalidAddressError("Invalid IPv6 address")

    if not is_dns_name(name):
        raise InvalidNameError("Invalid record name")

    return UpdateRequest(kind=record_kind, name=name, token=token, addr=addr)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _first(params: Mapping[str, Sequence[str]], key: str) -> str:
    values = params.get(key) or ()
    if isinstance(values, str):
        return values.strip()
    return values[0].strip() if values else ""
