"""
exceptions.py

Responsibility: Defines all custom exception classes used across the application.
Does NOT: contain business logic, logging, or HTTP handling.
"""

from __future__ import annotations


class RequestParseError(Exception):
    """
    Base class for every validation failure raised by the request parser.

    The message is returned verbatim to the client with HTTP 400, so it
    must never contain the presented token.
    """


class EmptyFieldError(RequestParseError):
    """Raised when the domain, token, or ip parameter is missing or blank."""


class InvalidTypeError(RequestParseError):
    """Raised when the type parameter is neither A nor AAAA."""


class InvalidAddressError(RequestParseError):
    """Raised when the ip parameter is not a literal of the requested family."""


class InvalidNameError(RequestParseError):
    """Raised when the domain parameter does not satisfy the DNS-name grammar."""


class AuthenticationError(Exception):
    """
    Raised by AuthService when the presented token does not match the
    configured security token.
    """


class DnsProviderError(Exception):
    """
    Raised by any RecordStore implementation when a DNS API call cannot be
    completed (network failure, timeout, malformed body).

    Non-200 responses are NOT signalled with this exception; they are
    returned to the caller so the status can be reported.
    """


class ConfigInvalidError(Exception):
    """
    Raised by the configuration loader when a required value is missing or
    a value cannot be parsed. Fatal at startup.
    """
