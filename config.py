"""
config.py

Responsibility: Declares the application Settings once and populates them
from defaults, then environment variables, then command-line flags (each
layer overriding the previous one).
Does NOT: derive the security token, start the server, or configure logging.
"""

from __future__ import annotations

import argparse
import os
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from exceptions import ConfigInvalidError

# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------

DEFAULT_ADDRESS = ":8080"
DEFAULT_ENDPOINT = "/ddns"
DEFAULT_LIMIT_RPS = 0.01
DEFAULT_LIMIT_BURST = 1
DEFAULT_REQUEST_TIMEOUT = 5.0
DEFAULT_LOG_LEVEL = "INFO"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

ENV_API_TOKEN = "DIGITALOCEAN_API_TOKEN"
ENV_SECURITY_TOKEN = "SECURITY_TOKEN"
ENV_LIMIT_RPS = "LIMIT_RPS"
ENV_LIMIT_BURST = "LIMIT_BURST"
ENV_REQUEST_TIMEOUT = "REQUEST_TIMEOUT"
ENV_LOG_LEVEL = "LOG_LEVEL"


@dataclass(frozen=True)
class Settings:
    """
    Process configuration, fixed after startup.

    An empty security_token means "derive one from api_token at boot".
    """

    # Listen address in host:port form; an empty host means all interfaces
    address: str = DEFAULT_ADDRESS

    # Path of the update endpoint
    endpoint: str = DEFAULT_ENDPOINT

    # DigitalOcean API token (required)
    api_token: str = ""

    # Token clients must present; derived when empty
    security_token: str = ""

    # Token bucket refill rate, requests per second
    limit_rps: float = DEFAULT_LIMIT_RPS

    # Token bucket capacity
    limit_burst: int = DEFAULT_LIMIT_BURST

    # Deadline in seconds for each DigitalOcean API call
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT

    log_level: str = DEFAULT_LOG_LEVEL

    def validate(self) -> Settings:
        """
        Checks the settings and returns them unchanged.

        Raises:
            ConfigInvalidError: If a value is missing or out of range.
        """
        if not self.api_token:
            raise ConfigInvalidError("DigitalOcean API token is required")
        if not self.endpoint.startswith("/"):
            raise ConfigInvalidError(f"Endpoint must start with '/': {self.endpoint!r}")
        if self.limit_rps <= 0:
            raise ConfigInvalidError(f"limit-rps must be positive, got {self.limit_rps}")
        if self.limit_burst < 1:
            raise ConfigInvalidError(f"limit-burst must be at least 1, got {self.limit_burst}")
        if self.request_timeout <= 0:
            raise ConfigInvalidError(
                f"request-timeout must be positive, got {self.request_timeout}"
            )
        if self.log_level not in LOG_LEVELS:
            raise ConfigInvalidError(f"Unknown log level: {self.log_level!r}")
        parse_address(self.address)
        return self


# ---------------------------------------------------------------------------
# Loader
# ---------------------------------------------------------------------------


def build_parser(environ: Mapping[str, str]) -> argparse.ArgumentParser:
    """
    Builds the argument parser whose defaults already reflect the environment.

    Args:
        environ: The environment to read fallbacks from.

    Returns:
        An argparse.ArgumentParser for the command line.

    Raises:
        ConfigInvalidError: If a numeric environment variable cannot be parsed.
    """
    parser = argparse.ArgumentParser(
        prog="do-ddns",
        description="DigitalOcean Dynamic DNS update endpoint",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("--address", default=DEFAULT_ADDRESS, help="address to listen on")
    parser.add_argument(
        "--endpoint", default=DEFAULT_ENDPOINT, help="endpoint path to handle updates"
    )
    parser.add_argument(
        "--digitalocean-api-token",
        dest="api_token",
        default=environ.get(ENV_API_TOKEN, ""),
        help=f"DigitalOcean API token (env {ENV_API_TOKEN})",
    )
    parser.add_argument(
        "--security-token",
        dest="security_token",
        default=environ.get(ENV_SECURITY_TOKEN, ""),
        help=f"application security token (env {ENV_SECURITY_TOKEN})",
    )
    parser.add_argument(
        "--limit-rps",
        type=float,
        default=_env_number(environ, ENV_LIMIT_RPS, float, DEFAULT_LIMIT_RPS),
        help=f"limit requests per second (env {ENV_LIMIT_RPS})",
    )
    parser.add_argument(
        "--limit-burst",
        type=int,
        default=_env_number(environ, ENV_LIMIT_BURST, int, DEFAULT_LIMIT_BURST),
        help=f"limit a single burst size (env {ENV_LIMIT_BURST})",
    )
    parser.add_argument(
        "--request-timeout",
        type=float,
        default=_env_number(environ, ENV_REQUEST_TIMEOUT, float, DEFAULT_REQUEST_TIMEOUT),
        help=f"DigitalOcean API call timeout in seconds (env {ENV_REQUEST_TIMEOUT})",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        default=environ.get(ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL).upper(),
        choices=LOG_LEVELS,
        help=f"log level (env {ENV_LOG_LEVEL})",
    )
    return parser


def load_settings(
    argv: Sequence[str] | None = None,
    environ: Mapping[str, str] | None = None,
) -> Settings:
    """
    Loads and validates the settings for this process.

    Args:
        argv: Command-line arguments without the program name; defaults to
            sys.argv[1:].
        environ: Environment mapping; defaults to os.environ.

    Returns:
        Validated Settings.

    Raises:
        ConfigInvalidError: If a value is missing, unparseable or out of range.
    """
    env = os.environ if environ is None else environ
    args = build_parser(env).parse_args(argv)

    settings = Settings(
        address=args.address,
        endpoint=args.endpoint,
        api_token=args.api_token.strip(),
        security_token=args.security_token.strip(),
        limit_rps=args.limit_rps,
        limit_burst=args.limit_burst,
        request_timeout=args.request_timeout,
        log_level=args.log_level,
    )
    return settings.validate()


def parse_address(address: str) -> tuple[str, int]:
    """
    Splits a listen address into host and port.

    Args:
        address: "host:port", ":port" or "[ipv6]:port".

    Returns:
        A (host, port) tuple; an empty host becomes "0.0.0.0".

    Raises:
        ConfigInvalidError: If the address has no valid port.
    """
    host, sep, port = address.rpartition(":")
    if not sep or not port.isdigit() or not 0 < int(port) < 65536:
        raise ConfigInvalidError(f"Invalid listen address: {address!r}")
    host = host.strip("[]") or "0.0.0.0"
    return host, int(port)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _env_number(environ: Mapping[str, str], key: str, kind: type, fallback: float) -> float:
    value = environ.get(key, "").strip()
    if not value:
        return fallback
    try:
        return kind(value)
    except ValueError as exc:
        raise ConfigInvalidError(f"Invalid value for {key}: {value!r}") from exc
