"""
tests/unit/test_config.py

Unit tests for config.py.
Verifies the default < environment < flag precedence and validation.
"""

from __future__ import annotations

import pytest

from config import Settings, load_settings, parse_address
from exceptions import ConfigInvalidError

_ENV = {"DIGITALOCEAN_API_TOKEN": "api"}


def test_defaults():
    settings = load_settings([], _ENV)

    assert settings == Settings(api_token="api")
    assert settings.address == ":8080"
    assert settings.endpoint == "/ddns"
    assert settings.limit_rps == 0.01
    assert settings.limit_burst == 1
    assert settings.request_timeout == 5.0
    assert settings.security_token == ""


def test_environment_overrides_defaults():
    env = {
        "DIGITALOCEAN_API_TOKEN": "api",
        "SECURITY_TOKEN": "secret",
        "LIMIT_RPS": "0.5",
        "LIMIT_BURST": "3",
        "REQUEST_TIMEOUT": "2.5",
        "LOG_LEVEL": "debug",
    }
    settings = load_settings([], env)

    assert settings.security_token == "secret"
    assert settings.limit_rps == 0.5
    assert settings.limit_burst == 3
    assert settings.request_timeout == 2.5
    assert settings.log_level == "DEBUG"


def test_flags_override_environment():
    env = {"DIGITALOCEAN_API_TOKEN": "env-api", "LIMIT_RPS": "0.5", "SECURITY_TOKEN": "env"}
    settings = load_settings(
        [
            "--digitalocean-api-token", "flag-api",
            "--security-token", "flag",
            "--limit-rps", "2",
            "--limit-burst", "4",
            "--address", "127.0.0.1:9000",
            "--endpoint", "/update",
        ],
        env,
    )

    assert settings.api_token == "flag-api"
    assert settings.security_token == "flag"
    assert settings.limit_rps == 2.0
    assert settings.limit_burst == 4
    assert settings.address == "127.0.0.1:9000"
    assert settings.endpoint == "/update"


def test_missing_api_token_is_fatal():
    with pytest.raises(ConfigInvalidError, match="API token is required"):
        load_settings([], {})


def test_unparseable_environment_number_is_fatal():
    with pytest.raises(ConfigInvalidError, match="LIMIT_BURST"):
        load_settings([], {**_ENV, "LIMIT_BURST": "many"})


@pytest.mark.parametrize(
    "argv",
    [
        ["--limit-rps", "0"],
        ["--limit-burst", "0"],
        ["--request-timeout", "-1"],
        ["--endpoint", "ddns"],
        ["--address", "localhost"],
    ],
)
def test_out_of_range_values_are_fatal(argv):
    with pytest.raises(ConfigInvalidError):
        load_settings(argv, _ENV)


@pytest.mark.parametrize(
    ("address", "expected"),
    [
        (":8080", ("0.0.0.0", 8080)),
        ("127.0.0.1:9000", ("127.0.0.1", 9000)),
        ("[::1]:8443", ("::1", 8443)),
    ],
)
def test_parse_address(address, expected):
    assert parse_address(address) == expected


@pytest.mark.parametrize("address", ["", "8080", ":", ":http", ":70000"])
def test_parse_address_rejects(address):
    with pytest.raises(ConfigInvalidError):
        parse_address(address)
