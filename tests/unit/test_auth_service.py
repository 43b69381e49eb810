"""
tests/unit/test_auth_service.py

Unit tests for services/auth_service.py.
Verifies exact-match authentication, its mismatch-position-independent
timing, and the deterministic token derivation.
"""

from __future__ import annotations

import hashlib
import logging
import statistics
import time

import pytest

from exceptions import AuthenticationError
from services.auth_service import AuthService, derive_security_token, resolve_security_token

# ---------------------------------------------------------------------------
# derive_security_token
# ---------------------------------------------------------------------------


def test_derived_token_is_sha512_256_hex():
    expected = hashlib.new("sha512_256", b"do-api-token").hexdigest()
    assert derive_security_token("do-api-token") == expected


def test_derived_token_is_stable_and_64_hex_chars():
    first = derive_security_token("abc")
    assert first == derive_security_token("abc")
    assert len(first) == 64
    assert all(c in "0123456789abcdef" for c in first)


def test_derived_token_matches_known_vector():
    """SHA-512/256("abc") from FIPS 180-4 examples."""
    assert derive_security_token("abc") == (
        "53048e2681941ef99b2e29b76b4c7dabe4c2d0c634fc6d46e0e2f13107e7af23"
    )


def test_different_api_tokens_give_different_tokens():
    assert derive_security_token("one") != derive_security_token("two")


# ---------------------------------------------------------------------------
# resolve_security_token
# ---------------------------------------------------------------------------


def test_configured_token_is_kept():
    assert resolve_security_token("configured", "api") == "configured"


def test_empty_token_is_derived_and_logged_once(caplog):
    with caplog.at_level(logging.INFO, logger="services.auth_service"):
        token = resolve_security_token("", "api")

    assert token == derive_security_token("api")
    messages = [r.getMessage() for r in caplog.records]
    assert messages == [f"New auth token: {token}"]


# ---------------------------------------------------------------------------
# AuthService
# ---------------------------------------------------------------------------


def test_authenticate_accepts_exact_token():
    AuthService("TOK").authenticate("TOK")


@pytest.mark.parametrize("token", ["WRONG", "tok", "TOK ", "TO", "TOKK", ""])
def test_authenticate_rejects_any_other_token(token):
    with pytest.raises(AuthenticationError, match="Authentication failed"):
        AuthService("TOK").authenticate(token)


def test_non_ascii_tokens_compare_bytewise():
    service = AuthService("jeton-é")
    assert service.is_valid("jeton-é")
    assert not service.is_valid("jeton-e")


# ---------------------------------------------------------------------------
# Comparison timing
# ---------------------------------------------------------------------------

_SECRET = derive_security_token("timing-api-token")


def _flip(token: str, index: int) -> str:
    replacement = "0" if token[index] != "0" else "1"
    return token[:index] + replacement + token[index + 1 :]


def _median_batch_ns(service: AuthService, tokens: list[str], calls: int = 2000, rounds: int = 31):
    """
    Median wall time of `calls` is_valid calls per token, interleaving the
    tokens round by round so drift in machine load hits all of them alike.
    """
    samples: dict[str, list[int]] = {token: [] for token in tokens}
    for _ in range(rounds):
        for token in tokens:
            start = time.perf_counter_ns()
            for _ in range(calls):
                service.is_valid(token)
            samples[token].append(time.perf_counter_ns() - start)
    return [statistics.median(samples[token]) for token in tokens]


def _within_ratio(a: float, b: float, ratio: float = 3.0) -> bool:
    return max(a, b) <= ratio * min(a, b)


def test_decision_time_does_not_depend_on_mismatch_position():
    service = AuthService(_SECRET)
    first_byte = _flip(_SECRET, 0)
    last_byte = _flip(_SECRET, len(_SECRET) - 1)
    assert len(first_byte) == len(last_byte) == len(_SECRET)
    assert not service.is_valid(first_byte)
    assert not service.is_valid(last_byte)

    early, late = _median_batch_ns(service, [first_byte, last_byte])

    assert _within_ratio(early, late)


def test_length_mismatch_is_rejected_regardless_of_content():
    """A matching prefix of the wrong length gets no faster or slower answer."""
    service = AuthService(_SECRET)
    prefix = _SECRET[:-1]
    wrong_prefix = _flip(prefix, 0)
    extended = _SECRET + "0"

    assert not service.is_valid(prefix)
    assert not service.is_valid(wrong_prefix)
    assert not service.is_valid(extended)

    matching, mismatching = _median_batch_ns(service, [prefix, wrong_prefix])

    assert _within_ratio(matching, mismatching)
