"""
tests/unit/test_models.py

Unit tests for models.py: zone extraction and ReconcileOutcome helpers.
"""

from __future__ import annotations

import pytest

from models import OutcomeKind, RecordKind, ReconcileOutcome, UpdateRequest, zone_of


@pytest.mark.parametrize(
    ("name", "zone"),
    [
        ("example.com", "example.com"),
        ("test.example.com", "example.com"),
        ("a.b.c.example.com", "example.com"),
        ("a.b.example.co.uk", "co.uk"),
        ("_acme-challenge.example.io", "example.io"),
    ],
)
def test_zone_is_last_two_labels(name, zone):
    assert zone_of(name) == zone
    assert UpdateRequest(kind=RecordKind.A, name=name).zone() == zone


def test_single_label_has_no_zone():
    assert zone_of("example") is None


def test_outcome_helpers():
    assert ReconcileOutcome.updated().ok
    missing = ReconcileOutcome.record_missing()
    assert missing.kind is OutcomeKind.RECORD_MISSING
    assert missing.reason == "Record not found"
    assert not ReconcileOutcome.edit_failed("boom").ok
    assert ReconcileOutcome.lookup_failed("boom").kind is OutcomeKind.LOOKUP_FAILED
