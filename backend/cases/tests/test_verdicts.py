"""Tests for verdict text → case status derivation."""

from __future__ import annotations

import pytest

from cases.models import CaseStatus
from cases.verdicts import derive_status_from_verdict


@pytest.mark.parametrize(
    "verdict, expected",
    [
        ("Accused found GUILTY under s.112", CaseStatus.CONVICTED),
        ("Convicted; fine of Rs. 5000 imposed", CaseStatus.CONVICTED),
        ("Not guilty", CaseStatus.ACQUITTED),
        ("The accused is acquitted of all charges", CaseStatus.ACQUITTED),
        ("Case dismissed for want of evidence", CaseStatus.DISMISSED),
        ("Settled out of court", CaseStatus.CLOSED),
        ("", CaseStatus.CLOSED),
        (None, CaseStatus.CLOSED),
    ],
)
def test_derive_status_from_verdict(verdict, expected):
    assert derive_status_from_verdict(verdict) == expected


def test_acquittal_checked_before_conviction():
    # "not guilty" contains "guilty"; the acquittal rule must win.
    assert derive_status_from_verdict("Found not guilty, accused acquitted") == CaseStatus.ACQUITTED
