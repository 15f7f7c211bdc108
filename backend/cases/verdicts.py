"""
Verdict text → case status.

Rules are checked in order and the first keyword found (case-insensitive
substring) wins, so "not guilty" is recognised as an acquittal before
"guilty" can match it as a conviction.  Text matching no rule closes the
case.
"""

from __future__ import annotations

from .models import CaseStatus

VERDICT_STATUS_RULES: tuple[tuple[tuple[str, ...], CaseStatus], ...] = (
    (("not guilty", "acquitted"), CaseStatus.ACQUITTED),
    (("convicted", "guilty"), CaseStatus.CONVICTED),
    (("dismissed",), CaseStatus.DISMISSED),
)
DEFAULT_VERDICT_STATUS = CaseStatus.CLOSED


def derive_status_from_verdict(verdict: str) -> CaseStatus:
    lowered = (verdict or "").lower()
    for keywords, status in VERDICT_STATUS_RULES:
        if any(keyword in lowered for keyword in keywords):
            return status
    return DEFAULT_VERDICT_STATUS
