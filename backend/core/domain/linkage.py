"""
core.domain.linkage — The cascading one-to-one evidence chain.

    EmissionReport ──0..1──▶ Challan ──0..1──▶ Fir ──0..1──▶ Case
                                    (cognizable only)

Each link is a hard chain-of-custody invariant.  Creation services call
the ``ensure_*`` guard immediately before the insert, inside the same
``transaction.atomic()`` block, and the ``OneToOneField`` on the child
model is the database backstop if two requests race past the guard.

The ``can_*`` predicates answer the same question without raising and
back the "eligible for escalation" listings.

Models are resolved lazily through ``django.apps`` so ``core`` never
imports app modules at import time.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from django.apps import apps

from core.domain.exceptions import Conflict, DomainError

if TYPE_CHECKING:
    from challans.models import Challan

logger = logging.getLogger(__name__)


def _model(label: str) -> Any:
    return apps.get_model(label)


# ── Predicates ──────────────────────────────────────────────────────


def can_link_challan_to_report(report_id: int) -> bool:
    """True iff no challan references this emission report yet."""
    return not _model("challans.Challan").objects.filter(emission_report_id=report_id).exists()


def can_link_fir_to_challan(challan: Challan) -> bool:
    """True iff the challan's violation is cognizable and it has no FIR."""
    if not challan.violation.is_cognizable:
        return False
    return not _model("firs.Fir").objects.filter(challan_id=challan.pk).exists()


def can_link_case_to_fir(fir_id: int) -> bool:
    """True iff no case references this FIR yet."""
    return not _model("cases.Case").objects.filter(fir_id=fir_id).exists()


# ── Guards ──────────────────────────────────────────────────────────


def ensure_report_unlinked(report_id: int) -> None:
    existing = (
        _model("challans.Challan").objects
        .filter(emission_report_id=report_id)
        .only("pk")
        .first()
    )
    if existing is not None:
        logger.warning("Linkage denied: emission report %s already on challan %s", report_id, existing.pk)
        raise Conflict(
            f"Emission report {report_id} is already linked to challan {existing.pk}."
        )


def ensure_challan_escalatable(challan: Challan) -> None:
    violation = challan.violation
    if not violation.is_cognizable:
        logger.warning("Linkage denied: challan %s violation is not cognizable", challan.pk)
        raise DomainError(
            f"Violation '{violation.violation_type}' is not cognizable; "
            f"an FIR cannot be filed for challan {challan.pk}."
        )
    existing = _model("firs.Fir").objects.filter(challan_id=challan.pk).only("fir_no").first()
    if existing is not None:
        logger.warning("Linkage denied: challan %s already escalated to %s", challan.pk, existing.fir_no)
        raise Conflict(
            f"Challan {challan.pk} is already linked to FIR {existing.fir_no}."
        )


def ensure_fir_unlinked(fir_id: int) -> None:
    existing = _model("cases.Case").objects.filter(fir_id=fir_id).only("case_no").first()
    if existing is not None:
        logger.warning("Linkage denied: FIR %s already on case %s", fir_id, existing.case_no)
        raise Conflict(
            f"FIR {fir_id} is already linked to case {existing.case_no}."
        )
