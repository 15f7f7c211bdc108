"""
Cases app Service Layer.

This module is the **single source of truth** for all business logic
in the ``cases`` app.

Architecture
------------
- ``CaseService``           — opening a case from an FIR (linkage gate +
                              per-court numbering), updates with verdict
                              → status derivation, judge assignment,
                              listings.
- ``CaseStatementService``  — judge statements on assigned cases.

Notifications
-------------
The accused is e-mailed after commit on: case creation, a changed
hearing date, a recorded verdict and every new statement.
"""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import TYPE_CHECKING, Any

from django.db import IntegrityError, transaction
from django.db.models import Max, QuerySet
from django.utils import timezone

from agencies.models import Judge
from core.constants import (
    DEFAULT_CASE_TYPE,
    DEFAULT_HEARING_OFFSET_DAYS,
    STATEMENT_EMAIL_SUMMARY_LENGTH,
)
from core.domain.access import require_permission
from core.domain.exceptions import Conflict, DomainError, NotFound, PermissionDenied
from core.domain.linkage import ensure_fir_unlinked
from core.domain.notifications import NotificationService
from core.domain.numbering import allocate_sequence, case_number
from core.domain.transactions import lock_for_update
from core.models import SequenceScope
from core.permissions_constants import CasesPerms
from firs.models import Fir

from .models import Case, CaseStatement, CaseStatus
from .verdicts import derive_status_from_verdict

if TYPE_CHECKING:
    from accounts.models import User

logger = logging.getLogger(__name__)


def _get_judge(judge_id: Any) -> Judge:
    if isinstance(judge_id, Judge):
        judge_id = judge_id.pk
    try:
        return Judge.objects.select_related("user", "court__court_type").get(pk=judge_id)
    except Judge.DoesNotExist:
        raise NotFound(f"Judge {judge_id} not found.")


def _accused_of(case: Case):
    return case.fir.challan.accused


def _format_when(value) -> str:
    return timezone.localtime(value).strftime("%Y-%m-%d %H:%M") if value else "-"


# ═══════════════════════════════════════════════════════════════════
#  Cases
# ═══════════════════════════════════════════════════════════════════


class CaseService:

    @staticmethod
    def _base_queryset() -> QuerySet[Case]:
        return Case.objects.select_related(
            "fir__station", "fir__challan__accused", "fir__challan__vehicle",
            "fir__challan__violation", "judge__user", "court__court_type",
        )

    @staticmethod
    @transaction.atomic
    def create_case(requesting_user: User, validated_data: dict[str, Any]) -> Case:
        """
        Open a court case for an FIR.

        The case belongs to the judge's court, and its number is drawn
        from that court's counter for the current year.

        Raises:
            PermissionDenied: without ``cases.can_create_case``.
            NotFound:         unknown FIR or judge.
            Conflict:         FIR already has a case.
            DomainError:      judge not attached to a court.
        """
        require_permission(
            requesting_user,
            f"cases.{CasesPerms.CAN_CREATE_CASE}",
            message="Only court authorities can create cases.",
        )
        fir = lock_for_update(Fir, validated_data["fir"])
        ensure_fir_unlinked(fir.pk)

        judge = _get_judge(validated_data["judge"])
        court = judge.court
        if court is None:
            raise DomainError(f"Judge {judge.full_name} is not attached to a court.")

        now = timezone.now()
        year = now.year
        sequence = allocate_sequence(
            SequenceScope.CASE,
            court.pk,
            year,
            seed=lambda: Case.objects.filter(court=court, year=year).aggregate(m=Max("sequence"))["m"] or 0,
        )
        hearing_date = validated_data.get("hearing_date") or now + timedelta(days=DEFAULT_HEARING_OFFSET_DAYS)
        try:
            with transaction.atomic():
                case = Case.objects.create(
                    case_no=case_number(court.court_type.name, court.location, year, sequence),
                    fir=fir,
                    judge=judge,
                    court=court,
                    year=year,
                    sequence=sequence,
                    case_type=validated_data.get("case_type") or DEFAULT_CASE_TYPE,
                    case_status=CaseStatus.PENDING,
                    hearing_date=hearing_date,
                )
        except IntegrityError:
            raise Conflict(f"FIR {fir.fir_no} is already linked to a case.")

        logger.info("Case %s opened for FIR %s by %s", case.case_no, fir.fir_no, requesting_user.username)
        accused = _accused_of(case)
        NotificationService.notify(
            event_type="case_created",
            recipient=accused.email,
            context={
                "case_no": case.case_no,
                "name": accused.full_name,
                "court": court.name,
                "fir_no": fir.fir_no,
                "hearing_date": _format_when(hearing_date),
            },
        )
        return case

    @staticmethod
    @transaction.atomic
    def update_case(requesting_user: User, case_id: int, validated_data: dict[str, Any]) -> Case:
        """
        Update status, hearing date and/or verdict.

        A verdict supplied without ``case_status`` sets the status through
        ``derive_status_from_verdict``; an explicit status always wins.
        """
        require_permission(
            requesting_user,
            f"cases.{CasesPerms.CAN_UPDATE_CASE}",
            message="Only court authorities or judges can update cases.",
        )
        lock_for_update(Case, case_id)
        case = CaseService.get_case(case_id)

        update_fields = {"updated_at"}
        hearing_changed = False
        verdict_given = False

        if validated_data.get("hearing_date") and validated_data["hearing_date"] != case.hearing_date:
            case.hearing_date = validated_data["hearing_date"]
            update_fields.add("hearing_date")
            hearing_changed = True

        if validated_data.get("verdict"):
            case.verdict = validated_data["verdict"]
            update_fields.add("verdict")
            verdict_given = True
            if not validated_data.get("case_status"):
                case.case_status = derive_status_from_verdict(case.verdict)
                update_fields.add("case_status")

        if validated_data.get("case_status"):
            case.case_status = validated_data["case_status"]
            update_fields.add("case_status")

        case.save(update_fields=sorted(update_fields))
        logger.info("Case %s updated by %s: %s", case.case_no, requesting_user.username,
                    ", ".join(sorted(update_fields - {"updated_at"})) or "no changes")

        accused = _accused_of(case)
        if hearing_changed:
            NotificationService.notify(
                event_type="hearing_scheduled",
                recipient=accused.email,
                context={
                    "case_no": case.case_no,
                    "name": accused.full_name,
                    "hearing_date": _format_when(case.hearing_date),
                },
            )
        if verdict_given:
            NotificationService.notify(
                event_type="verdict_announced",
                recipient=accused.email,
                context={
                    "case_no": case.case_no,
                    "name": accused.full_name,
                    "verdict": case.verdict,
                    "status": case.case_status,
                },
            )
        return case

    @staticmethod
    @transaction.atomic
    def assign_judge(requesting_user: User, case_id: int, judge_id: int) -> Case:
        require_permission(requesting_user, f"cases.{CasesPerms.CAN_ASSIGN_JUDGE}")
        lock_for_update(Case, case_id)
        case = CaseService.get_case(case_id)
        judge = _get_judge(judge_id)
        if not judge.service_status:
            raise DomainError(f"Judge {judge.full_name} is not in service.")
        case.judge = judge
        case.save(update_fields=["judge", "updated_at"])
        logger.info("Case %s assigned to judge %s by %s", case.case_no, judge.pk, requesting_user.username)
        return case

    @staticmethod
    def get_case(case_id: int) -> Case:
        try:
            return CaseService._base_queryset().prefetch_related("statements").get(pk=case_id)
        except Case.DoesNotExist:
            raise NotFound(f"Case {case_id} not found.")

    @staticmethod
    def list_cases(filters: dict[str, Any]) -> QuerySet[Case]:
        """
        Filters: ``status``, ``judge``, ``court``, ``hearing_from`` /
        ``hearing_to`` (dates), ``mine`` (cases of the requesting judge,
        resolved by the view into ``judge``).
        """
        qs = CaseService._base_queryset()
        if filters.get("status"):
            qs = qs.filter(case_status=filters["status"])
        if filters.get("judge"):
            qs = qs.filter(judge_id=filters["judge"])
        if filters.get("court"):
            qs = qs.filter(court_id=filters["court"])
        if filters.get("hearing_from"):
            qs = qs.filter(hearing_date__date__gte=filters["hearing_from"])
        if filters.get("hearing_to"):
            qs = qs.filter(hearing_date__date__lte=filters["hearing_to"])
        return qs

    @staticmethod
    def eligible_firs() -> QuerySet[Fir]:
        """FIRs not yet taken up by a court case."""
        return Fir.objects.select_related(
            "station", "challan__accused", "challan__vehicle",
            "challan__violation", "informant__user",
        ).filter(case__isnull=True)


# ═══════════════════════════════════════════════════════════════════
#  Statements
# ═══════════════════════════════════════════════════════════════════


class CaseStatementService:

    @staticmethod
    def list_statements(case_id: int) -> QuerySet[CaseStatement]:
        if not Case.objects.filter(pk=case_id).exists():
            raise NotFound(f"Case {case_id} not found.")
        return CaseStatement.objects.filter(case_id=case_id)

    @staticmethod
    @transaction.atomic
    def add_statement(requesting_user: User, case_id: int, validated_data: dict[str, Any]) -> CaseStatement:
        """
        Append a statement.  Only the judge presiding over the case may
        record one.
        """
        require_permission(
            requesting_user,
            f"cases.{CasesPerms.CAN_RECORD_STATEMENT}",
            message="Only judges can record case statements.",
        )
        judge = getattr(requesting_user, "judge", None)
        if judge is None:
            raise PermissionDenied("Only judges can record case statements.")

        case = CaseService.get_case(case_id)
        if case.judge_id != judge.pk:
            raise PermissionDenied(f"You are not the judge assigned to case {case.case_no}.")

        statement = CaseStatement.objects.create(
            case=case,
            statement_by=validated_data.get("statement_by") or judge.full_name,
            statement_text=validated_data["statement_text"],
            statement_date=validated_data.get("statement_date") or timezone.now(),
        )
        logger.info("Statement %s added to case %s by judge %s", statement.pk, case.case_no, judge.pk)

        text = statement.statement_text
        summary = text if len(text) <= STATEMENT_EMAIL_SUMMARY_LENGTH else text[:STATEMENT_EMAIL_SUMMARY_LENGTH] + "..."
        accused = _accused_of(case)
        NotificationService.notify(
            event_type="case_statement_added",
            recipient=accused.email,
            context={
                "case_no": case.case_no,
                "name": accused.full_name,
                "statement_by": statement.statement_by,
                "summary": summary,
            },
        )
        return statement
