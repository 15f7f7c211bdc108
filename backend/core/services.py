"""
Core app service layer.

Cross-app read-only aggregation.  Models are resolved through
``django.apps`` so ``core`` has no import-time dependency on the apps
it reports on.

Services
--------
- ``DashboardAggregationService`` — headline counts for the staff
  dashboard.
- ``SystemConstantsService``      — choice enumerations and business
  constants for client dropdowns and labels.
"""

from __future__ import annotations

from typing import Any

from django.apps import apps
from django.db.models import Count, Q

from core import constants


class DashboardAggregationService:
    """
    Produces the dict consumed by ``DashboardStatsSerializer``.

    All counts are system-wide; the endpoint is restricted to staff
    accounts by ``IsAuthenticated``.
    """

    @staticmethod
    def get_stats() -> dict[str, Any]:
        from cases.models import ACTIVE_CASE_STATUSES, CaseStatus
        from challans.models import ChallanStatus

        EmissionReport = apps.get_model("evidence", "EmissionReport")
        Challan = apps.get_model("challans", "Challan")
        Fir = apps.get_model("firs", "Fir")
        Case = apps.get_model("cases", "Case")

        reports = EmissionReport.objects.aggregate(
            total=Count("id"),
            violations=Count("id", filter=Q(sound_level_dba__gt=constants.LEGAL_SOUND_LIMIT_DBA)),
        )
        challans = Challan.objects.aggregate(
            total=Count("id"),
            unpaid=Count("id", filter=Q(status=ChallanStatus.UNPAID)),
        )
        cases = Case.objects.aggregate(
            total=Count("id"),
            pending=Count("id", filter=Q(case_status=CaseStatus.PENDING)),
            active=Count("id", filter=Q(case_status__in=ACTIVE_CASE_STATUSES)),
        )
        return {
            "total_emission_reports": reports["total"],
            "total_violations": reports["violations"],
            "total_challans": challans["total"],
            "unpaid_challans": challans["unpaid"],
            "total_firs": Fir.objects.count(),
            "total_cases": cases["total"],
            "pending_cases": cases["pending"],
            "active_cases": cases["active"],
            "cases_by_status": list(
                Case.objects.values("case_status")
                .annotate(count=Count("id"))
                .order_by("case_status")
            ),
        }


class SystemConstantsService:
    """
    Stateless: the same payload for every caller, authenticated or not.
    """

    @staticmethod
    def get_constants() -> dict[str, Any]:
        from accounts.models import RoleName
        from cases.models import CaseStatus
        from challans.models import ChallanStatus
        from firs.models import FirStatus

        to_list = SystemConstantsService._choices_to_list

        return {
            "roles": to_list(RoleName),
            "challan_statuses": to_list(ChallanStatus),
            "fir_statuses": to_list(FirStatus),
            "case_statuses": to_list(CaseStatus),
            "legal_sound_limit_dba": constants.LEGAL_SOUND_LIMIT_DBA,
            "challan_payment_window_days": constants.CHALLAN_PAYMENT_WINDOW_DAYS,
            "default_hearing_offset_days": constants.DEFAULT_HEARING_OFFSET_DAYS,
            "default_case_type": constants.DEFAULT_CASE_TYPE,
        }

    @staticmethod
    def _choices_to_list(choices_class: type) -> list[dict[str, str]]:
        """
        Convert a Django ``TextChoices`` class to a list of
        ``{"value": ..., "label": ...}`` dicts.
        """
        return [
            {"value": str(value), "label": str(label)}
            for value, label in choices_class.choices
        ]
