"""
Core app serializers — read-only response shapes for the aggregation
endpoints.
"""

from __future__ import annotations

from rest_framework import serializers


# ════════════════════════════════════════════════════════════════════
#  Dashboard
# ════════════════════════════════════════════════════════════════════

class CasesByStatusSerializer(serializers.Serializer):
    case_status = serializers.CharField()
    count = serializers.IntegerField()


class DashboardStatsSerializer(serializers.Serializer):
    """
    Response serializer for ``GET /api/core/dashboard/``.

    Response shape::

        {
            "total_emission_reports": 120,
            "total_violations": 37,
            "total_challans": 35,
            "unpaid_challans": 20,
            "total_firs": 6,
            "total_cases": 4,
            "pending_cases": 2,
            "active_cases": 3,
            "cases_by_status": [{"case_status": "Pending", "count": 2}, ...]
        }
    """

    total_emission_reports = serializers.IntegerField()
    total_violations = serializers.IntegerField(
        help_text="Readings above the legal sound limit.",
    )
    total_challans = serializers.IntegerField()
    unpaid_challans = serializers.IntegerField()
    total_firs = serializers.IntegerField()
    total_cases = serializers.IntegerField()
    pending_cases = serializers.IntegerField()
    active_cases = serializers.IntegerField(
        help_text="Cases that are Pending or In Progress.",
    )
    cases_by_status = CasesByStatusSerializer(many=True)


# ════════════════════════════════════════════════════════════════════
#  System Constants / Enums
# ════════════════════════════════════════════════════════════════════

class ChoiceItemSerializer(serializers.Serializer):
    """
    A single key-label pair representing one choice/enum option.

    Example::

        {"value": "Under Investigation", "label": "Under Investigation"}
    """

    value = serializers.CharField()
    label = serializers.CharField()


class SystemConstantsSerializer(serializers.Serializer):
    """Response serializer for ``GET /api/core/constants/``."""

    roles = ChoiceItemSerializer(many=True)
    challan_statuses = ChoiceItemSerializer(many=True)
    fir_statuses = ChoiceItemSerializer(many=True)
    case_statuses = ChoiceItemSerializer(many=True)
    legal_sound_limit_dba = serializers.DecimalField(max_digits=6, decimal_places=2)
    challan_payment_window_days = serializers.IntegerField()
    default_hearing_offset_days = serializers.IntegerField()
    default_case_type = serializers.CharField()
