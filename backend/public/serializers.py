"""
Public app serializers.

The status snapshot deliberately exposes a reduced view of each record:
no officer CNICs, device data or signatures.
"""

from __future__ import annotations

from rest_framework import serializers

from cases.models import Case, CaseStatement
from challans.models import Challan
from firs.models import Fir
from offenders.models import Accused, Vehicle


class RequestOtpSerializer(serializers.Serializer):
    vehicle_no = serializers.CharField(max_length=20)
    cnic = serializers.CharField(max_length=20)
    email = serializers.EmailField()


class VerifyOtpSerializer(RequestOtpSerializer):
    otp = serializers.RegexField(r"^\d{6}$", error_messages={"invalid": "OTP must be 6 digits."})


class RequestOtpResponseSerializer(serializers.Serializer):
    message = serializers.CharField()
    masked_email = serializers.CharField()
    expires_in_minutes = serializers.IntegerField()


class VerifyOtpResponseSerializer(serializers.Serializer):
    message = serializers.SerializerMethodField()
    access_token = serializers.CharField()
    expires_at = serializers.DateTimeField(source="access_token_expires_at")

    def get_message(self, obj) -> str:
        return "OTP verified successfully. You can now view your case status."


# ── Snapshot ────────────────────────────────────────────────────────


class _AccusedSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = Accused
        fields = ["full_name", "cnic", "city", "province"]


class _VehicleSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = Vehicle
        fields = ["plate_number", "make", "color", "registration_year"]


class _ChallanSummarySerializer(serializers.ModelSerializer):
    plate_number = serializers.CharField(source="vehicle.plate_number")
    violation_type = serializers.CharField(source="violation.violation_type")
    penalty_amount = serializers.DecimalField(source="violation.penalty_amount", max_digits=10, decimal_places=2)
    station_name = serializers.CharField(source="officer.station.name", default=None)
    is_overdue = serializers.BooleanField()

    class Meta:
        model = Challan
        fields = [
            "id", "plate_number", "violation_type", "penalty_amount", "station_name",
            "issue_datetime", "due_datetime", "status", "is_overdue", "bank_details",
        ]


class _FirSummarySerializer(serializers.ModelSerializer):
    station_name = serializers.CharField(source="station.name")

    class Meta:
        model = Fir
        fields = ["id", "fir_no", "challan", "station_name", "date_filed", "status", "description"]


class _StatementSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = CaseStatement
        fields = ["statement_by", "statement_text", "statement_date"]


class _CaseSummarySerializer(serializers.ModelSerializer):
    fir_no = serializers.CharField(source="fir.fir_no")
    court_name = serializers.CharField(source="court.name")
    judge_name = serializers.CharField(source="judge.full_name")
    statements = _StatementSummarySerializer(many=True)

    class Meta:
        model = Case
        fields = [
            "id", "case_no", "fir_no", "court_name", "judge_name", "case_type",
            "case_status", "hearing_date", "verdict", "statements",
        ]


class _TotalsSerializer(serializers.Serializer):
    total_challans = serializers.IntegerField()
    unpaid_challans = serializers.IntegerField()
    total_firs = serializers.IntegerField()
    active_cases = serializers.IntegerField()
    total_penalty = serializers.DecimalField(max_digits=12, decimal_places=2)
    unpaid_penalty = serializers.DecimalField(max_digits=12, decimal_places=2)


class StatusSnapshotSerializer(serializers.Serializer):
    accused = _AccusedSummarySerializer()
    vehicle = _VehicleSummarySerializer(allow_null=True)
    totals = _TotalsSerializer()
    challans = _ChallanSummarySerializer(many=True)
    firs = _FirSummarySerializer(many=True)
    cases = _CaseSummarySerializer(many=True)
