"""
Evidence app serializers.

``EmissionReportCreateSerializer`` only validates shape and ranges; the
device gate, duplicate window and signing live in
``EmissionReportService.create_report``.
"""

from __future__ import annotations

from rest_framework import serializers

from agencies.models import PoliceOfficer
from core.constants import LEGAL_SOUND_LIMIT_DBA

from .models import EmissionReport, IotDevice


# ═══════════════════════════════════════════════════════════════════
#  IoT devices
# ═══════════════════════════════════════════════════════════════════


class IotDeviceSerializer(serializers.ModelSerializer):
    paired_officer_name = serializers.CharField(
        source="paired_officer.full_name", read_only=True, default=None,
    )
    can_record = serializers.BooleanField(read_only=True)

    class Meta:
        model = IotDevice
        fields = [
            "id", "device_name", "firmware_version", "calibration_date",
            "calibration_status", "calibration_certificate_no", "is_registered",
            "is_active", "can_record", "paired_officer", "paired_officer_name",
            "pairing_datetime", "created_at",
        ]
        read_only_fields = [
            "id", "is_registered", "can_record", "paired_officer",
            "paired_officer_name", "pairing_datetime", "created_at",
        ]


class IotDeviceUpdateSerializer(serializers.ModelSerializer):
    class Meta:
        model = IotDevice
        fields = [
            "firmware_version", "calibration_date", "calibration_status",
            "calibration_certificate_no", "is_active",
        ]
        extra_kwargs = {field: {"required": False} for field in fields}


class PairDeviceSerializer(serializers.Serializer):
    officer = serializers.PrimaryKeyRelatedField(queryset=PoliceOfficer.objects.all())


# ═══════════════════════════════════════════════════════════════════
#  Emission reports
# ═══════════════════════════════════════════════════════════════════


class EmissionReportCreateSerializer(serializers.Serializer):
    device = serializers.PrimaryKeyRelatedField(queryset=IotDevice.objects.all())
    co = serializers.DecimalField(max_digits=10, decimal_places=2, required=False, allow_null=True, min_value=0)
    co2 = serializers.DecimalField(max_digits=10, decimal_places=2, required=False, allow_null=True, min_value=0)
    hc = serializers.DecimalField(max_digits=10, decimal_places=2, required=False, allow_null=True, min_value=0)
    nox = serializers.DecimalField(max_digits=10, decimal_places=2, required=False, allow_null=True, min_value=0)
    sound_level_dba = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0)
    test_datetime = serializers.DateTimeField()
    ml_classification = serializers.CharField(max_length=100, required=False, allow_blank=True, default="")


class EmissionReportSerializer(serializers.ModelSerializer):
    device_name = serializers.CharField(source="device.device_name", read_only=True)
    is_violation = serializers.BooleanField(read_only=True)
    legal_limit_dba = serializers.SerializerMethodField()
    challan_id = serializers.SerializerMethodField()

    class Meta:
        model = EmissionReport
        fields = [
            "id", "device", "device_name", "co", "co2", "hc", "nox",
            "sound_level_dba", "legal_limit_dba", "is_violation",
            "test_datetime", "ml_classification", "digital_signature",
            "challan_id", "created_at",
        ]
        read_only_fields = fields

    def get_legal_limit_dba(self, obj) -> str:
        return str(LEGAL_SOUND_LIMIT_DBA)

    def get_challan_id(self, obj) -> int | None:
        challan = getattr(obj, "challan", None)
        return challan.pk if challan else None


class SignatureVerificationSerializer(serializers.Serializer):
    report_id = serializers.IntegerField()
    is_authentic = serializers.BooleanField()
    digital_signature_match = serializers.BooleanField()
    admissible_in_court = serializers.BooleanField()
    data_integrity = serializers.CharField()
    stored_signature = serializers.CharField()
    computed_signature = serializers.CharField()
    verification_message = serializers.CharField()
    verified_at = serializers.DateTimeField()
