from __future__ import annotations

from rest_framework import serializers

from .models import Fir, FirStatus


class FirCreateSerializer(serializers.Serializer):
    challan = serializers.IntegerField()
    description = serializers.CharField(required=False, allow_blank=True, default="")


class FirUpdateSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=FirStatus.choices, required=False)
    investigation_report = serializers.CharField(required=False, allow_blank=True)
    description = serializers.CharField(required=False, allow_blank=True)

    def validate(self, attrs):
        if not attrs:
            raise serializers.ValidationError("Nothing to update.")
        return attrs


class FirSerializer(serializers.ModelSerializer):
    station_name = serializers.CharField(source="station.name", read_only=True)
    accused_name = serializers.CharField(source="challan.accused.full_name", read_only=True)
    accused_cnic = serializers.CharField(source="challan.accused.cnic", read_only=True)
    plate_number = serializers.CharField(source="challan.vehicle.plate_number", read_only=True)
    violation_type = serializers.CharField(source="challan.violation.violation_type", read_only=True)
    informant_name = serializers.CharField(source="informant.full_name", read_only=True, default=None)

    class Meta:
        model = Fir
        fields = [
            "id", "fir_no", "station", "station_name", "challan", "accused_name",
            "accused_cnic", "plate_number", "violation_type", "year", "sequence",
            "date_filed", "status", "description", "informant", "informant_name",
            "investigation_report", "created_at", "updated_at",
        ]
        read_only_fields = fields
