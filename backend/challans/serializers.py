"""
Challans app serializers.

``ChallanCreateSerializer`` accepts the accused and the vehicle either
by id (``accused_id`` / ``vehicle_id``) or as nested payloads that are
resolved by natural key in ``ChallanService.create_challan``.
"""

from __future__ import annotations

from rest_framework import serializers

from .models import Challan, ChallanStatus, Violation


class ViolationSerializer(serializers.ModelSerializer):
    class Meta:
        model = Violation
        fields = [
            "id", "violation_type", "description", "penalty_amount",
            "section_of_law", "is_cognizable",
        ]
        read_only_fields = ["id"]
        extra_kwargs = {"violation_type": {"validators": []}}


class ViolationUpdateSerializer(serializers.ModelSerializer):
    class Meta:
        model = Violation
        fields = ["description", "penalty_amount", "section_of_law", "is_cognizable"]
        extra_kwargs = {field: {"required": False} for field in fields}


class AccusedInputSerializer(serializers.Serializer):
    cnic = serializers.CharField(max_length=20)
    full_name = serializers.CharField(max_length=255, required=False, allow_blank=True)
    email = serializers.EmailField(required=False, allow_blank=True)
    contact = serializers.CharField(max_length=20, required=False, allow_blank=True)
    address = serializers.CharField(required=False, allow_blank=True)
    city = serializers.CharField(max_length=100, required=False, allow_blank=True)
    province = serializers.CharField(max_length=100, required=False, allow_blank=True)


class VehicleInputSerializer(serializers.Serializer):
    plate_number = serializers.CharField(max_length=20)
    make = serializers.CharField(max_length=100, required=False, allow_blank=True)
    color = serializers.CharField(max_length=50, required=False, allow_blank=True)
    chassis_no = serializers.CharField(max_length=50, required=False, allow_blank=True)
    engine_no = serializers.CharField(max_length=50, required=False, allow_blank=True)
    registration_year = serializers.IntegerField(required=False, allow_null=True, min_value=1900)


class ChallanCreateSerializer(serializers.Serializer):
    violation = serializers.IntegerField()
    emission_report = serializers.IntegerField(required=False, allow_null=True)
    accused_id = serializers.IntegerField(required=False, allow_null=True)
    accused = AccusedInputSerializer(required=False)
    vehicle_id = serializers.IntegerField(required=False, allow_null=True)
    vehicle = VehicleInputSerializer(required=False)
    evidence_image = serializers.ImageField(required=False, allow_null=True)
    bank_details = serializers.CharField(max_length=255, required=False, allow_blank=True)

    def validate(self, attrs):
        if not attrs.get("accused_id") and not attrs.get("accused"):
            raise serializers.ValidationError("Provide either 'accused_id' or 'accused'.")
        if not attrs.get("vehicle_id") and not attrs.get("vehicle"):
            raise serializers.ValidationError("Provide either 'vehicle_id' or 'vehicle'.")
        return attrs


class ChallanSerializer(serializers.ModelSerializer):
    officer_name = serializers.CharField(source="officer.full_name", read_only=True)
    station_name = serializers.CharField(source="officer.station.name", read_only=True, default=None)
    accused_name = serializers.CharField(source="accused.full_name", read_only=True)
    accused_cnic = serializers.CharField(source="accused.cnic", read_only=True)
    plate_number = serializers.CharField(source="vehicle.plate_number", read_only=True)
    violation_type = serializers.CharField(source="violation.violation_type", read_only=True)
    penalty_amount = serializers.DecimalField(
        source="violation.penalty_amount", max_digits=10, decimal_places=2, read_only=True,
    )
    is_cognizable = serializers.BooleanField(source="violation.is_cognizable", read_only=True)
    is_overdue = serializers.BooleanField(read_only=True)

    class Meta:
        model = Challan
        fields = [
            "id", "officer", "officer_name", "station_name", "accused",
            "accused_name", "accused_cnic", "vehicle", "plate_number",
            "violation", "violation_type", "penalty_amount", "is_cognizable",
            "emission_report", "evidence_image", "issue_datetime",
            "due_datetime", "status", "is_overdue", "bank_details",
            "digital_signature", "created_at",
        ]
        read_only_fields = fields


class ChallanFilterSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=ChallanStatus.choices, required=False)
    vehicle = serializers.IntegerField(required=False)
    accused = serializers.IntegerField(required=False)
    overdue = serializers.BooleanField(required=False, default=False)
