from __future__ import annotations

from rest_framework import serializers

from .models import Accused, Vehicle


class AccusedSerializer(serializers.ModelSerializer):
    class Meta:
        model = Accused
        fields = [
            "id", "cnic", "full_name", "email", "contact", "address",
            "city", "province", "created_at",
        ]
        read_only_fields = ["id", "created_at"]
        # Uniqueness is reported by the service as a 409, not a 400.
        extra_kwargs = {"cnic": {"validators": []}}


class AccusedUpdateSerializer(serializers.ModelSerializer):
    class Meta:
        model = Accused
        fields = ["full_name", "email", "contact", "address", "city", "province"]
        extra_kwargs = {field: {"required": False} for field in fields}


class VehicleSerializer(serializers.ModelSerializer):
    owner_name = serializers.CharField(source="owner.full_name", read_only=True, default=None)
    owner_cnic = serializers.CharField(source="owner.cnic", read_only=True, default=None)

    class Meta:
        model = Vehicle
        fields = [
            "id", "plate_number", "make", "color", "chassis_no", "engine_no",
            "registration_year", "owner", "owner_name", "owner_cnic", "created_at",
        ]
        read_only_fields = fields
