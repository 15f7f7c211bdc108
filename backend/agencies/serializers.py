"""
Agencies app serializers.

Read serializers expose stations, courts and personnel; the enrolment
serializers validate the combined *user account + profile* payload
that ``PersonnelService`` turns into two rows.
"""

from __future__ import annotations

from rest_framework import serializers

from .models import Court, CourtType, Judge, PoliceOfficer, PoliceStation


# ═══════════════════════════════════════════════════════════════════
#  Stations & Courts
# ═══════════════════════════════════════════════════════════════════


class PoliceStationSerializer(serializers.ModelSerializer):
    officer_count = serializers.IntegerField(source="officers.count", read_only=True)

    class Meta:
        model = PoliceStation
        fields = [
            "id", "name", "code", "location", "district", "province",
            "contact", "officer_count", "created_at",
        ]
        read_only_fields = ["id", "officer_count", "created_at"]


class CourtTypeSerializer(serializers.ModelSerializer):
    class Meta:
        model = CourtType
        fields = ["id", "name"]
        read_only_fields = ["id"]


class CourtSerializer(serializers.ModelSerializer):
    court_type_name = serializers.CharField(source="court_type.name", read_only=True)

    class Meta:
        model = Court
        fields = [
            "id", "name", "court_type", "court_type_name", "location",
            "district", "province", "created_at",
        ]
        read_only_fields = ["id", "court_type_name", "created_at"]


# ═══════════════════════════════════════════════════════════════════
#  Personnel
# ═══════════════════════════════════════════════════════════════════


class _AccountFieldsSerializer(serializers.Serializer):
    """User-account half of an enrolment payload."""

    username = serializers.CharField(max_length=150)
    password = serializers.CharField(write_only=True, min_length=8, style={"input_type": "password"})
    email = serializers.EmailField()
    first_name = serializers.CharField(max_length=150)
    last_name = serializers.CharField(max_length=150)
    phone_number = serializers.CharField(max_length=20, required=False, allow_blank=True, default="")


class PoliceOfficerEnrolSerializer(_AccountFieldsSerializer):
    station = serializers.PrimaryKeyRelatedField(queryset=PoliceStation.objects.all())
    cnic = serializers.CharField(max_length=15)
    badge_number = serializers.CharField(max_length=30)
    contact_no = serializers.CharField(max_length=20, required=False, allow_blank=True, default="")
    rank = serializers.CharField(max_length=50, required=False, allow_blank=True, default="")
    is_investigation_officer = serializers.BooleanField(required=False, default=False)
    posting_date = serializers.DateField(required=False, allow_null=True, default=None)


class JudgeEnrolSerializer(_AccountFieldsSerializer):
    court = serializers.PrimaryKeyRelatedField(queryset=Court.objects.all())
    cnic = serializers.CharField(max_length=15)
    contact_no = serializers.CharField(max_length=20, required=False, allow_blank=True, default="")
    rank = serializers.CharField(max_length=50, required=False, allow_blank=True, default="")
    service_status = serializers.BooleanField(required=False, default=True)


class PoliceOfficerSerializer(serializers.ModelSerializer):
    username = serializers.CharField(source="user.username", read_only=True)
    email = serializers.EmailField(source="user.email", read_only=True)
    full_name = serializers.CharField(read_only=True)
    station_name = serializers.CharField(source="station.name", read_only=True, default=None)

    class Meta:
        model = PoliceOfficer
        fields = [
            "id", "user", "username", "email", "full_name", "station",
            "station_name", "cnic", "contact_no", "badge_number", "rank",
            "is_investigation_officer", "posting_date",
        ]
        read_only_fields = fields


class JudgeSerializer(serializers.ModelSerializer):
    username = serializers.CharField(source="user.username", read_only=True)
    email = serializers.EmailField(source="user.email", read_only=True)
    full_name = serializers.CharField(read_only=True)
    court_name = serializers.CharField(source="court.name", read_only=True, default=None)

    class Meta:
        model = Judge
        fields = [
            "id", "user", "username", "email", "full_name", "court",
            "court_name", "cnic", "contact_no", "rank", "service_status",
        ]
        read_only_fields = fields
