"""
Agencies Service Layer.

Architecture
------------
- ``StationService``    — police station registry.
- ``CourtService``      — court types and courts.
- ``PersonnelService``  — enrols police officers and judges: one user
                          account (with the matching role) plus the
                          profile row, in a single transaction.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from django.db import IntegrityError, transaction
from django.db.models import QuerySet

from accounts.models import RoleName
from accounts.services import UserManagementService
from core.domain.access import require_permission
from core.domain.exceptions import Conflict, NotFound
from core.permissions_constants import AgenciesPerms

from .models import Court, CourtType, Judge, PoliceOfficer, PoliceStation

if TYPE_CHECKING:
    from accounts.models import User

logger = logging.getLogger(__name__)

_ACCOUNT_FIELDS = ("username", "password", "email", "first_name", "last_name", "phone_number")


def _split_enrolment(validated_data: dict[str, Any]) -> tuple[dict[str, Any], dict[str, Any]]:
    account = {k: validated_data[k] for k in _ACCOUNT_FIELDS if k in validated_data}
    profile = {k: v for k, v in validated_data.items() if k not in _ACCOUNT_FIELDS}
    return account, profile


class StationService:

    @staticmethod
    def list_stations() -> QuerySet[PoliceStation]:
        return PoliceStation.objects.prefetch_related("officers").order_by("name")

    @staticmethod
    def get_station(station_id: int) -> PoliceStation:
        try:
            return PoliceStation.objects.get(pk=station_id)
        except PoliceStation.DoesNotExist:
            raise NotFound(f"Police station {station_id} not found.")

    @staticmethod
    def create_station(requesting_user: User, validated_data: dict[str, Any]) -> PoliceStation:
        require_permission(requesting_user, f"agencies.{AgenciesPerms.CAN_MANAGE_STATIONS}")
        if PoliceStation.objects.filter(code__iexact=validated_data["code"]).exists():
            raise Conflict(f"A station with code '{validated_data['code']}' already exists.")
        station = PoliceStation.objects.create(**validated_data)
        logger.info("Police station %s registered by %s", station.code, requesting_user.username)
        return station


class CourtService:

    @staticmethod
    def list_court_types() -> QuerySet[CourtType]:
        return CourtType.objects.order_by("name")

    @staticmethod
    def create_court_type(requesting_user: User, validated_data: dict[str, Any]) -> CourtType:
        require_permission(requesting_user, f"agencies.{AgenciesPerms.CAN_MANAGE_COURTS}")
        if CourtType.objects.filter(name__iexact=validated_data["name"]).exists():
            raise Conflict(f"Court type '{validated_data['name']}' already exists.")
        return CourtType.objects.create(**validated_data)

    @staticmethod
    def list_courts() -> QuerySet[Court]:
        return Court.objects.select_related("court_type").order_by("name")

    @staticmethod
    def get_court(court_id: int) -> Court:
        try:
            return Court.objects.select_related("court_type").get(pk=court_id)
        except Court.DoesNotExist:
            raise NotFound(f"Court {court_id} not found.")

    @staticmethod
    def create_court(requesting_user: User, validated_data: dict[str, Any]) -> Court:
        require_permission(requesting_user, f"agencies.{AgenciesPerms.CAN_MANAGE_COURTS}")
        court = Court.objects.create(**validated_data)
        logger.info("Court %s registered by %s", court.name, requesting_user.username)
        return court


class PersonnelService:

    @staticmethod
    def list_officers(station_id: int | None = None) -> QuerySet[PoliceOfficer]:
        qs = PoliceOfficer.objects.select_related("user", "station")
        if station_id:
            qs = qs.filter(station_id=station_id)
        return qs

    @staticmethod
    def get_officer(officer_id: int) -> PoliceOfficer:
        try:
            return PoliceOfficer.objects.select_related("user", "station").get(pk=officer_id)
        except PoliceOfficer.DoesNotExist:
            raise NotFound(f"Police officer {officer_id} not found.")

    @staticmethod
    def list_judges(court_id: int | None = None) -> QuerySet[Judge]:
        qs = Judge.objects.select_related("user", "court__court_type")
        if court_id:
            qs = qs.filter(court_id=court_id)
        return qs

    @staticmethod
    def get_judge(judge_id: int) -> Judge:
        try:
            return Judge.objects.select_related("user", "court__court_type").get(pk=judge_id)
        except Judge.DoesNotExist:
            raise NotFound(f"Judge {judge_id} not found.")

    @staticmethod
    @transaction.atomic
    def enrol_police_officer(requesting_user: User, validated_data: dict[str, Any]) -> PoliceOfficer:
        """
        Create a Police Officer account and its station profile.

        Raises:
            PermissionDenied: without ``agencies.can_manage_personnel``.
            Conflict:         duplicate username/e-mail, CNIC or badge number.
        """
        require_permission(requesting_user, f"agencies.{AgenciesPerms.CAN_MANAGE_PERSONNEL}")
        account, profile = _split_enrolment(validated_data)

        if PoliceOfficer.objects.filter(badge_number=profile["badge_number"]).exists():
            raise Conflict(f"Badge number '{profile['badge_number']}' is already assigned.")
        if PoliceOfficer.objects.filter(cnic=profile["cnic"]).exists():
            raise Conflict(f"An officer with CNIC '{profile['cnic']}' already exists.")

        user = UserManagementService.create_user_with_role(account, RoleName.POLICE_OFFICER)
        try:
            with transaction.atomic():
                officer = PoliceOfficer.objects.create(user=user, **profile)
        except IntegrityError:
            raise Conflict("An officer with the same CNIC or badge number already exists.")

        logger.info("Police officer %s enrolled at station %s", officer.badge_number, officer.station_id)
        return officer

    @staticmethod
    @transaction.atomic
    def enrol_judge(requesting_user: User, validated_data: dict[str, Any]) -> Judge:
        """Create a Judge account and its court profile."""
        require_permission(requesting_user, f"agencies.{AgenciesPerms.CAN_MANAGE_PERSONNEL}")
        account, profile = _split_enrolment(validated_data)

        if Judge.objects.filter(cnic=profile["cnic"]).exists():
            raise Conflict(f"A judge with CNIC '{profile['cnic']}' already exists.")

        user = UserManagementService.create_user_with_role(account, RoleName.JUDGE)
        try:
            with transaction.atomic():
                judge = Judge.objects.create(user=user, **profile)
        except IntegrityError:
            raise Conflict("A judge with the same CNIC already exists.")

        logger.info("Judge %s enrolled at court %s", judge.full_name, judge.court_id)
        return judge
