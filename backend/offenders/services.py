"""
Offenders Service Layer.

Architecture
------------
- ``EntityResolutionService`` — get-or-create by natural key (CNIC,
                                plate) with last-write-wins contact
                                refresh.  Used by challan issuance.
- ``AccusedService``          — registry CRUD and search.
- ``VehicleService``          — registry lookups.

Resolution is idempotent: the unique constraints on ``Accused.cnic``
and ``Vehicle.plate_number`` are the backstop, and an ``IntegrityError``
from a racing insert is answered by re-reading the winner's row.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from django.db import IntegrityError, transaction
from django.db.models import Q, QuerySet

from core.domain.access import require_permission
from core.domain.exceptions import Conflict, DomainError, NotFound
from core.permissions_constants import OffendersPerms

from .models import Accused, Vehicle
from .normalization import normalize_cnic, normalize_plate

if TYPE_CHECKING:
    from accounts.models import User

logger = logging.getLogger(__name__)

_ACCUSED_FIELDS = ("full_name", "email", "contact", "address", "city", "province")
_ACCUSED_REFRESHED_FIELDS = ("contact", "address")
_VEHICLE_FIELDS = ("make", "color", "chassis_no", "engine_no", "registration_year")


def _pick(data: dict[str, Any], fields: tuple[str, ...]) -> dict[str, Any]:
    return {f: data[f] for f in fields if data.get(f) not in (None, "")}


# ═══════════════════════════════════════════════════════════════════
#  Entity resolution
# ═══════════════════════════════════════════════════════════════════


class EntityResolutionService:

    @staticmethod
    def resolve_accused(data: dict[str, Any]) -> tuple[Accused, bool]:
        """
        Return ``(accused, created)`` for the CNIC in ``data``.

        An existing row has its ``contact`` / ``address`` overwritten
        when the incoming values are non-empty and differ.
        """
        cnic = normalize_cnic(data.get("cnic", ""))
        if not cnic:
            raise DomainError("Accused CNIC is required.")

        accused = Accused.objects.filter(cnic=cnic).first()
        if accused is None:
            if not data.get("full_name"):
                raise DomainError(f"No accused with CNIC {cnic}; full_name is required to register one.")
            try:
                with transaction.atomic():
                    accused = Accused.objects.create(cnic=cnic, **_pick(data, _ACCUSED_FIELDS))
                logger.info("Accused %s registered", cnic)
                return accused, True
            except IntegrityError:
                accused = Accused.objects.get(cnic=cnic)

        changed = [
            field for field, value in _pick(data, _ACCUSED_REFRESHED_FIELDS).items()
            if getattr(accused, field) != value
        ]
        for field in changed:
            setattr(accused, field, data[field])
        if changed:
            accused.save(update_fields=[*changed, "updated_at"])
            logger.info("Accused %s contact details refreshed: %s", cnic, ", ".join(changed))
        return accused, False

    @staticmethod
    def resolve_vehicle(data: dict[str, Any], owner: Accused | None = None) -> tuple[Vehicle, bool]:
        """
        Return ``(vehicle, created)`` for the plate in ``data``.

        ``owner`` is attached only when the vehicle has none yet.
        """
        plate = normalize_plate(data.get("plate_number", ""))
        if not plate:
            raise DomainError("Vehicle plate number is required.")

        vehicle = Vehicle.objects.filter(plate_number=plate).first()
        if vehicle is None:
            try:
                with transaction.atomic():
                    vehicle = Vehicle.objects.create(
                        plate_number=plate, owner=owner, **_pick(data, _VEHICLE_FIELDS),
                    )
                logger.info("Vehicle %s registered", plate)
                return vehicle, True
            except IntegrityError:
                vehicle = Vehicle.objects.get(plate_number=plate)

        if owner is not None and vehicle.owner_id is None:
            vehicle.owner = owner
            vehicle.save(update_fields=["owner", "updated_at"])
        return vehicle, False


# ═══════════════════════════════════════════════════════════════════
#  Registries
# ═══════════════════════════════════════════════════════════════════


class AccusedService:

    @staticmethod
    def list_accused(search: str | None = None) -> QuerySet[Accused]:
        qs = Accused.objects.all()
        if search:
            qs = qs.filter(
                Q(full_name__icontains=search)
                | Q(cnic__icontains=search)
                | Q(cnic=normalize_cnic(search))
            )
        return qs

    @staticmethod
    def get_accused(accused_id: int) -> Accused:
        try:
            return Accused.objects.get(pk=accused_id)
        except Accused.DoesNotExist:
            raise NotFound(f"Accused {accused_id} not found.")

    @staticmethod
    def get_by_cnic(cnic: str) -> Accused:
        normalized = normalize_cnic(cnic)
        try:
            return Accused.objects.get(cnic=normalized)
        except Accused.DoesNotExist:
            raise NotFound(f"No accused with CNIC {normalized}.")

    @staticmethod
    def create_accused(requesting_user: User, validated_data: dict[str, Any]) -> Accused:
        require_permission(requesting_user, f"offenders.{OffendersPerms.CAN_REGISTER_ACCUSED}")
        cnic = normalize_cnic(validated_data["cnic"])
        if Accused.objects.filter(cnic=cnic).exists():
            raise Conflict(f"An accused with CNIC {cnic} already exists.")
        try:
            with transaction.atomic():
                accused = Accused.objects.create(cnic=cnic, **_pick(validated_data, _ACCUSED_FIELDS))
        except IntegrityError:
            raise Conflict(f"An accused with CNIC {cnic} already exists.")
        logger.info("Accused %s registered by %s", cnic, requesting_user.username)
        return accused

    @staticmethod
    def update_accused(requesting_user: User, accused_id: int, validated_data: dict[str, Any]) -> Accused:
        require_permission(requesting_user, f"offenders.{OffendersPerms.CAN_UPDATE_ACCUSED}")
        accused = AccusedService.get_accused(accused_id)
        for field, value in validated_data.items():
            setattr(accused, field, value)
        accused.save()
        return accused


class VehicleService:

    @staticmethod
    def list_vehicles(owner_id: int | None = None) -> QuerySet[Vehicle]:
        qs = Vehicle.objects.select_related("owner")
        if owner_id:
            qs = qs.filter(owner_id=owner_id)
        return qs

    @staticmethod
    def get_vehicle(vehicle_id: int) -> Vehicle:
        try:
            return Vehicle.objects.select_related("owner").get(pk=vehicle_id)
        except Vehicle.DoesNotExist:
            raise NotFound(f"Vehicle {vehicle_id} not found.")

    @staticmethod
    def get_by_plate(plate: str) -> Vehicle:
        normalized = normalize_plate(plate)
        try:
            return Vehicle.objects.select_related("owner").get(plate_number=normalized)
        except Vehicle.DoesNotExist:
            raise NotFound(f"No vehicle with plate {normalized}.")
