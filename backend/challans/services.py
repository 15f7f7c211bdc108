"""
Challans Service Layer.

Architecture
------------
- ``ViolationService`` — reference table maintenance.
- ``ChallanService``   — issuance (linkage gate, entity resolution,
                         due date, signature copy, e-mail), listing and
                         search.

Issuance runs in one transaction: the emission report row is locked,
the gate is checked, the accused and vehicle are resolved and the
challan is inserted.  The ``OneToOneField`` on ``emission_report`` is the
backstop; its ``IntegrityError`` becomes a ``Conflict``.
"""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import TYPE_CHECKING, Any

from django.db import IntegrityError, transaction
from django.db.models import Q, QuerySet
from django.utils import timezone

from core.constants import CHALLAN_PAYMENT_WINDOW_DAYS, DEFAULT_BANK_DETAILS
from core.domain.access import require_permission
from core.domain.exceptions import Conflict, DomainError, NotFound, PermissionDenied
from core.domain.linkage import ensure_report_unlinked
from core.domain.notifications import NotificationService
from core.domain.transactions import lock_for_update
from core.permissions_constants import ChallansPerms
from evidence.models import EmissionReport
from offenders.models import Accused, Vehicle
from offenders.normalization import normalize_cnic, normalize_plate
from offenders.services import EntityResolutionService

from .models import Challan, ChallanStatus, Violation

if TYPE_CHECKING:
    from accounts.models import User
    from agencies.models import PoliceOfficer

logger = logging.getLogger(__name__)


def _issuing_officer(user: User) -> PoliceOfficer:
    officer = getattr(user, "police_officer", None)
    if officer is None:
        raise PermissionDenied("Only police officers can issue challans.")
    if officer.station_id is None:
        raise DomainError(f"Officer {officer.badge_number} is not posted to a police station.")
    return officer


def _resolve_pk(model, value: Any):
    if isinstance(value, model):
        return value
    try:
        return model.objects.get(pk=value)
    except model.DoesNotExist:
        raise NotFound(f"{model._meta.verbose_name.title()} {value} not found.")


class ViolationService:

    @staticmethod
    def list_violations(cognizable: bool | None = None) -> QuerySet[Violation]:
        qs = Violation.objects.all()
        if cognizable is not None:
            qs = qs.filter(is_cognizable=cognizable)
        return qs

    @staticmethod
    def create_violation(requesting_user: User, validated_data: dict[str, Any]) -> Violation:
        require_permission(requesting_user, f"challans.{ChallansPerms.CAN_MANAGE_VIOLATIONS}")
        name = validated_data["violation_type"]
        if Violation.objects.filter(violation_type__iexact=name).exists():
            raise Conflict(f"Violation '{name}' already exists.")
        violation = Violation.objects.create(**validated_data)
        logger.info("Violation '%s' created by %s", violation.violation_type, requesting_user.username)
        return violation

    @staticmethod
    def update_violation(requesting_user: User, violation_id: int, validated_data: dict[str, Any]) -> Violation:
        require_permission(requesting_user, f"challans.{ChallansPerms.CAN_MANAGE_VIOLATIONS}")
        violation = _resolve_pk(Violation, violation_id)
        for field, value in validated_data.items():
            setattr(violation, field, value)
        violation.save()
        return violation


class ChallanService:

    @staticmethod
    def _base_queryset() -> QuerySet[Challan]:
        return Challan.objects.select_related(
            "officer__user", "officer__station", "accused", "vehicle",
            "violation", "emission_report",
        )

    @staticmethod
    @transaction.atomic
    def create_challan(requesting_user: User, validated_data: dict[str, Any]) -> Challan:
        """
        Issue a challan.

        ``validated_data`` keys:
            violation        — Violation pk (required)
            emission_report  — EmissionReport pk (optional)
            accused_id | accused  — existing pk, or CNIC-keyed payload
            vehicle_id | vehicle  — existing pk, or plate-keyed payload
            evidence_image, bank_details (optional)

        Raises:
            PermissionDenied: missing capability or officer profile.
            NotFound:         violation / report / accused / vehicle id.
            Conflict:         report already used by another challan.
            DomainError:      officer without a station, missing party data.
        """
        require_permission(
            requesting_user,
            f"challans.{ChallansPerms.CAN_ISSUE_CHALLAN}",
            message="Only police officers can issue challans.",
        )
        officer = _issuing_officer(requesting_user)
        violation = _resolve_pk(Violation, validated_data["violation"])

        report = None
        report_id = validated_data.get("emission_report")
        if report_id is not None:
            report = lock_for_update(EmissionReport, getattr(report_id, "pk", report_id))
            ensure_report_unlinked(report.pk)

        if validated_data.get("accused_id"):
            accused = _resolve_pk(Accused, validated_data["accused_id"])
        elif validated_data.get("accused"):
            accused, _ = EntityResolutionService.resolve_accused(validated_data["accused"])
        else:
            raise DomainError("Either accused_id or accused details must be provided.")

        if validated_data.get("vehicle_id"):
            vehicle = _resolve_pk(Vehicle, validated_data["vehicle_id"])
            if vehicle.owner_id is None:
                vehicle.owner = accused
                vehicle.save(update_fields=["owner", "updated_at"])
        elif validated_data.get("vehicle"):
            vehicle, _ = EntityResolutionService.resolve_vehicle(validated_data["vehicle"], owner=accused)
        else:
            raise DomainError("Either vehicle_id or vehicle details must be provided.")

        issued_at = timezone.now()
        try:
            with transaction.atomic():
                challan = Challan.objects.create(
                    officer=officer,
                    accused=accused,
                    vehicle=vehicle,
                    violation=violation,
                    emission_report=report,
                    evidence_image=validated_data.get("evidence_image"),
                    issue_datetime=issued_at,
                    due_datetime=issued_at + timedelta(days=CHALLAN_PAYMENT_WINDOW_DAYS),
                    status=ChallanStatus.UNPAID,
                    bank_details=validated_data.get("bank_details") or DEFAULT_BANK_DETAILS,
                    digital_signature=report.digital_signature if report else "",
                )
        except IntegrityError:
            raise Conflict(f"Emission report {report.pk if report else '-'} is already linked to a challan.")

        logger.info(
            "Challan %s issued by officer %s to %s for '%s'",
            challan.pk, officer.badge_number, accused.cnic, violation.violation_type,
        )
        NotificationService.notify(
            event_type="challan_issued",
            recipient=accused.email,
            context={
                "challan_id": challan.pk,
                "name": accused.full_name,
                "plate": vehicle.plate_number,
                "violation": violation.violation_type,
                "penalty": violation.penalty_amount,
                "due_date": challan.due_datetime.date().isoformat(),
                "bank_details": challan.bank_details,
            },
        )
        return challan

    @staticmethod
    def get_challan(challan_id: int) -> Challan:
        try:
            return ChallanService._base_queryset().get(pk=challan_id)
        except Challan.DoesNotExist:
            raise NotFound(f"Challan {challan_id} not found.")

    @staticmethod
    def list_challans(filters: dict[str, Any]) -> QuerySet[Challan]:
        """Filters: ``status``, ``vehicle``, ``accused``, ``overdue`` (bool)."""
        qs = ChallanService._base_queryset()
        if filters.get("status"):
            qs = qs.filter(status=filters["status"])
        if filters.get("vehicle"):
            qs = qs.filter(vehicle_id=filters["vehicle"])
        if filters.get("accused"):
            qs = qs.filter(accused_id=filters["accused"])
        if filters.get("overdue"):
            qs = qs.filter(status=ChallanStatus.UNPAID, due_datetime__lt=timezone.now())
        return qs

    @staticmethod
    def search(plate: str | None = None, cnic: str | None = None) -> QuerySet[Challan]:
        if not plate and not cnic:
            raise DomainError("Provide a plate number or a CNIC to search.")
        criteria = Q()
        if plate:
            criteria |= Q(vehicle__plate_number=normalize_plate(plate))
        if cnic:
            criteria |= Q(accused__cnic=normalize_cnic(cnic))
        return ChallanService._base_queryset().filter(criteria)

