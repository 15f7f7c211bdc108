"""
Evidence app Service Layer.

This module is the **single source of truth** for all business logic
in the ``evidence`` app.  Views must remain thin: validate input via
serializers, call a service method, and return the result wrapped in
a DRF ``Response``.

Architecture
------------
- ``IotDeviceService``        — device registry, calibration, pairing.
- ``EmissionReportService``   — signed reading creation, listing and
                                integrity verification.

Permission Constants (from ``core.permissions_constants.EvidencePerms``)
------------------------------------------------------------------------
- ``CAN_MANAGE_IOT_DEVICES``      — Station Authority / Admin.
- ``CAN_RECORD_EMISSION_REPORT``  — Police Officer.
"""

from __future__ import annotations

import logging
from datetime import timedelta, timezone as dt_timezone
from typing import TYPE_CHECKING, Any

from django.db import transaction
from django.db.models import QuerySet
from django.utils import timezone

from core.constants import DUPLICATE_READING_WINDOW_MINUTES, LEGAL_SOUND_LIMIT_DBA
from core.domain.access import require_permission
from core.domain.exceptions import Conflict, DomainError, NotFound
from core.permissions_constants import EvidencePerms

from .models import EmissionReport, IotDevice
from .signature import SignatureVerification, canonical_decimal, generate_signature, verify_report

if TYPE_CHECKING:
    from accounts.models import User

logger = logging.getLogger(__name__)

_READING_FIELDS = ("co", "co2", "hc", "nox")


# ═══════════════════════════════════════════════════════════════════
#  IoT devices
# ═══════════════════════════════════════════════════════════════════


class IotDeviceService:
    """Registry of measurement devices."""

    @staticmethod
    def list_devices(filters: dict[str, Any]) -> QuerySet[IotDevice]:
        qs = IotDevice.objects.select_related("paired_officer__user")
        if filters.get("available"):
            qs = qs.filter(is_registered=True, is_active=True, calibration_status=True)
        if filters.get("paired_officer"):
            qs = qs.filter(paired_officer_id=filters["paired_officer"])
        return qs

    @staticmethod
    def get_device(device_id: int) -> IotDevice:
        try:
            return IotDevice.objects.select_related("paired_officer__user").get(pk=device_id)
        except IotDevice.DoesNotExist:
            raise NotFound(f"IoT device {device_id} not found.")

    @staticmethod
    def register_device(requesting_user: User, validated_data: dict[str, Any]) -> IotDevice:
        require_permission(requesting_user, f"evidence.{EvidencePerms.CAN_MANAGE_IOT_DEVICES}")
        name = validated_data["device_name"]
        if IotDevice.objects.filter(device_name__iexact=name).exists():
            raise Conflict(f"A device named '{name}' is already registered.")
        device = IotDevice.objects.create(is_registered=True, **validated_data)
        logger.info("IoT device %s registered by %s", device.device_name, requesting_user.username)
        return device

    @staticmethod
    def update_device(requesting_user: User, device_id: int, validated_data: dict[str, Any]) -> IotDevice:
        """Update firmware / calibration / activity fields."""
        require_permission(requesting_user, f"evidence.{EvidencePerms.CAN_MANAGE_IOT_DEVICES}")
        device = IotDeviceService.get_device(device_id)
        for field, value in validated_data.items():
            setattr(device, field, value)
        device.save()
        logger.info("IoT device %s updated by %s", device.device_name, requesting_user.username)
        return device

    @staticmethod
    def pair_device(requesting_user: User, device_id: int, officer) -> IotDevice:
        require_permission(requesting_user, f"evidence.{EvidencePerms.CAN_MANAGE_IOT_DEVICES}")
        device = IotDeviceService.get_device(device_id)
        if not device.is_active:
            raise DomainError(f"Device {device.device_name} is inactive and cannot be paired.")
        device.paired_officer = officer
        device.pairing_datetime = timezone.now()
        device.save(update_fields=["paired_officer", "pairing_datetime", "updated_at"])
        logger.info("IoT device %s paired with officer %s", device.device_name, officer.badge_number)
        return device

    @staticmethod
    def unpair_device(requesting_user: User, device_id: int) -> IotDevice:
        require_permission(requesting_user, f"evidence.{EvidencePerms.CAN_MANAGE_IOT_DEVICES}")
        device = IotDeviceService.get_device(device_id)
        device.paired_officer = None
        device.pairing_datetime = None
        device.save(update_fields=["paired_officer", "pairing_datetime", "updated_at"])
        return device


# ═══════════════════════════════════════════════════════════════════
#  Emission reports
# ═══════════════════════════════════════════════════════════════════


class EmissionReportService:
    """Signed emission readings."""

    @staticmethod
    @transaction.atomic
    def create_report(requesting_user: User, validated_data: dict[str, Any]) -> EmissionReport:
        """
        Record a reading and stamp it with its integrity signature.

        Rules
        -----
        1. Caller needs ``evidence.can_record_emission_report``.
        2. The device exists and is registered, active and calibrated.
        3. ``test_datetime`` is not in the future.
        4. No other reading from the same device lies within
           ``DUPLICATE_READING_WINDOW_MINUTES`` of ``test_datetime``.
        5. Readings are canonicalised to two decimals *before* signing so
           the stored values are exactly the signed ones.

        Raises:
            PermissionDenied, NotFound, DomainError, Conflict
        """
        require_permission(
            requesting_user,
            f"evidence.{EvidencePerms.CAN_RECORD_EMISSION_REPORT}",
            message="Only police officers can record emission reports.",
        )

        device = validated_data["device"]
        if not isinstance(device, IotDevice):
            device = IotDeviceService.get_device(device)
        if not device.is_registered:
            raise DomainError(f"Device {device.device_name} is not registered.")
        if not device.is_active:
            raise DomainError(f"Device {device.device_name} is inactive.")
        if not device.calibration_status:
            raise DomainError(f"Device {device.device_name} is not calibrated.")

        test_datetime = validated_data["test_datetime"]
        if timezone.is_naive(test_datetime):
            test_datetime = timezone.make_aware(test_datetime, dt_timezone.utc)
        if test_datetime > timezone.now():
            raise DomainError("Test date/time cannot be in the future.")

        window = timedelta(minutes=DUPLICATE_READING_WINDOW_MINUTES)
        if EmissionReport.objects.filter(
            device=device,
            test_datetime__range=(test_datetime - window, test_datetime + window),
        ).exists():
            raise Conflict(
                f"Device {device.device_name} already has a reading within "
                f"{DUPLICATE_READING_WINDOW_MINUTES} minutes of {test_datetime.isoformat()}."
            )

        readings = {
            field: canonical_decimal(validated_data[field]) if validated_data.get(field) is not None else None
            for field in _READING_FIELDS
        }
        sound_level = canonical_decimal(validated_data["sound_level_dba"])

        signature = generate_signature(
            device.pk,
            readings["co"],
            readings["co2"],
            readings["hc"],
            readings["nox"],
            sound_level,
            test_datetime,
        )
        report = EmissionReport.objects.create(
            device=device,
            sound_level_dba=sound_level,
            test_datetime=test_datetime,
            ml_classification=validated_data.get("ml_classification") or "",
            digital_signature=signature,
            **readings,
        )

        logger.info(
            "Emission report %s recorded on %s by %s: %s dBA%s",
            report.pk, device.device_name, requesting_user.username, sound_level,
            " (VIOLATION)" if report.is_violation else "",
        )
        return report

    @staticmethod
    def get_report(report_id: int) -> EmissionReport:
        try:
            return EmissionReport.objects.select_related("device").get(pk=report_id)
        except EmissionReport.DoesNotExist:
            raise NotFound(f"Emission report {report_id} not found.")

    @staticmethod
    def list_reports(filters: dict[str, Any]) -> QuerySet[EmissionReport]:
        """
        Filters: ``device`` (pk), ``violations_only`` (bool),
        ``without_challan`` (bool), ``date_from`` / ``date_to`` (dates).
        """
        qs = EmissionReport.objects.select_related("device")
        if filters.get("device"):
            qs = qs.filter(device_id=filters["device"])
        if filters.get("violations_only"):
            qs = qs.filter(sound_level_dba__gt=LEGAL_SOUND_LIMIT_DBA)
        if filters.get("without_challan"):
            qs = qs.filter(challan__isnull=True)
        if filters.get("date_from"):
            qs = qs.filter(test_datetime__date__gte=filters["date_from"])
        if filters.get("date_to"):
            qs = qs.filter(test_datetime__date__lte=filters["date_to"])
        return qs

    @staticmethod
    def verify(report_id: int) -> SignatureVerification:
        """Recompute and compare the signature; read-only."""
        report = EmissionReportService.get_report(report_id)
        result = verify_report(report)
        if not result.is_authentic:
            logger.warning("Emission report %s failed signature verification", report_id)
        return result
