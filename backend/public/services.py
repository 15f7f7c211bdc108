"""
Public status lookup Service Layer.

Flow
----
1. ``request_otp``  — vehicle number + CNIC + e-mail must identify an
   accused on record; a 6-digit code is stored and e-mailed.
2. ``verify_otp``   — a matching, unexpired code is exchanged for an
   access token valid for ``ACCESS_TOKEN_LIFETIME_HOURS``.
3. ``get_status``   — the token unlocks a read-only snapshot of the
   challans, FIRs and cases recorded against the verified vehicle.

Codes and tokens come from ``secrets``.  The OTP e-mail is sent
synchronously inside the transaction, so a delivery failure rolls the
stored code back.
"""

from __future__ import annotations

import logging
import secrets
from dataclasses import dataclass, field
from datetime import timedelta
from decimal import Decimal
from typing import Any

from django.db import transaction
from django.db.models import Q
from django.utils import timezone

from cases.models import ACTIVE_CASE_STATUSES, Case
from challans.models import Challan, ChallanStatus
from core.constants import (
    ACCESS_TOKEN_BYTES,
    ACCESS_TOKEN_LIFETIME_HOURS,
    OTP_LENGTH,
    OTP_LIFETIME_MINUTES,
)
from core.domain.exceptions import DomainError, NotFound, PermissionDenied
from core.domain.notifications import NotificationError, NotificationService
from firs.models import Fir
from offenders.models import Accused, Vehicle
from offenders.normalization import normalize_cnic, plate_match_key

from .models import PublicStatusOtp

logger = logging.getLogger(__name__)


def generate_otp() -> str:
    return f"{secrets.randbelow(10 ** OTP_LENGTH):0{OTP_LENGTH}d}"


def mask_email(email: str) -> str:
    """``ali.khan@example.com`` → ``a***n@example.com``."""
    local, sep, domain = email.partition("@")
    if not sep:
        return email
    if len(local) <= 2:
        return f"{local}***@{domain}"
    return f"{local[0]}***{local[-1]}@{domain}"


def _matching_vehicle(accused: Accused, vehicle_no: str) -> Vehicle | None:
    key = plate_match_key(vehicle_no)
    candidates = Vehicle.objects.filter(Q(owner=accused) | Q(challans__accused=accused)).distinct()
    for vehicle in candidates:
        if plate_match_key(vehicle.plate_number) == key:
            return vehicle
    return None


@dataclass
class StatusSnapshot:
    accused: Accused
    vehicle: Vehicle | None
    challans: list[Challan]
    firs: list[Fir]
    cases: list[Case]
    totals: dict[str, Any] = field(default_factory=dict)


class PublicStatusService:

    @staticmethod
    @transaction.atomic
    def request_otp(vehicle_no: str, cnic: str, email: str) -> dict[str, Any]:
        """
        Raises:
            NotFound:    no accused with that CNIC and e-mail, or the
                         vehicle is not linked to them.
            DomainError: the OTP e-mail could not be sent.
        """
        cnic = normalize_cnic(cnic)
        email = email.strip()
        accused = Accused.objects.filter(cnic=cnic, email__iexact=email).first()
        if accused is None:
            raise NotFound(
                "No records found matching the provided CNIC and email combination."
            )
        if _matching_vehicle(accused, vehicle_no) is None:
            raise NotFound("No records found for the provided vehicle number with your CNIC.")

        vehicle_key = plate_match_key(vehicle_no)
        PublicStatusOtp.objects.filter(
            vehicle_no=vehicle_key, cnic=cnic, email__iexact=email, is_verified=False,
        ).delete()

        otp = generate_otp()
        PublicStatusOtp.objects.create(
            vehicle_no=vehicle_key,
            cnic=cnic,
            email=email.lower(),
            otp_code=otp,
            expires_at=timezone.now() + timedelta(minutes=OTP_LIFETIME_MINUTES),
        )
        try:
            NotificationService.send_now(
                event_type="public_status_otp",
                recipient=email,
                context={"otp": otp, "minutes": OTP_LIFETIME_MINUTES},
            )
        except NotificationError:
            logger.exception("Failed to send public status OTP to %s", email)
            raise DomainError("Failed to send OTP email. Please try again later.")

        logger.info("Public status OTP issued for CNIC %s / vehicle %s", cnic, vehicle_key)
        masked = mask_email(email)
        return {
            "message": (
                f"A {OTP_LENGTH}-digit verification code has been sent to {masked}. "
                f"The code is valid for {OTP_LIFETIME_MINUTES} minutes."
            ),
            "masked_email": masked,
            "expires_in_minutes": OTP_LIFETIME_MINUTES,
        }

    @staticmethod
    @transaction.atomic
    def verify_otp(vehicle_no: str, cnic: str, email: str, otp: str) -> PublicStatusOtp:
        record = (
            PublicStatusOtp.objects.select_for_update()
            .filter(
                vehicle_no=plate_match_key(vehicle_no),
                cnic=normalize_cnic(cnic),
                email__iexact=email.strip(),
                otp_code=otp.strip(),
                is_verified=False,
            )
            .first()
        )
        if record is None:
            raise DomainError("Invalid OTP. Please check the code and try again.")
        if record.is_expired:
            raise DomainError("OTP has expired. Please request a new code.")

        now = timezone.now()
        record.is_verified = True
        record.verified_at = now
        record.access_token = secrets.token_urlsafe(ACCESS_TOKEN_BYTES)
        record.access_token_expires_at = now + timedelta(hours=ACCESS_TOKEN_LIFETIME_HOURS)
        record.save(update_fields=[
            "is_verified", "verified_at", "access_token", "access_token_expires_at", "updated_at",
        ])
        logger.info("Public status OTP verified for CNIC %s", record.cnic)
        return record

    @staticmethod
    def get_status(access_token: str | None) -> StatusSnapshot:
        """
        Raises:
            PermissionDenied: missing, unknown or expired token.
            NotFound:         the accused no longer exists.
        """
        if not access_token:
            raise PermissionDenied("An access token is required. Please verify your identity first.")
        record = PublicStatusOtp.objects.filter(access_token=access_token, is_verified=True).first()
        if record is None:
            raise PermissionDenied("Invalid access token. Please verify your identity again.")
        if not record.token_is_valid:
            raise PermissionDenied("Access token has expired. Please verify your identity again.")

        accused = Accused.objects.filter(cnic=record.cnic).first()
        if accused is None:
            raise NotFound("No records found for this access token.")

        challans = [
            challan
            for challan in Challan.objects.filter(accused=accused)
            .select_related("vehicle", "violation", "officer__user", "officer__station")
            .order_by("-issue_datetime")
            if plate_match_key(challan.vehicle.plate_number) == record.vehicle_no
        ]
        challan_ids = [c.pk for c in challans]
        firs = list(
            Fir.objects.filter(challan_id__in=challan_ids)
            .select_related("station", "challan")
            .order_by("-date_filed")
        )
        cases = list(
            Case.objects.filter(fir__challan_id__in=challan_ids)
            .select_related("fir", "judge__user", "court__court_type")
            .prefetch_related("statements")
            .order_by("-created_at")
        )
        unpaid = [c for c in challans if c.status == ChallanStatus.UNPAID]
        totals = {
            "total_challans": len(challans),
            "unpaid_challans": len(unpaid),
            "total_firs": len(firs),
            "active_cases": sum(1 for c in cases if c.case_status in ACTIVE_CASE_STATUSES),
            "total_penalty": sum((c.violation.penalty_amount for c in challans), Decimal("0.00")),
            "unpaid_penalty": sum((c.violation.penalty_amount for c in unpaid), Decimal("0.00")),
        }
        return StatusSnapshot(
            accused=accused,
            vehicle=_matching_vehicle(accused, record.vehicle_no),
            challans=challans,
            firs=firs,
            cases=cases,
            totals=totals,
        )
