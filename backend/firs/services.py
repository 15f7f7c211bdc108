"""
FIRs Service Layer.

``FirService.create_fir`` runs in one transaction:

    1. lock the challan row and check the linkage gate
       (cognizable violation, not yet escalated);
    2. allocate the next ``(station, year)`` sequence under the counter
       row lock;
    3. insert the FIR (``IntegrityError`` → ``Conflict``);
    4. queue the ``fir_filed`` e-mail for after commit.

Status changes go through ``core.domain.transactions.atomic_transition``;
a Closed FIR is final.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from django.db import IntegrityError, transaction
from django.db.models import Max, QuerySet
from django.utils import timezone

from challans.models import Challan
from core.domain.access import require_permission
from core.domain.exceptions import Conflict, DomainError, NotFound
from core.domain.linkage import ensure_challan_escalatable
from core.domain.notifications import NotificationService
from core.domain.numbering import allocate_sequence, fir_number
from core.domain.transactions import atomic_transition, lock_for_update
from core.models import SequenceScope
from core.permissions_constants import FirsPerms

from .models import Fir, FirStatus

if TYPE_CHECKING:
    from accounts.models import User

logger = logging.getLogger(__name__)

OPEN_FIR_STATUSES = {FirStatus.FILED, FirStatus.UNDER_INVESTIGATION}


class FirService:

    @staticmethod
    def _base_queryset() -> QuerySet[Fir]:
        return Fir.objects.select_related(
            "station", "challan__accused", "challan__vehicle",
            "challan__violation", "informant__user",
        )

    @staticmethod
    @transaction.atomic
    def create_fir(requesting_user: User, validated_data: dict[str, Any]) -> Fir:
        """
        File an FIR against a cognizable challan.

        Raises:
            PermissionDenied: without ``firs.can_file_fir``.
            NotFound:         unknown challan.
            DomainError:      violation not cognizable / officer has no station.
            Conflict:         challan already escalated.
        """
        require_permission(
            requesting_user,
            f"firs.{FirsPerms.CAN_FILE_FIR}",
            message="Only station authorities can file FIRs.",
        )
        challan = lock_for_update(Challan, validated_data["challan"])
        ensure_challan_escalatable(challan)

        officer = challan.officer
        station = officer.station
        if station is None:
            raise DomainError(f"Issuing officer {officer.badge_number} is not posted to a police station.")

        filed_at = timezone.now()
        year = filed_at.year
        sequence = allocate_sequence(
            SequenceScope.FIR,
            station.pk,
            year,
            seed=lambda: Fir.objects.filter(station=station, year=year).aggregate(m=Max("sequence"))["m"] or 0,
        )
        try:
            with transaction.atomic():
                fir = Fir.objects.create(
                    fir_no=fir_number(station.code, year, sequence),
                    station=station,
                    challan=challan,
                    year=year,
                    sequence=sequence,
                    date_filed=filed_at,
                    status=FirStatus.FILED,
                    description=validated_data.get("description", ""),
                    informant=officer,
                )
        except IntegrityError:
            raise Conflict(f"Challan {challan.pk} is already linked to an FIR.")

        logger.info("FIR %s filed for challan %s by %s", fir.fir_no, challan.pk, requesting_user.username)
        accused = challan.accused
        NotificationService.notify(
            event_type="fir_filed",
            recipient=accused.email,
            context={
                "fir_no": fir.fir_no,
                "name": accused.full_name,
                "station": station.name,
                "date_filed": filed_at.date().isoformat(),
                "challan_id": challan.pk,
            },
        )
        return fir

    @staticmethod
    def update_fir(requesting_user: User, fir_id: int, validated_data: dict[str, Any]) -> Fir:
        """
        Change the status and/or investigation report.

        Raises:
            InvalidTransition: the FIR is already Closed.
        """
        require_permission(requesting_user, f"firs.{FirsPerms.CAN_UPDATE_FIR}")
        fir = FirService.get_fir(fir_id)
        extra = {}
        if "investigation_report" in validated_data:
            extra["investigation_report"] = validated_data["investigation_report"]
        if "description" in validated_data:
            extra["description"] = validated_data["description"]

        fir = atomic_transition(
            instance=fir,
            target_status=validated_data.get("status", fir.status),
            allowed_sources=OPEN_FIR_STATUSES,
            extra_updates=extra,
        )
        logger.info("FIR %s updated by %s: status=%s", fir.fir_no, requesting_user.username, fir.status)
        return fir

    @staticmethod
    def get_fir(fir_id: int) -> Fir:
        try:
            return FirService._base_queryset().get(pk=fir_id)
        except Fir.DoesNotExist:
            raise NotFound(f"FIR {fir_id} not found.")

    @staticmethod
    def list_firs(filters: dict[str, Any]) -> QuerySet[Fir]:
        qs = FirService._base_queryset()
        if filters.get("status"):
            qs = qs.filter(status=filters["status"])
        if filters.get("station"):
            qs = qs.filter(station_id=filters["station"])
        if filters.get("year"):
            qs = qs.filter(year=filters["year"])
        return qs

    @staticmethod
    def eligible_challans() -> QuerySet[Challan]:
        """Cognizable challans without an FIR."""
        return Challan.objects.select_related(
            "officer__user", "officer__station", "accused", "vehicle", "violation", "emission_report",
        ).filter(violation__is_cognizable=True, fir__isnull=True)

