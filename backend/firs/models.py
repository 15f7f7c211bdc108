"""
FIRs app models.

A ``Fir`` escalates exactly one cognizable challan.  Its number is
allocated per police station and calendar year
(``core.domain.numbering``); ``(station, year, sequence)`` and
``fir_no`` are both unique as database backstops.
"""

from django.db import models

from core.models import TimeStampedModel
from core.permissions_constants import FirsPerms


class FirStatus(models.TextChoices):
    FILED = "Filed", "Filed"
    UNDER_INVESTIGATION = "Under Investigation", "Under Investigation"
    CLOSED = "Closed", "Closed"


class Fir(TimeStampedModel):
    fir_no = models.CharField(max_length=50, unique=True, editable=False, verbose_name="FIR Number")
    station = models.ForeignKey(
        "agencies.PoliceStation",
        on_delete=models.PROTECT,
        related_name="firs",
        verbose_name="Police Station",
    )
    challan = models.OneToOneField(
        "challans.Challan",
        on_delete=models.PROTECT,
        related_name="fir",
        verbose_name="Challan",
    )
    year = models.PositiveSmallIntegerField(editable=False, verbose_name="Year")
    sequence = models.PositiveIntegerField(editable=False, verbose_name="Sequence")
    date_filed = models.DateTimeField(verbose_name="Date Filed")
    status = models.CharField(
        max_length=25,
        choices=FirStatus.choices,
        default=FirStatus.FILED,
        db_index=True,
        verbose_name="Status",
    )
    description = models.TextField(blank=True, default="", verbose_name="Description")
    informant = models.ForeignKey(
        "agencies.PoliceOfficer",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="informed_firs",
        verbose_name="Informant",
    )
    investigation_report = models.TextField(blank=True, default="", verbose_name="Investigation Report")

    class Meta:
        verbose_name = "FIR"
        verbose_name_plural = "FIRs"
        ordering = ["-date_filed"]
        constraints = [
            models.UniqueConstraint(
                fields=["station", "year", "sequence"],
                name="unique_fir_sequence_per_station_year",
            ),
        ]
        permissions = [
            (FirsPerms.CAN_FILE_FIR, "Escalate cognizable challans to FIRs"),
            (FirsPerms.CAN_UPDATE_FIR, "Update FIR status and investigation report"),
        ]

    def __str__(self):
        return self.fir_no
