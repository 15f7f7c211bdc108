"""
Cases app models.

A ``Case`` is the court proceeding opened from one FIR.  Case numbers
are allocated per court and calendar year; the court-type and city
abbreviations make them readable (``CASE-HC-LHR-2025-0001``).
Judges append ``CaseStatement`` rows over the life of the case.
"""

from django.db import models

from core.constants import DEFAULT_CASE_TYPE
from core.models import TimeStampedModel
from core.permissions_constants import CasesPerms


# ────────────────────────────────────────────────────────────────────
# Choice enumerations
# ────────────────────────────────────────────────────────────────────

class CaseStatus(models.TextChoices):
    PENDING = "Pending", "Pending"
    IN_PROGRESS = "In Progress", "In Progress"
    CONVICTED = "Convicted", "Convicted"
    ACQUITTED = "Acquitted", "Acquitted"
    DISMISSED = "Dismissed", "Dismissed"
    CLOSED = "Closed", "Closed"


ACTIVE_CASE_STATUSES = (CaseStatus.PENDING, CaseStatus.IN_PROGRESS)


# ────────────────────────────────────────────────────────────────────
# Models
# ────────────────────────────────────────────────────────────────────

class Case(TimeStampedModel):
    case_no = models.CharField(max_length=50, unique=True, editable=False, verbose_name="Case Number")
    fir = models.OneToOneField(
        "firs.Fir",
        on_delete=models.PROTECT,
        related_name="case",
        verbose_name="FIR",
    )
    judge = models.ForeignKey(
        "agencies.Judge",
        on_delete=models.PROTECT,
        related_name="cases",
        verbose_name="Presiding Judge",
    )
    court = models.ForeignKey(
        "agencies.Court",
        on_delete=models.PROTECT,
        related_name="cases",
        verbose_name="Court",
    )
    year = models.PositiveSmallIntegerField(editable=False, verbose_name="Year")
    sequence = models.PositiveIntegerField(editable=False, verbose_name="Sequence")
    case_type = models.CharField(max_length=100, default=DEFAULT_CASE_TYPE, verbose_name="Case Type")
    case_status = models.CharField(
        max_length=20,
        choices=CaseStatus.choices,
        default=CaseStatus.PENDING,
        db_index=True,
        verbose_name="Status",
    )
    hearing_date = models.DateTimeField(verbose_name="Hearing Date")
    verdict = models.TextField(null=True, blank=True, verbose_name="Verdict")

    class Meta:
        verbose_name = "Case"
        verbose_name_plural = "Cases"
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["court", "year", "sequence"],
                name="unique_case_sequence_per_court_year",
            ),
        ]
        permissions = [
            (CasesPerms.CAN_CREATE_CASE, "Open court cases from FIRs"),
            (CasesPerms.CAN_ASSIGN_JUDGE, "Assign the presiding judge"),
            (CasesPerms.CAN_UPDATE_CASE, "Update case status, hearing date and verdict"),
            (CasesPerms.CAN_RECORD_STATEMENT, "Record statements on assigned cases"),
        ]

    def __str__(self):
        return self.case_no


class CaseStatement(TimeStampedModel):
    case = models.ForeignKey(
        Case,
        on_delete=models.CASCADE,
        related_name="statements",
        verbose_name="Case",
    )
    statement_by = models.CharField(max_length=255, verbose_name="Statement By")
    statement_text = models.TextField(verbose_name="Statement")
    statement_date = models.DateTimeField(verbose_name="Statement Date")

    class Meta:
        verbose_name = "Case Statement"
        verbose_name_plural = "Case Statements"
        ordering = ["statement_date"]

    def __str__(self):
        return f"{self.case.case_no} - {self.statement_by}"
