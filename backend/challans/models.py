"""
Challans app models.

A ``Challan`` is the on-the-spot traffic ticket.  When it was raised
from an ``EmissionReport`` it carries a copy of that report's digital
signature; the ``OneToOneField`` guarantees a reading is used by at most
one challan.
"""

from django.db import models
from django.utils import timezone

from core.models import TimeStampedModel
from core.permissions_constants import ChallansPerms


class ChallanStatus(models.TextChoices):
    UNPAID = "Unpaid", "Unpaid"
    PAID = "Paid", "Paid"


class Violation(TimeStampedModel):
    """Reference data: a violation type and its statutory penalty."""

    violation_type = models.CharField(max_length=100, unique=True, verbose_name="Violation Type")
    description = models.TextField(blank=True, default="", verbose_name="Description")
    penalty_amount = models.DecimalField(max_digits=10, decimal_places=2, verbose_name="Penalty Amount")
    section_of_law = models.CharField(max_length=100, blank=True, default="", verbose_name="Section of Law")
    is_cognizable = models.BooleanField(
        default=False,
        verbose_name="Cognizable",
        help_text="Only challans for cognizable violations may be escalated to an FIR.",
    )

    class Meta:
        verbose_name = "Violation"
        verbose_name_plural = "Violations"
        ordering = ["violation_type"]
        permissions = [
            (ChallansPerms.CAN_MANAGE_VIOLATIONS, "Maintain the violation reference table"),
        ]

    def __str__(self):
        return self.violation_type


class Challan(TimeStampedModel):
    officer = models.ForeignKey(
        "agencies.PoliceOfficer",
        on_delete=models.PROTECT,
        related_name="challans",
        verbose_name="Issuing Officer",
    )
    accused = models.ForeignKey(
        "offenders.Accused",
        on_delete=models.PROTECT,
        related_name="challans",
        verbose_name="Accused",
    )
    vehicle = models.ForeignKey(
        "offenders.Vehicle",
        on_delete=models.PROTECT,
        related_name="challans",
        verbose_name="Vehicle",
    )
    violation = models.ForeignKey(
        Violation,
        on_delete=models.PROTECT,
        related_name="challans",
        verbose_name="Violation",
    )
    emission_report = models.OneToOneField(
        "evidence.EmissionReport",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="challan",
        verbose_name="Emission Report",
    )
    evidence_image = models.ImageField(
        upload_to="challans/evidence/%Y/%m/",
        null=True,
        blank=True,
        verbose_name="Evidence Image",
    )
    issue_datetime = models.DateTimeField(verbose_name="Issued At")
    due_datetime = models.DateTimeField(verbose_name="Payment Due")
    status = models.CharField(
        max_length=10,
        choices=ChallanStatus.choices,
        default=ChallanStatus.UNPAID,
        db_index=True,
        verbose_name="Status",
    )
    bank_details = models.CharField(max_length=255, blank=True, default="", verbose_name="Bank Details")
    digital_signature = models.CharField(
        max_length=64,
        blank=True,
        default="",
        verbose_name="Digital Signature",
        help_text="Copied from the linked emission report.",
    )

    class Meta:
        verbose_name = "Challan"
        verbose_name_plural = "Challans"
        ordering = ["-issue_datetime"]
        permissions = [
            (ChallansPerms.CAN_ISSUE_CHALLAN, "Issue traffic challans"),
        ]

    def __str__(self):
        return f"Challan #{self.pk} ({self.vehicle_id}, {self.status})"

    @property
    def is_overdue(self) -> bool:
        return self.status == ChallanStatus.UNPAID and self.due_datetime < timezone.now()
