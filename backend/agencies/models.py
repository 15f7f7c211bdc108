"""
Agencies app models.

The organisational units that scope document numbering and the staff
profiles attached to user accounts:

    PoliceStation ◀── PoliceOfficer ──▶ User (role: Police Officer)
    CourtType ◀── Court ◀── Judge ──▶ User (role: Judge)

FIR numbers are sequenced per ``PoliceStation`` and case numbers per
``Court``.
"""

from django.conf import settings
from django.db import models

from core.models import TimeStampedModel
from core.permissions_constants import AgenciesPerms


class PoliceStation(TimeStampedModel):
    """A police station; its ``code`` appears in FIR numbers."""

    name = models.CharField(max_length=150, verbose_name="Station Name")
    code = models.CharField(
        max_length=20,
        unique=True,
        verbose_name="Station Code",
        help_text="Short code, e.g. 'TSB-01'. Non-alphanumerics are dropped in FIR numbers.",
    )
    location = models.CharField(max_length=255, blank=True, default="", verbose_name="Location")
    district = models.CharField(max_length=100, blank=True, default="", verbose_name="District")
    province = models.CharField(max_length=100, blank=True, default="", verbose_name="Province")
    contact = models.CharField(max_length=50, blank=True, default="", verbose_name="Contact")

    class Meta:
        verbose_name = "Police Station"
        verbose_name_plural = "Police Stations"
        ordering = ["name"]
        permissions = [
            (AgenciesPerms.CAN_MANAGE_STATIONS, "Register and edit police stations"),
            (AgenciesPerms.CAN_MANAGE_PERSONNEL, "Enrol police officers and judges"),
        ]

    def __str__(self):
        return f"{self.name} ({self.code})"


class PoliceOfficer(TimeStampedModel):
    """Profile linking a Police Officer user to the station they serve."""

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="police_officer",
        verbose_name="User Account",
    )
    station = models.ForeignKey(
        PoliceStation,
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="officers",
        verbose_name="Station",
    )
    cnic = models.CharField(max_length=15, unique=True, verbose_name="CNIC")
    contact_no = models.CharField(max_length=20, blank=True, default="", verbose_name="Contact Number")
    badge_number = models.CharField(max_length=30, unique=True, verbose_name="Badge Number")
    rank = models.CharField(max_length=50, blank=True, default="", verbose_name="Rank")
    is_investigation_officer = models.BooleanField(default=False, verbose_name="Investigation Officer")
    posting_date = models.DateField(null=True, blank=True, verbose_name="Posting Date")

    class Meta:
        verbose_name = "Police Officer"
        verbose_name_plural = "Police Officers"
        ordering = ["badge_number"]

    def __str__(self):
        return f"{self.full_name} [{self.badge_number}]"

    @property
    def full_name(self) -> str:
        return self.user.get_full_name() or self.user.username


class CourtType(TimeStampedModel):
    """E.g. "High Court", "Sessions Court"; abbreviated in case numbers."""

    name = models.CharField(max_length=100, unique=True, verbose_name="Court Type")

    class Meta:
        verbose_name = "Court Type"
        verbose_name_plural = "Court Types"
        ordering = ["name"]

    def __str__(self):
        return self.name


class Court(TimeStampedModel):
    """A court; its type and city ``location`` appear in case numbers."""

    name = models.CharField(max_length=150, verbose_name="Court Name")
    court_type = models.ForeignKey(
        CourtType,
        on_delete=models.PROTECT,
        related_name="courts",
        verbose_name="Court Type",
    )
    location = models.CharField(max_length=150, blank=True, default="", verbose_name="City / Location")
    district = models.CharField(max_length=100, blank=True, default="", verbose_name="District")
    province = models.CharField(max_length=100, blank=True, default="", verbose_name="Province")

    class Meta:
        verbose_name = "Court"
        verbose_name_plural = "Courts"
        ordering = ["name"]
        permissions = [
            (AgenciesPerms.CAN_MANAGE_COURTS, "Register courts and court types"),
        ]

    def __str__(self):
        return self.name


class Judge(TimeStampedModel):
    """Profile linking a Judge user to the court they sit in."""

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="judge",
        verbose_name="User Account",
    )
    court = models.ForeignKey(
        Court,
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="judges",
        verbose_name="Court",
    )
    cnic = models.CharField(max_length=15, unique=True, verbose_name="CNIC")
    contact_no = models.CharField(max_length=20, blank=True, default="", verbose_name="Contact Number")
    rank = models.CharField(max_length=50, blank=True, default="", verbose_name="Rank")
    service_status = models.BooleanField(default=True, verbose_name="In Service")

    class Meta:
        verbose_name = "Judge"
        verbose_name_plural = "Judges"
        ordering = ["user__last_name", "user__first_name"]

    def __str__(self):
        return self.full_name

    @property
    def full_name(self) -> str:
        return self.user.get_full_name() or self.user.username
