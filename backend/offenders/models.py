"""
Offenders app models.

``Accused`` and ``Vehicle`` are keyed by natural identifiers (CNIC and
plate number).  Both are written through
``offenders.services.EntityResolutionService`` so repeated challans for
the same person or vehicle reuse one row.
"""

from django.db import models

from core.models import TimeStampedModel
from core.permissions_constants import OffendersPerms


class Accused(TimeStampedModel):
    """A person a challan has been issued to, identified by CNIC."""

    cnic = models.CharField(
        max_length=15,
        unique=True,
        verbose_name="CNIC",
        help_text="National identity number, stored as XXXXX-XXXXXXX-X.",
    )
    full_name = models.CharField(max_length=255, verbose_name="Full Name")
    email = models.EmailField(blank=True, default="", verbose_name="Email")
    contact = models.CharField(max_length=20, blank=True, default="", verbose_name="Contact Number")
    address = models.TextField(blank=True, default="", verbose_name="Address")
    city = models.CharField(max_length=100, blank=True, default="", verbose_name="City")
    province = models.CharField(max_length=100, blank=True, default="", verbose_name="Province")

    class Meta:
        verbose_name = "Accused"
        verbose_name_plural = "Accused Persons"
        ordering = ["full_name"]
        permissions = [
            (OffendersPerms.CAN_REGISTER_ACCUSED, "Register accused persons"),
            (OffendersPerms.CAN_UPDATE_ACCUSED, "Update accused contact details"),
        ]

    def __str__(self):
        return f"{self.full_name} ({self.cnic})"


class Vehicle(TimeStampedModel):
    """A vehicle identified by its registration plate (stored uppercased)."""

    plate_number = models.CharField(
        max_length=20,
        unique=True,
        verbose_name="Plate Number",
    )
    make = models.CharField(max_length=100, blank=True, default="", verbose_name="Make")
    color = models.CharField(max_length=50, blank=True, default="", verbose_name="Colour")
    chassis_no = models.CharField(max_length=50, blank=True, default="", verbose_name="Chassis No.")
    engine_no = models.CharField(max_length=50, blank=True, default="", verbose_name="Engine No.")
    registration_year = models.PositiveSmallIntegerField(null=True, blank=True, verbose_name="Registration Year")
    owner = models.ForeignKey(
        Accused,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="vehicles",
        verbose_name="Owner",
    )

    class Meta:
        verbose_name = "Vehicle"
        verbose_name_plural = "Vehicles"
        ordering = ["plate_number"]

    def __str__(self):
        return self.plate_number
