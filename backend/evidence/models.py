"""
Evidence app models.

An ``EmissionReport`` is a single reading taken by a calibrated
``IotDevice``.  At creation it is stamped with a keyless integrity
signature (``evidence.signature``) over its measured fields and
timestamp; the row is never edited afterwards, so recomputing the
signature later proves the reading is unmodified when it is presented
in court.
"""

from django.db import models

from core.constants import LEGAL_SOUND_LIMIT_DBA
from core.models import TimeStampedModel
from core.permissions_constants import EvidencePerms


class IotDevice(TimeStampedModel):
    """
    A roadside / handheld emission and noise measurement device.

    Only devices that are registered, active and calibrated may submit
    readings.  A device may be paired with the police officer carrying it.
    """

    device_name = models.CharField(
        max_length=100,
        unique=True,
        verbose_name="Device Name",
        help_text="Unique identifier printed on the device, e.g. 'IOT-01'.",
    )
    firmware_version = models.CharField(max_length=50, blank=True, default="", verbose_name="Firmware Version")
    calibration_date = models.DateField(null=True, blank=True, verbose_name="Calibration Date")
    calibration_status = models.BooleanField(default=False, verbose_name="Calibrated")
    calibration_certificate_no = models.CharField(
        max_length=100, blank=True, default="", verbose_name="Calibration Certificate No.",
    )
    is_registered = models.BooleanField(default=True, verbose_name="Registered")
    is_active = models.BooleanField(default=True, verbose_name="Active")
    paired_officer = models.ForeignKey(
        "agencies.PoliceOfficer",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="paired_devices",
        verbose_name="Paired Officer",
    )
    pairing_datetime = models.DateTimeField(null=True, blank=True, verbose_name="Paired At")

    class Meta:
        verbose_name = "IoT Device"
        verbose_name_plural = "IoT Devices"
        ordering = ["device_name"]
        permissions = [
            (EvidencePerms.CAN_MANAGE_IOT_DEVICES, "Register, calibrate and pair IoT devices"),
        ]

    def __str__(self):
        return self.device_name

    @property
    def can_record(self) -> bool:
        return self.is_registered and self.is_active and self.calibration_status


class EmissionReport(TimeStampedModel):
    """
    A signed emission / noise reading.

    ``digital_signature`` is computed once from ``device_id``, the four
    pollutant readings, ``sound_level_dba`` and ``test_datetime``.
    """

    device = models.ForeignKey(
        IotDevice,
        on_delete=models.PROTECT,
        related_name="emission_reports",
        verbose_name="Device",
    )
    co = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True, verbose_name="CO")
    co2 = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True, verbose_name="CO2")
    hc = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True, verbose_name="HC")
    nox = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True, verbose_name="NOx")
    sound_level_dba = models.DecimalField(max_digits=10, decimal_places=2, verbose_name="Sound Level (dBA)")
    test_datetime = models.DateTimeField(verbose_name="Test Date/Time")
    ml_classification = models.CharField(max_length=100, blank=True, default="", verbose_name="ML Classification")
    digital_signature = models.CharField(
        max_length=64,
        editable=False,
        verbose_name="Digital Signature",
        help_text="Base64 SHA-256 over the canonical reading string.",
    )

    class Meta:
        verbose_name = "Emission Report"
        verbose_name_plural = "Emission Reports"
        ordering = ["-test_datetime"]
        indexes = [
            models.Index(fields=["device", "test_datetime"], name="emission_device_time_idx"),
        ]
        permissions = [
            (EvidencePerms.CAN_RECORD_EMISSION_REPORT, "Record signed emission readings"),
        ]

    def __str__(self):
        return f"Report #{self.pk} {self.device_id} {self.sound_level_dba} dBA"

    @property
    def is_violation(self) -> bool:
        return self.sound_level_dba > LEGAL_SOUND_LIMIT_DBA
