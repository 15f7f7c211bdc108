"""
Public app models.

``PublicStatusOtp`` backs the unauthenticated status lookup: a citizen
proves control of the e-mail on record with a one-time code, then uses
the issued access token to read their challans, FIRs and cases.
"""

from django.db import models
from django.utils import timezone

from core.models import TimeStampedModel


class PublicStatusOtp(TimeStampedModel):
    vehicle_no = models.CharField(max_length=20, verbose_name="Vehicle Number")
    cnic = models.CharField(max_length=15, db_index=True, verbose_name="CNIC")
    email = models.EmailField(verbose_name="Email")
    otp_code = models.CharField(max_length=6, verbose_name="OTP Code")
    expires_at = models.DateTimeField(verbose_name="OTP Expires At")
    is_verified = models.BooleanField(default=False, verbose_name="Verified")
    verified_at = models.DateTimeField(null=True, blank=True, verbose_name="Verified At")
    access_token = models.CharField(
        max_length=64,
        null=True,
        blank=True,
        unique=True,
        verbose_name="Access Token",
    )
    access_token_expires_at = models.DateTimeField(null=True, blank=True, verbose_name="Access Token Expires At")

    class Meta:
        verbose_name = "Public Status OTP"
        verbose_name_plural = "Public Status OTPs"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["vehicle_no", "cnic", "email"], name="public_otp_lookup_idx"),
        ]

    def __str__(self):
        return f"OTP for {self.cnic} / {self.vehicle_no}"

    @property
    def is_expired(self) -> bool:
        return self.expires_at < timezone.now()

    @property
    def token_is_valid(self) -> bool:
        return (
            self.is_verified
            and self.access_token_expires_at is not None
            and self.access_token_expires_at >= timezone.now()
        )
