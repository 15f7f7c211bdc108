"""
evidence.signature — Keyless integrity signature for emission readings.

Canonical form
--------------
::

    {device_id}|{co}|{co2}|{hc}|{nox}|{sound_level_dba}|{test_datetime}

* Pollutant readings are fixed-point with exactly two decimals
  (ROUND_HALF_UP) or the literal ``NULL`` when absent.
* ``sound_level_dba`` is always two decimals.
* ``test_datetime`` is converted to UTC and rendered
  ``YYYY-MM-DDTHH:MM:SS.ffffffZ``; naive values are taken as UTC.
* Floats go through ``Decimal(str(value))`` first so the digits are the
  shortest repr, not the binary expansion.

The signature is ``base64(sha256(canonical.encode("utf-8")))``.  It is an
integrity hash, not a PKI signature: anyone can recompute it, and any
change to a signed field changes it.

Verification recomputes from the report's stored fields and never
mutates the report.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
from dataclasses import asdict, dataclass
from datetime import datetime, timezone as dt_timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import TYPE_CHECKING, Union

from django.utils import timezone

if TYPE_CHECKING:
    from evidence.models import EmissionReport

Number = Union[Decimal, float, int, str]

NULL_TOKEN = "NULL"
FIELD_SEPARATOR = "|"
_TWO_PLACES = Decimal("0.01")
_TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S.%fZ"


def canonical_decimal(value: Number) -> Decimal:
    """Fixed-point, two-decimal ``Decimal`` for any numeric input."""
    if isinstance(value, float):
        value = str(value)
    return Decimal(value).quantize(_TWO_PLACES, rounding=ROUND_HALF_UP)


def _format_reading(value: Number | None) -> str:
    if value is None:
        return NULL_TOKEN
    return format(canonical_decimal(value), "f")


def _format_timestamp(value: datetime) -> str:
    if timezone.is_naive(value):
        value = value.replace(tzinfo=dt_timezone.utc)
    return value.astimezone(dt_timezone.utc).strftime(_TIMESTAMP_FORMAT)


def canonical_payload(
    device_id: int | str,
    co: Number | None,
    co2: Number | None,
    hc: Number | None,
    nox: Number | None,
    sound_level_dba: Number,
    test_datetime: datetime,
) -> str:
    if sound_level_dba is None:
        raise ValueError("sound_level_dba is required for a signature.")
    return FIELD_SEPARATOR.join([
        str(device_id),
        _format_reading(co),
        _format_reading(co2),
        _format_reading(hc),
        _format_reading(nox),
        _format_reading(sound_level_dba),
        _format_timestamp(test_datetime),
    ])


def generate_signature(
    device_id: int | str,
    co: Number | None,
    co2: Number | None,
    hc: Number | None,
    nox: Number | None,
    sound_level_dba: Number,
    test_datetime: datetime,
) -> str:
    payload = canonical_payload(device_id, co, co2, hc, nox, sound_level_dba, test_datetime)
    digest = hashlib.sha256(payload.encode("utf-8")).digest()
    return base64.b64encode(digest).decode("ascii")


def signature_for_report(report: EmissionReport) -> str:
    return generate_signature(
        report.device_id,
        report.co,
        report.co2,
        report.hc,
        report.nox,
        report.sound_level_dba,
        report.test_datetime,
    )


@dataclass(frozen=True)
class SignatureVerification:
    """Outcome of re-checking a report; a mismatch is a result, not an error."""

    report_id: int
    is_authentic: bool
    stored_signature: str
    computed_signature: str
    verified_at: datetime

    @property
    def digital_signature_match(self) -> bool:
        return self.is_authentic

    @property
    def admissible_in_court(self) -> bool:
        return self.is_authentic

    @property
    def data_integrity(self) -> str:
        return "Intact" if self.is_authentic else "Compromised"

    @property
    def verification_message(self) -> str:
        if self.is_authentic:
            return "Digital signature verified. The emission report has not been modified."
        return "Signature mismatch: the emission report has been altered since it was recorded."

    def as_dict(self) -> dict:
        data = asdict(self)
        data.update(
            digital_signature_match=self.digital_signature_match,
            admissible_in_court=self.admissible_in_court,
            data_integrity=self.data_integrity,
            verification_message=self.verification_message,
        )
        return data


def verify_report(report: EmissionReport) -> SignatureVerification:
    stored = report.digital_signature or ""
    computed = signature_for_report(report)
    return SignatureVerification(
        report_id=report.pk,
        is_authentic=hmac.compare_digest(stored.encode("utf-8"), computed.encode("utf-8")),
        stored_signature=stored,
        computed_signature=computed,
        verified_at=timezone.now(),
    )
