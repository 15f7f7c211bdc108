"""
Tests for ``evidence.signature``: canonical payload, determinism,
sensitivity to every signed field, and verification of stored reports.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone as dt_timezone
from decimal import Decimal

import pytest

from evidence.models import EmissionReport
from evidence.signature import (
    canonical_decimal,
    canonical_payload,
    generate_signature,
    verify_report,
)

WHEN = datetime(2025, 1, 10, 10, 0, tzinfo=dt_timezone.utc)
BASE = dict(device_id=1, co=Decimal("1.2"), co2=Decimal("3.4"), hc=None, nox=Decimal("0.5"),
            sound_level_dba=Decimal("95.5"), test_datetime=WHEN)


class TestCanonicalForm:

    def test_payload_layout(self):
        assert canonical_payload(**BASE) == "1|1.20|3.40|NULL|0.50|95.50|2025-01-10T10:00:00.000000Z"

    def test_float_uses_shortest_repr(self):
        assert canonical_decimal(0.1) == Decimal("0.10")
        assert canonical_decimal(2.675) == Decimal("2.68")

    def test_half_up_rounding(self):
        assert canonical_decimal("95.125") == Decimal("95.13")

    def test_naive_timestamp_taken_as_utc(self):
        naive = dict(BASE, test_datetime=WHEN.replace(tzinfo=None))
        assert generate_signature(**naive) == generate_signature(**BASE)

    def test_offset_timestamp_converted_to_utc(self):
        karachi = WHEN.astimezone(dt_timezone(timedelta(hours=5)))
        assert generate_signature(**dict(BASE, test_datetime=karachi)) == generate_signature(**BASE)

    def test_sound_level_required(self):
        with pytest.raises(ValueError):
            canonical_payload(**dict(BASE, sound_level_dba=None))


class TestSignature:

    def test_deterministic(self):
        assert generate_signature(**BASE) == generate_signature(**BASE)

    def test_base64_sha256_length(self):
        assert len(generate_signature(**BASE)) == 44

    def test_equivalent_numeric_inputs_match(self):
        same = dict(BASE, co=1.2, co2="3.40", sound_level_dba=95.5)
        assert generate_signature(**same) == generate_signature(**BASE)

    @pytest.mark.parametrize(
        "field, value",
        [
            ("device_id", 2),
            ("co", Decimal("1.21")),
            ("co2", None),
            ("hc", Decimal("0.00")),
            ("nox", Decimal("0.51")),
            ("sound_level_dba", Decimal("95.51")),
            ("test_datetime", WHEN + timedelta(microseconds=1)),
        ],
    )
    def test_any_field_change_changes_signature(self, field, value):
        assert generate_signature(**dict(BASE, **{field: value})) != generate_signature(**BASE)


@pytest.mark.django_db
class TestVerifyReport:

    def _report(self, device) -> EmissionReport:
        return EmissionReport.objects.create(
            device=device,
            co=Decimal("1.20"),
            sound_level_dba=Decimal("95.50"),
            test_datetime=WHEN,
            digital_signature=generate_signature(device.pk, Decimal("1.20"), None, None, None, Decimal("95.50"), WHEN),
        )

    def test_untouched_report_is_authentic(self, device):
        report = self._report(device)
        result = verify_report(report)
        assert result.is_authentic
        assert result.data_integrity == "Intact"
        assert result.stored_signature == result.computed_signature

    def test_tampered_report_is_detected(self, device):
        report = self._report(device)
        EmissionReport.objects.filter(pk=report.pk).update(sound_level_dba=Decimal("80.00"))
        report.refresh_from_db()

        result = verify_report(report)
        assert not result.is_authentic
        assert not result.admissible_in_court
        assert result.data_integrity == "Compromised"
        assert result.stored_signature == report.digital_signature

    def test_verification_does_not_modify_report(self, device):
        report = self._report(device)
        before = EmissionReport.objects.values().get(pk=report.pk)
        verify_report(report)
        assert EmissionReport.objects.values().get(pk=report.pk) == before
