"""
Tests for ``core.domain.numbering``: document number formatting and the
per-scope, per-year counter behind FIR and case numbers.
"""

from __future__ import annotations

import pytest
from django.db import transaction

from core.domain.numbering import (
    allocate_sequence,
    case_number,
    city_abbreviation,
    court_type_abbreviation,
    fir_number,
)
from core.models import DocumentSequence, SequenceScope


class TestFormatting:

    def test_fir_number_strips_punctuation_from_station_code(self):
        assert fir_number("TSB-01", 2025, 7) == "FIR-TSB01-2025-0007"

    def test_fir_number_without_station_code(self):
        assert fir_number("", 2025, 1) == "FIR-STATION-2025-0001"

    def test_sequence_wider_than_padding_is_kept(self):
        assert fir_number("PS1", 2025, 12345) == "FIR-PS1-2025-12345"

    def test_case_number_known_court_and_city(self):
        assert case_number("High Court", "Lahore", 2025, 1) == "CASE-HC-LHR-2025-0001"

    @pytest.mark.parametrize(
        "court_type, expected",
        [
            ("Supreme Court", "SC"),
            ("HIGH COURT", "HC"),
            ("District Court", "DC"),
            ("Civil Court", "CC"),
            ("Sessions Court", "SESS"),
            ("Additional Sessions Court", "COURT"),
            ("Islamabad High Court", "COURT"),
            ("Traffic Magistrate", "COURT"),
            (None, "COURT"),
        ],
    )
    def test_court_type_abbreviation(self, court_type, expected):
        assert court_type_abbreviation(court_type) == expected

    @pytest.mark.parametrize(
        "city, expected",
        [
            ("Karachi", "KHI"),
            ("  islamabad ", "ISB"),
            ("Sialkot", "SIA"),
            ("D.I. Khan", "D.I"),
            ("", "UNK"),
        ],
    )
    def test_city_abbreviation(self, city, expected):
        assert city_abbreviation(city) == expected


@pytest.mark.django_db
class TestAllocateSequence:

    @pytest.mark.django_db(transaction=True)
    def test_requires_atomic_block(self):
        with pytest.raises(RuntimeError):
            allocate_sequence(SequenceScope.FIR, 1, 2025)

    def test_consecutive_values_from_one(self):
        with transaction.atomic():
            values = [allocate_sequence(SequenceScope.FIR, 1, 2025) for _ in range(5)]
        assert values == [1, 2, 3, 4, 5]

    def test_counters_are_independent_per_scope_and_year(self):
        with transaction.atomic():
            assert allocate_sequence(SequenceScope.FIR, 1, 2025) == 1
            assert allocate_sequence(SequenceScope.FIR, 1, 2025) == 2
            # New year restarts the sequence.
            assert allocate_sequence(SequenceScope.FIR, 1, 2026) == 1
            # Another station, and the case scope for the same id, start fresh.
            assert allocate_sequence(SequenceScope.FIR, 2, 2025) == 1
            assert allocate_sequence(SequenceScope.CASE, 1, 2025) == 1

        assert DocumentSequence.objects.get(scope=SequenceScope.FIR, scope_id=1, year=2025).last_value == 2

    def test_seed_only_used_when_counter_is_created(self):
        calls = []

        def seed():
            calls.append(1)
            return 41

        with transaction.atomic():
            assert allocate_sequence(SequenceScope.CASE, 9, 2025, seed=seed) == 42
            assert allocate_sequence(SequenceScope.CASE, 9, 2025, seed=seed) == 43
        assert len(calls) == 1
