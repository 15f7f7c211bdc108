"""
core.domain.numbering — Sequential, human-readable document numbers.

FIR and court-case numbers have the shape::

    FIR-{station code}-{year}-{sequence:04d}          FIR-TSB01-2025-0007
    CASE-{court type}-{city}-{year}-{sequence:04d}    CASE-HC-LHR-2025-0001

Allocation
----------
``allocate_sequence`` increments a ``core.DocumentSequence`` counter row
for ``(scope, scope_id, year)`` while holding a row lock, so it must run
inside the same ``transaction.atomic()`` block that inserts the numbered
document.  Two concurrent requests for the same station/court block on
the lock and receive consecutive values.  The first allocation for a
scope/year creates the counter; a concurrent first-use insert loses on
the unique constraint and ``get_or_create`` re-reads the winner's row.

A freshly created counter is seeded with ``seed()`` (typically the
highest sequence already stored for that scope/year) so historical rows
imported without a counter can never be duplicated.
"""

from __future__ import annotations

import logging
import re
from typing import Callable

from django.db import transaction
from django.db.models import F
from django.utils import timezone

from core.models import DocumentSequence, SequenceScope

logger = logging.getLogger(__name__)

SEQUENCE_WIDTH = 4

# Court type names are matched whole, case-insensitively.
COURT_TYPE_ABBREVIATIONS: dict[str, str] = {
    "supreme court": "SC",
    "high court": "HC",
    "district court": "DC",
    "civil court": "CC",
    "sessions court": "SESS",
}
DEFAULT_COURT_TYPE_ABBREVIATION = "COURT"

# Ordered (needle, abbreviation) pairs, matched as lowercase substrings.
CITY_ABBREVIATIONS: list[tuple[str, str]] = [
    ("lahore", "LHR"),
    ("karachi", "KHI"),
    ("islamabad", "ISB"),
    ("rawalpindi", "RWP"),
    ("faisalabad", "FSD"),
    ("multan", "MUL"),
    ("peshawar", "PSH"),
    ("quetta", "QTA"),
]
UNKNOWN_CITY_ABBREVIATION = "UNK"
DEFAULT_STATION_CODE = "STATION"

_NON_ALNUM = re.compile(r"[^A-Za-z0-9]")


def allocate_sequence(
    scope: SequenceScope | str,
    scope_id: int,
    year: int,
    *,
    seed: Callable[[], int] | None = None,
) -> int:
    """
    Reserve and return the next sequence number for a scope and year.

    Args:
        scope:    ``SequenceScope.FIR`` or ``SequenceScope.CASE``.
        scope_id: PK of the police station / court.
        year:     Calendar year the document is filed in.
        seed:     Callable returning the highest sequence already in use
                  for this scope/year.  Only evaluated when the counter
                  row is created.

    Returns:
        The reserved sequence (1 for the first document of the year).
    """
    if not transaction.get_connection().in_atomic_block:
        raise RuntimeError("allocate_sequence() must run inside transaction.atomic().")

    counter, created = DocumentSequence.objects.select_for_update().get_or_create(
        scope=scope,
        scope_id=scope_id,
        year=year,
        defaults={"last_value": seed if seed is not None else 0},
    )
    DocumentSequence.objects.filter(pk=counter.pk).update(
        last_value=F("last_value") + 1,
        updated_at=timezone.now(),
    )
    counter.refresh_from_db(fields=["last_value"])

    logger.debug(
        "Allocated %s sequence %d for scope_id=%s year=%d (counter %s)",
        scope, counter.last_value, scope_id, year,
        "created" if created else "reused",
    )
    return counter.last_value


def format_document_number(prefix: str, *scope_parts: str, year: int, sequence: int) -> str:
    """Join ``prefix``, scope codes, year and zero-padded sequence with dashes."""
    return "-".join([prefix, *scope_parts, str(year), f"{sequence:0{SEQUENCE_WIDTH}d}"])


def station_scope_code(station_code: str | None) -> str:
    """Station code with non-alphanumerics stripped, uppercased."""
    cleaned = _NON_ALNUM.sub("", station_code or "").upper()
    return cleaned or DEFAULT_STATION_CODE


def court_type_abbreviation(court_type_name: str | None) -> str:
    return COURT_TYPE_ABBREVIATIONS.get((court_type_name or "").lower(), DEFAULT_COURT_TYPE_ABBREVIATION)


def city_abbreviation(city: str | None) -> str:
    """Fixed abbreviation for known cities, else the first three characters as given."""
    lowered = (city or "").lower()
    for needle, abbreviation in CITY_ABBREVIATIONS:
        if needle in lowered:
            return abbreviation
    return city[:3].upper() if city else UNKNOWN_CITY_ABBREVIATION


def fir_number(station_code: str | None, year: int, sequence: int) -> str:
    return format_document_number("FIR", station_scope_code(station_code), year=year, sequence=sequence)


def case_number(court_type_name: str | None, city: str | None, year: int, sequence: int) -> str:
    return format_document_number(
        "CASE",
        court_type_abbreviation(court_type_name),
        city_abbreviation(city),
        year=year,
        sequence=sequence,
    )
