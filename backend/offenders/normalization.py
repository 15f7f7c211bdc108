"""
Natural-key normalisation for accused persons and vehicles.

Every lookup and every insert goes through these helpers, so
``"12345 1234567 1"`` and ``"1234512345671"`` resolve to the same
accused and ``" abc  123 "`` and ``"ABC 123"`` to the same vehicle.
"""

from __future__ import annotations

import re

_NON_DIGITS = re.compile(r"\D")
_WHITESPACE = re.compile(r"\s+")
_PLATE_SEPARATORS = re.compile(r"[\s\-]+")

CNIC_DIGITS = 13


def normalize_cnic(value: str) -> str:
    """13 digits become ``XXXXX-XXXXXXX-X``; anything else is only stripped."""
    value = (value or "").strip()
    digits = _NON_DIGITS.sub("", value)
    if len(digits) == CNIC_DIGITS:
        return f"{digits[:5]}-{digits[5:12]}-{digits[12]}"
    return value


def normalize_plate(value: str) -> str:
    """Trim, collapse internal whitespace, uppercase."""
    return _WHITESPACE.sub(" ", (value or "").strip()).upper()


def plate_match_key(value: str) -> str:
    """Looser key for public lookups: spaces and dashes removed, uppercased."""
    return _PLATE_SEPARATORS.sub("", value or "").upper()
