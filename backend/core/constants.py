"""
Core constants — **Single Source of Truth** for project-wide magic numbers.

Any business rule that references a numeric threshold or window should
import it from here instead of hardcoding.  This avoids drift between
apps that use the same value (e.g. the 30-day window is shared by the
challan due date and the default hearing date).
"""

from decimal import Decimal

# ── Emission readings ───────────────────────────────────────────────
# Sound levels strictly above this limit are flagged as violations.
LEGAL_SOUND_LIMIT_DBA: Decimal = Decimal("85.00")

# Two readings from the same device closer than this are duplicates.
DUPLICATE_READING_WINDOW_MINUTES: int = 5

# ── Challans ────────────────────────────────────────────────────────
CHALLAN_PAYMENT_WINDOW_DAYS: int = 30
DEFAULT_BANK_DETAILS: str = "Account: XXXXXXXXXX, Bank: HBL"

# ── Courts ──────────────────────────────────────────────────────────
DEFAULT_HEARING_OFFSET_DAYS: int = 30
DEFAULT_CASE_TYPE: str = "Traffic Violation"

# Characters of a case statement quoted in the notification e-mail.
STATEMENT_EMAIL_SUMMARY_LENGTH: int = 200

# ── Public status lookup ────────────────────────────────────────────
OTP_LENGTH: int = 6
OTP_LIFETIME_MINUTES: int = 15
ACCESS_TOKEN_LIFETIME_HOURS: int = 24
ACCESS_TOKEN_BYTES: int = 32
