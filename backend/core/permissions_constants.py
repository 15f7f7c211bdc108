"""
Permissions Constants — **Single Source of Truth**

Every capability referenced in code (services, ``setup_rbac``, tests)
MUST use one of the constants defined here.

Organisation
------------
- Each class groups the **custom capability** permissions of one app.
  The codenames are registered through the related model's
  ``Meta.permissions`` tuple and inserted by ``migrate``.
- Codenames are unique across the whole project, so ``setup_rbac`` can
  resolve them without an app label.  Service-layer checks always use
  the fully-qualified form::

      require_permission(user, f"firs.{FirsPerms.CAN_FILE_FIR}")

Adding a new capability requires:
    1. Add the constant below.
    2. Add the ``(codename, description)`` to the model's ``Meta.permissions``.
    3. ``makemigrations`` + ``migrate``.
    4. Add the constant to the role lists in ``accounts.rbac``.
"""


# ════════════════════════════════════════════════════════════════════
#  ACCOUNTS
# ════════════════════════════════════════════════════════════════════

class AccountsPerms:
    """Custom permissions for the accounts app."""

    CAN_MANAGE_USERS = "can_manage_users"
    """Create staff users, assign roles, activate / deactivate accounts."""


# ════════════════════════════════════════════════════════════════════
#  AGENCIES (police stations, courts, personnel)
# ════════════════════════════════════════════════════════════════════

class AgenciesPerms:
    """Custom permissions for the agencies app."""

    CAN_MANAGE_STATIONS = "can_manage_stations"
    """Register and edit police stations."""

    CAN_MANAGE_COURTS = "can_manage_courts"
    """Register courts and court types."""

    CAN_MANAGE_PERSONNEL = "can_manage_personnel"
    """Enrol police officers and judges (user account + profile)."""


# ════════════════════════════════════════════════════════════════════
#  EVIDENCE (IoT devices, emission reports)
# ════════════════════════════════════════════════════════════════════

class EvidencePerms:
    """Custom permissions for the evidence app."""

    CAN_MANAGE_IOT_DEVICES = "can_manage_iot_devices"
    """Register, calibrate and pair IoT measurement devices."""

    CAN_RECORD_EMISSION_REPORT = "can_record_emission_report"
    """Record a signed emission / noise reading from a device."""


# ════════════════════════════════════════════════════════════════════
#  OFFENDERS (accused persons, vehicles)
# ════════════════════════════════════════════════════════════════════

class OffendersPerms:
    """Custom permissions for the offenders app."""

    CAN_REGISTER_ACCUSED = "can_register_accused"
    """Register a new accused person by CNIC."""

    CAN_UPDATE_ACCUSED = "can_update_accused"
    """Edit an accused person's contact details."""


# ════════════════════════════════════════════════════════════════════
#  CHALLANS
# ════════════════════════════════════════════════════════════════════

class ChallansPerms:
    """Custom permissions for the challans app."""

    CAN_ISSUE_CHALLAN = "can_issue_challan"
    """Issue a traffic challan (Police Officer)."""

    CAN_MANAGE_VIOLATIONS = "can_manage_violations"
    """Maintain the violation reference table."""


# ════════════════════════════════════════════════════════════════════
#  FIRS
# ════════════════════════════════════════════════════════════════════

class FirsPerms:
    """Custom permissions for the firs app."""

    CAN_FILE_FIR = "can_file_fir"
    """Escalate a cognizable challan to an FIR (Station Authority)."""

    CAN_UPDATE_FIR = "can_update_fir"
    """Update FIR status and investigation report (Station Authority)."""


# ════════════════════════════════════════════════════════════════════
#  CASES
# ════════════════════════════════════════════════════════════════════

class CasesPerms:
    """Custom permissions for the cases app."""

    CAN_CREATE_CASE = "can_create_case"
    """Open a court case from an FIR (Court Authority)."""

    CAN_ASSIGN_JUDGE = "can_assign_judge"
    """Assign or reassign the presiding judge (Court Authority)."""

    CAN_UPDATE_CASE = "can_update_case"
    """Change status, hearing date or verdict (Court Authority, Judge)."""

    CAN_RECORD_STATEMENT = "can_record_statement"
    """Append a statement to an assigned case (Judge)."""
