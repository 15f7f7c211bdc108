"""
Role → capability mapping and the idempotent seeding routine.

``ROLE_CAPABILITIES`` is the single place where the closed ``RoleName``
set meets the permission codenames of ``core.permissions_constants``.
``sync_role`` is shared by the ``setup_rbac`` management command and
the test suite so both always see the same grants.

This module never creates ``Permission`` rows: standard and custom
permissions are inserted by ``migrate`` (post-migrate signal).
"""

from __future__ import annotations

import logging

from django.contrib.auth.models import Permission

from core.permissions_constants import (
    AccountsPerms,
    AgenciesPerms,
    CasesPerms,
    ChallansPerms,
    EvidencePerms,
    FirsPerms,
    OffendersPerms,
)

from .models import Role, RoleName

logger = logging.getLogger(__name__)

ROLE_DESCRIPTIONS: dict[RoleName, str] = {
    RoleName.ADMIN: "System administration: personnel, stations, courts, reference data.",
    RoleName.POLICE_OFFICER: "Records emission readings and issues challans.",
    RoleName.STATION_AUTHORITY: "Manages station devices and escalates cognizable challans to FIRs.",
    RoleName.COURT_AUTHORITY: "Opens court cases from FIRs and assigns judges.",
    RoleName.JUDGE: "Presides over assigned cases, records statements and verdicts.",
}

ROLE_CAPABILITIES: dict[RoleName, list[str]] = {
    RoleName.ADMIN: [
        AccountsPerms.CAN_MANAGE_USERS,
        AgenciesPerms.CAN_MANAGE_STATIONS,
        AgenciesPerms.CAN_MANAGE_COURTS,
        AgenciesPerms.CAN_MANAGE_PERSONNEL,
        ChallansPerms.CAN_MANAGE_VIOLATIONS,
        EvidencePerms.CAN_MANAGE_IOT_DEVICES,
        OffendersPerms.CAN_UPDATE_ACCUSED,
    ],
    RoleName.POLICE_OFFICER: [
        EvidencePerms.CAN_RECORD_EMISSION_REPORT,
        ChallansPerms.CAN_ISSUE_CHALLAN,
        OffendersPerms.CAN_REGISTER_ACCUSED,
    ],
    RoleName.STATION_AUTHORITY: [
        EvidencePerms.CAN_MANAGE_IOT_DEVICES,
        OffendersPerms.CAN_REGISTER_ACCUSED,
        OffendersPerms.CAN_UPDATE_ACCUSED,
        FirsPerms.CAN_FILE_FIR,
        FirsPerms.CAN_UPDATE_FIR,
    ],
    RoleName.COURT_AUTHORITY: [
        CasesPerms.CAN_CREATE_CASE,
        CasesPerms.CAN_ASSIGN_JUDGE,
        CasesPerms.CAN_UPDATE_CASE,
    ],
    RoleName.JUDGE: [
        CasesPerms.CAN_UPDATE_CASE,
        CasesPerms.CAN_RECORD_STATEMENT,
    ],
}


def sync_role(role_name: RoleName) -> tuple[Role, bool, list[str]]:
    """
    Create or update the ``Role`` row for ``role_name`` and replace its
    permission set with ``ROLE_CAPABILITIES[role_name]``.

    Returns:
        ``(role, created, missing_codenames)`` — codenames not found in
        ``auth_permission`` are reported rather than raised.
    """
    role_name = RoleName(role_name)
    description = ROLE_DESCRIPTIONS[role_name]
    role, created = Role.objects.get_or_create(
        name=role_name,
        defaults={"description": description},
    )
    if not created and role.description != description:
        role.description = description
        role.save(update_fields=["description"])

    codenames = ROLE_CAPABILITIES[role_name]
    permissions = list(Permission.objects.filter(codename__in=codenames))
    found = {p.codename for p in permissions}
    missing = [c for c in codenames if c not in found]
    if missing:
        logger.warning("Role %s: permissions not found: %s", role_name, ", ".join(missing))

    role.permissions.set(permissions)
    return role, created, missing
