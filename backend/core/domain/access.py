"""
core.domain.access — Capability checks shared by every service layer.

Roles form a **closed** set (``accounts.models.RoleName``).  What a role
may do is expressed as Django permissions attached to its ``Role`` row
(seeded by ``manage.py setup_rbac``).  Services never compare role
strings; they ask for a capability::

    from core.domain.access import require_permission

    require_permission(user, f"firs.{FirsPerms.CAN_FILE_FIR}")

``User.get_all_permissions`` caches the resolved permission set on the
user instance, so every check after the first one in a request is a set
lookup.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from core.domain.exceptions import PermissionDenied

if TYPE_CHECKING:
    from accounts.models import RoleName, User


def get_user_role(user: User) -> RoleName | None:
    """
    Return the user's ``RoleName`` member, or ``None`` if unassigned.

    Informational only (API payloads, logging).  Access control goes
    through ``require_permission``.
    """
    from accounts.models import RoleName

    if user.is_superuser:
        return RoleName.ADMIN
    role = getattr(user, "role", None)
    if role is None:
        return None
    return RoleName(role.name)


def require_permission(user: User, *perms: str, message: str = "") -> None:
    """
    Guard that raises ``PermissionDenied`` unless the user holds at
    least one of ``perms`` (OR-logic).

    Args:
        user:    Authenticated user.
        *perms:  Fully-qualified permission strings (``app.codename``).
        message: Optional custom error message.
    """
    for perm in perms:
        if user.has_perm(perm):
            return
    raise PermissionDenied(
        message or f"Missing required permission: {', '.join(perms)}."
    )
