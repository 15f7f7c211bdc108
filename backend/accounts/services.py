"""
Accounts Service Layer.

This module is the **single source of truth** for all business logic
within the ``accounts`` app.  Views must remain *thin*: they validate
input through serializers, call a service method, and return the
result wrapped in a DRF ``Response``.

Architecture
------------
- ``RoleService``           — resolves ``RoleName`` values to ``Role`` rows.
- ``UserManagementService`` — staff account creation, role assignment,
                              activate / deactivate.
"""

from __future__ import annotations

import logging
from typing import Any

from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction
from django.db.models import Q, QuerySet

from core.domain.access import require_permission
from core.domain.exceptions import Conflict, NotFound
from core.permissions_constants import AccountsPerms

from .models import Role, RoleName
from .rbac import sync_role

User = get_user_model()

logger = logging.getLogger(__name__)

_MANAGE_USERS = f"accounts.{AccountsPerms.CAN_MANAGE_USERS}"


class RoleService:
    """Resolves the closed role set to persistent ``Role`` rows."""

    @staticmethod
    def get_role(role_name: RoleName | str) -> Role:
        """
        Return the ``Role`` row for ``role_name``.

        A role that has not been seeded yet is created on the fly with its
        capabilities from ``accounts.rbac`` so a fresh database never
        strands a user without permissions.
        """
        role_name = RoleName(role_name)
        role = Role.objects.filter(name=role_name).first()
        if role is None:
            role, _, _ = sync_role(role_name)
        return role

    @staticmethod
    def list_roles() -> QuerySet[Role]:
        return Role.objects.prefetch_related("permissions__content_type").order_by("name")


class UserManagementService:
    """Administrative operations on staff accounts."""

    @staticmethod
    def list_users(requesting_user: User, filters: dict[str, Any]) -> QuerySet[User]:
        """
        Return users filtered by ``role`` (``RoleName`` value),
        ``is_active`` and a free-text ``search`` over name/username/email.
        """
        require_permission(requesting_user, _MANAGE_USERS)
        qs = User.objects.select_related("role").order_by("username")
        if filters.get("role"):
            qs = qs.filter(role__name=filters["role"])
        if "is_active" in filters:
            qs = qs.filter(is_active=filters["is_active"])
        if filters.get("search"):
            term = filters["search"]
            qs = qs.filter(
                Q(username__icontains=term)
                | Q(email__icontains=term)
                | Q(first_name__icontains=term)
                | Q(last_name__icontains=term)
            )
        return qs

    @staticmethod
    def get_user(requesting_user: User, user_id: int) -> User:
        require_permission(requesting_user, _MANAGE_USERS)
        try:
            return User.objects.select_related("role").get(pk=user_id)
        except User.DoesNotExist:
            raise NotFound(f"User with id {user_id} not found.")

    @staticmethod
    def create_user_with_role(validated_data: dict[str, Any], role_name: RoleName | str) -> User:
        """
        Create a user account holding ``role_name``.

        No permission check: callers (``create_staff_user`` and the
        personnel services in ``agencies``) guard the operation.

        Raises:
            Conflict: if the username or email is already taken.
        """
        data = dict(validated_data)
        password = data.pop("password")
        data.pop("role", None)

        conflicts = []
        if User.objects.filter(username=data.get("username")).exists():
            conflicts.append("username")
        if User.objects.filter(email__iexact=data.get("email")).exists():
            conflicts.append("email")
        if conflicts:
            raise Conflict(f"The following field(s) already exist: {', '.join(conflicts)}.")

        role = RoleService.get_role(role_name)
        try:
            with transaction.atomic():
                user = User.objects.create_user(password=password, role=role, **data)
        except IntegrityError:
            raise Conflict("A user with one of the provided unique fields already exists.")

        logger.info("User %s created with role %s", user.username, role.name)
        return user

    @staticmethod
    def create_staff_user(requesting_user: User, validated_data: dict[str, Any]) -> User:
        require_permission(requesting_user, _MANAGE_USERS)
        return UserManagementService.create_user_with_role(validated_data, validated_data["role"])

    @staticmethod
    def assign_role(requesting_user: User, user_id: int, role_name: RoleName | str) -> User:
        require_permission(requesting_user, _MANAGE_USERS)
        user = UserManagementService.get_user(requesting_user, user_id)
        user.role = RoleService.get_role(role_name)
        user.save(update_fields=["role"])
        logger.info("Role of user %s set to %s by %s", user.username, role_name, requesting_user.username)
        return user

    @staticmethod
    def set_active(requesting_user: User, user_id: int, is_active: bool) -> User:
        require_permission(requesting_user, _MANAGE_USERS)
        user = UserManagementService.get_user(requesting_user, user_id)
        if user.pk == requesting_user.pk and not is_active:
            raise Conflict("You cannot deactivate your own account.")
        user.is_active = is_active
        user.save(update_fields=["is_active"])
        logger.info("User %s %s by %s", user.username,
                    "activated" if is_active else "deactivated", requesting_user.username)
        return user
