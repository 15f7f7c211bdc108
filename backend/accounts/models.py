"""
Accounts app models.

Defines the closed set of NoiseSentinel roles and a custom User model
that extends Django's ``AbstractUser``.  Each user holds exactly one
role; what the role may do is the set of Django permissions linked to
its ``Role`` row.
"""

from django.contrib.auth.models import AbstractUser, Permission
from django.db import models

from core.permissions_constants import AccountsPerms


class RoleName(models.TextChoices):
    """
    The closed set of roles.  Adding a role is a code change (new member
    here plus an entry in ``accounts.rbac.ROLE_CAPABILITIES``).
    """

    ADMIN = "admin", "Admin"
    POLICE_OFFICER = "police_officer", "Police Officer"
    STATION_AUTHORITY = "station_authority", "Station Authority"
    COURT_AUTHORITY = "court_authority", "Court Authority"
    JUDGE = "judge", "Judge"


class Role(models.Model):
    """
    Persistent row for one ``RoleName`` carrying its permissions.

    Rows are seeded (idempotently) by ``manage.py setup_rbac``; the
    ``name`` column only accepts ``RoleName`` values.
    """

    name = models.CharField(
        max_length=32,
        choices=RoleName.choices,
        unique=True,
        verbose_name="Role Name",
    )
    description = models.TextField(
        blank=True,
        default="",
        verbose_name="Description",
    )
    permissions = models.ManyToManyField(
        Permission,
        blank=True,
        verbose_name="Permissions",
        help_text="Capabilities granted to every user holding this role.",
    )

    class Meta:
        verbose_name = "Role"
        verbose_name_plural = "Roles"
        ordering = ["name"]

    def __str__(self):
        return self.get_name_display()


class User(AbstractUser):
    """
    Custom user model for NoiseSentinel staff (officers, authorities,
    judges, administrators).

    Login is supported via ``username`` or ``email`` together with the
    password (see ``accounts.backends.MultiFieldAuthBackend``).
    """

    email = models.EmailField(
        unique=True,
        verbose_name="Email Address",
    )
    phone_number = models.CharField(
        max_length=20,
        blank=True,
        default="",
        verbose_name="Phone Number",
    )

    # ── Single-role assignment ───────────────────────────────────────
    role = models.ForeignKey(
        Role,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="users",
        verbose_name="Assigned Role",
    )

    REQUIRED_FIELDS = ["email", "first_name", "last_name"]

    class Meta:
        verbose_name = "User"
        verbose_name_plural = "Users"
        permissions = [
            (AccountsPerms.CAN_MANAGE_USERS, "Create staff users and manage their roles"),
        ]

    def __str__(self):
        role_name = self.role.get_name_display() if self.role else "No Role"
        return f"{self.username} ({self.get_full_name()}) - {role_name}"

    def has_role(self, role_name: RoleName) -> bool:
        """Check if the user's current role is ``role_name``."""
        return self.role is not None and self.role.name == role_name

    # ── RBAC Permission Overrides ────────────────────────────────────

    def get_all_permissions(self, obj=None) -> set:
        """
        Return the ``app_label.codename`` strings granted to the user.

        Resolved once per instance and cached, so repeated capability
        checks during a request do not hit the database again.
        """
        if not self.is_active:
            return set()

        if self.is_superuser:
            if not hasattr(self, "_superuser_perm_cache"):
                perms = Permission.objects.select_related("content_type").all()
                self._superuser_perm_cache = {f"{p.content_type.app_label}.{p.codename}" for p in perms}
            return self._superuser_perm_cache

        if not self.role:
            return set()

        if not hasattr(self, "_perm_cache"):
            perms = self.role.permissions.select_related("content_type")
            self._perm_cache = {f"{p.content_type.app_label}.{p.codename}" for p in perms}

        return self._perm_cache

    def has_perm(self, perm: str, obj=None) -> bool:
        if self.is_active and self.is_superuser:
            return True
        return perm in self.get_all_permissions(obj)

    def has_perms(self, perm_list, obj=None) -> bool:
        return all(self.has_perm(perm, obj) for perm in perm_list)

    def has_module_perms(self, app_label: str) -> bool:
        if self.is_active and self.is_superuser:
            return True
        return any(perm.startswith(f"{app_label}.") for perm in self.get_all_permissions())

    @property
    def permissions_list(self) -> list[str]:
        """Sorted permission strings, handy for API payloads."""
        return sorted(self.get_all_permissions())
