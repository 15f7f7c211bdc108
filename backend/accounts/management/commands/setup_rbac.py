"""
Management command: setup_rbac
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~

Seeds one ``Role`` row per ``RoleName`` member and links each role to
its capabilities from ``accounts.rbac.ROLE_CAPABILITIES``.

This command does NOT create Permission objects; they are inserted by
``migrate`` from each model's ``Meta.permissions``.

The command is **idempotent** — safe to run multiple times.  Existing
roles are updated; permissions are replaced (set) to match the mapping.

Usage::

    python manage.py migrate
    python manage.py setup_rbac
"""

from django.core.management.base import BaseCommand

from accounts.models import RoleName
from accounts.rbac import sync_role


class Command(BaseCommand):
    help = "Create/update the NoiseSentinel roles and their permissions."

    def handle(self, *args, **options):
        self.stdout.write(self.style.MIGRATE_HEADING(
            "\n══════════════════════════════════════════"
            "\n  RBAC Setup — Seeding Roles & Permissions"
            "\n══════════════════════════════════════════\n"
        ))

        created_count = 0
        updated_count = 0
        warnings = 0

        for role_name in RoleName:
            role, created, missing = sync_role(role_name)

            for codename in missing:
                warnings += 1
                self.stdout.write(self.style.WARNING(
                    f"  ⚠  Permission '{codename}' not found — skipped for "
                    f"role '{role_name.label}'.  (Run migrate first?)"
                ))

            if created:
                created_count += 1
            else:
                updated_count += 1

            self.stdout.write(self.style.SUCCESS(
                f"  ✔  {'Created' if created else 'Updated'} role: "
                f"{role_name.label:<20s} (permissions={role.permissions.count()})"
            ))

        self.stdout.write(self.style.MIGRATE_HEADING(
            "\n──────────────────────────────────────────"
        ))
        summary = (
            f"  Done!  {created_count} role(s) created, "
            f"{updated_count} role(s) updated."
        )
        if warnings:
            summary += f"  ({warnings} permission warning(s) — see above.)"
        self.stdout.write(self.style.SUCCESS(summary + "\n"))
