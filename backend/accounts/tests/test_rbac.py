"""
Tests for the closed role set, capability seeding and the
administrator user-management endpoints.
"""

from __future__ import annotations

import pytest
from django.core.management import call_command
from django.urls import reverse
from rest_framework import status

from accounts.models import Role, RoleName, User
from accounts.rbac import ROLE_CAPABILITIES, sync_role
from core.domain.access import get_user_role, require_permission
from core.domain.exceptions import PermissionDenied


@pytest.mark.django_db
class TestRoleSeeding:

    def test_setup_rbac_is_idempotent(self):
        call_command("setup_rbac")
        call_command("setup_rbac")
        assert Role.objects.count() == len(RoleName)
        for name, codenames in ROLE_CAPABILITIES.items():
            role = Role.objects.get(name=name)
            assert set(role.permissions.values_list("codename", flat=True)) == set(codenames)

    def test_every_capability_exists(self):
        for name in RoleName:
            _, _, missing = sync_role(name)
            assert missing == []

    def test_role_name_outside_closed_set(self):
        with pytest.raises(ValueError):
            sync_role("Inspector")


@pytest.mark.django_db
class TestCapabilityChecks:

    def test_officer_capabilities(self, create_user):
        officer = create_user(role_name=RoleName.POLICE_OFFICER)
        require_permission(officer, "challans.can_issue_challan")
        with pytest.raises(PermissionDenied):
            require_permission(officer, "firs.can_file_fir")

    def test_any_of_several(self, create_user):
        judge = create_user(role_name=RoleName.JUDGE)
        require_permission(judge, "firs.can_file_fir", "cases.can_record_statement")

    def test_user_without_role_has_nothing(self, create_user):
        user = create_user()
        assert user.get_all_permissions() == set()
        assert get_user_role(user) is None

    def test_superuser_has_everything(self, db):
        root = User.objects.create_superuser(username="root", email="root@example.com", password="x" * 10)
        require_permission(root, "cases.can_create_case")
        assert get_user_role(root) == RoleName.ADMIN

    def test_inactive_user_has_nothing(self, create_user):
        user = create_user(role_name=RoleName.ADMIN, is_active=False)
        assert not user.has_perm("accounts.can_manage_users")


@pytest.mark.django_db
class TestUserManagementApi:

    def test_admin_creates_staff_user(self, api_client, admin_user):
        api_client.force_authenticate(user=admin_user)
        resp = api_client.post(
            reverse("accounts:user-list"),
            {
                "username": "court_clerk",
                "password": "Cl3rk!Pass",
                "email": "clerk@example.com",
                "first_name": "Court",
                "last_name": "Clerk",
                "role": RoleName.COURT_AUTHORITY,
            },
            format="json",
        )
        assert resp.status_code == status.HTTP_201_CREATED, resp.data
        assert resp.data["role_name"] == RoleName.COURT_AUTHORITY
        assert "cases.can_create_case" in resp.data["permissions"]

    def test_duplicate_email_conflicts(self, api_client, admin_user, create_user):
        create_user(email="taken@example.com")
        api_client.force_authenticate(user=admin_user)
        resp = api_client.post(
            reverse("accounts:user-list"),
            {
                "username": "another",
                "password": "An0ther!Pass",
                "email": "TAKEN@example.com",
                "first_name": "A",
                "last_name": "B",
                "role": RoleName.JUDGE,
            },
            format="json",
        )
        assert resp.status_code == status.HTTP_409_CONFLICT

    def test_assign_role_and_deactivate(self, api_client, admin_user, create_user):
        target = create_user()
        api_client.force_authenticate(user=admin_user)

        resp = api_client.patch(
            reverse("accounts:user-assign-role", args=[target.pk]), {"role": RoleName.STATION_AUTHORITY}, format="json",
        )
        assert resp.status_code == status.HTTP_200_OK
        assert resp.data["role_name"] == RoleName.STATION_AUTHORITY

        resp = api_client.patch(reverse("accounts:user-deactivate", args=[target.pk]))
        assert resp.data["is_active"] is False

    def test_unknown_role_rejected(self, api_client, admin_user, create_user):
        target = create_user()
        api_client.force_authenticate(user=admin_user)
        resp = api_client.patch(
            reverse("accounts:user-assign-role", args=[target.pk]), {"role": "Inspector"}, format="json",
        )
        assert resp.status_code == status.HTTP_400_BAD_REQUEST

    def test_non_admin_forbidden(self, api_client, officer):
        api_client.force_authenticate(user=officer.user)
        resp = api_client.get(reverse("accounts:user-list"))
        assert resp.status_code == status.HTTP_403_FORBIDDEN

    def test_roles_listing(self, api_client, officer):
        api_client.force_authenticate(user=officer.user)
        resp = api_client.get(reverse("accounts:role-list"))
        assert resp.status_code == status.HTTP_200_OK
        assert {r["name"] for r in resp.data} == set(RoleName.values)
