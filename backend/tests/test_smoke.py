"""
Smoke tests — verify that Django boots, URL routing resolves, and
the core domain modules are importable.

These tests require a DB only where noted; they do NOT require real
data, they just prove the plumbing works.
"""

from __future__ import annotations

import pytest
from django.urls import resolve, reverse
from rest_framework import status


# ════════════════════════════════════════════════════════════════════
#  URL Routing Smoke Tests
# ════════════════════════════════════════════════════════════════════

class TestURLRouting:
    """Ensure all top-level URL names resolve to the expected prefixes."""

    EXPECTED_URLS = [
        # (url_name, expected_path_prefix)
        ("accounts:login",          "/api/accounts/auth/login/"),
        ("station-list",            "/api/stations/"),
        ("iot-device-list",         "/api/iot-devices/"),
        ("emission-report-list",    "/api/emission-reports/"),
        ("accused-list",            "/api/accused/"),
        ("challan-list",            "/api/challans/"),
        ("fir-list",                "/api/firs/"),
        ("case-list",               "/api/cases/"),
        ("core:dashboard-stats",    "/api/core/dashboard/"),
        ("core:system-constants",   "/api/core/constants/"),
    ]

    @pytest.mark.parametrize("url_name,expected_prefix", EXPECTED_URLS)
    def test_url_resolves(self, url_name: str, expected_prefix: str):
        url = reverse(url_name)
        assert url.startswith(expected_prefix), (
            f"{url_name} resolved to {url}, expected prefix {expected_prefix}"
        )

    @pytest.mark.parametrize("url_name,expected_prefix", EXPECTED_URLS)
    def test_url_resolve_matches_view(self, url_name: str, expected_prefix: str):
        match = resolve(expected_prefix)
        assert match.func is not None


# ════════════════════════════════════════════════════════════════════
#  Core Domain Module Import Tests
# ════════════════════════════════════════════════════════════════════

class TestCoreDomainImports:

    def test_exception_hierarchy(self):
        from core.domain.exceptions import (
            Conflict,
            DomainError,
            InvalidTransition,
            NotFound,
            PermissionDenied,
        )
        assert issubclass(InvalidTransition, Conflict)
        assert issubclass(Conflict, DomainError)
        assert issubclass(PermissionDenied, DomainError)
        assert issubclass(NotFound, DomainError)

    def test_import_transactions(self):
        from core.domain.transactions import atomic_transition, lock_for_update

        assert callable(atomic_transition)
        assert callable(lock_for_update)


# ════════════════════════════════════════════════════════════════════
#  Public plumbing
# ════════════════════════════════════════════════════════════════════

@pytest.mark.django_db
class TestPublicPlumbing:

    def test_openapi_schema(self, api_client):
        resp = api_client.get(reverse("schema"))
        assert resp.status_code == status.HTTP_200_OK

    def test_constants_are_public(self, api_client):
        resp = api_client.get(reverse("core:system-constants"))
        assert resp.status_code == status.HTTP_200_OK
        assert resp.data["legal_sound_limit_dba"] == "85.00"
        assert {r["value"] for r in resp.data["roles"]} >= {"police_officer", "judge"}
        assert [s["value"] for s in resp.data["challan_statuses"]] == ["Unpaid", "Paid"]

    def test_dashboard_requires_authentication(self, api_client):
        resp = api_client.get(reverse("core:dashboard-stats"))
        assert resp.status_code == status.HTTP_401_UNAUTHORIZED
        assert resp.data["success"] is False
