"""
Root conftest.py — shared fixtures for the entire test suite.

Provides:
  - ``api_client`` fixture returning a DRF ``APIClient``.
  - ``create_user`` factory fixture for creating staff users by role.
  - ``auth_header`` fixture for authenticated requests (JWT).
  - Domain fixtures: a station, a court, an officer posted to the
    station, a judge sitting in the court, a calibrated device and the
    two reference violations (cognizable / non-cognizable).
"""

from __future__ import annotations

from datetime import date, timedelta
from decimal import Decimal

import pytest
from rest_framework.test import APIClient


@pytest.fixture()
def api_client() -> APIClient:
    """Unauthenticated DRF test client."""
    return APIClient()


@pytest.fixture()
def rbac_roles(db):
    """Seed every ``RoleName`` with its capabilities (as ``setup_rbac`` does)."""
    from accounts.models import RoleName
    from accounts.rbac import sync_role

    return {name: sync_role(name)[0] for name in RoleName}


@pytest.fixture()
def create_user(db, rbac_roles):
    """
    Factory fixture that creates a staff user with sensible defaults.

    Usage::

        def test_something(create_user):
            user = create_user(username="alice")
            authority = create_user(role_name=RoleName.STATION_AUTHORITY)
    """
    from accounts.models import User

    _counter = 0

    def _factory(
        *,
        username: str | None = None,
        password: str = "TestPass123!",
        email: str | None = None,
        phone_number: str | None = None,
        role_name=None,
        is_active: bool = True,
        **kwargs,
    ) -> User:
        nonlocal _counter
        _counter += 1
        if username is None:
            username = f"testuser{_counter}"
        if email is None:
            email = f"{username}@test.local"
        if phone_number is None:
            phone_number = f"0300{_counter:07d}"

        return User.objects.create_user(
            username=username,
            password=password,
            email=email,
            phone_number=phone_number,
            is_active=is_active,
            role=rbac_roles[role_name] if role_name is not None else None,
            **kwargs,
        )

    return _factory


@pytest.fixture()
def auth_header(create_user):
    """
    Returns a helper that creates a user and returns an
    ``Authorization`` header dict with a valid JWT access token.

    Passing ``user=`` reuses an existing account instead.
    """
    from rest_framework_simplejwt.tokens import AccessToken

    def _make(*, user=None, **user_kwargs) -> dict[str, str]:
        if user is None:
            user = create_user(**user_kwargs)
        token = AccessToken.for_user(user)
        return {"Authorization": f"Bearer {token}"}

    return _make


# ── Domain fixtures ──────────────────────────────────────────────────


@pytest.fixture()
def station(db):
    from agencies.models import PoliceStation

    return PoliceStation.objects.create(
        name="Traffic Station Blue Area",
        code="TSB-01",
        location="Blue Area",
        district="Islamabad",
        province="ICT",
    )


@pytest.fixture()
def court(db):
    from agencies.models import Court, CourtType

    court_type = CourtType.objects.create(name="High Court")
    return Court.objects.create(
        name="Lahore High Court",
        court_type=court_type,
        location="Lahore",
        district="Lahore",
        province="Punjab",
    )


@pytest.fixture()
def create_officer(create_user, station):
    """Factory for police officers posted to ``station``."""
    from accounts.models import RoleName
    from agencies.models import PoliceOfficer

    _counter = 0

    def _factory(*, station_override=None, **user_kwargs) -> PoliceOfficer:
        nonlocal _counter
        _counter += 1
        user = create_user(role_name=RoleName.POLICE_OFFICER, first_name="Officer", last_name=str(_counter), **user_kwargs)
        return PoliceOfficer.objects.create(
            user=user,
            station=station_override if station_override is not None else station,
            cnic=f"61101-{_counter:07d}-1",
            badge_number=f"B-{_counter:04d}",
            rank="ASI",
        )

    return _factory


@pytest.fixture()
def officer(create_officer):
    return create_officer()


@pytest.fixture()
def create_judge(create_user, court):
    """Factory for judges sitting in ``court``."""
    from accounts.models import RoleName
    from agencies.models import Judge

    _counter = 0

    def _factory(*, court_override=None, **judge_kwargs) -> Judge:
        nonlocal _counter
        _counter += 1
        user = create_user(role_name=RoleName.JUDGE, first_name="Judge", last_name=str(_counter))
        return Judge.objects.create(
            user=user,
            court=court_override if court_override is not None else court,
            cnic=f"35202-{_counter:07d}-3",
            rank="Civil Judge",
            **judge_kwargs,
        )

    return _factory


@pytest.fixture()
def judge(create_judge):
    return create_judge()


@pytest.fixture()
def station_authority(create_user):
    from accounts.models import RoleName

    return create_user(username="station_authority", role_name=RoleName.STATION_AUTHORITY)


@pytest.fixture()
def court_authority(create_user):
    from accounts.models import RoleName

    return create_user(username="court_authority", role_name=RoleName.COURT_AUTHORITY)


@pytest.fixture()
def admin_user(create_user):
    from accounts.models import RoleName

    return create_user(username="sysadmin", role_name=RoleName.ADMIN)


@pytest.fixture()
def device(db):
    from evidence.models import IotDevice

    return IotDevice.objects.create(
        device_name="IOT-01",
        firmware_version="1.4.2",
        calibration_date=date(2024, 12, 1),
        calibration_status=True,
        calibration_certificate_no="CAL-2024-118",
    )


@pytest.fixture()
def cognizable_violation(db):
    from challans.models import Violation

    return Violation.objects.create(
        violation_type="Excessive Noise (Modified Exhaust)",
        penalty_amount=Decimal("5000.00"),
        section_of_law="MVO 1965 s.112",
        is_cognizable=True,
    )


@pytest.fixture()
def minor_violation(db):
    from challans.models import Violation

    return Violation.objects.create(
        violation_type="Pressure Horn",
        penalty_amount=Decimal("1000.00"),
        is_cognizable=False,
    )


@pytest.fixture()
def accused_payload() -> dict[str, str]:
    return {
        "cnic": "3520212345671",
        "full_name": "Ali Khan",
        "email": "ali.khan@example.com",
        "contact": "03001234567",
        "address": "House 12, Street 4, Gulberg",
        "city": "Lahore",
        "province": "Punjab",
    }


@pytest.fixture()
def vehicle_payload() -> dict[str, str]:
    return {"plate_number": "lea-1234", "make": "Honda CG-125", "color": "Red"}


@pytest.fixture()
def create_report(device):
    """Factory for signed emission reports on ``device``."""
    from django.utils import timezone

    from evidence.models import EmissionReport
    from evidence.signature import generate_signature

    _counter = 0

    def _factory(*, sound_level_dba: Decimal = Decimal("95.50"), test_datetime=None) -> EmissionReport:
        nonlocal _counter
        _counter += 1
        when = test_datetime or timezone.now() - timedelta(hours=_counter)
        return EmissionReport.objects.create(
            device=device,
            sound_level_dba=sound_level_dba,
            test_datetime=when,
            digital_signature=generate_signature(device.pk, None, None, None, None, sound_level_dba, when),
        )

    return _factory


@pytest.fixture()
def create_challan(officer, cognizable_violation):
    """
    Factory for challans issued by ``officer``; defaults to the
    cognizable violation and a fresh accused / vehicle pair.
    """
    from django.utils import timezone

    from challans.models import Challan
    from offenders.models import Accused, Vehicle

    _counter = 0

    def _factory(*, violation=None, accused=None, vehicle=None, issuing_officer=None) -> Challan:
        nonlocal _counter
        _counter += 1
        if accused is None:
            accused = Accused.objects.create(
                cnic=f"42101-{_counter:07d}-5",
                full_name=f"Accused {_counter}",
                email=f"accused{_counter}@example.com",
            )
        if vehicle is None:
            vehicle = Vehicle.objects.create(plate_number=f"KHI-{_counter:04d}", owner=accused)
        now = timezone.now()
        return Challan.objects.create(
            officer=issuing_officer or officer,
            accused=accused,
            vehicle=vehicle,
            violation=violation or cognizable_violation,
            issue_datetime=now,
            due_datetime=now + timedelta(days=30),
        )

    return _factory
