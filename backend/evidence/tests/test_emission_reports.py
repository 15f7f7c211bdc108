"""
Integration tests for emission report recording and verification
through the HTTP API.
"""

from __future__ import annotations

from datetime import timedelta

import pytest
from django.urls import reverse
from django.utils import timezone
from rest_framework import status

from accounts.models import RoleName
from evidence.models import EmissionReport, IotDevice


@pytest.fixture()
def officer_client(api_client, officer):
    api_client.force_authenticate(user=officer.user)
    return api_client


def _payload(device, **overrides):
    data = {
        "device": device.pk,
        "co": "1.25",
        "co2": "3.1",
        "sound_level_dba": "95.5",
        "test_datetime": (timezone.now() - timedelta(hours=1)).isoformat(),
    }
    data.update(overrides)
    return data


@pytest.mark.django_db
class TestRecordEmissionReport:

    @property
    def url(self) -> str:
        return reverse("emission-report-list")

    def test_officer_records_signed_report(self, officer_client, device):
        resp = officer_client.post(self.url, _payload(device), format="json")
        assert resp.status_code == status.HTTP_201_CREATED, resp.data
        assert resp.data["sound_level_dba"] == "95.50"
        assert resp.data["is_violation"] is True
        assert len(resp.data["digital_signature"]) == 44

        verify = officer_client.get(reverse("emission-report-verify", args=[resp.data["id"]]))
        assert verify.status_code == status.HTTP_200_OK
        assert verify.data["is_authentic"] is True

    def test_reading_below_limit_is_not_violation(self, officer_client, device):
        resp = officer_client.post(self.url, _payload(device, sound_level_dba="70"), format="json")
        assert resp.status_code == status.HTTP_201_CREATED
        assert resp.data["is_violation"] is False

    @pytest.mark.parametrize(
        "field, value",
        [("calibration_status", False), ("is_active", False), ("is_registered", False)],
    )
    def test_device_gate(self, officer_client, device, field, value):
        IotDevice.objects.filter(pk=device.pk).update(**{field: value})
        resp = officer_client.post(self.url, _payload(device), format="json")
        assert resp.status_code == status.HTTP_400_BAD_REQUEST
        assert resp.data["success"] is False
        assert EmissionReport.objects.count() == 0

    def test_future_timestamp_rejected(self, officer_client, device):
        future = (timezone.now() + timedelta(minutes=10)).isoformat()
        resp = officer_client.post(self.url, _payload(device, test_datetime=future), format="json")
        assert resp.status_code == status.HTTP_400_BAD_REQUEST

    def test_duplicate_within_window_rejected(self, officer_client, device):
        first = timezone.now() - timedelta(hours=1)
        assert officer_client.post(self.url, _payload(device, test_datetime=first.isoformat()), format="json").status_code == 201

        near = (first + timedelta(minutes=4)).isoformat()
        resp = officer_client.post(self.url, _payload(device, test_datetime=near), format="json")
        assert resp.status_code == status.HTTP_409_CONFLICT

        far = (first + timedelta(minutes=6)).isoformat()
        resp = officer_client.post(self.url, _payload(device, test_datetime=far), format="json")
        assert resp.status_code == status.HTTP_201_CREATED

    def test_judge_cannot_record(self, api_client, judge, device):
        api_client.force_authenticate(user=judge.user)
        resp = api_client.post(self.url, _payload(device), format="json")
        assert resp.status_code == status.HTTP_403_FORBIDDEN

    def test_unauthenticated_rejected(self, api_client, device):
        resp = api_client.post(self.url, _payload(device), format="json")
        assert resp.status_code == status.HTTP_401_UNAUTHORIZED

    def test_tampered_report_fails_verification(self, officer_client, device):
        resp = officer_client.post(self.url, _payload(device), format="json")
        EmissionReport.objects.filter(pk=resp.data["id"]).update(nox="9.99")

        verify = officer_client.get(reverse("emission-report-verify", args=[resp.data["id"]]))
        assert verify.status_code == status.HTTP_200_OK
        assert verify.data["is_authentic"] is False
        assert verify.data["data_integrity"] == "Compromised"

    def test_violations_only_filter(self, officer_client, device):
        base = timezone.now() - timedelta(hours=2)
        officer_client.post(self.url, _payload(device, sound_level_dba="70", test_datetime=base.isoformat()), format="json")
        officer_client.post(
            self.url,
            _payload(device, sound_level_dba="99", test_datetime=(base + timedelta(minutes=30)).isoformat()),
            format="json",
        )
        resp = officer_client.get(self.url, {"violations_only": "true"})
        assert resp.status_code == status.HTTP_200_OK
        assert [r["sound_level_dba"] for r in resp.data] == ["99.00"]


@pytest.mark.django_db
class TestIotDevices:

    @property
    def url(self) -> str:
        return reverse("iot-device-list")

    def test_station_authority_registers_and_pairs(self, api_client, station_authority, officer):
        api_client.force_authenticate(user=station_authority)
        resp = api_client.post(
            self.url,
            {"device_name": "IOT-77", "calibration_status": True, "calibration_date": "2025-01-01"},
            format="json",
        )
        assert resp.status_code == status.HTTP_201_CREATED, resp.data

        pair = api_client.post(
            reverse("iot-device-pair", args=[resp.data["id"]]), {"officer": officer.pk}, format="json",
        )
        assert pair.status_code == status.HTTP_200_OK
        assert pair.data["paired_officer"] == officer.pk
        assert pair.data["pairing_datetime"] is not None

        unpair = api_client.post(reverse("iot-device-unpair", args=[resp.data["id"]]))
        assert unpair.data["paired_officer"] is None

    def test_duplicate_name_conflicts(self, api_client, station_authority, device):
        api_client.force_authenticate(user=station_authority)
        resp = api_client.post(self.url, {"device_name": "iot-01"}, format="json")
        assert resp.status_code == status.HTTP_409_CONFLICT

    def test_officer_cannot_register(self, api_client, create_user):
        api_client.force_authenticate(user=create_user(role_name=RoleName.POLICE_OFFICER))
        resp = api_client.post(self.url, {"device_name": "IOT-99"}, format="json")
        assert resp.status_code == status.HTTP_403_FORBIDDEN
