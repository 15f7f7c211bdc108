"""
Integration tests for the unauthenticated status lookup:
OTP request → OTP verification → token-gated snapshot.
"""

from __future__ import annotations

import re
from datetime import timedelta
from unittest import mock

import pytest
from django.core import mail
from django.urls import reverse
from django.utils import timezone
from rest_framework import status

from public.models import PublicStatusOtp
from public.services import mask_email


@pytest.fixture()
def challan(create_challan):
    from offenders.models import Accused, Vehicle

    accused = Accused.objects.create(cnic="35202-1234567-1", full_name="Ali Khan", email="ali.khan@example.com")
    vehicle = Vehicle.objects.create(plate_number="LEA-1234", owner=accused)
    return create_challan(accused=accused, vehicle=vehicle)


def _identity(**overrides):
    data = {"vehicle_no": "lea 1234", "cnic": "3520212345671", "email": "Ali.Khan@example.com"}
    data.update(overrides)
    return data


def _otp_from_mail() -> str:
    return re.search(r"\b(\d{6})\b", mail.outbox[-1].body).group(1)


@pytest.mark.django_db
class TestRequestOtp:

    url = "/api/public/status/request-otp/"

    def test_otp_emailed_and_masked(self, api_client, challan):
        resp = api_client.post(self.url, _identity(), format="json")
        assert resp.status_code == status.HTTP_200_OK, resp.data
        assert resp.data["masked_email"] == "A***n@example.com"
        assert resp.data["expires_in_minutes"] == 15

        assert len(mail.outbox) == 1
        assert mail.outbox[0].to == ["Ali.Khan@example.com"]
        record = PublicStatusOtp.objects.get()
        assert record.otp_code == _otp_from_mail()
        assert record.vehicle_no == "LEA1234"

    def test_new_request_replaces_pending_code(self, api_client, challan):
        api_client.post(self.url, _identity(), format="json")
        api_client.post(self.url, _identity(), format="json")
        assert PublicStatusOtp.objects.count() == 1

    def test_unknown_identity(self, api_client, challan):
        resp = api_client.post(self.url, _identity(email="someone@example.com"), format="json")
        assert resp.status_code == status.HTTP_404_NOT_FOUND
        assert mail.outbox == []

    def test_vehicle_not_linked(self, api_client, challan):
        resp = api_client.post(self.url, _identity(vehicle_no="ZZZ-999"), format="json")
        assert resp.status_code == status.HTTP_404_NOT_FOUND

    def test_mail_failure_rolls_back_code(self, api_client, challan):
        with mock.patch("core.domain.notifications.send_mail", side_effect=OSError("smtp down")):
            resp = api_client.post(self.url, _identity(), format="json")
        assert resp.status_code == status.HTTP_400_BAD_REQUEST
        assert not PublicStatusOtp.objects.exists()


@pytest.mark.django_db
class TestVerifyAndStatus:

    def _request(self, api_client):
        api_client.post("/api/public/status/request-otp/", _identity(), format="json")
        return _otp_from_mail()

    def test_full_flow(self, api_client, challan):
        otp = self._request(api_client)
        resp = api_client.post("/api/public/status/verify-otp/", _identity(otp=otp), format="json")
        assert resp.status_code == status.HTTP_200_OK, resp.data
        token = resp.data["access_token"]

        snapshot = api_client.get("/api/public/status/", HTTP_X_ACCESS_TOKEN=token)
        assert snapshot.status_code == status.HTTP_200_OK
        assert snapshot.data["accused"]["cnic"] == "35202-1234567-1"
        assert snapshot.data["vehicle"]["plate_number"] == "LEA-1234"
        assert [c["id"] for c in snapshot.data["challans"]] == [challan.pk]
        assert snapshot.data["totals"]["unpaid_challans"] == 1
        assert snapshot.data["totals"]["total_penalty"] == "5000.00"

        via_query = api_client.get("/api/public/status/", {"token": token})
        assert via_query.status_code == status.HTTP_200_OK

    def test_snapshot_limited_to_verified_vehicle(self, api_client, challan, create_challan, minor_violation):
        from offenders.models import Vehicle

        other = Vehicle.objects.create(plate_number="ISB-9999", owner=challan.accused)
        create_challan(accused=challan.accused, vehicle=other, violation=minor_violation)

        otp = self._request(api_client)
        token = api_client.post("/api/public/status/verify-otp/", _identity(otp=otp), format="json").data["access_token"]
        snapshot = api_client.get("/api/public/status/", HTTP_X_ACCESS_TOKEN=token)

        assert snapshot.status_code == status.HTTP_200_OK
        assert [c["plate_number"] for c in snapshot.data["challans"]] == ["LEA-1234"]
        assert snapshot.data["totals"]["total_challans"] == 1
        assert snapshot.data["totals"]["total_penalty"] == "5000.00"

    def test_wrong_code(self, api_client, challan):
        otp = self._request(api_client)
        wrong = f"{(int(otp) + 1) % 1000000:06d}"
        resp = api_client.post("/api/public/status/verify-otp/", _identity(otp=wrong), format="json")
        assert resp.status_code == status.HTTP_400_BAD_REQUEST

    def test_code_is_single_use(self, api_client, challan):
        otp = self._request(api_client)
        assert api_client.post("/api/public/status/verify-otp/", _identity(otp=otp), format="json").status_code == 200
        again = api_client.post("/api/public/status/verify-otp/", _identity(otp=otp), format="json")
        assert again.status_code == status.HTTP_400_BAD_REQUEST

    def test_expired_code(self, api_client, challan):
        otp = self._request(api_client)
        PublicStatusOtp.objects.update(expires_at=timezone.now() - timedelta(seconds=1))
        resp = api_client.post("/api/public/status/verify-otp/", _identity(otp=otp), format="json")
        assert resp.status_code == status.HTTP_400_BAD_REQUEST
        assert "expired" in resp.data["message"]

    def test_malformed_code(self, api_client, challan):
        resp = api_client.post("/api/public/status/verify-otp/", _identity(otp="12ab"), format="json")
        assert resp.status_code == status.HTTP_400_BAD_REQUEST

    def test_status_requires_valid_token(self, api_client, challan):
        assert api_client.get("/api/public/status/").status_code == status.HTTP_403_FORBIDDEN
        assert api_client.get("/api/public/status/", {"token": "nope"}).status_code == status.HTTP_403_FORBIDDEN

    def test_expired_token(self, api_client, challan):
        otp = self._request(api_client)
        token = api_client.post("/api/public/status/verify-otp/", _identity(otp=otp), format="json").data["access_token"]
        PublicStatusOtp.objects.update(access_token_expires_at=timezone.now() - timedelta(seconds=1))
        resp = api_client.get("/api/public/status/", HTTP_X_ACCESS_TOKEN=token)
        assert resp.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.parametrize(
    "email, masked",
    [
        ("ali.khan@example.com", "a***n@example.com"),
        ("ab@example.com", "ab***@example.com"),
        ("not-an-email", "not-an-email"),
    ],
)
def test_mask_email(email, masked):
    assert mask_email(email) == masked
