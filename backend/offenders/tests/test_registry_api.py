"""Integration tests for the accused / vehicle registry endpoints."""

from __future__ import annotations

import pytest
from django.urls import reverse
from rest_framework import status

from offenders.models import Accused, Vehicle


@pytest.mark.django_db
class TestAccusedApi:

    def test_register_and_lookup_by_cnic(self, api_client, officer, accused_payload):
        api_client.force_authenticate(user=officer.user)
        resp = api_client.post(reverse("accused-list"), accused_payload, format="json")
        assert resp.status_code == status.HTTP_201_CREATED, resp.data
        assert resp.data["cnic"] == "35202-1234567-1"

        lookup = api_client.get(reverse("accused-by-cnic"), {"cnic": "35202 1234567 1"})
        assert lookup.status_code == status.HTTP_200_OK
        assert lookup.data["id"] == resp.data["id"]

    def test_duplicate_cnic_conflicts(self, api_client, officer, accused_payload):
        api_client.force_authenticate(user=officer.user)
        api_client.post(reverse("accused-list"), accused_payload, format="json")
        resp = api_client.post(reverse("accused-list"), accused_payload, format="json")
        assert resp.status_code == status.HTTP_409_CONFLICT

    def test_unknown_cnic_is_404(self, api_client, officer):
        api_client.force_authenticate(user=officer.user)
        resp = api_client.get(reverse("accused-by-cnic"), {"cnic": "1111111111111"})
        assert resp.status_code == status.HTTP_404_NOT_FOUND

    def test_officer_cannot_edit_contact(self, api_client, officer):
        accused = Accused.objects.create(cnic="35202-1234567-1", full_name="Ali Khan")
        api_client.force_authenticate(user=officer.user)
        resp = api_client.patch(reverse("accused-detail", args=[accused.pk]), {"contact": "0300"}, format="json")
        assert resp.status_code == status.HTTP_403_FORBIDDEN

    def test_station_authority_edits_contact(self, api_client, station_authority):
        accused = Accused.objects.create(cnic="35202-1234567-1", full_name="Ali Khan")
        api_client.force_authenticate(user=station_authority)
        resp = api_client.patch(reverse("accused-detail", args=[accused.pk]), {"contact": "03001112222"}, format="json")
        assert resp.status_code == status.HTTP_200_OK
        accused.refresh_from_db()
        assert accused.contact == "03001112222"


@pytest.mark.django_db
def test_vehicle_by_plate(api_client, officer):
    Vehicle.objects.create(plate_number="LEA-1234")
    api_client.force_authenticate(user=officer.user)
    resp = api_client.get(reverse("vehicle-by-plate"), {"plate": " lea-1234"})
    assert resp.status_code == status.HTTP_200_OK
    assert resp.data["plate_number"] == "LEA-1234"
