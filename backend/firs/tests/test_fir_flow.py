"""
Integration tests for FIR filing: the cognizable / not-yet-escalated
gate, per-station numbering and status updates.
"""

from __future__ import annotations

import pytest
from django.core import mail
from django.urls import reverse
from django.utils import timezone
from rest_framework import status

from core.domain.exceptions import Conflict, DomainError, InvalidTransition
from firs.models import Fir, FirStatus
from firs.services import FirService


@pytest.fixture()
def authority_client(api_client, station_authority):
    api_client.force_authenticate(user=station_authority)
    return api_client


@pytest.mark.django_db
class TestFileFir:

    def test_file_fir_numbers_and_notifies(self, authority_client, officer, create_challan,
                                           django_capture_on_commit_callbacks):
        challan = create_challan()
        with django_capture_on_commit_callbacks(execute=True):
            resp = authority_client.post(
                reverse("fir-list"), {"challan": challan.pk, "description": "Repeat offence"}, format="json",
            )
        assert resp.status_code == status.HTTP_201_CREATED, resp.data

        year = timezone.now().year
        assert resp.data["fir_no"] == f"FIR-TSB01-{year}-0001"
        assert resp.data["status"] == FirStatus.FILED
        fir = Fir.objects.get(pk=resp.data["id"])
        assert fir.station == officer.station
        assert fir.informant == officer

        assert len(mail.outbox) == 1
        assert fir.fir_no in mail.outbox[0].subject

    def test_sequence_per_station(self, station_authority, create_challan, create_officer):
        from agencies.models import PoliceStation

        other_station = PoliceStation.objects.create(name="Saddar", code="SDR")
        other_officer = create_officer(station_override=other_station)

        first = FirService.create_fir(station_authority, {"challan": create_challan().pk})
        second = FirService.create_fir(station_authority, {"challan": create_challan().pk})
        elsewhere = FirService.create_fir(
            station_authority, {"challan": create_challan(issuing_officer=other_officer).pk},
        )
        assert (first.sequence, second.sequence, elsewhere.sequence) == (1, 2, 1)
        assert elsewhere.fir_no.startswith("FIR-SDR-")

    def test_non_cognizable_rejected(self, authority_client, create_challan, minor_violation):
        challan = create_challan(violation=minor_violation)
        resp = authority_client.post(reverse("fir-list"), {"challan": challan.pk}, format="json")
        assert resp.status_code == status.HTTP_400_BAD_REQUEST
        assert not Fir.objects.exists()

    def test_second_fir_for_challan_conflicts(self, station_authority, create_challan):
        challan = create_challan()
        FirService.create_fir(station_authority, {"challan": challan.pk})
        with pytest.raises(Conflict):
            FirService.create_fir(station_authority, {"challan": challan.pk})
        assert Fir.objects.count() == 1

    def test_officer_cannot_file(self, api_client, officer, create_challan):
        api_client.force_authenticate(user=officer.user)
        resp = api_client.post(reverse("fir-list"), {"challan": create_challan().pk}, format="json")
        assert resp.status_code == status.HTTP_403_FORBIDDEN

    def test_unknown_challan(self, authority_client, db):
        resp = authority_client.post(reverse("fir-list"), {"challan": 424242}, format="json")
        assert resp.status_code == status.HTTP_404_NOT_FOUND

    def test_officer_without_station(self, station_authority, create_challan, officer):
        challan = create_challan()
        officer.station = None
        officer.save()
        with pytest.raises(DomainError):
            FirService.create_fir(station_authority, {"challan": challan.pk})

    def test_eligible_challans(self, authority_client, create_challan, minor_violation, station_authority):
        escalated = create_challan()
        FirService.create_fir(station_authority, {"challan": escalated.pk})
        eligible = create_challan()
        create_challan(violation=minor_violation)

        resp = authority_client.get(reverse("fir-eligible-challans"))
        assert resp.status_code == status.HTTP_200_OK
        assert [c["id"] for c in resp.data] == [eligible.pk]


@pytest.mark.django_db
class TestUpdateFir:

    def test_investigation_then_close(self, authority_client, station_authority, create_challan):
        fir = FirService.create_fir(station_authority, {"challan": create_challan().pk})
        url = reverse("fir-detail", args=[fir.pk])

        resp = authority_client.patch(
            url, {"status": FirStatus.UNDER_INVESTIGATION, "investigation_report": "Exhaust removed."}, format="json",
        )
        assert resp.status_code == status.HTTP_200_OK
        assert resp.data["investigation_report"] == "Exhaust removed."

        assert authority_client.patch(url, {"status": FirStatus.CLOSED}, format="json").status_code == 200

        resp = authority_client.patch(url, {"status": FirStatus.FILED}, format="json")
        assert resp.status_code == status.HTTP_409_CONFLICT
        fir.refresh_from_db()
        assert fir.status == FirStatus.CLOSED

    def test_closed_fir_report_is_frozen(self, station_authority, create_challan):
        fir = FirService.create_fir(station_authority, {"challan": create_challan().pk})
        FirService.update_fir(station_authority, fir.pk, {"status": FirStatus.CLOSED})
        with pytest.raises(InvalidTransition):
            FirService.update_fir(station_authority, fir.pk, {"investigation_report": "late edit"})
