"""
Integration tests for challan issuance: entity resolution, the
report → challan linkage gate, due date, signature copy and the
``challan_issued`` notification.
"""

from __future__ import annotations

from datetime import timedelta
from decimal import Decimal
from unittest import mock

import pytest
from django.core import mail
from django.urls import reverse
from django.utils import timezone
from rest_framework import status

from challans.models import Challan, ChallanStatus
from challans.services import ChallanService
from core.constants import DEFAULT_BANK_DETAILS
from core.domain.exceptions import Conflict, DomainError, PermissionDenied
from offenders.models import Accused, Vehicle


@pytest.fixture()
def officer_client(api_client, officer):
    api_client.force_authenticate(user=officer.user)
    return api_client


def _issue(client, **data):
    return client.post(reverse("challan-list"), data, format="json")


@pytest.mark.django_db
class TestIssueChallan:

    def test_issue_with_new_accused_and_vehicle(
        self, officer_client, officer, cognizable_violation, create_report,
        accused_payload, vehicle_payload, django_capture_on_commit_callbacks,
    ):
        report = create_report()
        with django_capture_on_commit_callbacks(execute=True):
            resp = _issue(
                officer_client,
                violation=cognizable_violation.pk,
                emission_report=report.pk,
                accused=accused_payload,
                vehicle=vehicle_payload,
            )
        assert resp.status_code == status.HTTP_201_CREATED, resp.data

        challan = Challan.objects.get(pk=resp.data["id"])
        assert challan.officer == officer
        assert challan.status == ChallanStatus.UNPAID
        assert challan.digital_signature == report.digital_signature
        assert challan.bank_details == DEFAULT_BANK_DETAILS
        assert challan.due_datetime - challan.issue_datetime == timedelta(days=30)
        assert challan.vehicle.plate_number == "LEA-1234"
        assert challan.vehicle.owner == challan.accused
        assert resp.data["accused_cnic"] == "35202-1234567-1"

        assert len(mail.outbox) == 1
        assert mail.outbox[0].to == ["ali.khan@example.com"]
        assert "LEA-1234" in mail.outbox[0].body

    def test_repeat_offender_reuses_rows(self, officer_client, minor_violation, accused_payload, vehicle_payload):
        _issue(officer_client, violation=minor_violation.pk, accused=accused_payload, vehicle=vehicle_payload)
        resp = _issue(
            officer_client,
            violation=minor_violation.pk,
            accused={"cnic": "35202-1234567-1", "contact": "03110000000"},
            vehicle={"plate_number": "LEA-1234"},
        )
        assert resp.status_code == status.HTTP_201_CREATED, resp.data
        assert Accused.objects.count() == 1
        assert Vehicle.objects.count() == 1
        assert Accused.objects.get().contact == "03110000000"

    def test_issue_by_existing_ids(self, officer_client, minor_violation):
        accused = Accused.objects.create(cnic="35202-1234567-1", full_name="Ali Khan")
        vehicle = Vehicle.objects.create(plate_number="LEA-1234")
        resp = _issue(officer_client, violation=minor_violation.pk, accused_id=accused.pk, vehicle_id=vehicle.pk)
        assert resp.status_code == status.HTTP_201_CREATED
        vehicle.refresh_from_db()
        assert vehicle.owner == accused

    def test_report_used_once(self, officer_client, minor_violation, create_report, accused_payload, vehicle_payload):
        report = create_report()
        first = _issue(officer_client, violation=minor_violation.pk, emission_report=report.pk,
                       accused=accused_payload, vehicle=vehicle_payload)
        assert first.status_code == status.HTTP_201_CREATED

        second = _issue(officer_client, violation=minor_violation.pk, emission_report=report.pk,
                        accused=accused_payload, vehicle=vehicle_payload)
        assert second.status_code == status.HTTP_409_CONFLICT
        assert second.data["success"] is False
        assert Challan.objects.count() == 1

    def test_unknown_report_is_404(self, officer_client, minor_violation, accused_payload, vehicle_payload):
        resp = _issue(officer_client, violation=minor_violation.pk, emission_report=9999,
                      accused=accused_payload, vehicle=vehicle_payload)
        assert resp.status_code == status.HTTP_404_NOT_FOUND

    def test_missing_party_is_validation_error(self, officer_client, minor_violation, vehicle_payload):
        resp = _issue(officer_client, violation=minor_violation.pk, vehicle=vehicle_payload)
        assert resp.status_code == status.HTTP_400_BAD_REQUEST

    def test_station_authority_cannot_issue(self, api_client, station_authority, minor_violation,
                                            accused_payload, vehicle_payload):
        api_client.force_authenticate(user=station_authority)
        resp = _issue(api_client, violation=minor_violation.pk, accused=accused_payload, vehicle=vehicle_payload)
        assert resp.status_code == status.HTTP_403_FORBIDDEN

    def test_mail_failure_does_not_undo_challan(
        self, officer_client, minor_violation, accused_payload, vehicle_payload, django_capture_on_commit_callbacks,
    ):
        with mock.patch("core.domain.notifications.send_mail", side_effect=OSError("smtp down")):
            with django_capture_on_commit_callbacks(execute=True):
                resp = _issue(officer_client, violation=minor_violation.pk,
                              accused=accused_payload, vehicle=vehicle_payload)
        assert resp.status_code == status.HTTP_201_CREATED
        assert Challan.objects.filter(pk=resp.data["id"]).exists()


@pytest.mark.django_db
class TestChallanServiceRules:

    def test_officer_without_station(self, create_officer, minor_violation, accused_payload, vehicle_payload):
        unposted = create_officer()
        unposted.station = None
        unposted.save()
        with pytest.raises(DomainError):
            ChallanService.create_challan(unposted.user, {
                "violation": minor_violation.pk, "accused": accused_payload, "vehicle": vehicle_payload,
            })

    def test_role_without_profile(self, create_user, minor_violation, accused_payload, vehicle_payload):
        from accounts.models import RoleName

        user = create_user(role_name=RoleName.POLICE_OFFICER)
        with pytest.raises(PermissionDenied):
            ChallanService.create_challan(user, {
                "violation": minor_violation.pk, "accused": accused_payload, "vehicle": vehicle_payload,
            })

    def test_linked_report_rejected_in_service(self, officer, minor_violation, create_report,
                                               accused_payload, vehicle_payload):
        report = create_report()
        data = {"violation": minor_violation.pk, "emission_report": report.pk,
                "accused": accused_payload, "vehicle": vehicle_payload}
        ChallanService.create_challan(officer.user, dict(data))
        with pytest.raises(Conflict):
            ChallanService.create_challan(officer.user, dict(data))


@pytest.mark.django_db
class TestChallanQueries:

    def _make(self, officer, violation, plate, cnic, **extra):
        accused = Accused.objects.create(cnic=cnic, full_name=f"Owner {plate}")
        vehicle = Vehicle.objects.create(plate_number=plate, owner=accused)
        now = extra.pop("issued", timezone.now())
        return Challan.objects.create(
            officer=officer, accused=accused, vehicle=vehicle, violation=violation,
            issue_datetime=now, due_datetime=now + timedelta(days=30), **extra,
        )

    def test_search_by_plate_or_cnic(self, api_client, officer, minor_violation):
        c1 = self._make(officer, minor_violation, "LEA-1", "35202-0000001-1")
        c2 = self._make(officer, minor_violation, "LEA-2", "35202-0000002-1")
        api_client.force_authenticate(user=officer.user)

        resp = api_client.get(reverse("challan-search"), {"plate": "lea-1"})
        assert [c["id"] for c in resp.data] == [c1.pk]

        resp = api_client.get(reverse("challan-search"), {"cnic": "3520200000021"})
        assert [c["id"] for c in resp.data] == [c2.pk]

        resp = api_client.get(reverse("challan-search"))
        assert resp.status_code == status.HTTP_400_BAD_REQUEST

    def test_overdue_filter(self, api_client, officer, minor_violation):
        old = self._make(officer, minor_violation, "OLD-1", "35202-0000003-1",
                         issued=timezone.now() - timedelta(days=45))
        self._make(officer, minor_violation, "NEW-1", "35202-0000004-1")
        api_client.force_authenticate(user=officer.user)

        resp = api_client.get(reverse("challan-list"), {"overdue": "true"})
        assert [c["id"] for c in resp.data] == [old.pk]
        assert resp.data[0]["is_overdue"] is True
        assert Decimal(resp.data[0]["penalty_amount"]) == Decimal("1000.00")
