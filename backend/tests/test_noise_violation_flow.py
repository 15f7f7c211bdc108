"""
End-to-end scenario: a roadside noise reading travels through the
whole pipeline, from the calibrated device to the public status page.

    device reading ─► challan ─► FIR ─► court case ─► verdict / statement
                                                        │
                 accused: request OTP ─► verify ─► status snapshot
"""

from __future__ import annotations

import re
from datetime import date, datetime, timedelta, timezone as dt_timezone
from decimal import Decimal
from unittest import mock

import pytest
from django.core import mail
from django.urls import reverse
from django.utils import timezone
from rest_framework import status


@pytest.mark.django_db
def test_full_noise_violation_flow(
    api_client,
    officer,
    station_authority,
    court_authority,
    judge,
    device,
    cognizable_violation,
    accused_payload,
    vehicle_payload,
    django_capture_on_commit_callbacks,
):
    year = timezone.now().year

    # ── 1. Officer records a reading above the legal limit ─────────
    api_client.force_authenticate(user=officer.user)
    resp = api_client.post(
        reverse("emission-report-list"),
        {
            "device": device.pk,
            "sound_level_dba": "96.4",
            "test_datetime": (timezone.now() - timedelta(minutes=10)).isoformat(),
        },
        format="json",
    )
    assert resp.status_code == status.HTTP_201_CREATED, resp.data
    assert resp.data["is_violation"] is True
    report_id = resp.data["id"]

    resp = api_client.get(reverse("emission-report-verify", args=[report_id]))
    assert resp.data["is_authentic"] is True

    # ── 2. Officer issues the challan; the accused is e-mailed ─────
    with django_capture_on_commit_callbacks(execute=True):
        resp = api_client.post(
            reverse("challan-list"),
            {
                "violation": cognizable_violation.pk,
                "emission_report": report_id,
                "accused": accused_payload,
                "vehicle": vehicle_payload,
            },
            format="json",
        )
    assert resp.status_code == status.HTTP_201_CREATED, resp.data
    assert resp.data["status"] == "Unpaid"
    assert resp.data["plate_number"] == "LEA-1234"
    challan_id = resp.data["id"]

    # ── 3. Station authority escalates it to an FIR ───────────────
    api_client.force_authenticate(user=station_authority)
    with django_capture_on_commit_callbacks(execute=True):
        resp = api_client.post(reverse("fir-list"), {"challan": challan_id}, format="json")
    assert resp.status_code == status.HTTP_201_CREATED, resp.data
    assert resp.data["fir_no"] == f"FIR-TSB01-{year}-0001"
    fir_id = resp.data["id"]

    # ── 4. Court authority opens the case before the judge ────────
    api_client.force_authenticate(user=court_authority)
    with django_capture_on_commit_callbacks(execute=True):
        resp = api_client.post(reverse("case-list"), {"fir": fir_id, "judge": judge.pk}, format="json")
    assert resp.status_code == status.HTTP_201_CREATED, resp.data
    assert resp.data["case_no"] == f"CASE-HC-LHR-{year}-0001"
    case_id = resp.data["id"]

    # ── 5. The presiding judge records a statement and the verdict ─
    api_client.force_authenticate(user=judge.user)
    with django_capture_on_commit_callbacks(execute=True):
        resp = api_client.post(
            reverse("case-statement-list", kwargs={"case_pk": case_id}),
            {"statement_text": "Accused admits the exhaust was modified."},
            format="json",
        )
    assert resp.status_code == status.HTTP_201_CREATED, resp.data

    with django_capture_on_commit_callbacks(execute=True):
        resp = api_client.patch(
            reverse("case-detail", args=[case_id]),
            {"verdict": "Convicted and fined PKR 5000"},
            format="json",
        )
    assert resp.status_code == status.HTTP_200_OK, resp.data
    assert resp.data["case_status"] == "Convicted"

    subjects = [m.subject for m in mail.outbox]
    assert len(subjects) == 5
    assert all(m.to == [accused_payload["email"]] for m in mail.outbox)

    # ── 6. Dashboard reflects the pipeline ────────────────────────
    resp = api_client.get(reverse("core:dashboard-stats"))
    assert resp.data["total_violations"] == 1
    assert resp.data["total_firs"] == 1
    assert resp.data["active_cases"] == 0

    # ── 7. The accused checks their status publicly ───────────────
    api_client.force_authenticate(user=None)
    identity = {"vehicle_no": "LEA 1234", "cnic": "35202-1234567-1", "email": "ALI.KHAN@example.com"}
    resp = api_client.post("/api/public/status/request-otp/", identity, format="json")
    assert resp.status_code == status.HTTP_200_OK, resp.data
    otp = re.search(r"\b(\d{6})\b", mail.outbox[-1].body).group(1)

    resp = api_client.post("/api/public/status/verify-otp/", {**identity, "otp": otp}, format="json")
    assert resp.status_code == status.HTTP_200_OK, resp.data
    token = resp.data["access_token"]

    resp = api_client.get("/api/public/status/", HTTP_X_ACCESS_TOKEN=token)
    assert resp.status_code == status.HTTP_200_OK, resp.data
    assert resp.data["accused"]["full_name"] == "Ali Khan"
    assert resp.data["totals"]["total_challans"] == 1
    assert resp.data["totals"]["total_firs"] == 1
    assert resp.data["cases"][0]["case_status"] == "Convicted"
    assert len(resp.data["cases"][0]["statements"]) == 1


@pytest.mark.django_db
def test_reference_scenario_dates_and_numbers(officer, station_authority, court_authority, judge, device):
    """Fixed-clock run of the reference scenario through the service layer."""
    from challans.models import Violation
    from challans.services import ChallanService
    from cases.services import CaseService
    from evidence.services import EmissionReportService
    from firs.services import FirService

    horn = Violation.objects.create(
        violation_type="Excessive Horn", penalty_amount=Decimal("2000.00"), is_cognizable=True,
    )
    now = datetime(2025, 1, 10, 10, 5, tzinfo=dt_timezone.utc)

    with mock.patch("django.utils.timezone.now", return_value=now):
        report = EmissionReportService.create_report(officer.user, {
            "device": device.pk,
            "sound_level_dba": Decimal("97.5"),
            "test_datetime": datetime(2025, 1, 10, 10, 0, tzinfo=dt_timezone.utc),
        })
        challan = ChallanService.create_challan(officer.user, {
            "violation": horn.pk,
            "emission_report": report.pk,
            "accused": {"cnic": "12345-1234567-1", "full_name": "Bilal Ahmed"},
            "vehicle": {"plate_number": "ABC-123"},
        })
        fir = FirService.create_fir(station_authority, {"challan": challan.pk})
        case = CaseService.create_case(court_authority, {"fir": fir.pk, "judge": judge.pk})

    assert report.sound_level_dba == Decimal("97.50")
    assert challan.digital_signature == report.digital_signature
    assert challan.due_datetime.date() == date(2025, 2, 9)
    assert fir.fir_no == "FIR-TSB01-2025-0001"
    assert case.case_no == "CASE-HC-LHR-2025-0001"
    assert case.hearing_date.date() == date(2025, 2, 9)
    assert EmissionReportService.verify(report.pk).is_authentic is True
