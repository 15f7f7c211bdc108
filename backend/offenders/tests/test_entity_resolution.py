"""
Tests for ``EntityResolutionService``: natural-key get-or-create for
accused persons and vehicles.
"""

from __future__ import annotations

import pytest

from core.domain.exceptions import DomainError
from offenders.models import Accused, Vehicle
from offenders.services import EntityResolutionService


@pytest.mark.django_db
class TestResolveAccused:

    def test_creates_then_reuses(self, accused_payload):
        first, created = EntityResolutionService.resolve_accused(accused_payload)
        assert created
        assert first.cnic == "35202-1234567-1"

        second, created = EntityResolutionService.resolve_accused(
            {"cnic": "35202-1234567-1", "full_name": "Someone Else"}
        )
        assert not created
        assert second.pk == first.pk
        assert Accused.objects.count() == 1
        # Identity fields are never overwritten by a later challan.
        second.refresh_from_db()
        assert second.full_name == "Ali Khan"

    def test_contact_and_address_refreshed_last_write_wins(self, accused_payload):
        EntityResolutionService.resolve_accused(accused_payload)
        accused, _ = EntityResolutionService.resolve_accused(
            {"cnic": "3520212345671", "contact": "03219999999", "address": "New address"}
        )
        accused.refresh_from_db()
        assert accused.contact == "03219999999"
        assert accused.address == "New address"

    def test_blank_values_do_not_erase(self, accused_payload):
        EntityResolutionService.resolve_accused(accused_payload)
        accused, _ = EntityResolutionService.resolve_accused(
            {"cnic": "3520212345671", "contact": "", "address": ""}
        )
        accused.refresh_from_db()
        assert accused.contact == accused_payload["contact"]
        assert accused.address == accused_payload["address"]

    def test_missing_cnic(self):
        with pytest.raises(DomainError):
            EntityResolutionService.resolve_accused({"full_name": "No Id"})

    def test_new_accused_needs_name(self):
        with pytest.raises(DomainError):
            EntityResolutionService.resolve_accused({"cnic": "3520299999991"})


@pytest.mark.django_db
class TestResolveVehicle:

    def test_plate_normalised_and_reused(self, accused_payload):
        owner, _ = EntityResolutionService.resolve_accused(accused_payload)
        vehicle, created = EntityResolutionService.resolve_vehicle({"plate_number": " lea-1234 "}, owner=owner)
        assert created
        assert vehicle.plate_number == "LEA-1234"
        assert vehicle.owner == owner

        again, created = EntityResolutionService.resolve_vehicle({"plate_number": "LEA-1234"})
        assert not created
        assert again.pk == vehicle.pk
        assert Vehicle.objects.count() == 1

    def test_existing_owner_kept(self, accused_payload):
        owner, _ = EntityResolutionService.resolve_accused(accused_payload)
        other, _ = EntityResolutionService.resolve_accused({"cnic": "3740512345673", "full_name": "Bilal"})
        EntityResolutionService.resolve_vehicle({"plate_number": "RIK-55"}, owner=owner)

        vehicle, _ = EntityResolutionService.resolve_vehicle({"plate_number": "rik-55"}, owner=other)
        assert vehicle.owner == owner

    def test_ownerless_vehicle_gets_owner(self, accused_payload):
        Vehicle.objects.create(plate_number="ICT-7")
        owner, _ = EntityResolutionService.resolve_accused(accused_payload)
        vehicle, _ = EntityResolutionService.resolve_vehicle({"plate_number": "ict-7"}, owner=owner)
        assert vehicle.owner == owner

    def test_missing_plate(self):
        with pytest.raises(DomainError):
            EntityResolutionService.resolve_vehicle({"plate_number": "   "})
