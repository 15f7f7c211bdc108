"""Tests for ``core.domain.notifications``."""

from __future__ import annotations

from unittest import mock

import pytest
from django.core import mail
from django.db import transaction

from core.domain.notifications import NotificationError, NotificationService


@pytest.mark.django_db
class TestNotificationService:

    def test_render_unknown_event(self):
        with pytest.raises(ValueError):
            NotificationService.render("no_such_event", {})

    def test_send_now_delivers(self):
        NotificationService.send_now(
            event_type="public_status_otp",
            recipient="citizen@example.com",
            context={"otp": "123456", "minutes": 15},
        )
        assert len(mail.outbox) == 1
        assert mail.outbox[0].to == ["citizen@example.com"]
        assert "123456" in mail.outbox[0].body

    def test_send_now_wraps_backend_failure(self):
        with mock.patch("core.domain.notifications.send_mail", side_effect=OSError("smtp down")):
            with pytest.raises(NotificationError):
                NotificationService.send_now(
                    event_type="public_status_otp",
                    recipient="citizen@example.com",
                    context={"otp": "123456", "minutes": 15},
                )

    def test_notify_waits_for_commit(self, django_capture_on_commit_callbacks):
        with django_capture_on_commit_callbacks(execute=True) as callbacks:
            with transaction.atomic():
                NotificationService.notify(
                    event_type="hearing_scheduled",
                    recipient="ali@example.com",
                    context={"case_no": "CASE-HC-LHR-2025-0001", "name": "Ali", "hearing_date": "2025-02-10 10:00"},
                )
                assert mail.outbox == []
        assert len(callbacks) == 1
        assert mail.outbox[0].subject == "Hearing scheduled for case CASE-HC-LHR-2025-0001"

    def test_notify_failure_is_swallowed(self, django_capture_on_commit_callbacks):
        with mock.patch("core.domain.notifications.send_mail", side_effect=OSError("smtp down")):
            with django_capture_on_commit_callbacks(execute=True):
                NotificationService.notify(
                    event_type="hearing_scheduled",
                    recipient="ali@example.com",
                    context={"case_no": "X", "name": "Ali", "hearing_date": "-"},
                )
        assert mail.outbox == []

    def test_notify_skips_missing_recipient(self, django_capture_on_commit_callbacks):
        with django_capture_on_commit_callbacks(execute=True) as callbacks:
            NotificationService.notify(event_type="hearing_scheduled", recipient="", context={})
        assert callbacks == []
