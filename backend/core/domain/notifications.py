"""
core.domain.notifications — Best-effort e-mail notifications.

Centralises outgoing mail so every app uses one consistent entry-point
rather than calling ``send_mail`` directly.

Design decisions
----------------
* **After commit** — ``NotificationService.notify`` registers the send
  with ``transaction.on_commit`` so an e-mail only leaves once the write
  that triggered it is durable.  Outside a transaction it sends at once.
* **Best-effort** — delivery failures are logged and swallowed; the
  triggering write has already committed and is never rolled back.
* **Synchronous variant** — ``NotificationService.send_now`` returns the
  outcome to the caller.  The public-status OTP uses it because the
  e-mail *is* the operation.

Usage::

    from core.domain.notifications import NotificationService

    NotificationService.notify(
        event_type="fir_filed",
        recipient=accused.email,
        context={"name": accused.full_name, "fir_no": fir.fir_no, ...},
    )
"""

from __future__ import annotations

import logging
from typing import Any

from django.conf import settings
from django.core.mail import send_mail
from django.db import transaction

logger = logging.getLogger(__name__)

# ── Event-type → (subject template, body template) ──────────────────
# Templates use ``str.format`` with the ``context`` dict.
_EVENT_TEMPLATES: dict[str, tuple[str, str]] = {
    "challan_issued": (
        "Traffic challan #{challan_id} issued",
        "Dear {name},\n\nA challan has been issued for vehicle {plate} "
        "for '{violation}'. Penalty: {penalty}. Payment is due by {due_date}.\n\n"
        "Bank details: {bank_details}",
    ),
    "fir_filed": (
        "FIR {fir_no} filed",
        "Dear {name},\n\nFIR {fir_no} has been filed at {station} on "
        "{date_filed} in connection with challan #{challan_id}.",
    ),
    "case_created": (
        "Court case {case_no} opened",
        "Dear {name},\n\nCourt case {case_no} has been registered at {court} "
        "against FIR {fir_no}. The first hearing is scheduled for {hearing_date}.",
    ),
    "hearing_scheduled": (
        "Hearing scheduled for case {case_no}",
        "Dear {name},\n\nThe hearing for case {case_no} is scheduled for {hearing_date}.",
    ),
    "verdict_announced": (
        "Verdict announced in case {case_no}",
        "Dear {name},\n\nA verdict has been recorded in case {case_no}: "
        "{verdict}\nCase status: {status}.",
    ),
    "case_statement_added": (
        "New statement in case {case_no}",
        "Dear {name},\n\n{statement_by} added a statement to case {case_no}:\n\n{summary}",
    ),
    "public_status_otp": (
        "Your NoiseSentinel verification code",
        "Your verification code is {otp}. It expires in {minutes} minutes.\n"
        "If you did not request this code, ignore this message.",
    ),
}


class NotificationError(Exception):
    """Raised by ``send_now`` when the mail backend fails."""


class NotificationService:
    """
    Stateless helper for templated e-mail notifications.

    All methods are classmethods — no instance state is needed.
    """

    @classmethod
    def render(cls, event_type: str, context: dict[str, Any]) -> tuple[str, str]:
        try:
            subject, body = _EVENT_TEMPLATES[event_type]
        except KeyError:
            raise ValueError(f"Unknown notification event type: {event_type!r}")
        return subject.format(**context), body.format(**context)

    @classmethod
    def send_now(cls, *, event_type: str, recipient: str, context: dict[str, Any]) -> None:
        """
        Render and send immediately.

        Raises:
            NotificationError: if the backend raises while sending.
        """
        subject, body = cls.render(event_type, context)
        try:
            send_mail(
                subject,
                body,
                settings.DEFAULT_FROM_EMAIL,
                [recipient],
                fail_silently=False,
            )
        except Exception as exc:
            raise NotificationError(f"Failed to send '{event_type}' e-mail: {exc}") from exc
        logger.info("Sent [%s] e-mail to %s", event_type, recipient)

    @classmethod
    def notify(cls, *, event_type: str, recipient: str | None, context: dict[str, Any]) -> None:
        """
        Queue a best-effort e-mail to go out after the current transaction
        commits.  A missing recipient address is logged and skipped.
        """
        if not recipient:
            logger.info("Skipping [%s] e-mail: recipient has no address", event_type)
            return

        def _deliver() -> None:
            try:
                cls.send_now(event_type=event_type, recipient=recipient, context=context)
            except NotificationError:
                logger.exception("Best-effort [%s] e-mail to %s failed", event_type, recipient)

        transaction.on_commit(_deliver)
