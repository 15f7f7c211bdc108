"""
core.domain.exceptions — Domain-specific exception hierarchy.

These exceptions represent business-rule violations inside service
layers.  They are deliberately **not** DRF exceptions so that the domain
layer stays framework-agnostic.  ``core.domain.exception_handler`` maps
them to HTTP responses carrying the uniform failure envelope::

    {"success": false, "message": "...", "errors": ["..."]}

Mapping cheatsheet
------------------
┌─────────────────────┬──────────────────────────────────────────┬──────┐
│ Domain Exception    │ Typical cause                            │ Code │
├─────────────────────┼──────────────────────────────────────────┼──────┤
│ DomainError         │ invalid input (future test date, ...)    │ 400  │
│ PermissionDenied    │ role lacks the capability                │ 403  │
│ NotFound            │ referenced entity does not exist         │ 404  │
│ Conflict            │ linkage gate denied / duplicate key      │ 409  │
│ InvalidTransition   │ status change not allowed from current   │ 409  │
└─────────────────────┴──────────────────────────────────────────┴──────┘

Usage inside a service::

    from core.domain.exceptions import Conflict

    if Challan.objects.filter(emission_report_id=report_id).exists():
        raise Conflict(f"Emission report {report_id} is already linked to a challan.")
"""

from __future__ import annotations


class DomainError(Exception):
    """
    Base class for all domain / business-rule errors.

    ``errors`` carries optional per-item details that the exception
    handler copies into the response envelope.
    """

    def __init__(
        self,
        message: str = "A business rule was violated.",
        errors: list[str] | None = None,
    ) -> None:
        self.message = message
        self.errors = list(errors or [])
        super().__init__(self.message)


class PermissionDenied(DomainError):
    """
    The authenticated user's role does not grant the capability required
    for this operation.

    Maps to HTTP 403.
    """

    def __init__(self, message: str = "You do not have permission to perform this action.") -> None:
        super().__init__(message)


class NotFound(DomainError):
    """
    A referenced resource (device, violation, challan, FIR, judge, ...)
    does not exist.

    Maps to HTTP 404.
    """

    def __init__(self, message: str = "The requested resource was not found.") -> None:
        super().__init__(message)


class Conflict(DomainError):
    """
    The operation conflicts with the current state of the data.

    Typical usage: a linkage-gate denial (report/challan/FIR already
    linked), a duplicate natural key, or a duplicate device reading.
    Maps to HTTP 409.
    """

    def __init__(self, message: str = "The operation conflicts with the current state.") -> None:
        super().__init__(message)


class InvalidTransition(Conflict):
    """
    A status change that is not allowed from the current status.

    Inherits from ``Conflict`` because an invalid transition IS a conflict
    with the resource's current state.  Maps to HTTP 409.

    Example::

        raise InvalidTransition(
            current="closed",
            target="under_investigation",
            reason="Closed FIRs cannot be reopened.",
        )
    """

    def __init__(
        self,
        message: str | None = None,
        *,
        current: str | None = None,
        target: str | None = None,
        reason: str | None = None,
    ) -> None:
        if message is None:
            parts = ["Invalid status transition"]
            if current and target:
                parts.append(f"from '{current}' to '{target}'")
            message = " ".join(parts) + "."
            if reason:
                message = f"{message} {reason}"
        super().__init__(message)
        self.current = current
        self.target = target
        self.reason = reason
