"""
core.domain — Shared domain utilities for cross-app service layers.

Modules
-------
exceptions         Domain-specific exceptions that map cleanly to HTTP responses.
exception_handler  DRF handler producing the uniform failure envelope.
access             Capability checks against the closed role set.
transactions       Helpers for ``transaction.atomic`` + ``select_for_update``.
numbering          Per-scope sequence allocation and document-number formats.
linkage            The EmissionReport → Challan → FIR → Case one-to-one gate.
notifications      Best-effort templated e-mail.

Usage from any app::

    from core.domain.exceptions import Conflict, NotFound
    from core.domain.access import require_permission
    from core.domain.numbering import allocate_sequence, fir_number
    from core.domain.linkage import ensure_challan_escalatable
    from core.domain.notifications import NotificationService
"""
