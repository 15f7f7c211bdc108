"""
core.domain.exception_handler — DRF-compatible global exception handler.

Maps domain exceptions from ``core.domain.exceptions`` to DRF
``Response`` objects so that views don't need per-endpoint try/except
boilerplate, and rewrites DRF's own error payloads (validation,
authentication, throttling, ...) into the same failure envelope::

    {
        "success": false,
        "message": "Human-readable summary.",
        "errors":  ["field: detail", ...]
    }

Register in ``settings.py``::

    REST_FRAMEWORK = {
        ...
        'EXCEPTION_HANDLER': 'core.domain.exception_handler.domain_exception_handler',
    }
"""

from __future__ import annotations

import logging
from typing import Any

from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_default_handler

from core.domain.exceptions import (
    Conflict,
    DomainError,
    InvalidTransition,
    NotFound,
    PermissionDenied,
)

logger = logging.getLogger(__name__)

# Domain exception → HTTP status code
_STATUS_MAP: dict[type, int] = {
    PermissionDenied:  403,
    NotFound:          404,
    InvalidTransition: 409,
    Conflict:          409,
    DomainError:       400,  # catch-all base class last
}


def _flatten_errors(data: Any, prefix: str = "") -> list[str]:
    """Turn DRF's nested error structure into ``["field: message", ...]``."""
    if isinstance(data, dict):
        flat: list[str] = []
        for key, value in data.items():
            label = key if key not in ("detail", "non_field_errors") else ""
            nested_prefix = f"{prefix}.{label}" if prefix and label else (label or prefix)
            flat.extend(_flatten_errors(value, nested_prefix))
        return flat
    if isinstance(data, (list, tuple)):
        flat = []
        for item in data:
            flat.extend(_flatten_errors(item, prefix))
        return flat
    return [f"{prefix}: {data}" if prefix else str(data)]


def failure_envelope(message: str, errors: list[str] | None = None) -> dict[str, Any]:
    return {
        "success": False,
        "message": message,
        "errors": list(errors or []),
    }


def domain_exception_handler(exc: Exception, context: dict) -> Response | None:
    """
    DRF exception handler that also handles ``core.domain.exceptions``.

    The default DRF handler is called first.  If it produces a response,
    its payload is rewritten into the failure envelope.  Otherwise we
    check whether the exception is one of our domain exceptions.
    """
    response = drf_default_handler(exc, context)
    if response is not None:
        errors = _flatten_errors(response.data)
        detail = response.data.get("detail") if isinstance(response.data, dict) else None
        if isinstance(detail, list):
            detail = detail[0] if detail else None
        if detail is not None:
            message = str(detail)
        elif response.status_code == 400:
            message = "Validation failed."
        else:
            message = errors[0] if errors else "Request failed."
        response.data = failure_envelope(message, errors)
        return response

    # Most specific domain exception first
    for exc_class, status_code in _STATUS_MAP.items():
        if isinstance(exc, exc_class):
            logger.warning(
                "Domain exception [%s] in %s: %s",
                exc_class.__name__,
                context.get("view", "unknown"),
                exc,
            )
            return Response(
                failure_envelope(str(exc), exc.errors or [str(exc)]),
                status=status_code,
            )

    # Not a domain exception: let it propagate
    return None
