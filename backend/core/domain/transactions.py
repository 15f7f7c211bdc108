"""
core.domain.transactions — Helpers for safe state transitions.

Provides utilities that wrap ``transaction.atomic`` and
``select_for_update`` into reusable patterns so that every app's
service layer follows the same concurrency-safe approach.

Usage::

    from core.domain.transactions import atomic_transition

    fir = atomic_transition(
        instance=fir,
        target_status=FirStatus.UNDER_INVESTIGATION,
        allowed_sources={FirStatus.FILED, FirStatus.UNDER_INVESTIGATION},
        extra_updates={"investigation_report": "..."},
    )

    # For a plain row lock inside an existing atomic block:
    from core.domain.transactions import lock_for_update

    case = lock_for_update(Case, case_id)
"""

from __future__ import annotations

from typing import Any, Iterable, TypeVar

from django.db import models, transaction

from core.domain.exceptions import InvalidTransition, NotFound

M = TypeVar("M", bound=models.Model)


def atomic_transition(
    *,
    instance: M,
    status_field: str = "status",
    target_status: str,
    allowed_sources: Iterable[str] | None = None,
    extra_updates: dict[str, Any] | None = None,
) -> M:
    """
    Atomically move a model instance to ``target_status``.

    Steps performed inside ``transaction.atomic()``:
        1. Re-fetch the row with ``select_for_update()``.
        2. If ``allowed_sources`` is given, verify the current status is
           among them; raise ``InvalidTransition`` otherwise.
        3. Apply ``target_status`` plus any ``extra_updates`` and save
           only the touched columns.

    Args:
        instance:        The model instance to transition.
        status_field:    Name of the status field.  Defaults to ``"status"``.
        target_status:   The desired new value.
        allowed_sources: Statuses from which the change is permitted.
                         ``None`` accepts any current value.
        extra_updates:   Other field values to persist in the same write.

    Returns:
        The caller's instance, refreshed from the database.

    Raises:
        NotFound:          If the row no longer exists.
        InvalidTransition: If the current status is not in ``allowed_sources``.
    """
    model_class = type(instance)
    allowed = set(allowed_sources) if allowed_sources is not None else None

    with transaction.atomic():
        locked = lock_for_update(model_class, instance.pk)
        current = getattr(locked, status_field)

        if allowed is not None and current not in allowed:
            raise InvalidTransition(
                current=str(current),
                target=str(target_status),
                reason=f"Allowed source states: {', '.join(sorted(str(s) for s in allowed))}.",
            )

        setattr(locked, status_field, target_status)
        update_fields = {status_field, "updated_at"}
        for field_name, value in (extra_updates or {}).items():
            setattr(locked, field_name, value)
            update_fields.add(field_name)

        locked.save(update_fields=sorted(update_fields))

    instance.refresh_from_db()
    return instance


def lock_for_update(model_class: type[M], pk: Any) -> M:
    """
    Acquire a row-level lock on the given model instance.

    Must be called inside an ``atomic()`` block.

    Raises:
        NotFound: If no row with that PK exists.
    """
    try:
        return model_class.objects.select_for_update().get(pk=pk)
    except model_class.DoesNotExist:
        raise NotFound(f"{model_class._meta.verbose_name.title()} with id {pk} does not exist.")
