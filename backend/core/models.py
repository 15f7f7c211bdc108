"""
Core app models.

Provides abstract base models and the shared document-sequence counter
used by the numbering helpers in ``core.domain.numbering``.
"""

from django.db import models


class TimeStampedModel(models.Model):
    """
    Abstract base model that provides self-updating ``created_at`` and
    ``updated_at`` timestamp fields for every concrete child model.
    """

    created_at = models.DateTimeField(
        auto_now_add=True,
        verbose_name="Created At",
    )
    updated_at = models.DateTimeField(
        auto_now=True,
        verbose_name="Updated At",
    )

    class Meta:
        abstract = True


class SequenceScope(models.TextChoices):
    """Organisational unit a document number is scoped to."""

    FIR = "fir", "FIR (per police station)"
    CASE = "case", "Case (per court)"


class DocumentSequence(TimeStampedModel):
    """
    Per-scope, per-year counter row behind FIR and case numbering.

    One row exists for every ``(scope, scope_id, year)`` that has ever
    issued a number.  Allocation locks the row with
    ``select_for_update`` and increments ``last_value`` inside the same
    transaction that inserts the numbered document, so two concurrent
    requests for the same station/court can never receive the same
    sequence.  Values only ever grow; numbers are never recycled.
    """

    scope = models.CharField(
        max_length=20,
        choices=SequenceScope.choices,
        verbose_name="Scope",
    )
    scope_id = models.PositiveBigIntegerField(
        verbose_name="Scope Object ID",
        help_text="PK of the police station (FIR) or court (Case).",
    )
    year = models.PositiveSmallIntegerField(verbose_name="Year")
    last_value = models.PositiveIntegerField(
        default=0,
        verbose_name="Last Issued Sequence",
    )

    class Meta:
        verbose_name = "Document Sequence"
        verbose_name_plural = "Document Sequences"
        ordering = ["scope", "scope_id", "-year"]
        constraints = [
            models.UniqueConstraint(
                fields=["scope", "scope_id", "year"],
                name="unique_document_sequence_per_scope_year",
            ),
        ]

    def __str__(self):
        return f"{self.get_scope_display()} #{self.scope_id} {self.year}: {self.last_value}"
