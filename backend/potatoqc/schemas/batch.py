"""Pydantic schemas for potato batch records.

Wire and persisted field names are camelCase (``batchNumber``,
``sizeDefects``); Python attributes are snake_case.  Both spellings are
accepted on input.
"""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from potatoqc.schemas.quality import QualityReport
from potatoqc.schemas.validators import (
    Amount,
    MetricValue,
    RequiredText,
    StoredAmount,
)

CAMEL_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class QualityMetrics(BaseModel):
    """The ten inspection metrics, each an optional percentage (sugar in mg/dl)."""

    model_config = CAMEL_CONFIG

    # Informational, shown with reference ranges, never scored
    dry_matter: MetricValue = None
    sugar: MetricValue = None
    fry_defects: MetricValue = None

    # Defect metrics, summed into total defects
    soil: MetricValue = None
    greening: MetricValue = None
    disease: MetricValue = None
    peeling: MetricValue = None
    mechanical: MetricValue = None
    wilting: MetricValue = None
    size_defects: MetricValue = None


# ── Stored record ────────────────────────────────────────────

class Batch(QualityMetrics):
    """A batch as held in the storage slot.

    Lenient on numbers so that records written by older front ends (which
    stored raw form text) still load.
    """

    id: str
    created_at: datetime
    updated_at: datetime | None = None

    batch_number: str
    supplier: str
    arrival_date: date
    quantity: StoredAmount
    price: StoredAmount


# ── Create ───────────────────────────────────────────────────

class BatchCreate(QualityMetrics):
    """Payload of the "new batch" form. Required fields must be non-empty."""

    batch_number: RequiredText
    supplier: RequiredText
    arrival_date: date
    quantity: Amount
    price: Amount


# ── Update (partial) ─────────────────────────────────────────

REQUIRED_FIELDS = ("batch_number", "supplier", "arrival_date", "quantity", "price")


class BatchPatch(QualityMetrics):
    """Fields an edit may change.

    Only explicitly sent fields are merged.  ``id``, ``createdAt`` and
    ``updatedAt`` are not part of the patch and are rejected, as is any
    unknown field.  Required fields may be changed but not cleared.
    """

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="forbid"
    )

    batch_number: RequiredText | None = None
    supplier: RequiredText | None = None
    arrival_date: date | None = None
    quantity: Amount | None = None
    price: Amount | None = None

    @field_validator(*REQUIRED_FIELDS, mode="before")
    @classmethod
    def _required_not_cleared(cls, value):
        if value is None:
            raise ValueError("Required field cannot be cleared")
        return value

    def changes(self) -> dict:
        """Snake_case dict of the fields the caller actually sent."""
        return self.model_dump(exclude_unset=True)


# ── Views ────────────────────────────────────────────────────

class BatchSummary(BaseModel):
    """One row of the batch table."""

    model_config = CAMEL_CONFIG

    id: str
    batch_number: str
    supplier: str
    arrival_date: date
    quantity: float
    price: float
    quality: QualityReport


class BatchListResponse(BaseModel):
    items: list[BatchSummary]
    total: int
    search: str | None = None


class BatchDetail(Batch):
    """Full record plus its derived quality report (edit form / detail view)."""

    quality: QualityReport
