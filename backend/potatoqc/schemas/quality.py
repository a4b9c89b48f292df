"""Schemas for derived quality values and metric reference data."""

import enum

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class QualityClass(str, enum.Enum):
    GOOD = "good"
    MEDIUM = "medium"
    BAD = "bad"


class MetricKind(str, enum.Enum):
    DEFECT = "defect"
    INFORMATIONAL = "informational"


class QualityReport(BaseModel):
    """Derived values for one batch or in-progress form."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    total_defects: float
    price_deduction: float
    quality_class: QualityClass
    # Badge shown in the batch table
    label: str
    css_class: str


class MetricDefinition(BaseModel):
    """Static description of one inspection metric."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )

    field: str
    key: str
    name: str
    label: str
    unit: str
    kind: MetricKind
    preferred: str | None = None
    allowed: str | None = None
