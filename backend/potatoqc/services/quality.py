"""Quality evaluation for potato batches.

All functions are pure and accept either a ``Batch``/``QualityMetrics``
model, or raw form data (a mapping keyed by camelCase or snake_case metric
names).  Missing and non-numeric metric values count as 0.

Only the seven defect metrics are scored.  Dry matter, sugar and fry defects
are informational: they carry reference ranges for display but never affect
the total, the deduction, or the class.

Thresholds on total defects:
    total > 20        → bad
    10 < total ≤ 20   → medium
    total ≤ 10        → good
"""

import math
from collections.abc import Mapping
from typing import Any

from potatoqc.schemas.quality import (
    MetricDefinition,
    MetricKind,
    QualityClass,
    QualityReport,
)
from potatoqc.schemas.validators import parse_number

MEDIUM_THRESHOLD = 10.0
BAD_THRESHOLD = 20.0
MAX_DEDUCTION = 100.0

METRIC_DEFINITIONS: tuple[MetricDefinition, ...] = (
    MetricDefinition(
        field="dry_matter", key="dryMatter", name="Dry matter (firmness)",
        label="المادة الجافة (الصلابة)", unit="%",
        kind=MetricKind.INFORMATIONAL, preferred="> 19%",
    ),
    MetricDefinition(
        field="sugar", key="sugar", name="Sugar",
        label="السكر", unit="mg/dl",
        kind=MetricKind.INFORMATIONAL, allowed="≤ 10",
    ),
    MetricDefinition(
        field="fry_defects", key="fryDefects", name="Chip defects after frying",
        label="عيوب الشريحة بعد القلي", unit="%",
        kind=MetricKind.INFORMATIONAL, allowed="< 15%",
    ),
    MetricDefinition(
        field="soil", key="soil", name="Soil",
        label="الاتربة", unit="%", kind=MetricKind.DEFECT,
    ),
    MetricDefinition(
        field="greening", key="greening", name="Greening",
        label="الاخضرار", unit="%", kind=MetricKind.DEFECT,
    ),
    MetricDefinition(
        field="disease", key="disease", name="Disease",
        label="الاصابات المرضية", unit="%", kind=MetricKind.DEFECT,
    ),
    MetricDefinition(
        field="peeling", key="peeling", name="Peeling",
        label="التقشير", unit="%", kind=MetricKind.DEFECT,
    ),
    MetricDefinition(
        field="mechanical", key="mechanical", name="Mechanical damage",
        label="الاصابات الميكانيكية", unit="%", kind=MetricKind.DEFECT,
    ),
    MetricDefinition(
        field="wilting", key="wilting", name="Wilting",
        label="الذبول", unit="%", kind=MetricKind.DEFECT,
    ),
    MetricDefinition(
        field="size_defects", key="sizeDefects", name="Size defects",
        label="عيوب الاحجام", unit="%", kind=MetricKind.DEFECT,
    ),
)

DEFECT_METRICS = tuple(m for m in METRIC_DEFINITIONS if m.kind == MetricKind.DEFECT)
INFORMATIONAL_METRICS = tuple(
    m for m in METRIC_DEFINITIONS if m.kind == MetricKind.INFORMATIONAL
)

# Badge text and CSS class per class, as rendered in the batch table
QUALITY_BADGES = {
    QualityClass.GOOD: ("جيد", "status-good"),
    QualityClass.MEDIUM: ("متوسط", "status-medium"),
    QualityClass.BAD: ("رديء", "status-bad"),
}


def _metric_value(source: Any, metric: MetricDefinition) -> float:
    if isinstance(source, Mapping):
        raw = source.get(metric.key, source.get(metric.field))
    else:
        raw = getattr(source, metric.field, None)
    value = parse_number(raw)
    return 0.0 if value is None else value


def total_defects(source: Any) -> float:
    """Sum of the seven defect metrics. Not clamped."""
    return math.fsum(_metric_value(source, m) for m in DEFECT_METRICS)


def price_deduction(source: Any) -> float:
    """Percentage deducted from the price: total defects capped at 100."""
    return min(total_defects(source), MAX_DEDUCTION)


def classify(total: float) -> QualityClass:
    if total > BAD_THRESHOLD:
        return QualityClass.BAD
    if total > MEDIUM_THRESHOLD:
        return QualityClass.MEDIUM
    return QualityClass.GOOD


def quality_class(source: Any) -> QualityClass:
    return classify(total_defects(source))


def evaluate(source: Any) -> QualityReport:
    """Total, deduction, class and badge for one batch or form."""
    total = total_defects(source)
    grade = classify(total)
    label, css_class = QUALITY_BADGES[grade]
    return QualityReport(
        total_defects=total,
        price_deduction=min(total, MAX_DEDUCTION),
        quality_class=grade,
        label=label,
        css_class=css_class,
    )
