"""Quality router — live deduction summary and metric reference data.

Endpoints:
    POST /api/quality/preview    Evaluate in-progress form metrics
    GET  /api/quality/metrics    Metric names, units and reference ranges
"""

from fastapi import APIRouter

from potatoqc.schemas.batch import QualityMetrics
from potatoqc.schemas.quality import MetricDefinition, QualityReport
from potatoqc.services.quality import METRIC_DEFINITIONS, evaluate

router = APIRouter()


@router.post("/preview", response_model=QualityReport)
def preview_quality(body: QualityMetrics):
    """Totals shown under the form while the user is still typing."""
    return evaluate(body)


@router.get("/metrics", response_model=list[MetricDefinition])
def list_metrics():
    return list(METRIC_DEFINITIONS)
