"""Health check endpoints."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from potatoqc.config import settings
from potatoqc.deps import get_store
from potatoqc.services.batch_store import BatchStore

router = APIRouter(tags=["health"])


@router.get("/health")
def health_check():
    """Lightweight liveness check (does not touch storage)."""
    return {
        "status": "ok",
        "service": "PotatoQC",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": settings.environment,
    }


@router.get("/health/ready")
def readiness_check(store: BatchStore = Depends(get_store)):
    """Readiness check: the storage slot must be readable."""
    checks = {"service": "ok", "storage": "unknown"}

    try:
        store.slot.load()
        checks["storage"] = "ok"
    except Exception as e:
        checks["storage"] = f"error: {str(e)[:100]}"
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "unavailable", "checks": checks},
        )

    return {"status": "ready", "checks": checks}
