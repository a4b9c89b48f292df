"""Batch router — record list, form submit, edit and delete.

Endpoints:
    GET    /api/batches/              List batches (optional ?search=)
    POST   /api/batches/              Create batch from the entry form
    GET    /api/batches/{batch_id}    Single batch with quality report
    PATCH  /api/batches/{batch_id}    Update batch fields
    DELETE /api/batches/{batch_id}    Delete batch (requires ?confirm=true)
"""

from fastapi import APIRouter, Depends, Query, Response, status

from potatoqc.deps import get_store
from potatoqc.middleware.exceptions import (
    ConfirmationRequiredError,
    ResourceNotFoundError,
)
from potatoqc.schemas.batch import (
    Batch,
    BatchCreate,
    BatchDetail,
    BatchListResponse,
    BatchPatch,
    BatchSummary,
)
from potatoqc.services.batch_store import BatchStore
from potatoqc.services.quality import evaluate

router = APIRouter()


def _summary(batch: Batch) -> BatchSummary:
    return BatchSummary(
        id=batch.id,
        batch_number=batch.batch_number,
        supplier=batch.supplier,
        arrival_date=batch.arrival_date,
        quantity=batch.quantity,
        price=batch.price,
        quality=evaluate(batch),
    )


# ── List / search ────────────────────────────────────────────

@router.get("/", response_model=BatchListResponse)
def list_batches(
    search: str | None = Query(None),
    store: BatchStore = Depends(get_store),
):
    batches = store.search(search)
    return BatchListResponse(
        items=[_summary(b) for b in batches],
        total=len(batches),
        search=search or None,
    )


# ── Create ───────────────────────────────────────────────────

@router.post("/", response_model=Batch, status_code=status.HTTP_201_CREATED)
def create_batch(
    body: BatchCreate,
    store: BatchStore = Depends(get_store),
):
    return store.add(body)


# ── Single batch detail ──────────────────────────────────────

@router.get("/{batch_id}", response_model=BatchDetail)
def get_batch(
    batch_id: str,
    store: BatchStore = Depends(get_store),
):
    batch = store.get(batch_id)
    if batch is None:
        raise ResourceNotFoundError("Batch", batch_id)
    return BatchDetail(**batch.model_dump(), quality=evaluate(batch))


# ── Update ───────────────────────────────────────────────────

@router.patch("/{batch_id}", response_model=Batch)
def update_batch(
    batch_id: str,
    body: BatchPatch,
    store: BatchStore = Depends(get_store),
):
    batch = store.update(batch_id, body)
    if batch is None:
        raise ResourceNotFoundError("Batch", batch_id)
    return batch


# ── Delete ───────────────────────────────────────────────────

@router.delete("/{batch_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_batch(
    batch_id: str,
    confirm: bool = Query(False),
    store: BatchStore = Depends(get_store),
):
    """Delete a batch.  Unknown ids succeed silently."""
    if not confirm:
        raise ConfirmationRequiredError("Deleting a batch requires confirm=true")
    store.remove(batch_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
