"""PotatoQC application.

Run locally (after ``pip install -e .[serve]``) with:

    uvicorn potatoqc.main:app --app-dir backend
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from potatoqc.config import settings
from potatoqc.middleware.exceptions import register_exception_handlers
from potatoqc.routers import batches, health, quality
from potatoqc.services.batch_store import BatchStore
from potatoqc.storage import build_slot

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger("potatoqc")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the one store instance for this process and close its slot on exit."""
    slot = build_slot(settings)
    app.state.store = BatchStore(slot)
    logger.info("PotatoQC started (%s storage)", settings.storage_backend)
    yield
    close = getattr(slot, "close", None)
    if close is not None:
        close()
    logger.info("PotatoQC stopped")


app = FastAPI(
    title="PotatoQC",
    description="Potato batch intake and quality inspection records",
    version="0.1.0",
    lifespan=lifespan,
)

# ── Exception Handlers ───────────────────────────────────────
register_exception_handlers(app)

# ── Middleware ───────────────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins.split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ── Routers ──────────────────────────────────────────────────
app.include_router(health.router)
app.include_router(batches.router, prefix="/api/batches", tags=["batches"])
app.include_router(quality.router, prefix="/api/quality", tags=["quality"])
