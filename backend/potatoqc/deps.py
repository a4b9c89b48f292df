"""FastAPI dependencies."""

from fastapi import Request

from potatoqc.services.batch_store import BatchStore


def get_store(request: Request) -> BatchStore:
    """The store instance created at startup (see ``main.lifespan``)."""
    return request.app.state.store
