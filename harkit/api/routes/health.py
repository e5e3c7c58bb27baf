"""
Health check API route.
"""
from fastapi import APIRouter, Request

from harkit.core.store import MemoryStore

router = APIRouter()


@router.get("/health")
def health(request: Request):
    """
    Health check endpoint.

    Reports whether the store is durable or fell back to memory.
    """
    store = getattr(request.app.state, "store", None)
    return {
        "status": "ready",
        "store": "memory" if isinstance(store, MemoryStore) else "sqlite",
    }
