"""FastAPI dependencies shared by route modules."""

from fastapi import Request

from jsonspark.core.errors import StoreError
from jsonspark.core.repository_protocols import DocumentStore


def get_store(request: Request) -> DocumentStore:
    """The store built at startup (or injected by tests) on app.state."""
    store = getattr(request.app.state, "store", None)
    if store is None:
        raise StoreError("connect", "document store not initialized")
    return store
