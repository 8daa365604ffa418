"""
Process-wide document store handle.

The store is opened once at process start with ``init_store`` and shared by
every model instance that is not given an explicit store.
"""
import logging
from typing import Optional

from ..config.settings import StoreSettings, get_store_settings
from ..core.exceptions import StoreConnectionError
from .couchdb import CouchDBDocumentStore
from .memory import InMemoryDocumentStore
from .protocols import DocumentStore

logger = logging.getLogger(__name__)

_store: Optional[DocumentStore] = None


def create_store(settings: Optional[StoreSettings] = None) -> DocumentStore:
    """Create a document store for the configured backend."""
    settings = settings or get_store_settings()
    if settings.store_backend == "memory":
        return InMemoryDocumentStore()
    return CouchDBDocumentStore.from_settings(settings)


def get_store() -> DocumentStore:
    """Get the global document store, creating it from settings if needed."""
    global _store
    if _store is None:
        _store = create_store()
    return _store


def set_store(store: Optional[DocumentStore]) -> None:
    """Replace the global document store."""
    global _store
    _store = store


async def init_store(settings: Optional[StoreSettings] = None) -> DocumentStore:
    """Initialize the global document store and check that it is reachable.

    Raises:
        StoreConnectionError: If the store fails its health check
    """
    global _store
    settings = settings or get_store_settings()
    logger.info(f"Initializing {settings.store_backend} document store...")

    store = create_store(settings)
    if not await store.health_check():
        await store.close()
        raise StoreConnectionError(settings.database_url, "health check failed")

    _store = store
    logger.info("Document store initialized")
    return store


async def close_store() -> None:
    """Close the global document store."""
    global _store
    if _store is not None:
        close = getattr(_store, "close", None)
        if close is not None:
            await close()
        _store = None
        logger.info("Document store closed")
