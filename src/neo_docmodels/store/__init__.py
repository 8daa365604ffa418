"""Document stores for neo-docmodels."""

from .protocols import DocumentStore
from .couchdb import CouchDBDocumentStore
from .memory import InMemoryDocumentStore
from .connection import (
    create_store,
    get_store,
    set_store,
    init_store,
    close_store,
)

__all__ = [
    "DocumentStore",
    "CouchDBDocumentStore",
    "InMemoryDocumentStore",
    "create_store",
    "get_store",
    "set_store",
    "init_store",
    "close_store",
]
