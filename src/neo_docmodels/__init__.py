"""Neo-DocModels - document models with declarative validation for CouchDB.

This library provides a base class for persistence-backed domain objects:
attribute storage, declarative validation rules, unsafe (write-once)
attributes, value filters and save/load against a document store.
"""

# Initialize logging configuration on import
from .config.logging_config import setup_logging
setup_logging()

from .__version__ import __version__

from .config import (
    StoreSettings,
    get_store_settings,
    get_logger,
)

from .core.exceptions import (
    DocModelsError,
    ConfigurationError,
    RuleDeclarationError,
    StoreError,
    StoreConnectionError,
    StoreReadError,
    StoreWriteError,
    DocumentConflictError,
    create_error_response,
)

from .models import (
    BaseModel,
    ModelSchema,
    ModelState,
    SchemaProvider,
)

from .store import (
    DocumentStore,
    CouchDBDocumentStore,
    InMemoryDocumentStore,
    get_store,
    set_store,
    init_store,
    close_store,
)

__all__ = [
    "__version__",
    # Configuration
    "StoreSettings",
    "get_store_settings",
    "setup_logging",
    "get_logger",
    # Exceptions
    "DocModelsError",
    "ConfigurationError",
    "RuleDeclarationError",
    "StoreError",
    "StoreConnectionError",
    "StoreReadError",
    "StoreWriteError",
    "DocumentConflictError",
    "create_error_response",
    # Models
    "BaseModel",
    "ModelSchema",
    "ModelState",
    "SchemaProvider",
    # Stores
    "DocumentStore",
    "CouchDBDocumentStore",
    "InMemoryDocumentStore",
    "get_store",
    "set_store",
    "init_store",
    "close_store",
]
