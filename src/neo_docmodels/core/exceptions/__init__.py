"""Exceptions module for neo-docmodels.

This module provides the complete exception hierarchy for neo-docmodels,
split into model declaration errors and document store errors.
"""

from .base import (
    DocModelsError,
    create_error_response,
)

from .model import (
    ConfigurationError,
    RuleDeclarationError,
)

from .store import (
    StoreError,
    StoreConnectionError,
    StoreReadError,
    StoreWriteError,
    DocumentConflictError,
)

__all__ = [
    # Base
    "DocModelsError",
    "create_error_response",
    # Model declaration
    "ConfigurationError",
    "RuleDeclarationError",
    # Document store
    "StoreError",
    "StoreConnectionError",
    "StoreReadError",
    "StoreWriteError",
    "DocumentConflictError",
]
