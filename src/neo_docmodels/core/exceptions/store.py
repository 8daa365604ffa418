"""Document store exceptions for neo-docmodels."""

from typing import Optional

from .base import DocModelsError


class StoreError(DocModelsError):
    """Base class for document store errors."""
    pass


class StoreConnectionError(StoreError):
    """Raised when the document store cannot be reached."""

    def __init__(self, store_name: str, reason: str = ""):
        self.store_name = store_name
        self.reason = reason
        message = f"Document store '{store_name}' is unavailable"
        if reason:
            message += f": {reason}"
        super().__init__(message, details={"store": store_name, "reason": reason})


class StoreReadError(StoreError):
    """Raised when a document cannot be read from the store."""

    def __init__(self, document_id: str, reason: str = "", status_code: Optional[int] = None):
        self.document_id = document_id
        self.reason = reason
        self.status_code = status_code
        message = f"Failed to read document '{document_id}'"
        if reason:
            message += f": {reason}"
        super().__init__(
            message,
            details={"document_id": document_id, "reason": reason, "status_code": status_code},
        )


class StoreWriteError(StoreError):
    """Raised when a document cannot be written to the store."""

    def __init__(self, document_id: Optional[str], reason: str = "", status_code: Optional[int] = None):
        self.document_id = document_id
        self.reason = reason
        self.status_code = status_code
        message = f"Failed to write document '{document_id}'"
        if reason:
            message += f": {reason}"
        super().__init__(
            message,
            details={"document_id": document_id, "reason": reason, "status_code": status_code},
        )


class DocumentConflictError(StoreWriteError):
    """Raised when a write conflicts with the stored document revision."""

    def __init__(self, document_id: Optional[str]):
        super().__init__(document_id, "document update conflict", status_code=409)
