"""
Document store protocol consumed by document models.
"""
from typing import Any, Dict, Mapping, Protocol, Sequence, runtime_checkable


@runtime_checkable
class DocumentStore(Protocol):
    """Protocol for document stores backing ``BaseModel``.

    Both operations raise ``StoreError`` subclasses on failure.
    """

    async def get(self, document_id: str) -> Sequence[Dict[str, Any]]:
        """Fetch a document by id.

        Returns:
            A sequence whose first element is the matching record, or an
            empty sequence when no document has that id
        """
        ...

    async def insert(self, document: Mapping[str, Any]) -> Any:
        """Insert or update a document.

        Returns:
            Store acknowledgment (for CouchDB ``{"ok": True, "id": ..., "rev": ...}``)
        """
        ...
