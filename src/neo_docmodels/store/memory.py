"""
In-memory document store with CouchDB-style revisions.
"""
import asyncio
import copy
import logging
from typing import Any, Dict, List, Mapping, Optional
from uuid import uuid4

from ..core.exceptions import DocumentConflictError

logger = logging.getLogger(__name__)


class InMemoryDocumentStore:
    """Dict-backed document store.

    Updates must carry the current ``_rev`` of the stored document, the same
    way CouchDB rejects stale writes.
    """

    def __init__(self, documents: Optional[Mapping[str, Mapping[str, Any]]] = None):
        self._documents: Dict[str, Dict[str, Any]] = {}
        self._lock = asyncio.Lock()
        for document_id, document in (documents or {}).items():
            stored = dict(document)
            stored["_id"] = document_id
            stored.setdefault("_rev", self._next_revision(None))
            self._documents[document_id] = stored

    @staticmethod
    def _next_revision(current: Optional[str] = None) -> str:
        generation = int(current.split("-", 1)[0]) + 1 if current else 1
        return f"{generation}-{uuid4().hex}"

    async def get(self, document_id: str) -> List[Dict[str, Any]]:
        document = self._documents.get(document_id)
        if document is None:
            logger.debug(f"Document {document_id} not found")
            return []
        return [copy.deepcopy(document)]

    async def insert(self, document: Mapping[str, Any]) -> Dict[str, Any]:
        async with self._lock:
            document_id = document.get("_id") or uuid4().hex
            existing = self._documents.get(document_id)

            if existing is not None and document.get("_rev") != existing["_rev"]:
                raise DocumentConflictError(document_id)
            if existing is None and document.get("_rev"):
                raise DocumentConflictError(document_id)

            revision = self._next_revision(existing["_rev"] if existing else None)
            stored = copy.deepcopy(dict(document))
            stored["_id"] = document_id
            stored["_rev"] = revision
            self._documents[document_id] = stored

            logger.debug(f"Stored document {document_id} at revision {revision}")
            return {"ok": True, "id": document_id, "rev": revision}

    async def health_check(self) -> bool:
        return True

    async def close(self) -> None:
        pass

    def __len__(self) -> int:
        return len(self._documents)

    def __contains__(self, document_id: str) -> bool:
        return document_id in self._documents
