"""
CouchDB document store using httpx.
"""
import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple
from urllib.parse import quote

import httpx

from ..config.settings import StoreSettings
from ..core.exceptions import (
    DocumentConflictError,
    StoreConnectionError,
    StoreReadError,
    StoreWriteError,
)

logger = logging.getLogger(__name__)


class CouchDBDocumentStore:
    """Document store backed by a single CouchDB database."""

    def __init__(
        self,
        base_url: str = "http://localhost:5984",
        database: str = "dom4",
        username: Optional[str] = None,
        password: Optional[str] = None,
        timeout: float = 10.0,
        verify_ssl: bool = True,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """Initialize CouchDB document store.

        Args:
            base_url: CouchDB server URL
            database: Database name
            username: Optional basic auth user
            password: Optional basic auth password
            timeout: Request timeout in seconds
            verify_ssl: Verify TLS certificates
            client: Pre-built client (tests inject one with a mock transport)
        """
        self.base_url = base_url.rstrip("/")
        self.database = database
        auth: Optional[Tuple[str, str]] = (username, password) if username and password else None

        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=self.base_url,
            auth=auth,
            timeout=timeout,
            verify=verify_ssl,
            headers={"Accept": "application/json"},
        )

    @classmethod
    def from_settings(cls, settings: StoreSettings) -> "CouchDBDocumentStore":
        """Create a store from ``StoreSettings``."""
        credentials = settings.credentials
        return cls(
            base_url=settings.couchdb_url,
            database=settings.couchdb_database,
            username=credentials[0] if credentials else None,
            password=credentials[1] if credentials else None,
            timeout=settings.request_timeout,
            verify_ssl=settings.verify_ssl,
        )

    @property
    def name(self) -> str:
        return f"{self.base_url}/{self.database}"

    def _document_path(self, document_id: str) -> str:
        return f"/{self.database}/{quote(document_id, safe='')}"

    async def get(self, document_id: str) -> List[Dict[str, Any]]:
        """Fetch a document; returns ``[]`` when it does not exist."""
        try:
            response = await self._client.get(self._document_path(document_id))
        except httpx.TimeoutException as e:
            raise StoreConnectionError(self.name, f"request timed out: {e}") from e
        except httpx.RequestError as e:
            raise StoreConnectionError(self.name, str(e)) from e

        if response.status_code == 404:
            logger.debug(f"Document {document_id} not found in {self.database}")
            return []

        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise StoreReadError(
                document_id,
                self._error_reason(e.response),
                status_code=e.response.status_code,
            ) from e

        try:
            document = response.json()
        except ValueError as e:
            raise StoreReadError(
                document_id,
                f"invalid JSON response: {e}",
                status_code=response.status_code,
            ) from e

        if not isinstance(document, dict):
            raise StoreReadError(
                document_id,
                "response is not a document",
                status_code=response.status_code,
            )

        return [document]

    async def insert(self, document: Mapping[str, Any]) -> Dict[str, Any]:
        """Insert a document.

        Documents carrying an ``_id`` are written with ``PUT`` so the id is
        kept; others are posted and receive a server-generated id.
        """
        document_id = document.get("_id")
        try:
            if document_id:
                response = await self._client.put(self._document_path(document_id), json=dict(document))
            else:
                response = await self._client.post(f"/{self.database}", json=dict(document))
        except httpx.TimeoutException as e:
            raise StoreConnectionError(self.name, f"request timed out: {e}") from e
        except httpx.RequestError as e:
            raise StoreConnectionError(self.name, str(e)) from e

        if response.status_code == 409:
            raise DocumentConflictError(document_id)

        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise StoreWriteError(
                document_id,
                self._error_reason(e.response),
                status_code=e.response.status_code,
            ) from e

        try:
            result = response.json()
        except ValueError as e:
            raise StoreWriteError(
                document_id,
                f"invalid JSON response: {e}",
                status_code=response.status_code,
            ) from e

        if not isinstance(result, dict):
            raise StoreWriteError(
                document_id,
                "response is not an acknowledgment",
                status_code=response.status_code,
            )

        logger.debug(f"Stored document {result.get('id')} at revision {result.get('rev')}")
        return result

    async def health_check(self) -> bool:
        """Check that the configured database is reachable."""
        try:
            response = await self._client.get(f"/{self.database}")
            return response.status_code == 200
        except httpx.HTTPError as e:
            logger.error(f"CouchDB health check failed: {e}")
            return False

    async def close(self) -> None:
        """Close the underlying HTTP client if this store created it."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "CouchDBDocumentStore":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    @staticmethod
    def _error_reason(response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return response.text or response.reason_phrase
        if isinstance(body, dict):
            return body.get("reason") or body.get("error") or response.reason_phrase
        return response.reason_phrase
