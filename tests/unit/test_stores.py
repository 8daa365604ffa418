"""Tests for the document store adapters."""

import json

import httpx
import pytest

from neo_docmodels.config.settings import StoreSettings
from neo_docmodels.core.exceptions import (
    DocumentConflictError,
    StoreConnectionError,
    StoreReadError,
    StoreWriteError,
)
from neo_docmodels.store import CouchDBDocumentStore, DocumentStore, InMemoryDocumentStore


class TestInMemoryDocumentStore:
    """Test the in-memory store."""

    @pytest.mark.asyncio
    async def test_get_missing(self, memory_store):
        assert await memory_store.get("realty-1") == []

    @pytest.mark.asyncio
    async def test_insert_then_get(self, memory_store):
        result = await memory_store.insert({"_id": "realty-1", "title": "House"})

        assert result["ok"] is True
        assert result["id"] == "realty-1"
        assert result["rev"].startswith("1-")

        records = await memory_store.get("realty-1")
        assert records[0]["title"] == "House"
        assert records[0]["_rev"] == result["rev"]

    @pytest.mark.asyncio
    async def test_insert_without_id_generates_one(self, memory_store):
        result = await memory_store.insert({"title": "House"})
        assert result["id"] in memory_store

    @pytest.mark.asyncio
    async def test_update_requires_current_revision(self, memory_store):
        first = await memory_store.insert({"_id": "realty-1", "title": "House"})

        with pytest.raises(DocumentConflictError):
            await memory_store.insert({"_id": "realty-1", "title": "Villa"})

        second = await memory_store.insert({"_id": "realty-1", "_rev": first["rev"], "title": "Villa"})
        assert second["rev"].startswith("2-")

    @pytest.mark.asyncio
    async def test_returned_records_are_copies(self, memory_store):
        await memory_store.insert({"_id": "realty-1", "tags": ["a"]})
        record = (await memory_store.get("realty-1"))[0]
        record["tags"].append("b")
        assert (await memory_store.get("realty-1"))[0]["tags"] == ["a"]

    @pytest.mark.asyncio
    async def test_seeded_documents(self):
        store = InMemoryDocumentStore({"realty-1": {"title": "House"}})
        records = await store.get("realty-1")
        assert records[0]["_id"] == "realty-1"
        assert len(store) == 1

    def test_implements_protocol(self, memory_store):
        assert isinstance(memory_store, DocumentStore)


def couchdb_store(handler) -> CouchDBDocumentStore:
    client = httpx.AsyncClient(base_url="http://couch:5984", transport=httpx.MockTransport(handler))
    return CouchDBDocumentStore(base_url="http://couch:5984", database="dom4", client=client)


class TestCouchDBDocumentStore:
    """Test the CouchDB store against a mocked HTTP transport."""

    @pytest.mark.asyncio
    async def test_get_document(self):
        def handler(request):
            assert request.method == "GET"
            assert request.url.path == "/dom4/realty-7"
            return httpx.Response(200, json={"_id": "realty-7", "_rev": "1-a", "title": "House"})

        records = await couchdb_store(handler).get("realty-7")

        assert records == [{"_id": "realty-7", "_rev": "1-a", "title": "House"}]

    @pytest.mark.asyncio
    async def test_get_missing_document(self):
        def handler(request):
            return httpx.Response(404, json={"error": "not_found", "reason": "missing"})

        assert await couchdb_store(handler).get("realty-404") == []

    @pytest.mark.asyncio
    async def test_get_server_error(self):
        def handler(request):
            return httpx.Response(500, json={"error": "internal", "reason": "disk full"})

        with pytest.raises(StoreReadError) as exc_info:
            await couchdb_store(handler).get("realty-7")

        assert exc_info.value.status_code == 500
        assert exc_info.value.reason == "disk full"

    @pytest.mark.asyncio
    async def test_get_transport_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(StoreConnectionError):
            await couchdb_store(handler).get("realty-7")

    @pytest.mark.asyncio
    async def test_get_non_json_response(self):
        def handler(request):
            return httpx.Response(200, text="<html>proxy</html>")

        with pytest.raises(StoreReadError) as exc_info:
            await couchdb_store(handler).get("realty-7")

        assert exc_info.value.status_code == 200

    @pytest.mark.asyncio
    async def test_get_non_document_response(self):
        def handler(request):
            return httpx.Response(200, json=["realty-7"])

        with pytest.raises(StoreReadError):
            await couchdb_store(handler).get("realty-7")

    @pytest.mark.asyncio
    async def test_redirect_loop(self):
        def handler(request):
            return httpx.Response(302, headers={"Location": "/dom4/realty-7"})

        client = httpx.AsyncClient(
            base_url="http://couch:5984",
            transport=httpx.MockTransport(handler),
            follow_redirects=True,
        )
        store = CouchDBDocumentStore(base_url="http://couch:5984", database="dom4", client=client)

        with pytest.raises(StoreConnectionError):
            await store.insert({"_id": "realty-7"})

    @pytest.mark.asyncio
    async def test_insert_non_json_acknowledgment(self):
        def handler(request):
            return httpx.Response(201, text="created")

        with pytest.raises(StoreWriteError) as exc_info:
            await couchdb_store(handler).insert({"_id": "realty-7"})

        assert exc_info.value.status_code == 201

    @pytest.mark.asyncio
    async def test_model_save_reports_bad_acknowledgment(self, listing_cls):
        def handler(request):
            return httpx.Response(201, text="created")

        listing = listing_cls({"realty_id": "1", "title": "House"}, store=couchdb_store(handler))

        assert await listing.save() is None
        assert listing.errors["store"].startswith("Failed to write document 'listing-1'")

    @pytest.mark.asyncio
    async def test_model_load_reports_bad_response(self, listing_cls):
        def handler(request):
            return httpx.Response(200, text="<html>proxy</html>")

        with pytest.raises(StoreReadError):
            await listing_cls(store=couchdb_store(handler)).find_by_id("listing-1")

    @pytest.mark.asyncio
    async def test_insert_with_id_uses_put(self):
        def handler(request):
            assert request.method == "PUT"
            assert request.url.path == "/dom4/realty-7"
            assert json.loads(request.content) == {"_id": "realty-7", "title": "House"}
            return httpx.Response(201, json={"ok": True, "id": "realty-7", "rev": "1-a"})

        result = await couchdb_store(handler).insert({"_id": "realty-7", "title": "House"})

        assert result == {"ok": True, "id": "realty-7", "rev": "1-a"}

    @pytest.mark.asyncio
    async def test_insert_without_id_uses_post(self):
        def handler(request):
            assert request.method == "POST"
            assert request.url.path == "/dom4"
            return httpx.Response(201, json={"ok": True, "id": "generated", "rev": "1-a"})

        result = await couchdb_store(handler).insert({"title": "House"})

        assert result["id"] == "generated"

    @pytest.mark.asyncio
    async def test_document_id_is_quoted(self):
        def handler(request):
            assert request.url.raw_path == b"/dom4/realty%2F7"
            return httpx.Response(200, json={"_id": "realty/7"})

        await couchdb_store(handler).get("realty/7")

    @pytest.mark.asyncio
    async def test_insert_conflict(self):
        def handler(request):
            return httpx.Response(409, json={"error": "conflict", "reason": "Document update conflict."})

        with pytest.raises(DocumentConflictError) as exc_info:
            await couchdb_store(handler).insert({"_id": "realty-7"})

        assert exc_info.value.status_code == 409

    @pytest.mark.asyncio
    async def test_insert_rejected(self):
        def handler(request):
            return httpx.Response(403, json={"error": "forbidden", "reason": "read only"})

        with pytest.raises(StoreWriteError) as exc_info:
            await couchdb_store(handler).insert({"_id": "realty-7"})

        assert exc_info.value.reason == "read only"

    @pytest.mark.asyncio
    async def test_insert_timeout(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        with pytest.raises(StoreConnectionError):
            await couchdb_store(handler).insert({"_id": "realty-7"})

    @pytest.mark.asyncio
    async def test_health_check(self):
        def handler(request):
            assert request.url.path == "/dom4"
            return httpx.Response(200, json={"db_name": "dom4"})

        assert await couchdb_store(handler).health_check() is True

    @pytest.mark.asyncio
    async def test_health_check_unreachable(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        assert await couchdb_store(handler).health_check() is False

    def test_from_settings(self):
        settings = StoreSettings(
            couchdb_url="http://couch.internal:5984/",
            couchdb_database="listings",
            couchdb_username="admin",
            couchdb_password="secret",
            request_timeout=3,
        )

        store = CouchDBDocumentStore.from_settings(settings)

        assert store.base_url == "http://couch.internal:5984"
        assert store.database == "listings"
        assert store.name == "http://couch.internal:5984/listings"

    @pytest.mark.asyncio
    async def test_injected_client_is_not_closed(self):
        client = httpx.AsyncClient(transport=httpx.MockTransport(lambda request: httpx.Response(200)))
        async with CouchDBDocumentStore(client=client):
            pass
        assert client.is_closed is False
        await client.aclose()
