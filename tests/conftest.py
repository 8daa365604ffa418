"""Pytest configuration and fixtures for neo-docmodels tests."""

import pytest
from unittest.mock import AsyncMock

from neo_docmodels.models import BaseModel, ModelSchema
from neo_docmodels.store import InMemoryDocumentStore, set_store


class Realty(BaseModel):
    """Realty listing used across tests."""

    schema = ModelSchema(
        attributes=("realty_id", "title", "price", "description", "rooms"),
        defaults={"price": 0, "rooms": 1},
        validation_rules=(
            (["title"], {"required": {}}),
            (["title"], {"length": {"min": 3, "max": 20}}),
            (["price"], {"numeric": {"min": 0, "max": 1000000}}),
            (["rooms"], {"numeric": {"allow_float": False}}),
        ),
        unsafe=("realty_id",),
        attribute_filters={"strip_tags": ["description"], "numeric": ["price"]},
    )


class Listing(BaseModel):
    """Minimal model with a required title."""

    schema = ModelSchema(
        attributes=("realty_id", "title"),
        validation_rules=((["title"], {"required": {}}),),
    )


@pytest.fixture
def realty_cls():
    """Realty model class."""
    return Realty


@pytest.fixture
def listing_cls():
    """Listing model class."""
    return Listing


@pytest.fixture(autouse=True)
def reset_global_store():
    """Keep the process-wide store isolated between tests."""
    set_store(None)
    yield
    set_store(None)


@pytest.fixture
def mock_store():
    """Mock document store for testing."""
    store = AsyncMock()
    store.get = AsyncMock(return_value=[])
    store.insert = AsyncMock(return_value={"ok": True, "id": "listing-7", "rev": "1-abc"})
    return store


@pytest.fixture
def memory_store():
    """In-memory document store."""
    return InMemoryDocumentStore()


@pytest.fixture
def realty(mock_store):
    """New realty model bound to the mock store."""
    return Realty({"realty_id": "7", "title": "House", "price": 1500}, store=mock_store)


@pytest.fixture
def stored_realty_record():
    """Realty document as returned by the store."""
    return {
        "_id": "realty-7",
        "_rev": "3-f00d",
        "realty_id": "7",
        "title": "Old house",
        "price": 900,
        "description": "Near the river",
        "rooms": 3,
    }
