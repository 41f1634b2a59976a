"""CollectionAccess: loading flag, error tracking, read leniency, write re-raise."""
from unittest.mock import AsyncMock, MagicMock

import pytest

from inventory_console.adapters.memory import MemoryCollection
from inventory_console.errors import ConnectionFailure, InsertFailure
from inventory_console.services.access import CollectionAccess


@pytest.fixture
def access():
    return CollectionAccess(MemoryCollection("products", []))


@pytest.fixture
def broken():
    coll = MagicMock()
    coll.name = "products"
    failure = ConnectionFailure("backend down", collection="products")
    for op in ("find", "find_one", "find_by_id", "count"):
        setattr(coll, op, AsyncMock(side_effect=failure))
    coll.insert_one = AsyncMock(side_effect=InsertFailure("rejected", collection="products"))
    coll.update_one = AsyncMock(side_effect=failure)
    coll.delete_one = AsyncMock(side_effect=failure)
    return CollectionAccess(coll)


class TestHappyPath:
    async def test_crud_round(self, access, widget):
        created = await access.create(widget)

        assert await access.find_all() == [created]
        assert await access.find({"name": "Widget"}) == [created]
        assert await access.find_one({"name": "Widget"}) == created
        assert await access.find_by_id(created["id"]) == created
        assert await access.count() == 1

        updated = await access.update(created["id"], {"stock": 2})
        assert updated["stock"] == 2

        assert await access.remove(created["id"]) == updated
        assert await access.count() == 0
        assert access.error is None
        assert access.is_loading is False

    async def test_loading_flag_is_set_while_running(self, widget):
        seen = []
        coll = MemoryCollection("products", [])
        access = CollectionAccess(coll)

        async def spy(query=None):
            seen.append(access.is_loading)
            return []

        coll.find = spy
        await access.find_all()

        assert seen == [True]
        assert access.is_loading is False


class TestFailures:
    async def test_reads_fall_back_and_record_error(self, broken):
        assert await broken.find_all() == []
        assert "backend down" in broken.error
        assert await broken.find_one({"a": 1}) is None
        assert await broken.find_by_id("x") is None
        assert await broken.count() == 0
        assert broken.is_loading is False

    async def test_writes_reraise_and_record_error(self, broken, widget):
        with pytest.raises(InsertFailure):
            await broken.create(widget)
        assert "rejected" in broken.error

        with pytest.raises(ConnectionFailure):
            await broken.update("x", {"stock": 1})
        with pytest.raises(ConnectionFailure):
            await broken.remove("x")
        assert broken.is_loading is False

    async def test_success_clears_previous_error(self, broken):
        await broken.find_all()
        assert broken.error
        broken.collection.find = AsyncMock(return_value=[])

        await broken.find_all()

        assert broken.error is None
