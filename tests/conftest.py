"""
Shared fixtures for the Inventory Console test-suite.

Every adapter runs against a real store except the document backend, which
talks to the small in-process fake below (same async call surface as the
pymongo ``AsyncDatabase`` methods the adapter uses).
"""
from __future__ import annotations

import copy
import os
import tempfile
from typing import Any, Dict, List, Optional

# logging_setup writes under INVENTORY_DATA_ROOT when the app module is imported
os.environ.setdefault("INVENTORY_DATA_ROOT", tempfile.mkdtemp(prefix="inventory-console-"))

import pytest
import pytest_asyncio
from bson import ObjectId

from inventory_console.adapters.document import DocumentCollection
from inventory_console.adapters.local import LocalCollection
from inventory_console.adapters.memory import MemoryCollection
from inventory_console.adapters.relational import RelationalCollection
from inventory_console.config_io import JsonSlotStore
from inventory_console.connection import (
    ConnectionManager, DocumentConnector, LocalConnector, MemoryConnector, RelationalConnector,
)
from inventory_console.database import Database
from inventory_console.models import (
    BackendKind, DocumentStoreConfig, LocalConfig, MemoryConfig, RelationalConfig,
)
from inventory_console.registry import build_registry

BACKENDS = ["memory", "local", "mongo", "postgres"]


# =========================================================================
# Fake async Mongo
# =========================================================================

class FakeInsertResult:
    def __init__(self, inserted_id: Any):
        self.inserted_id = inserted_id


class FakeUpdateResult:
    def __init__(self, matched_count: int):
        self.matched_count = matched_count
        self.modified_count = matched_count


class FakeDeleteResult:
    def __init__(self, deleted_count: int):
        self.deleted_count = deleted_count


class FakeCursor:
    def __init__(self, docs: List[Dict[str, Any]]):
        self._docs = docs

    async def to_list(self, length: Optional[int] = None) -> List[Dict[str, Any]]:
        return self._docs if length is None else self._docs[:length]


class FakeCollection:
    def __init__(self):
        self.docs: List[Dict[str, Any]] = []

    def _matching(self, flt: Dict[str, Any]) -> List[Dict[str, Any]]:
        return [d for d in self.docs if all(d.get(k) == v for k, v in (flt or {}).items())]

    def find(self, flt: Optional[Dict[str, Any]] = None) -> FakeCursor:
        return FakeCursor([copy.deepcopy(d) for d in self._matching(flt or {})])

    async def find_one(self, flt: Optional[Dict[str, Any]] = None) -> Optional[Dict[str, Any]]:
        found = self._matching(flt or {})
        return copy.deepcopy(found[0]) if found else None

    async def insert_one(self, doc: Dict[str, Any]) -> FakeInsertResult:
        stored = copy.deepcopy(doc)
        stored.setdefault("_id", ObjectId())
        self.docs.append(stored)
        return FakeInsertResult(stored["_id"])

    async def update_one(self, flt: Dict[str, Any], update: Dict[str, Any]) -> FakeUpdateResult:
        found = self._matching(flt)
        if not found:
            return FakeUpdateResult(0)
        found[0].update(copy.deepcopy(update["$set"]))
        return FakeUpdateResult(1)

    async def delete_one(self, flt: Dict[str, Any]) -> FakeDeleteResult:
        found = self._matching(flt)
        if found:
            self.docs.remove(found[0])
        return FakeDeleteResult(len(found[:1]))

    async def count_documents(self, flt: Dict[str, Any]) -> int:
        return len(self._matching(flt))


class FakeDatabase:
    def __init__(self):
        self.collections: Dict[str, FakeCollection] = {}

    def __getitem__(self, name: str) -> FakeCollection:
        return self.collections.setdefault(name, FakeCollection())


class FakeAdmin:
    def __init__(self, client: "FakeMongoClient"):
        self.client = client

    async def command(self, name: str) -> Dict[str, Any]:
        if not self.client.reachable:
            raise ConnectionError("server selection timed out")
        return {"ok": 1}


class FakeMongoClient:
    """Stands in for ``AsyncMongoClient(uri, **options)``."""

    reachable = True

    def __init__(self, uri: str, **options: Any):
        self.uri = uri
        self.options = options
        self.closed = False
        self.admin = FakeAdmin(self)
        self.databases: Dict[str, FakeDatabase] = {}

    def __getitem__(self, name: str) -> FakeDatabase:
        return self.databases.setdefault(name, FakeDatabase())

    async def close(self) -> None:
        self.closed = True


class UnreachableMongoClient(FakeMongoClient):
    reachable = False


# =========================================================================
# Single collections, one per backend
# =========================================================================

@pytest.fixture
def slot_store(tmp_path) -> JsonSlotStore:
    return JsonSlotStore(tmp_path / "slots")


@pytest_asyncio.fixture(params=BACKENDS)
async def make_collection(request, tmp_path):
    """Factory ``make_collection(name, **kwargs)`` for the parametrized backend."""
    kind = request.param
    memory: Dict[str, List[Dict[str, Any]]] = {}
    store = JsonSlotStore(tmp_path / "slots")
    mongo = FakeDatabase()
    db: Dict[str, Database] = {}

    async def make(name: str = "products", **kwargs: Any):
        if kind == "memory":
            return MemoryCollection(name, memory.setdefault(name, []), **kwargs)
        if kind == "local":
            return LocalCollection(name, store, **kwargs)
        if kind == "mongo":
            return DocumentCollection(name, mongo, timeout=5.0, **kwargs)
        if "db" not in db:
            db["db"] = Database(f"sqlite+aiosqlite:///{tmp_path / 'contract.db'}")
            await db["db"].init()
            await db["db"].create_all()
        return RelationalCollection(name, db["db"], timeout=5.0, **kwargs)

    make.kind = kind
    yield make
    if "db" in db:
        await db["db"].close()


@pytest_asyncio.fixture
async def products(make_collection):
    return await make_collection("products")


# =========================================================================
# Registry over a connected manager, one per backend
# =========================================================================

def sqlite_config(path) -> RelationalConfig:
    return RelationalConfig(
        database="console", user="test", password="test", url=f"sqlite+aiosqlite:///{path}",
    )


@pytest_asyncio.fixture(params=BACKENDS)
async def manager(request, tmp_path):
    kind = BackendKind(request.param)
    if kind is BackendKind.memory:
        mgr = ConnectionManager(kind, MemoryConnector())
        config: Any = MemoryConfig(seed=False)
    elif kind is BackendKind.local:
        mgr = ConnectionManager(kind, LocalConnector())
        config = LocalConfig(data_root=tmp_path / "slots")
    elif kind is BackendKind.mongo:
        mgr = ConnectionManager(kind, DocumentConnector(client_factory=FakeMongoClient))
        config = DocumentStoreConfig(uri="mongodb://fake", db_name="inventory_test")
    else:
        mgr = ConnectionManager(kind, RelationalConnector())
        config = sqlite_config(tmp_path / "registry.db")
    assert await mgr.connect(config)
    yield mgr
    await mgr.disconnect()


@pytest.fixture
def registry(manager):
    return build_registry(manager, timeout=5.0)


# =========================================================================
# Sample records
# =========================================================================

@pytest.fixture
def widget() -> Dict[str, Any]:
    return {"name": "Widget", "price": 9.99, "category": "Tools", "stock": 10}
