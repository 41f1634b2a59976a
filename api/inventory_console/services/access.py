# inventory_console/services/access.py
"""
Per-collection access wrapper for request handlers and scripts.

Tracks whether an operation is in flight and the last failure message.
Reads never raise (``[]`` / ``None`` / ``0`` on failure); writes record the
failure and raise it again.
"""
from __future__ import annotations
import logging
from typing import Any, List, Mapping, Optional

from inventory_console.adapters.base import Collection, Record
from inventory_console.identifiers import PUBLIC_KEY

logger = logging.getLogger(__name__)


class CollectionAccess:
    def __init__(self, collection: Collection):
        self.collection = collection
        self.is_loading = False
        self.error: Optional[str] = None

    @property
    def name(self) -> str:
        return self.collection.name

    async def _run(self, op: str, aw, fallback: Any, *, reraise: bool) -> Any:
        self.is_loading = True
        self.error = None
        try:
            result = await aw
        except Exception as exc:
            self.error = str(exc)
            if reraise:
                logger.error("%s: %s failed: %s", self.name, op, exc)
                raise
            logger.warning("%s: %s failed: %s", self.name, op, exc)
            return fallback
        finally:
            self.is_loading = False
        return result

    # ---------------------------------------------------------
    # Reads
    # ---------------------------------------------------------

    async def find_all(self) -> List[Record]:
        return await self._run("find_all", self.collection.find({}), [], reraise=False)

    async def find(self, query: Optional[Mapping[str, Any]] = None) -> List[Record]:
        return await self._run("find", self.collection.find(query), [], reraise=False)

    async def find_one(self, query: Optional[Mapping[str, Any]] = None) -> Optional[Record]:
        return await self._run("find_one", self.collection.find_one(query), None, reraise=False)

    async def find_by_id(self, record_id: str) -> Optional[Record]:
        return await self._run("find_by_id", self.collection.find_by_id(record_id), None, reraise=False)

    async def count(self, query: Optional[Mapping[str, Any]] = None) -> int:
        return await self._run("count", self.collection.count(query), 0, reraise=False)

    # ---------------------------------------------------------
    # Writes
    # ---------------------------------------------------------

    async def create(self, data: Mapping[str, Any]) -> Record:
        created = await self._run("create", self.collection.insert_one(data), None, reraise=True)
        logger.info("%s: created %s", self.name, created.get(PUBLIC_KEY))
        return created

    async def update(self, record_id: str, patch: Mapping[str, Any]) -> Optional[Record]:
        return await self._run(
            "update", self.collection.update_one({PUBLIC_KEY: record_id}, patch), None, reraise=True,
        )

    async def remove(self, record_id: str) -> Optional[Record]:
        return await self._run(
            "remove", self.collection.delete_one({PUBLIC_KEY: record_id}), None, reraise=True,
        )
