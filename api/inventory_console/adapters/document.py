# inventory_console/adapters/document.py
"""
External document store backend (MongoDB through pymongo's async client).

The driver stores records under ``_id`` as an ``ObjectId``; outside this
module the record id is always the public string ``id``. Ids coming back in
are turned into ``ObjectId`` when they look like one and used verbatim
otherwise, so collections holding plain string ids still resolve.
"""
from __future__ import annotations
import logging
from typing import Any, List, Optional

from bson import ObjectId
from bson.errors import InvalidId

from inventory_console.adapters.base import BaseCollection, Record
from inventory_console.identifiers import NATIVE_KEY, from_native, native_query, to_native

logger = logging.getLogger(__name__)


def as_object_id(value: Any) -> Any:
    """``ObjectId`` for a 24-hex string, the value itself otherwise."""
    if isinstance(value, ObjectId):
        return value
    try:
        return ObjectId(value) if ObjectId.is_valid(value) else value
    except (InvalidId, TypeError):
        return value


class DocumentCollection(BaseCollection):
    backend = "mongo"

    def __init__(self, name: str, database: Any, **kwargs: Any):
        """``database`` is a connected ``AsyncDatabase`` (or anything indexable by name)."""
        super().__init__(name, **kwargs)
        self._coll = database[name]

    def _filter(self, query: Record) -> Record:
        return native_query(query, convert=as_object_id)

    def _by_id(self, record_id: str) -> Record:
        return {NATIVE_KEY: as_object_id(record_id)}

    # =========================================================================
    # Hooks
    # =========================================================================

    async def _find(self, query: Record) -> List[Record]:
        cursor = self._coll.find(self._filter(query))
        docs = await self._bounded(cursor.to_list(None))
        return [from_native(d) for d in docs]

    async def _find_one(self, query: Record) -> Optional[Record]:
        doc = await self._bounded(self._coll.find_one(self._filter(query)))
        return from_native(doc)

    async def _find_by_id(self, record_id: str) -> Optional[Record]:
        doc = await self._bounded(self._coll.find_one(self._by_id(record_id)))
        return from_native(doc)

    async def _count(self, query: Record) -> int:
        return await self._bounded(self._coll.count_documents(self._filter(query)))

    async def _insert(self, record: Record) -> Record:
        # no id: the driver assigns the ObjectId
        doc = to_native(record)
        res = await self._bounded(self._coll.insert_one(doc))
        stored = await self._bounded(self._coll.find_one({NATIVE_KEY: res.inserted_id}))
        if stored is None:
            stored = {**doc, NATIVE_KEY: res.inserted_id}
        return from_native(stored)

    async def _update(self, record_id: str, patch: Record) -> Optional[Record]:
        flt = self._by_id(record_id)
        if self.model is not None or not patch:
            current = await self._bounded(self._coll.find_one(flt))
            if current is None:
                return None
            if not patch:
                return from_native(current)
            self._check_merged(from_native(current), patch)
        res = await self._bounded(self._coll.update_one(flt, {"$set": patch}))
        if res.matched_count == 0:
            return None
        return from_native(await self._bounded(self._coll.find_one(flt)))

    async def _delete(self, record_id: str) -> Optional[Record]:
        flt = self._by_id(record_id)
        existing = await self._bounded(self._coll.find_one(flt))
        if existing is None:
            return None
        await self._bounded(self._coll.delete_one(flt))
        return from_native(existing)
