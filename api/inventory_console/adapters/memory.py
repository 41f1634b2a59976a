# inventory_console/adapters/memory.py
"""
In-memory backend: shared lists of records, one per collection.

Always available. Mutations hit the shared list directly; callers only ever
see deep copies, so a record they hold never changes under them.
"""
from __future__ import annotations
import copy
from typing import Any, Callable, Dict, List, Optional

from inventory_console.adapters.base import BaseCollection, Record, matches
from inventory_console.fixtures import seed_data
from inventory_console.identifiers import PUBLIC_KEY, prefixed_id


class MemoryStore:
    """Process-wide record lists keyed by collection name."""

    def __init__(self, data: Optional[Dict[str, List[Record]]] = None):
        self._data: Dict[str, List[Record]] = copy.deepcopy(data) if data is not None else {}

    @classmethod
    def seeded(cls) -> "MemoryStore":
        return cls(seed_data())

    def records(self, name: str) -> List[Record]:
        """The live list for ``name`` (created empty on first use)."""
        return self._data.setdefault(name, [])


class MemoryCollection(BaseCollection):
    backend = "memory"

    def __init__(
        self,
        name: str,
        records: List[Record],
        *,
        id_factory: Optional[Callable[[str], str]] = None,
        **kwargs: Any,
    ):
        super().__init__(name, **kwargs)
        self._records = records
        self._new_id = id_factory or prefixed_id

    def _index_of(self, record_id: str) -> int:
        for i, item in enumerate(self._records):
            if item.get(PUBLIC_KEY) == record_id:
                return i
        return -1

    async def _find(self, query: Record) -> List[Record]:
        return [copy.deepcopy(r) for r in self._records if matches(r, query)]

    async def _find_one(self, query: Record) -> Optional[Record]:
        for r in self._records:
            if matches(r, query):
                return copy.deepcopy(r)
        return None

    async def _find_by_id(self, record_id: str) -> Optional[Record]:
        i = self._index_of(record_id)
        return copy.deepcopy(self._records[i]) if i != -1 else None

    async def _count(self, query: Record) -> int:
        return sum(1 for r in self._records if matches(r, query))

    async def _insert(self, record: Record) -> Record:
        stored = copy.deepcopy(record)
        stored[PUBLIC_KEY] = self._new_id(self.name)
        self._records.append(stored)
        return copy.deepcopy(stored)

    async def _update(self, record_id: str, patch: Record) -> Optional[Record]:
        i = self._index_of(record_id)
        if i == -1:
            return None
        merged = self._check_merged(self._records[i], copy.deepcopy(patch))
        self._records[i] = merged
        return copy.deepcopy(merged)

    async def _delete(self, record_id: str) -> Optional[Record]:
        i = self._index_of(record_id)
        if i == -1:
            return None
        return copy.deepcopy(self._records.pop(i))
