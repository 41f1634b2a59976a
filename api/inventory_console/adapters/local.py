# inventory_console/adapters/local.py
"""
Local persisted backend: every collection lives in one JSON slot.

The slot is read once when the collection is built and rewritten after every
mutation. Records are kept under the native key ``_id``; the public ``id`` only
exists at the boundary (``to_native`` / ``from_native``).

A slot that cannot be read is moved aside as ``<slot>.json.bad`` before the
collection starts empty, so the first save never overwrites it.

If a write to the slot fails, the change stays applied in memory and a
``PersistenceFailure`` is raised; memory remains the source of truth for the
rest of the process.
"""
from __future__ import annotations
import copy
import json
import logging
from typing import Any, Callable, List, Optional

from inventory_console.adapters.base import BaseCollection, Record, matches
from inventory_console.config_io import JsonSlotStore
from inventory_console.errors import PersistenceFailure
from inventory_console.identifiers import NATIVE_KEY, from_native, native_query, timestamp_id, to_native

logger = logging.getLogger(__name__)


class LocalCollection(BaseCollection):
    backend = "local"

    def __init__(
        self,
        name: str,
        store: JsonSlotStore,
        *,
        prefix: str = "inventory_",
        id_factory: Optional[Callable[[], str]] = None,
        **kwargs: Any,
    ):
        super().__init__(name, **kwargs)
        self.store = store
        self.slot = f"{prefix}{name}"
        self._new_id = id_factory or timestamp_id
        self._storage: List[Record] = self._load()

    # =========================================================================
    # Slot I/O
    # =========================================================================

    def _load(self) -> List[Record]:
        try:
            data = self.store.load(self.slot)
        except (OSError, ValueError) as exc:
            try:
                moved = self.store.quarantine(self.slot)
            except OSError as move_exc:
                raise PersistenceFailure(
                    f"unreadable slot {self.slot} could not be moved aside",
                    collection=self.name, cause=move_exc,
                ) from move_exc
            logger.error("local: could not load slot %s (%s), moved to %s, starting empty",
                         self.slot, exc, moved)
            return []
        return data or []

    def _save(self, result: Optional[Record]) -> None:
        try:
            self.store.save(self.slot, self._storage)
        except (OSError, TypeError, ValueError) as exc:
            logger.error("local: could not save slot %s: %s", self.slot, exc)
            raise PersistenceFailure(
                "could not persist collection", collection=self.name, cause=exc, record=result,
            ) from exc

    def _ensure_serializable(self, doc: Record) -> None:
        """Reject values JSON cannot hold before they reach the in-memory copy."""
        try:
            json.dumps(doc)
        except (TypeError, ValueError) as exc:
            raise PersistenceFailure(
                "record is not serializable", collection=self.name, cause=exc,
            ) from exc

    def _index_of(self, record_id: str) -> int:
        for i, item in enumerate(self._storage):
            if str(item.get(NATIVE_KEY)) == record_id:
                return i
        return -1

    # =========================================================================
    # Hooks
    # =========================================================================

    async def _find(self, query: Record) -> List[Record]:
        q = native_query(query)
        return [from_native(copy.deepcopy(doc)) for doc in self._storage if matches(doc, q)]

    async def _find_by_id(self, record_id: str) -> Optional[Record]:
        i = self._index_of(record_id)
        return from_native(copy.deepcopy(self._storage[i])) if i != -1 else None

    async def _insert(self, record: Record) -> Record:
        doc = to_native(copy.deepcopy(record), new_id=self._new_id)
        self._ensure_serializable(doc)
        self._storage.append(doc)
        result = from_native(copy.deepcopy(doc))
        self._save(result)
        return result

    async def _update(self, record_id: str, patch: Record) -> Optional[Record]:
        i = self._index_of(record_id)
        if i == -1:
            return None
        # the public id in the merged record comes from the stored document, never the patch
        merged = self._check_merged(from_native(self._storage[i]), copy.deepcopy(patch))
        doc = to_native(merged)
        self._ensure_serializable(doc)
        self._storage[i] = doc
        result = from_native(copy.deepcopy(doc))
        self._save(result)
        return result

    async def _delete(self, record_id: str) -> Optional[Record]:
        i = self._index_of(record_id)
        if i == -1:
            return None
        result = from_native(self._storage.pop(i))
        self._save(result)
        return result

    def reload(self) -> None:
        """Drop the in-memory copy and read the slot again."""
        self._storage = self._load()
