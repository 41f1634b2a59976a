# inventory_console/adapters/base.py
"""
Collection contract shared by every storage backend.

Each backend implements the ``_find`` / ``_find_one`` / ``_find_by_id`` /
``_insert`` / ``_update`` / ``_delete`` / ``_count`` hooks; the public methods
here apply the common rules:

- query matching is equality on every key given, missing keys are wildcards
- the caller's ``id`` is never written (insert assigns one, update ignores it)
- ``find`` and ``count`` degrade to ``[]`` / ``0`` when the backend fails
- every other failure surfaces as one of the ``errors`` kinds
"""
from __future__ import annotations
import asyncio
import logging
from abc import ABC, abstractmethod
from typing import (
    Any, Awaitable, Dict, List, Mapping, Optional, Protocol, Type, TypeVar, runtime_checkable,
)

from pydantic import BaseModel, ValidationError

from inventory_console.errors import (
    StorageError, InsertFailure, UpdateFailure, DeleteFailure, ConnectionFailure,
)
from inventory_console.identifiers import NATIVE_KEY, PUBLIC_KEY

logger = logging.getLogger(__name__)

Record = Dict[str, Any]
Query = Mapping[str, Any]
T = TypeVar("T")

COLLECTION_NAMES = (
    "products",
    "customers",
    "orders",
    "orderItems",
    "payments",
    "warehouses",
    "expenses",
)


@runtime_checkable
class Collection(Protocol):
    """What the access layer and the registry rely on, whatever the backend."""

    name: str

    async def find(self, query: Optional[Query] = None, *, strict: bool = False) -> List[Record]: ...

    async def find_one(self, query: Optional[Query] = None) -> Optional[Record]: ...

    async def find_by_id(self, record_id: str) -> Optional[Record]: ...

    async def insert_one(self, data: Mapping[str, Any]) -> Record: ...

    async def update_one(self, filter: Query, patch: Mapping[str, Any]) -> Optional[Record]: ...

    async def delete_one(self, filter: Query) -> Optional[Record]: ...

    async def count(self, query: Optional[Query] = None) -> int: ...


def matches(record: Mapping[str, Any], query: Optional[Query]) -> bool:
    """Equality on every query key; a key the record lacks compares as None."""
    if not query:
        return True
    return all(record.get(k) == v for k, v in query.items())


class BaseCollection(ABC):
    """Common behaviour for the concrete adapters."""

    backend = "base"

    def __init__(
        self,
        name: str,
        *,
        model: Optional[Type[BaseModel]] = None,
        insert_model: Optional[Type[BaseModel]] = None,
        timeout: Optional[float] = None,
    ):
        self.name = name
        self.model = model
        self.insert_model = insert_model or model
        self.timeout = timeout

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name!r}>"

    # =========================================================================
    # Hooks
    # =========================================================================

    @abstractmethod
    async def _find(self, query: Record) -> List[Record]: ...

    async def _find_one(self, query: Record) -> Optional[Record]:
        found = await self._find(query)
        return found[0] if found else None

    async def _find_by_id(self, record_id: str) -> Optional[Record]:
        return await self._find_one({PUBLIC_KEY: record_id})

    @abstractmethod
    async def _insert(self, record: Record) -> Record: ...

    @abstractmethod
    async def _update(self, record_id: str, patch: Record) -> Optional[Record]: ...

    @abstractmethod
    async def _delete(self, record_id: str) -> Optional[Record]: ...

    async def _count(self, query: Record) -> int:
        return len(await self._find(query))

    # =========================================================================
    # Contract
    # =========================================================================

    async def find(self, query: Optional[Query] = None, *, strict: bool = False) -> List[Record]:
        """
        Every matching record. A backend failure yields ``[]`` unless ``strict``,
        in which case it raises ``ConnectionFailure``.
        """
        logger.debug("%s: find %s where %s", self.backend, self.name, query)
        if strict:
            return await self._read(self._find(dict(query or {})), "find")
        try:
            return await self._find(dict(query or {}))
        except Exception as exc:
            logger.warning("%s: find on %s failed, returning no records: %s",
                           self.backend, self.name, exc)
            return []

    async def find_one(self, query: Optional[Query] = None) -> Optional[Record]:
        logger.debug("%s: find_one %s where %s", self.backend, self.name, query)
        return await self._read(self._find_one(dict(query or {})), "find_one")

    async def find_by_id(self, record_id: str) -> Optional[Record]:
        logger.debug("%s: find_by_id %s/%s", self.backend, self.name, record_id)
        return await self._read(self._find_by_id(str(record_id)), "find_by_id")

    async def insert_one(self, data: Mapping[str, Any]) -> Record:
        record = strip_ids(data)
        self._validate(record, self.insert_model, InsertFailure)
        logger.debug("%s: insert into %s", self.backend, self.name)
        try:
            created = await self._insert(record)
        except StorageError:
            raise
        except Exception as exc:
            logger.error("%s: insert into %s failed: %s", self.backend, self.name, exc)
            raise InsertFailure("insert failed", collection=self.name, cause=exc) from exc
        logger.info("%s: inserted %s/%s", self.backend, self.name, created.get(PUBLIC_KEY))
        return created

    async def update_one(self, filter: Query, patch: Mapping[str, Any]) -> Optional[Record]:
        record_id = self._filter_id(filter, UpdateFailure)
        changes = strip_ids(patch)
        logger.debug("%s: update %s/%s with %s", self.backend, self.name, record_id, sorted(changes))
        try:
            updated = await self._update(record_id, changes)
        except StorageError:
            raise
        except Exception as exc:
            logger.error("%s: update of %s/%s failed: %s", self.backend, self.name, record_id, exc)
            raise UpdateFailure("update failed", collection=self.name, cause=exc) from exc
        if updated is None:
            logger.info("%s: no %s record %s to update", self.backend, self.name, record_id)
        return updated

    async def delete_one(self, filter: Query) -> Optional[Record]:
        record_id = self._filter_id(filter, DeleteFailure)
        logger.debug("%s: delete %s/%s", self.backend, self.name, record_id)
        try:
            deleted = await self._delete(record_id)
        except StorageError:
            raise
        except Exception as exc:
            logger.error("%s: delete of %s/%s failed: %s", self.backend, self.name, record_id, exc)
            raise DeleteFailure("delete failed", collection=self.name, cause=exc) from exc
        if deleted is None:
            logger.info("%s: no %s record %s to delete", self.backend, self.name, record_id)
        return deleted

    async def count(self, query: Optional[Query] = None) -> int:
        try:
            return await self._count(dict(query or {}))
        except Exception as exc:
            logger.warning("%s: count on %s failed, returning 0: %s", self.backend, self.name, exc)
            return 0

    # =========================================================================
    # Helpers
    # =========================================================================

    async def _read(self, aw: Awaitable[T], op: str) -> T:
        try:
            return await aw
        except StorageError:
            raise
        except Exception as exc:
            logger.error("%s: %s on %s failed: %s", self.backend, op, self.name, exc)
            raise ConnectionFailure(f"{op} failed", collection=self.name, cause=exc) from exc

    async def _bounded(self, aw: Awaitable[T]) -> T:
        """Await ``aw`` within the adapter timeout (no limit when unset)."""
        if self.timeout is None:
            return await aw
        return await asyncio.wait_for(aw, self.timeout)

    def _filter_id(self, filter: Query, failure: Type[StorageError]) -> str:
        record_id = (filter or {}).get(PUBLIC_KEY)
        if record_id is None:
            raise failure("filter must address a record by id", collection=self.name)
        return str(record_id)

    def _validate(
        self,
        record: Mapping[str, Any],
        model: Optional[Type[BaseModel]],
        failure: Type[StorageError],
    ) -> None:
        if model is None:
            return
        try:
            model.model_validate(dict(record))
        except ValidationError as exc:
            raise failure("record failed validation", collection=self.name, cause=exc) from exc

    def _check_merged(self, current: Mapping[str, Any], patch: Mapping[str, Any]) -> Record:
        """Shallow-merge ``patch`` into ``current`` and validate the result."""
        merged = {**current, **patch}
        self._validate(merged, self.model, UpdateFailure)
        return merged


def strip_ids(data: Mapping[str, Any]) -> Record:
    """Copy of ``data`` without the public or native id."""
    return {k: v for k, v in (data or {}).items() if k not in (PUBLIC_KEY, NATIVE_KEY)}
