# inventory_console/adapters/__init__.py
"""
Storage adapters for Inventory Console: one per backend, same contract.
"""
from inventory_console.adapters.base import COLLECTION_NAMES, BaseCollection, Collection
from inventory_console.adapters.memory import MemoryCollection, MemoryStore
from inventory_console.adapters.local import LocalCollection
from inventory_console.adapters.document import DocumentCollection
from inventory_console.adapters.relational import RelationalCollection

__all__ = [
    "COLLECTION_NAMES",
    "BaseCollection",
    "Collection",
    "MemoryCollection",
    "MemoryStore",
    "LocalCollection",
    "DocumentCollection",
    "RelationalCollection",
]
