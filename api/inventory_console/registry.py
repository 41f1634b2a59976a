# inventory_console/registry.py
"""
Collection registry: the seven named collections of one backend.

``build_registry`` takes a connected ``ConnectionManager`` and wires an adapter
per collection name onto its resource. The registry also carries the
operations that span several collections (order details, order creation,
order removal with its items).
"""
from __future__ import annotations
import asyncio
import logging
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple, Type

from fastapi import Request
from pydantic import BaseModel

from inventory_console.adapters.base import COLLECTION_NAMES, BaseCollection, Record
from inventory_console.adapters.document import DocumentCollection
from inventory_console.adapters.local import LocalCollection
from inventory_console.adapters.memory import MemoryCollection
from inventory_console.adapters.relational import RelationalCollection
from inventory_console.connection import ConnectionManager
from inventory_console.errors import ConnectionFailure, DeleteFailure, StorageError
from inventory_console.identifiers import PUBLIC_KEY
from inventory_console import models

logger = logging.getLogger(__name__)

# collection name -> (model checked on update, model checked on insert)
ENTITY_MODELS: Dict[str, Tuple[Type[BaseModel], Type[BaseModel]]] = {
    "products": (models.Product, models.Product),
    "customers": (models.Customer, models.Customer),
    "orders": (models.Order, models.Order),
    "orderItems": (models.OrderItem, models.NewOrderItem),
    "payments": (models.Payment, models.Payment),
    "warehouses": (models.Warehouse, models.Warehouse),
    "expenses": (models.Expense, models.Expense),
}


class CollectionRegistry:
    def __init__(self, kind: models.BackendKind, collections: Mapping[str, BaseCollection]):
        self.kind = kind
        self._collections: Dict[str, BaseCollection] = dict(collections)

    def __getitem__(self, name: str) -> BaseCollection:
        return self._collections[name]

    def __contains__(self, name: object) -> bool:
        return name in self._collections

    def __iter__(self) -> Iterator[str]:
        return iter(self._collections)

    def collection(self, name: str) -> BaseCollection:
        return self[name]

    def names(self) -> List[str]:
        return list(self._collections)

    # =========================================================================
    # Cross-collection operations
    # =========================================================================

    async def get_order_with_details(self, order_id: str) -> Optional[Dict[str, Any]]:
        """Order record plus ``items``, ``payment`` and ``customer`` (``None`` when absent)."""
        orders = self["orders"]
        if isinstance(orders, RelationalCollection):
            return await orders.order_details(order_id)

        order = await orders.find_by_id(order_id)
        if order is None:
            return None
        items, payment, customer = await asyncio.gather(
            self["orderItems"].find({"order_id": order_id}),
            self["payments"].find_one({"order_id": order_id}),
            self["customers"].find_by_id(order.get("customer_id")),
        )
        return {**order, "items": items, "payment": payment, "customer": customer}

    async def create_order(self, order: Mapping[str, Any], items: List[Mapping[str, Any]]) -> Dict[str, Any]:
        """
        Insert an order, then each of its items pointed at it.

        ``total_amount`` defaults to the sum of the item subtotals. Items are
        inserted one by one; a failing item leaves the order and earlier
        items in place.
        """
        data = dict(order)
        if data.get("total_amount") is None:
            data["total_amount"] = round(sum(float(i.get("subtotal", 0)) for i in items), 2)
        created = await self["orders"].insert_one(data)
        stored_items = []
        for item in items:
            stored_items.append(
                await self["orderItems"].insert_one({**item, "order_id": created[PUBLIC_KEY]})
            )
        logger.info("order %s created with %d item(s)", created[PUBLIC_KEY], len(stored_items))
        return {"order": created, "items": stored_items}

    async def delete_order(self, order_id: str) -> Optional[Record]:
        """
        Delete the order, then every item that references it.

        The items are listed before anything is removed; if that listing fails
        nothing is deleted and ``DeleteFailure`` is raised.
        """
        try:
            items = await self["orderItems"].find({"order_id": order_id}, strict=True)
        except StorageError as exc:
            raise DeleteFailure(
                "could not list order items for cascade", collection="orders", cause=exc,
            ) from exc
        deleted = await self["orders"].delete_one({PUBLIC_KEY: order_id})
        for item in items:
            await self["orderItems"].delete_one({PUBLIC_KEY: item[PUBLIC_KEY]})
        if deleted is not None or items:
            logger.info("order %s deleted with %d item(s)", order_id, len(items))
        return deleted


def build_registry(manager: ConnectionManager, *, timeout: Optional[float] = None) -> CollectionRegistry:
    """Adapters for every collection on the backend ``manager`` is connected to."""
    if not manager.is_connected:
        raise ConnectionFailure(f"cannot build registry: {manager.kind.value} backend is {manager.state.value}")
    resource = manager.resource
    kind = manager.kind
    collections: Dict[str, BaseCollection] = {}
    for name in COLLECTION_NAMES:
        model, insert_model = ENTITY_MODELS[name]
        kwargs: Dict[str, Any] = {"model": model, "insert_model": insert_model}
        if kind is models.BackendKind.memory:
            collections[name] = MemoryCollection(name, resource.records(name), **kwargs)
        elif kind is models.BackendKind.local:
            prefix = manager.config.collection_name_prefix
            collections[name] = LocalCollection(name, resource, prefix=prefix, **kwargs)
        elif kind is models.BackendKind.mongo:
            collections[name] = DocumentCollection(name, resource, timeout=timeout, **kwargs)
        else:
            collections[name] = RelationalCollection(name, resource, timeout=timeout, **kwargs)
    logger.info("registry built on %s backend", kind.value)
    return CollectionRegistry(kind, collections)


def get_registry(request: Request) -> CollectionRegistry:
    """FastAPI dependency: the registry the app built at startup."""
    return request.app.state.registry
