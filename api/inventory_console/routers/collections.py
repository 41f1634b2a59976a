# inventory_console/routers/collections.py
"""
Collections Router - generic CRUD over the seven named collections,
plus the order endpoints that span several of them.
"""
from __future__ import annotations
import json
from typing import Any, Dict, List, Optional, Tuple, Type, get_args

from fastapi import APIRouter, Body, Depends, HTTPException, Request
from pydantic import BaseModel

from inventory_console.adapters.base import Record
from inventory_console.models import OrderCreateIn
from inventory_console.registry import CollectionRegistry, get_registry
from inventory_console.services.access import CollectionAccess

router = APIRouter(tags=["Collections"])

# ============================================================================
# Helpers
# ============================================================================

def _access(registry: CollectionRegistry, name: str) -> CollectionAccess:
    if name not in registry:
        raise HTTPException(status_code=404, detail=f"Unknown collection: {name}")
    return CollectionAccess(registry[name])


def _declared_types(model: Optional[Type[BaseModel]], field: str) -> Tuple[type, ...]:
    if model is None or field not in model.model_fields:
        return ()
    annotation = model.model_fields[field].annotation
    return tuple(t for t in (get_args(annotation) or (annotation,))
                 if isinstance(t, type) and t is not type(None))


def _coerce(value: str, declared: Tuple[type, ...] = ()) -> Any:
    """
    Query-string value -> filter value.

    Fields the entity declares as strings (enums included) keep the raw text, so
    ``user_id=1`` still matches ``"1"``. Anything else becomes a JSON scalar when
    it parses as one ("10" -> 10, "true" -> True).
    """
    if any(issubclass(t, str) for t in declared):
        return value
    try:
        parsed = json.loads(value)
    except ValueError:
        return value
    return parsed if isinstance(parsed, (int, float, bool)) or parsed is None else value


def _query_filters(request: Request, registry: CollectionRegistry, name: str) -> Dict[str, Any]:
    model = registry[name].model if name in registry else None
    return {k: _coerce(v, _declared_types(model, k)) for k, v in request.query_params.items()}


def _found(record: Optional[Record], name: str, record_id: str) -> Record:
    if record is None:
        raise HTTPException(status_code=404, detail=f"{name}/{record_id} not found")
    return record

# ============================================================================
# Generic collection endpoints
# ============================================================================

@router.get("/collections")
def list_collections(registry: CollectionRegistry = Depends(get_registry)) -> Dict[str, Any]:
    return {"backend": registry.kind.value, "collections": registry.names()}


@router.get("/collections/{name}")
async def find_records(
    name: str, request: Request, registry: CollectionRegistry = Depends(get_registry)
) -> List[Record]:
    return await _access(registry, name).find(_query_filters(request, registry, name))


@router.get("/collections/{name}/count")
async def count_records(
    name: str, request: Request, registry: CollectionRegistry = Depends(get_registry)
) -> Dict[str, int]:
    return {"count": await _access(registry, name).count(_query_filters(request, registry, name))}


@router.get("/collections/{name}/{record_id}")
async def get_record(
    name: str, record_id: str, registry: CollectionRegistry = Depends(get_registry)
) -> Record:
    access = _access(registry, name)
    # straight to the adapter: a backend failure here must surface, not read as absent
    return _found(await access.collection.find_by_id(record_id), name, record_id)


@router.post("/collections/{name}", status_code=201)
async def create_record(
    name: str,
    data: Dict[str, Any] = Body(...),
    registry: CollectionRegistry = Depends(get_registry),
) -> Record:
    return await _access(registry, name).create(data)


@router.patch("/collections/{name}/{record_id}")
async def update_record(
    name: str,
    record_id: str,
    patch: Dict[str, Any] = Body(...),
    registry: CollectionRegistry = Depends(get_registry),
) -> Record:
    return _found(await _access(registry, name).update(record_id, patch), name, record_id)


@router.delete("/collections/{name}/{record_id}")
async def delete_record(
    name: str, record_id: str, registry: CollectionRegistry = Depends(get_registry)
) -> Record:
    access = _access(registry, name)
    if name == "orders":
        deleted = await registry.delete_order(record_id)
    else:
        deleted = await access.remove(record_id)
    return _found(deleted, name, record_id)

# ============================================================================
# Orders
# ============================================================================

@router.post("/orders", status_code=201)
async def create_order(
    payload: OrderCreateIn, registry: CollectionRegistry = Depends(get_registry)
) -> Dict[str, Any]:
    return await registry.create_order(payload.order, payload.items)


@router.get("/orders/{order_id}/details")
async def order_details(
    order_id: str, registry: CollectionRegistry = Depends(get_registry)
) -> Dict[str, Any]:
    return _found(await registry.get_order_with_details(order_id), "orders", order_id)
