# inventory_console/routers/dashboard.py
from __future__ import annotations
from typing import Any, Dict, List

from fastapi import APIRouter, Depends

from inventory_console.models import DashboardStatsOut
from inventory_console.registry import CollectionRegistry, get_registry
from inventory_console.services.dashboard import dashboard_stats, revenue_by_month

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("/stats", response_model=DashboardStatsOut)
async def get_stats(registry: CollectionRegistry = Depends(get_registry)) -> DashboardStatsOut:
    return await dashboard_stats(registry)


@router.get("/revenue")
async def get_revenue(registry: CollectionRegistry = Depends(get_registry)) -> List[Dict[str, Any]]:
    return revenue_by_month(await registry["orders"].find({}))
