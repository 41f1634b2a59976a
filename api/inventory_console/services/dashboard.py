# inventory_console/services/dashboard.py
"""
Dashboard figures computed from the collections.

- total_products / total_customers: plain counts
- active_orders: orders still pending, processing or shipped
- monthly_revenue: order totals of the latest month that has orders
  (cancelled orders excluded)
"""
from __future__ import annotations
import asyncio
import logging
from typing import Any, Dict, List, Mapping

import pandas as pd

from inventory_console.models import DashboardStatsOut, OrderStatus

logger = logging.getLogger(__name__)

ACTIVE_STATUSES = (OrderStatus.pending.value, OrderStatus.processing.value, OrderStatus.shipped.value)


def _orders_frame(orders: List[Mapping[str, Any]]) -> pd.DataFrame:
    df = pd.DataFrame(list(orders), columns=["order_date", "status", "total_amount"])
    df["total_amount"] = pd.to_numeric(df["total_amount"], errors="coerce").fillna(0.0)
    df["order_date"] = pd.to_datetime(df["order_date"], errors="coerce", utc=True)
    df = df[df["order_date"].notna() & (df["status"] != OrderStatus.cancelled.value)]
    return df


def revenue_by_month(orders: List[Mapping[str, Any]]) -> List[Dict[str, Any]]:
    """
    Revenue per calendar month, oldest first.

    Example:
        [{"month": "2023-06", "revenue": 1729.95, "orders": 3}, ...]
    """
    df = _orders_frame(orders)
    if df.empty:
        return []
    df = df.assign(month=df["order_date"].dt.strftime("%Y-%m"))
    grouped = (
        df.groupby("month", sort=True)["total_amount"]
        .agg(["sum", "count"])
        .reset_index()
    )
    return [
        {"month": row["month"], "revenue": round(float(row["sum"]), 2), "orders": int(row["count"])}
        for _, row in grouped.iterrows()
    ]


def compute_stats(
    products: List[Mapping[str, Any]],
    customers: List[Mapping[str, Any]],
    orders: List[Mapping[str, Any]],
) -> DashboardStatsOut:
    months = revenue_by_month(orders)
    return DashboardStatsOut(
        total_products=len(products),
        total_customers=len(customers),
        active_orders=sum(1 for o in orders if o.get("status") in ACTIVE_STATUSES),
        monthly_revenue=months[-1]["revenue"] if months else 0.0,
    )


async def dashboard_stats(registry) -> DashboardStatsOut:
    """Read the three collections concurrently and compute the stats."""
    products, customers, orders = await asyncio.gather(
        registry["products"].find({}),
        registry["customers"].find({}),
        registry["orders"].find({}),
    )
    stats = compute_stats(products, customers, orders)
    logger.debug("dashboard stats: %s", stats)
    return stats
