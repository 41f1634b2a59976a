# inventory_console/services/__init__.py
"""
Services on top of the collection registry.
"""
from inventory_console.services.access import CollectionAccess
from inventory_console.services.dashboard import compute_stats, dashboard_stats, revenue_by_month

__all__ = [
    "CollectionAccess",
    "compute_stats",
    "dashboard_stats",
    "revenue_by_month",
]
