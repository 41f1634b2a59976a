"""Dashboard figures from the fixture data and edge cases."""
import pytest

from inventory_console.fixtures import seed_data
from inventory_console.services.dashboard import compute_stats, dashboard_stats, revenue_by_month


@pytest.fixture
def data():
    return seed_data()


class TestRevenueByMonth:
    def test_fixture_months(self, data):
        assert revenue_by_month(data["orders"]) == [
            {"month": "2023-06", "revenue": 1729.95, "orders": 3},
            {"month": "2023-07", "revenue": 429.95, "orders": 2},
        ]

    def test_cancelled_and_undated_orders_are_skipped(self):
        orders = [
            {"order_date": "2024-01-05T10:00:00Z", "status": "delivered", "total_amount": 10},
            {"order_date": "2024-01-06T10:00:00Z", "status": "cancelled", "total_amount": 99},
            {"status": "pending", "total_amount": 50},
            {"order_date": "not a date", "status": "pending", "total_amount": 7},
        ]
        assert revenue_by_month(orders) == [{"month": "2024-01", "revenue": 10.0, "orders": 1}]

    def test_no_orders(self):
        assert revenue_by_month([]) == []


class TestStats:
    def test_fixture_stats(self, data):
        stats = compute_stats(data["products"], data["customers"], data["orders"])

        assert stats.total_products == 7
        assert stats.total_customers == 4
        assert stats.active_orders == 4
        assert stats.monthly_revenue == pytest.approx(429.95)

    def test_empty_collections(self):
        stats = compute_stats([], [], [])
        assert stats.model_dump() == {
            "total_products": 0, "total_customers": 0, "active_orders": 0, "monthly_revenue": 0.0,
        }

    async def test_stats_from_registry(self, registry, widget):
        await registry["products"].insert_one(widget)
        await registry.create_order(
            {"customer_id": "c1", "status": "shipped", "order_date": "2024-03-01T09:00:00Z", "total_amount": 12.5},
            [],
        )

        stats = await dashboard_stats(registry)

        assert stats.total_products == 1
        assert stats.total_customers == 0
        assert stats.active_orders == 1
        assert stats.monthly_revenue == 12.5
