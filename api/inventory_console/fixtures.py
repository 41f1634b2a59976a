# inventory_console/fixtures.py
"""Demo data the in-memory backend starts with."""
from __future__ import annotations
import copy
from typing import Any, Dict, List

PRODUCTS: List[Dict[str, Any]] = [
    {"id": "prod_001", "name": "Wireless Bluetooth Headphones",
     "description": "Noise-cancelling over-ear headphones with 30-hour battery life.",
     "price": 199.99, "category": "Electronics", "stock": 45},
    {"id": "prod_002", "name": "Ultra HD Smart TV",
     "description": "65-inch 4K UHD Smart TV with built-in streaming apps.",
     "price": 799.99, "category": "Electronics", "stock": 15},
    {"id": "prod_003", "name": "Professional DSLR Camera",
     "description": "24.1MP digital camera with 18-55mm lens kit.",
     "price": 649.99, "category": "Photography", "stock": 20},
    {"id": "prod_004", "name": "Ergonomic Office Chair",
     "description": "Adjustable office chair with lumbar support and mesh back.",
     "price": 249.99, "category": "Furniture", "stock": 35},
    {"id": "prod_005", "name": "Stainless Steel Water Bottle",
     "description": "Vacuum insulated bottle that keeps drinks hot or cold for 24 hours.",
     "price": 29.99, "category": "Home & Kitchen", "stock": 100},
    {"id": "prod_006", "name": "Smartphone Stand and Wireless Charger",
     "description": "Adjustable stand with integrated 15W fast wireless charging.",
     "price": 49.99, "category": "Electronics", "stock": 60},
    {"id": "prod_007", "name": "Portable Bluetooth Speaker",
     "description": "Waterproof speaker with 360° sound and 12-hour playtime.",
     "price": 79.99, "category": "Electronics", "stock": 40},
]

CUSTOMERS: List[Dict[str, Any]] = [
    {"id": "cust_001", "name": "John Smith", "email": "john.smith@example.com",
     "phone": "555-123-4567", "address": "123 Main St, Anytown, CA 12345",
     "created_at": "2023-01-15T10:30:00Z"},
    {"id": "cust_002", "name": "Sarah Johnson", "email": "sarah.j@example.com",
     "phone": "555-234-5678", "address": "456 Elm St, Somewhere, NY 67890",
     "created_at": "2023-02-22T14:45:00Z"},
    {"id": "cust_003", "name": "Michael Brown", "email": "m.brown@example.com",
     "phone": "555-345-6789", "address": "789 Oak St, Nowhere, TX 13579",
     "created_at": "2023-03-10T09:15:00Z"},
    {"id": "cust_004", "name": "Emily Davis", "email": "emily.d@example.com",
     "phone": "555-456-7890", "address": "101 Pine St, Everywhere, FL 24680",
     "created_at": "2023-04-05T16:20:00Z"},
]

WAREHOUSES: List[Dict[str, Any]] = [
    {"id": "wh_001", "name": "Main Distribution Center",
     "location": "1000 Warehouse Blvd, Portland, OR 97205", "created_at": "2022-01-01T00:00:00Z"},
    {"id": "wh_002", "name": "East Coast Facility",
     "location": "500 Storage Lane, Newark, NJ 07101", "created_at": "2022-04-15T00:00:00Z"},
    {"id": "wh_003", "name": "West Coast Hub",
     "location": "750 Logistics Ave, San Diego, CA 92101", "created_at": "2022-07-20T00:00:00Z"},
]

ORDERS: List[Dict[str, Any]] = [
    {"id": "ord_001", "customer_id": "cust_001", "customer_name": "John Smith", "user_id": "1",
     "order_date": "2023-06-01T10:30:00Z", "status": "delivered", "total_amount": 249.98},
    {"id": "ord_002", "customer_id": "cust_002", "customer_name": "Sarah Johnson", "user_id": "1",
     "order_date": "2023-06-15T14:45:00Z", "status": "shipped", "total_amount": 799.99},
    {"id": "ord_003", "customer_id": "cust_003", "customer_name": "Michael Brown", "user_id": "1",
     "order_date": "2023-06-28T09:15:00Z", "status": "processing", "total_amount": 679.98},
    {"id": "ord_004", "customer_id": "cust_004", "customer_name": "Emily Davis", "user_id": "1",
     "order_date": "2023-07-10T16:20:00Z", "status": "pending", "total_amount": 299.97},
    {"id": "ord_005", "customer_id": "cust_001", "customer_name": "John Smith", "user_id": "1",
     "order_date": "2023-07-15T11:40:00Z", "status": "processing", "total_amount": 129.98},
]

ORDER_ITEMS: List[Dict[str, Any]] = [
    {"id": "item_001", "order_id": "ord_001", "product_id": "prod_001",
     "product_name": "Wireless Bluetooth Headphones", "quantity": 1, "price": 199.99,
     "subtotal": 199.99, "warehouse_id": "wh_001"},
    {"id": "item_002", "order_id": "ord_001", "product_id": "prod_005",
     "product_name": "Stainless Steel Water Bottle", "quantity": 1, "price": 29.99,
     "subtotal": 29.99, "warehouse_id": "wh_001"},
    {"id": "item_003", "order_id": "ord_002", "product_id": "prod_002",
     "product_name": "Ultra HD Smart TV", "quantity": 1, "price": 799.99,
     "subtotal": 799.99, "warehouse_id": "wh_002"},
    {"id": "item_004", "order_id": "ord_003", "product_id": "prod_003",
     "product_name": "Professional DSLR Camera", "quantity": 1, "price": 649.99,
     "subtotal": 649.99, "warehouse_id": "wh_003"},
    {"id": "item_005", "order_id": "ord_003", "product_id": "prod_006",
     "product_name": "Smartphone Stand and Wireless Charger", "quantity": 1, "price": 29.99,
     "subtotal": 29.99, "warehouse_id": "wh_001"},
]

PAYMENTS: List[Dict[str, Any]] = [
    {"id": "pay_001", "order_id": "ord_001", "amount": 249.98, "payment_date": "2023-06-01T10:35:00Z",
     "method": "credit_card", "transaction_id": "txn_abc123", "status": "completed",
     "card_details": {"last4": "4242", "expiry": "04/25", "brand": "Visa"}},
    {"id": "pay_002", "order_id": "ord_002", "amount": 799.99, "payment_date": "2023-06-15T14:50:00Z",
     "method": "paypal", "transaction_id": "txn_def456", "status": "completed"},
    {"id": "pay_003", "order_id": "ord_003", "amount": 679.98, "payment_date": "2023-06-28T09:20:00Z",
     "method": "credit_card", "transaction_id": "txn_ghi789", "status": "completed",
     "card_details": {"last4": "1234", "expiry": "08/24", "brand": "Mastercard"}},
    {"id": "pay_004", "order_id": "ord_004", "amount": 299.97, "payment_date": "2023-07-10T16:25:00Z",
     "method": "bank_transfer", "transaction_id": "txn_jkl012", "status": "pending"},
]

EXPENSES: List[Dict[str, Any]] = [
    {"id": "exp_001", "title": "Rent Payment", "amount": 5000.00, "category": "Rent",
     "warehouse_id": "wh_001", "warehouse_name": "Main Distribution Center",
     "expense_date": "2023-06-01T00:00:00Z"},
    {"id": "exp_002", "title": "Utility Bills", "amount": 1200.00, "category": "Utilities",
     "warehouse_id": "wh_001", "warehouse_name": "Main Distribution Center",
     "expense_date": "2023-06-05T00:00:00Z"},
    {"id": "exp_003", "title": "Equipment Maintenance", "amount": 850.00, "category": "Maintenance",
     "warehouse_id": "wh_002", "warehouse_name": "East Coast Facility",
     "expense_date": "2023-06-12T00:00:00Z"},
    {"id": "exp_004", "title": "Security System Upgrade", "amount": 3500.00, "category": "Security",
     "warehouse_id": "wh_003", "warehouse_name": "West Coast Hub",
     "expense_date": "2023-06-20T00:00:00Z"},
    {"id": "exp_005", "title": "Staff Salaries", "amount": 12500.00, "category": "Payroll",
     "warehouse_id": "wh_001", "warehouse_name": "Main Distribution Center",
     "expense_date": "2023-06-30T00:00:00Z"},
    {"id": "exp_006", "title": "Insurance Premium", "amount": 2000.00, "category": "Insurance",
     "warehouse_id": "wh_002", "warehouse_name": "East Coast Facility",
     "expense_date": "2023-07-01T00:00:00Z"},
]

_SEED: Dict[str, List[Dict[str, Any]]] = {
    "products": PRODUCTS,
    "customers": CUSTOMERS,
    "orders": ORDERS,
    "orderItems": ORDER_ITEMS,
    "payments": PAYMENTS,
    "warehouses": WAREHOUSES,
    "expenses": EXPENSES,
}


def seed_data() -> Dict[str, List[Dict[str, Any]]]:
    """Fresh deep copy of every collection's fixtures."""
    return copy.deepcopy(_SEED)
