# inventory_console/db_models.py
"""
SQLAlchemy ORM Models for the Inventory Console relational backend.

Seven tables, one per collection. The primary key ``id`` is the public
record id (a string), so no key translation happens for this backend.
Timestamps are kept as ISO-8601 strings, exactly as the other backends
store them.
"""
from __future__ import annotations
from typing import Any, Dict, Optional

from sqlalchemy import (
    String, Integer, Float, Text, Index, CheckConstraint, JSON, Table,
)
from sqlalchemy.orm import Mapped, mapped_column

from inventory_console.database import Base

ID = String(64)
STAMP = String(40)


# ============================================================================
# 1. WAREHOUSES
# ============================================================================

class Warehouse(Base):
    __tablename__ = "warehouses"

    id: Mapped[str] = mapped_column(ID, primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    location: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[Optional[str]] = mapped_column(STAMP)


# ============================================================================
# 2. PRODUCTS
# ============================================================================

class Product(Base):
    __tablename__ = "products"

    id: Mapped[str] = mapped_column(ID, primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)
    price: Mapped[float] = mapped_column(Float, nullable=False)
    category: Mapped[str] = mapped_column(String(100), nullable=False)
    stock: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    image: Mapped[Optional[str]] = mapped_column(String(500))

    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_products_price"),
        CheckConstraint("stock >= 0", name="ck_products_stock"),
        Index("idx_products_category", "category"),
    )


# ============================================================================
# 3. CUSTOMERS
# ============================================================================

class Customer(Base):
    __tablename__ = "customers"

    id: Mapped[str] = mapped_column(ID, primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[Optional[str]] = mapped_column(String(50))
    address: Mapped[Optional[str]] = mapped_column(Text)
    created_at: Mapped[Optional[str]] = mapped_column(STAMP)


# ============================================================================
# 4. ORDERS + ORDER ITEMS
# ============================================================================

class Order(Base):
    __tablename__ = "orders"

    id: Mapped[str] = mapped_column(ID, primary_key=True)
    customer_id: Mapped[str] = mapped_column(ID, nullable=False)
    customer_name: Mapped[Optional[str]] = mapped_column(String(255))
    user_id: Mapped[Optional[str]] = mapped_column(ID)
    order_date: Mapped[Optional[str]] = mapped_column(STAMP)
    status: Mapped[str] = mapped_column(String(20), default="pending", nullable=False)
    total_amount: Mapped[float] = mapped_column(Float, default=0, nullable=False)

    __table_args__ = (
        Index("idx_orders_customer", "customer_id"),
    )


class OrderItem(Base):
    __tablename__ = "order_items"

    id: Mapped[str] = mapped_column(ID, primary_key=True)
    # no FK constraints anywhere: references are checked by callers, the order cascade by the registry
    order_id: Mapped[str] = mapped_column(ID, nullable=False)
    product_id: Mapped[str] = mapped_column(ID, nullable=False)
    product_name: Mapped[Optional[str]] = mapped_column(String(255))
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    price: Mapped[float] = mapped_column(Float, nullable=False)
    subtotal: Mapped[float] = mapped_column(Float, nullable=False)
    warehouse_id: Mapped[Optional[str]] = mapped_column(ID)

    __table_args__ = (
        CheckConstraint("quantity >= 1", name="ck_order_items_quantity"),
        Index("idx_order_items_order", "order_id"),
    )


# ============================================================================
# 5. PAYMENTS
# ============================================================================

class Payment(Base):
    __tablename__ = "payments"

    id: Mapped[str] = mapped_column(ID, primary_key=True)
    order_id: Mapped[str] = mapped_column(ID, nullable=False)
    amount: Mapped[float] = mapped_column(Float, nullable=False)
    payment_date: Mapped[Optional[str]] = mapped_column(STAMP)
    method: Mapped[str] = mapped_column(String(20), nullable=False)
    transaction_id: Mapped[Optional[str]] = mapped_column(String(100))
    status: Mapped[str] = mapped_column(String(20), default="pending", nullable=False)
    card_details: Mapped[Optional[Dict[str, Any]]] = mapped_column(JSON)

    __table_args__ = (
        Index("idx_payments_order", "order_id"),
    )


# ============================================================================
# 6. EXPENSES
# ============================================================================

class Expense(Base):
    __tablename__ = "expenses"

    id: Mapped[str] = mapped_column(ID, primary_key=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    amount: Mapped[float] = mapped_column(Float, nullable=False)
    category: Mapped[str] = mapped_column(String(100), nullable=False)
    warehouse_id: Mapped[str] = mapped_column(ID, nullable=False)
    warehouse_name: Mapped[Optional[str]] = mapped_column(String(255))
    expense_date: Mapped[Optional[str]] = mapped_column(STAMP)


# collection name -> table
TABLES: Dict[str, Table] = {
    "products": Product.__table__,
    "customers": Customer.__table__,
    "orders": Order.__table__,
    "orderItems": OrderItem.__table__,
    "payments": Payment.__table__,
    "warehouses": Warehouse.__table__,
    "expenses": Expense.__table__,
}
