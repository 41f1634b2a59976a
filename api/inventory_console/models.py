from pathlib import Path
from typing import Optional, Dict, Any, List, Literal
import enum
from pydantic import BaseModel, ConfigDict, Field, model_validator

# ---------------------------------------------------------
# Entities (validated on write, stored as plain dicts)
# ---------------------------------------------------------

class OrderStatus(str, enum.Enum):
    pending = "pending"
    processing = "processing"
    shipped = "shipped"
    delivered = "delivered"
    cancelled = "cancelled"

class PaymentMethod(str, enum.Enum):
    credit_card = "credit_card"
    paypal = "paypal"
    bank_transfer = "bank_transfer"
    cash = "cash"

class PaymentStatus(str, enum.Enum):
    pending = "pending"
    completed = "completed"
    failed = "failed"
    refunded = "refunded"

class Record(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: Optional[str] = None

class Product(Record):
    name: str
    description: str = ""
    price: float = Field(ge=0)
    category: str
    stock: int = Field(ge=0)
    image: Optional[str] = None

class Customer(Record):
    name: str
    email: str
    phone: str = ""
    address: str = ""
    created_at: Optional[str] = None

class Warehouse(Record):
    name: str
    location: str
    created_at: Optional[str] = None

class Order(Record):
    customer_id: str
    customer_name: Optional[str] = None
    user_id: Optional[str] = None
    order_date: Optional[str] = None
    status: OrderStatus = OrderStatus.pending
    total_amount: float = Field(ge=0)

class OrderItem(Record):
    order_id: str
    product_id: str
    product_name: Optional[str] = None
    quantity: int = Field(ge=1)
    price: float = Field(ge=0)
    subtotal: float = Field(ge=0)
    warehouse_id: str

class NewOrderItem(OrderItem):
    """Order item at insert time: subtotal must equal price x quantity."""

    @model_validator(mode="after")
    def _check_subtotal(self):
        if abs(self.subtotal - self.price * self.quantity) > 0.005:
            raise ValueError(
                f"subtotal {self.subtotal} != price {self.price} x quantity {self.quantity}"
            )
        return self

class CardDetails(BaseModel):
    last4: str
    expiry: str
    brand: str

class Payment(Record):
    order_id: str
    amount: float = Field(ge=0)
    payment_date: Optional[str] = None
    method: PaymentMethod
    transaction_id: Optional[str] = None
    status: PaymentStatus = PaymentStatus.pending
    card_details: Optional[CardDetails] = None

    @model_validator(mode="after")
    def _card_only_for_cards(self):
        if self.card_details is not None and self.method is not PaymentMethod.credit_card:
            raise ValueError("card_details is only allowed for credit_card payments")
        return self

class Expense(Record):
    title: str
    amount: float = Field(gt=0)
    category: str
    warehouse_id: str
    # point-in-time copy of the warehouse name, never re-synced
    warehouse_name: str = ""
    expense_date: Optional[str] = None

# ---------------------------------------------------------
# Backend connection configs
# ---------------------------------------------------------

class BackendKind(str, enum.Enum):
    memory = "memory"
    local = "local"
    mongo = "mongo"
    postgres = "postgres"

class MemoryConfig(BaseModel):
    seed: bool = True

class LocalConfig(BaseModel):
    collection_name_prefix: str = "inventory_"
    data_root: Optional[Path] = None

class DocumentStoreConfig(BaseModel):
    uri: str
    db_name: str
    options: Dict[str, Any] = Field(default_factory=dict)

class RelationalConfig(BaseModel):
    host: str = "localhost"
    port: int = 5432
    database: str
    user: str
    password: str
    ssl: bool = False
    url: Optional[str] = None
    pool_size: int = 5
    max_overflow: int = 10
    echo: bool = False

# ---------------------------------------------------------
# API payloads
# ---------------------------------------------------------

class OrderCreateIn(BaseModel):
    order: Dict[str, Any]
    items: List[Dict[str, Any]] = Field(default_factory=list)

class HealthOut(BaseModel):
    status: Literal["ok", "degraded"]
    backend: BackendKind
    connection: str
    last_error: Optional[str] = None

class DashboardStatsOut(BaseModel):
    total_products: int
    total_customers: int
    active_orders: int
    monthly_revenue: float
