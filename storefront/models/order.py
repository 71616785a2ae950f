"""Order models for the storefront"""

from decimal import Decimal
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, field_validator


class OrderStatus(str, Enum):
    PENDING = "pending"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"

    @classmethod
    def values(cls) -> list[str]:
        return [status.value for status in cls]


class OrderItem(BaseModel):
    """Snapshot of a cart line at the time the order was placed"""
    product_id: str
    product_name: str
    quantity: int = Field(gt=0)
    unit_price: Decimal = Field(ge=0)
    line_total: Decimal = Field(ge=0)


class Order(BaseModel):
    """Placed order"""
    id: str
    user_id: str
    items: list[OrderItem]
    total_amount: Decimal
    shipping_address: str
    status: OrderStatus = OrderStatus.PENDING
    created_at: datetime
    updated_at: datetime


class PlaceOrderRequest(BaseModel):
    """Request to place an order from the caller's cart"""
    shipping_address: str = Field(min_length=1)

    @field_validator("shipping_address")
    @classmethod
    def address_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("shipping address must not be blank")
        return value


class UpdateOrderStatusRequest(BaseModel):
    """Request to change an order's status.

    ``status`` is a plain string so that unknown values reach the
    order service and are reported with the allowed set.
    """
    status: str
