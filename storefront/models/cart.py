"""Cart models for the storefront"""

from decimal import Decimal
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class CartItem(BaseModel):
    """Line item in a shopping cart"""
    product_id: str
    quantity: int = Field(gt=0)


class Cart(BaseModel):
    """Shopping cart, one per user"""
    id: str
    user_id: str
    items: list[CartItem] = []
    created_at: datetime
    updated_at: datetime


class AddToCartRequest(BaseModel):
    """Request to add item to cart"""
    product_id: str
    quantity: int = Field(default=1, gt=0)


class UpdateCartItemRequest(BaseModel):
    """Request to update cart item quantity"""
    quantity: int = Field(gt=0)


class CartResponse(BaseModel):
    """Cart API response"""
    cart: Optional[Cart] = None
    items: list[CartItem] = []
    subtotal: Decimal = Decimal("0")
    message: Optional[str] = None
