"""Product models for the storefront"""

from decimal import Decimal
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Product(BaseModel):
    """Product in the catalog"""
    id: str
    name: str
    description: str
    price: Decimal = Field(ge=0)
    category_id: str
    stock: int = Field(ge=0)
    image_url: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class ProductCreateRequest(BaseModel):
    """Request to create a product"""
    name: str = Field(min_length=1)
    description: str = Field(min_length=1)
    price: Decimal = Field(ge=0)
    category_id: str
    stock: int = Field(default=0, ge=0)
    image_url: Optional[str] = None


class ProductUpdateRequest(BaseModel):
    """Request to update a product; only the fields sent are changed.

    Stock is not accepted here; it changes only through stock adjustments.
    """
    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = Field(default=None, min_length=1)
    price: Optional[Decimal] = Field(default=None, ge=0)
    category_id: Optional[str] = None
    image_url: Optional[str] = None


class StockAdjustmentRequest(BaseModel):
    """Request to add (positive) or remove (negative) stock"""
    delta: int
