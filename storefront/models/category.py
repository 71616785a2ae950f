"""Category models for the storefront"""

from datetime import datetime

from pydantic import BaseModel, Field


class Category(BaseModel):
    """Product category"""
    id: str
    name: str
    created_at: datetime
    updated_at: datetime


class CategoryRequest(BaseModel):
    """Request to create or rename a category"""
    name: str = Field(min_length=1)
