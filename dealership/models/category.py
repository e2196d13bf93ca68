# dealership/models/category.py
from typing import Optional
from pydantic import BaseModel, Field
from .base import TimeStampedModel


class Category(TimeStampedModel):
    """Category model for grouping car listings"""
    category_id: int
    name: str
    description: Optional[str] = None
    is_active: bool = True


class CategoryCreate(BaseModel):
    name: str = Field(min_length=1)
    description: Optional[str] = None


class CategoryUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    is_active: Optional[bool] = None
