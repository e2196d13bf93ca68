# dealership/models/base.py
import math
from datetime import datetime
from typing import Any, List, Optional
from pydantic import BaseModel, ConfigDict


class TimeStampedModel(BaseModel):
    """Base model with timestamp fields"""
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    pages: int

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "Pagination":
        return cls(page=page, limit=limit, total=total,
                   pages=math.ceil(total / limit) if limit else 0)


class PaginatedResult(BaseModel):
    """A page of items plus the counters the envelope reports"""
    items: List[Any]
    pagination: Pagination
