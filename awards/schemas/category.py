"""Category schemas."""
from datetime import datetime
from typing import Optional

from pydantic import constr

from awards.schemas.base import BaseSchema

CategoryNameStr = constr(strip_whitespace=True, min_length=1, max_length=200)


class CategoryCreateRequest(BaseSchema):
    name: CategoryNameStr
    description: Optional[str] = None


class CategoryUpdateRequest(BaseSchema):
    name: Optional[CategoryNameStr] = None
    description: Optional[str] = None
    active: Optional[bool] = None


class CategoryResponse(BaseSchema):
    category_id: int
    name: str
    description: Optional[str] = None
    active: bool
    created_at: datetime
