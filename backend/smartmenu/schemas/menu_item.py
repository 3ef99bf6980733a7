"""Menu item schemas."""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import Field

from smartmenu.schemas.common import CamelModel


class MenuItemCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    price: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)
    category: Optional[str] = Field(None, max_length=100)
    image_url: Optional[str] = Field(None, max_length=500)
    available: bool = True
    allergens: List[str] = Field(default_factory=list)
    prep_time_minutes: Optional[int] = Field(None, ge=0)
    featured: bool = False


class MenuItemUpdate(CamelModel):
    """Partial update; omitted fields keep their stored values."""

    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    price: Optional[Decimal] = Field(None, gt=0, max_digits=10, decimal_places=2)
    category: Optional[str] = Field(None, max_length=100)
    image_url: Optional[str] = Field(None, max_length=500)
    available: Optional[bool] = None
    allergens: Optional[List[str]] = None
    prep_time_minutes: Optional[int] = Field(None, ge=0)
    featured: Optional[bool] = None


class MenuItemResponse(CamelModel):
    id: int
    owner_id: int
    name: str
    description: Optional[str] = None
    price: float
    category: Optional[str] = None
    image_url: Optional[str] = None
    available: bool
    allergens: List[str] = Field(default_factory=list)
    prep_time_minutes: Optional[int] = None
    featured: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class PublicMenuResponse(CamelModel):
    """Available items of the restaurant that owns the scanned table."""

    table_id: int
    table_number: str
    menu_items: List[MenuItemResponse]
    total_items: int
