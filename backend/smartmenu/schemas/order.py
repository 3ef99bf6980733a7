"""Order schemas."""

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from smartmenu.models.restaurant import OrderStatus
from smartmenu.schemas.common import CamelModel


class OrderLineRequest(CamelModel):
    """One line of a customer order; ``id`` is the menu item id."""

    id: int
    quantity: int = Field(1, ge=1, le=99)
    special_instructions: Optional[str] = Field(None, max_length=500)


class OrderCreate(CamelModel):
    table_id: int
    device_id: Optional[str] = Field(None, max_length=100)
    customer_name: Optional[str] = Field(None, max_length=100)
    customer_notes: Optional[str] = Field(None, max_length=1000)
    items: List[OrderLineRequest] = Field(..., min_length=1)


class OrderPlacedResponse(CamelModel):
    success: bool = True
    order_number: str
    order_id: int
    status: OrderStatus
    message: str = "Order placed successfully!"


class OrderItemResponse(CamelModel):
    id: int
    menu_item_id: Optional[int] = None
    menu_item_name: str
    price: float
    quantity: int
    special_instructions: Optional[str] = None


class OrderResponse(CamelModel):
    id: int
    order_number: str
    table_id: Optional[int] = None
    table_number: Optional[str] = None
    device_id: Optional[str] = None
    customer_name: Optional[str] = None
    status: OrderStatus
    subtotal: float
    tax: float
    total: float
    customer_notes: Optional[str] = None
    items: List[OrderItemResponse] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None


class OrderStatusUpdate(CamelModel):
    # Validated against OrderStatus in the route so unknown values get a
    # readable 400 instead of a 422.
    status: str = Field(..., min_length=1, max_length=20)
