"""SQLAlchemy models."""

from smartmenu.models.user import User
from smartmenu.models.customer_session import CustomerSession
from smartmenu.models.restaurant import (
    Feedback,
    MenuItem,
    Order,
    OrderItem,
    OrderStatus,
    Table,
)

__all__ = [
    "User",
    "CustomerSession",
    "Feedback",
    "MenuItem",
    "Order",
    "OrderItem",
    "OrderStatus",
    "Table",
]
