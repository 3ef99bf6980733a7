"""Restaurant models - tables, menu items, orders, feedback."""

import enum
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import (
    JSON, Boolean, Column, DateTime, Enum, ForeignKey, Integer, Numeric, String, Text,
)
from sqlalchemy.orm import relationship, validates

from smartmenu.db.base import Base
from smartmenu.models.validators import non_negative, positive, rating_score, validate_list


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Table(Base):
    """Restaurant table or room; customers reach its menu through a QR code."""
    __tablename__ = "tables"

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    table_number = Column(String(50), nullable=False)  # "Table 1", "Patio A", ...
    qr_code_id = Column(String(36), nullable=False, unique=True)
    qr_code_url = Column(String(500), nullable=True)
    is_room = Column(Boolean, default=False, nullable=False)
    location = Column(String(100), nullable=True)  # Main Hall, Terrace, ...
    active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), default=_utcnow)


class MenuItem(Base):
    """Food or drink item on a restaurant's menu."""
    __tablename__ = "menu_items"

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Numeric(10, 2), nullable=False)
    category = Column(String(100), nullable=True)  # Appetizer, Main Course, Drinks
    image_url = Column(String(500), nullable=True)
    available = Column(Boolean, default=True, nullable=False)
    allergens = Column(JSON, default=list)  # ["nuts", "dairy", "gluten"]
    prep_time_minutes = Column(Integer, nullable=True)
    featured = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime(timezone=True), default=_utcnow)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    @validates("price")
    def _validate_price(self, key, value):
        return non_negative(key, value)

    @validates("prep_time_minutes")
    def _validate_prep_time(self, key, value):
        return non_negative(key, value)

    @validates("allergens")
    def _validate_allergens(self, key, value):
        return validate_list(key, value)


class OrderStatus(str, enum.Enum):
    """Order workflow: PENDING -> CONFIRMED -> PREPARING -> READY -> COMPLETED."""
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    PREPARING = "PREPARING"
    READY = "READY"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class Order(Base):
    """Customer order placed from a table."""
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    table_id = Column(Integer, ForeignKey("tables.id", ondelete="SET NULL"), nullable=True)
    table_number = Column(String(50), nullable=True)
    device_id = Column(String(100), nullable=True, index=True)
    customer_name = Column(String(100), nullable=True)
    order_number = Column(String(32), nullable=False, unique=True, index=True)

    subtotal = Column(Numeric(10, 2), default=Decimal("0"))
    tax = Column(Numeric(10, 2), default=Decimal("0"))
    total = Column(Numeric(10, 2), default=Decimal("0"))

    status = Column(Enum(OrderStatus), default=OrderStatus.PENDING, nullable=False, index=True)
    customer_notes = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), default=_utcnow)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)
    completed_at = Column(DateTime(timezone=True), nullable=True)

    items = relationship("OrderItem", back_populates="order", cascade="all, delete-orphan")

    @validates("subtotal", "tax", "total")
    def _validate_amounts(self, key, value):
        return non_negative(key, value)


class OrderItem(Base):
    """Line on an order; name and price are copied from the menu at order time."""
    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False)
    menu_item_id = Column(Integer, ForeignKey("menu_items.id", ondelete="SET NULL"), nullable=True)
    menu_item_name = Column(String(200), nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    quantity = Column(Integer, default=1, nullable=False)
    special_instructions = Column(Text, nullable=True)  # "No onions"

    order = relationship("Order", back_populates="items")

    @validates("quantity")
    def _validate_quantity(self, key, value):
        return positive(key, value)

    @validates("price")
    def _validate_price(self, key, value):
        return non_negative(key, value)


class Feedback(Base):
    """Customer rating for a completed order."""
    __tablename__ = "feedback"

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="SET NULL"), nullable=True)
    order_number = Column(String(32), nullable=True, index=True)
    table_number = Column(String(50), nullable=True)
    total_amount = Column(Numeric(10, 2), nullable=True)
    rating = Column(Integer, nullable=False)  # 1-5 stars
    comments = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow)

    @validates("rating")
    def _validate_rating(self, key, value):
        return rating_score(key, value)
