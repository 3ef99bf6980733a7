"""Anonymous customer session model."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, validates

from smartmenu.db.base import Base, TimestampMixin
from smartmenu.models.validators import positive


class CustomerSession(Base, TimestampMixin):
    """Tracks a customer device across visits, keyed by ``device_id``."""

    __tablename__ = "customer_sessions"

    id: Mapped[int] = mapped_column(primary_key=True)
    device_id: Mapped[str] = mapped_column(String(100), unique=True, index=True, nullable=False)
    table_id: Mapped[Optional[int]] = mapped_column(ForeignKey("tables.id", ondelete="SET NULL"), nullable=True)
    restaurant_id: Mapped[int] = mapped_column(ForeignKey("users.id"), index=True, nullable=False)
    customer_name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    customer_phone: Mapped[Optional[str]] = mapped_column(String(30), nullable=True)
    visit_count: Mapped[int] = mapped_column(Integer, default=1, nullable=False)
    first_visit: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    last_visit: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    @validates("visit_count")
    def _validate_visit_count(self, key, value):
        return positive(key, value)
