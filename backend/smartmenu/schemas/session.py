"""Customer session schemas."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from smartmenu.schemas.common import CamelModel


class SessionRequest(CamelModel):
    # Optional here so a missing id yields the 400 the customer app expects.
    device_id: Optional[str] = Field(None, max_length=100)
    table_id: Optional[int] = None
    customer_name: Optional[str] = Field(None, max_length=100)
    customer_phone: Optional[str] = Field(None, max_length=30)


class SessionResponse(CamelModel):
    session_id: int
    visit_count: int
    is_returning_customer: bool
    customer_name: Optional[str] = None
    last_visit: Optional[datetime] = None


class NoSessionResponse(CamelModel):
    message: str = "No session found"
    is_returning_customer: bool = False
