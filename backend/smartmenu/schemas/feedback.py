"""Feedback schemas."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from smartmenu.schemas.common import CamelModel


class FeedbackCreate(CamelModel):
    order_number: str = Field(..., min_length=1, max_length=32)
    device_id: Optional[str] = Field(None, max_length=100)
    rating: int = Field(..., ge=1, le=5)
    comments: Optional[str] = Field(None, max_length=2000)


class FeedbackResponse(CamelModel):
    id: int
    order_id: Optional[int] = None
    order_number: Optional[str] = None
    table_number: Optional[str] = None
    total_amount: Optional[float] = None
    rating: int
    comments: Optional[str] = None
    created_at: Optional[datetime] = None


class FeedbackSubmittedResponse(CamelModel):
    success: bool = True
    message: str = "Thank you for your feedback!"
