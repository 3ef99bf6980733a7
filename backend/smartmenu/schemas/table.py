"""Table schemas."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from smartmenu.schemas.common import CamelModel


class TableCreate(CamelModel):
    # Checked in the route so a blank or overlong number is a 400.
    table_number: Optional[str] = None
    is_room: bool = False
    location: Optional[str] = Field(None, max_length=100)


class TableResponse(CamelModel):
    id: int
    owner_id: int
    table_number: str
    qr_code_id: str
    qr_code_url: Optional[str] = None
    is_room: bool
    location: Optional[str] = None
    active: bool
    created_at: Optional[datetime] = None


class PublicTableResponse(CamelModel):
    """What a customer's device learns about the table it scanned."""

    id: int
    table_number: str
    owner_id: int
    qr_code_id: str
    qr_code_url: Optional[str] = None


class QRCodeResponse(CamelModel):
    """QR image for a table; ``qr_data`` is base64 PNG or raw SVG markup."""

    table_id: int
    table_number: str
    format: str
    qr_data: str
    url: str
