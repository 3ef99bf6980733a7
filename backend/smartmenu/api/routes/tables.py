"""Table and QR code management routes - database-backed."""

import base64
import io
import logging
import uuid
from typing import List, Literal

import qrcode
import qrcode.image.svg
from fastapi import APIRouter, HTTPException, status

from smartmenu.core.config import settings
from smartmenu.core.errors import InvalidRequest, NotFound
from smartmenu.core.rbac import CanManageTables
from smartmenu.db.session import DbSession
from smartmenu.models.restaurant import Table
from smartmenu.schemas.common import MessageResponse
from smartmenu.schemas.table import QRCodeResponse, TableCreate, TableResponse

logger = logging.getLogger(__name__)

router = APIRouter()

MAX_TABLE_NUMBER_LENGTH = 50


def qr_code_url(table_id: int) -> str:
    """Link encoded in the table's QR code."""
    return f"{settings.frontend_url.rstrip('/')}/customer-menu?table={table_id}"


@router.get("", response_model=List[TableResponse])
def list_tables(identity: CanManageTables, db: DbSession):
    return db.query(Table).filter(Table.owner_id == identity.id).order_by(Table.id).all()


@router.post("", response_model=TableResponse, status_code=status.HTTP_201_CREATED)
def create_table(table_create: TableCreate, identity: CanManageTables, db: DbSession):
    """Create a table and assign it a QR code."""
    table_number = (table_create.table_number or "").strip()
    if not table_number:
        raise InvalidRequest("Table number is required")
    if len(table_number) > MAX_TABLE_NUMBER_LENGTH:
        raise InvalidRequest(f"Table number must be at most {MAX_TABLE_NUMBER_LENGTH} characters")

    existing = db.query(Table).filter(
        Table.owner_id == identity.id,
        Table.table_number == table_number,
    ).first()
    if existing:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Table '{table_number}' already exists",
        )

    table = Table(
        owner_id=identity.id,
        table_number=table_number,
        qr_code_id=str(uuid.uuid4()),
        is_room=table_create.is_room,
        location=table_create.location,
        active=True,
    )
    db.add(table)
    db.flush()
    table.qr_code_url = qr_code_url(table.id)
    db.commit()
    db.refresh(table)
    logger.info(f"Table created: {table.table_number} (ID: {table.id}) by user {identity.username}")
    return table


@router.delete("/{table_id}", response_model=MessageResponse)
def delete_table(table_id: int, identity: CanManageTables, db: DbSession):
    table = db.query(Table).filter(Table.id == table_id).first()
    if table is None:
        raise NotFound("Table not found")
    if table.owner_id != identity.id:
        logger.warning(f"User {identity.username} tried to delete table {table_id} of another restaurant")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not allowed to delete this table",
        )
    db.delete(table)
    db.commit()
    return MessageResponse(message="Table deleted successfully")


@router.get("/{table_id}/qr", response_model=QRCodeResponse)
def get_table_qr_code(
    table_id: int,
    identity: CanManageTables,
    db: DbSession,
    format: Literal["png", "svg"] = "png",
):
    """Render the table's QR code for printing."""
    table = db.query(Table).filter(Table.id == table_id, Table.owner_id == identity.id).first()
    if table is None:
        raise NotFound("Table not found")

    url = table.qr_code_url or qr_code_url(table.id)
    qr = qrcode.QRCode(version=1, box_size=10, border=4)
    qr.add_data(url)
    qr.make(fit=True)

    buffer = io.BytesIO()
    if format == "svg":
        img = qr.make_image(image_factory=qrcode.image.svg.SvgPathImage)
        img.save(buffer)
        qr_data = buffer.getvalue().decode("utf-8")
    else:
        img = qr.make_image(fill_color="black", back_color="white")
        img.save(buffer, format="PNG")
        qr_data = base64.b64encode(buffer.getvalue()).decode("utf-8")

    return QRCodeResponse(
        table_id=table.id,
        table_number=table.table_number,
        format=format,
        qr_data=qr_data,
        url=url,
    )
