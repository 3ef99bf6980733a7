"""Customer-facing routes reached from a table's QR code. No authentication."""

from typing import Optional

from fastapi import APIRouter, Query

from smartmenu.core.errors import InvalidRequest, NotFound
from smartmenu.db.session import DbSession
from smartmenu.models.restaurant import MenuItem, Table
from smartmenu.schemas.feedback import FeedbackCreate, FeedbackSubmittedResponse
from smartmenu.schemas.menu_item import MenuItemResponse, PublicMenuResponse
from smartmenu.schemas.order import OrderCreate, OrderPlacedResponse, OrderResponse
from smartmenu.schemas.session import NoSessionResponse, SessionRequest, SessionResponse
from smartmenu.schemas.table import PublicTableResponse
from smartmenu.services.order_numbers import get_order_number_generator
from smartmenu.services.order_service import OrderService
from smartmenu.services.session_tracker import SessionSummary, SessionTracker

router = APIRouter()


def _get_table(db, table_id: int) -> Optional[Table]:
    return db.query(Table).filter(Table.id == table_id).first()


def _session_response(summary: SessionSummary, include_last_visit: bool = False) -> SessionResponse:
    return SessionResponse(
        session_id=summary.session_id,
        visit_count=summary.visit_count,
        is_returning_customer=summary.is_returning,
        customer_name=summary.customer_name,
        last_visit=summary.last_visit if include_last_visit else None,
    )


@router.get("/table/{table_id}", response_model=PublicTableResponse)
def get_table_info(table_id: int, db: DbSession):
    """Table details for the customer view."""
    table = _get_table(db, table_id)
    if table is None:
        raise NotFound("Table not found")
    return table


@router.get("/menu/{table_id}", response_model=PublicMenuResponse)
def get_menu_for_table(
    table_id: int,
    db: DbSession,
    device_id: Optional[str] = Query(None, alias="deviceId", max_length=100),
):
    """Available menu of the table's restaurant; counts a visit when ``deviceId`` is sent."""
    table = _get_table(db, table_id)
    if table is None:
        raise InvalidRequest("Table not found")

    if device_id:
        SessionTracker(db).touch(device_id, table.id, table.owner_id)

    items = db.query(MenuItem).filter(
        MenuItem.owner_id == table.owner_id,
        MenuItem.available == True,  # noqa: E712
    ).order_by(MenuItem.category, MenuItem.name).all()

    return PublicMenuResponse(
        table_id=table.id,
        table_number=table.table_number,
        menu_items=[MenuItemResponse.model_validate(item) for item in items],
        total_items=len(items),
    )


@router.post("/session", response_model=SessionResponse)
def track_session(session_request: SessionRequest, db: DbSession):
    """Record a device visit, optionally with the customer's name and phone."""
    if not session_request.device_id or session_request.table_id is None:
        raise InvalidRequest("deviceId and tableId are required")

    table = _get_table(db, session_request.table_id)
    if table is None:
        raise InvalidRequest("Table not found")

    summary = SessionTracker(db).touch(
        session_request.device_id,
        table.id,
        table.owner_id,
        customer_name=session_request.customer_name,
        customer_phone=session_request.customer_phone,
    )
    return _session_response(summary)


@router.get("/session/{device_id}")
def get_session(device_id: str, db: DbSession):
    """Look up a device without counting a visit."""
    summary = SessionTracker(db).lookup(device_id)
    if summary is None:
        return NoSessionResponse()
    return _session_response(summary, include_last_visit=True)


@router.post("/order", response_model=OrderPlacedResponse)
def place_order(order_request: OrderCreate, db: DbSession):
    """Place an order from a table."""
    table = _get_table(db, order_request.table_id)
    if table is None:
        raise NotFound("Table not found")

    order = OrderService(db, get_order_number_generator()).place(table, order_request)
    return OrderPlacedResponse(
        order_number=order.order_number,
        order_id=order.id,
        status=order.status,
    )


@router.get("/order/{order_number}", response_model=OrderResponse)
def get_order_status(order_number: str, db: DbSession):
    """Order tracking for the customer."""
    return OrderService(db, get_order_number_generator()).get_by_number(order_number)


@router.post("/feedback", response_model=FeedbackSubmittedResponse)
def submit_feedback(feedback_request: FeedbackCreate, db: DbSession):
    """Rate an order."""
    OrderService(db, get_order_number_generator()).leave_feedback(
        feedback_request.order_number,
        feedback_request.rating,
        feedback_request.comments,
    )
    return FeedbackSubmittedResponse()
