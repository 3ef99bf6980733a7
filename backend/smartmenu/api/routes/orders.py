"""Order management routes for restaurant owners."""

from typing import List, Optional

from fastapi import APIRouter

from smartmenu.core.rbac import CanManageOrders
from smartmenu.db.session import DbSession
from smartmenu.schemas.common import MessageResponse
from smartmenu.schemas.order import OrderResponse, OrderStatusUpdate
from smartmenu.services.order_numbers import get_order_number_generator
from smartmenu.services.order_service import OrderService, parse_status

router = APIRouter()


def _service(db) -> OrderService:
    return OrderService(db, get_order_number_generator())


@router.get("", response_model=List[OrderResponse])
def list_orders(identity: CanManageOrders, db: DbSession, status: Optional[str] = None):
    """The caller's orders, newest first."""
    order_status = parse_status(status) if status else None
    return _service(db).list_owned(identity.id, order_status)


@router.get("/{order_id}", response_model=OrderResponse)
def get_order(order_id: int, identity: CanManageOrders, db: DbSession):
    return _service(db).get_owned(identity.id, order_id)


@router.put("/{order_id}/status", response_model=OrderResponse)
def update_order_status(
    order_id: int,
    status_update: OrderStatusUpdate,
    identity: CanManageOrders,
    db: DbSession,
):
    service = _service(db)
    order = service.get_owned(identity.id, order_id)
    return service.set_status(order, parse_status(status_update.status))


@router.delete("/{order_id}", response_model=MessageResponse)
def delete_order(order_id: int, identity: CanManageOrders, db: DbSession):
    service = _service(db)
    service.delete(service.get_owned(identity.id, order_id))
    return MessageResponse(message="Order deleted successfully")
