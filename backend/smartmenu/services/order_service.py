"""Customer order placement and the owner-side order workflow."""

import logging
from datetime import datetime, timezone
from decimal import Decimal
from typing import Callable, List, Optional

from sqlalchemy.orm import Session

from smartmenu.core.errors import InvalidRequest, NotFound
from smartmenu.models.restaurant import Feedback, MenuItem, Order, OrderItem, OrderStatus, Table
from smartmenu.schemas.order import OrderCreate
from smartmenu.services.order_numbers import OrderNumberGenerator
from smartmenu.services.session_tracker import SessionTracker

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def parse_status(value: str) -> OrderStatus:
    """Case-insensitive lookup of an order status name."""
    try:
        return OrderStatus(value.strip().upper())
    except ValueError:
        allowed = ", ".join(s.value for s in OrderStatus)
        raise InvalidRequest(f"Invalid status '{value}'. Allowed: {allowed}")


class OrderService:
    def __init__(
        self,
        db: Session,
        numbers: OrderNumberGenerator,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.db = db
        self.numbers = numbers
        self._clock = clock

    def _menu_items(self, owner_id: int, item_ids: List[int]) -> dict[int, MenuItem]:
        items = self.db.query(MenuItem).filter(
            MenuItem.owner_id == owner_id,
            MenuItem.id.in_(item_ids),
        ).all()
        return {item.id: item for item in items}

    def place(self, table: Table, request: OrderCreate) -> Order:
        """Create a PENDING order for ``table``.

        Names and prices are copied from the restaurant's current menu;
        the client only chooses items and quantities.
        """
        menu = self._menu_items(table.owner_id, [line.id for line in request.items])

        order = Order(
            owner_id=table.owner_id,
            table_id=table.id,
            table_number=table.table_number,
            device_id=request.device_id,
            customer_name=request.customer_name,
            customer_notes=request.customer_notes,
            order_number=self.numbers.generate(),
            status=OrderStatus.PENDING,
        )

        subtotal = Decimal("0")
        for line in request.items:
            item = menu.get(line.id)
            if item is None:
                raise InvalidRequest(f"Menu item {line.id} not found")
            if not item.available:
                raise InvalidRequest(f"Menu item '{item.name}' is not available")
            order.items.append(OrderItem(
                menu_item_id=item.id,
                menu_item_name=item.name,
                price=item.price,
                quantity=line.quantity,
                special_instructions=line.special_instructions,
            ))
            subtotal += Decimal(item.price) * line.quantity

        order.subtotal = subtotal
        order.tax = Decimal("0")
        order.total = subtotal

        self.db.add(order)
        self.db.commit()
        self.db.refresh(order)
        logger.info(f"Order {order.order_number} placed at table {table.table_number} (total {order.total})")

        if request.customer_name and request.device_id:
            SessionTracker(self.db).remember_name(request.device_id, request.customer_name)
        return order

    def get_by_number(self, order_number: str) -> Order:
        order = self.db.query(Order).filter(Order.order_number == order_number).first()
        if order is None:
            raise NotFound("Order not found")
        return order

    def get_owned(self, owner_id: int, order_id: int) -> Order:
        order = self.db.query(Order).filter(Order.id == order_id, Order.owner_id == owner_id).first()
        if order is None:
            raise NotFound("Order not found")
        return order

    def list_owned(self, owner_id: int, status: Optional[OrderStatus] = None) -> List[Order]:
        query = self.db.query(Order).filter(Order.owner_id == owner_id)
        if status is not None:
            query = query.filter(Order.status == status)
        return query.order_by(Order.created_at.desc(), Order.id.desc()).all()

    def set_status(self, order: Order, status: OrderStatus) -> Order:
        order.status = status
        order.updated_at = self._clock()
        if status == OrderStatus.COMPLETED:
            order.completed_at = self._clock()
        self.db.commit()
        self.db.refresh(order)
        logger.info(f"Order {order.order_number} moved to {status.value}")
        return order

    def delete(self, order: Order) -> None:
        self.db.delete(order)
        self.db.commit()

    def leave_feedback(self, order_number: str, rating: int, comments: Optional[str] = None) -> Feedback:
        order = self.get_by_number(order_number)
        feedback = Feedback(
            owner_id=order.owner_id,
            order_id=order.id,
            order_number=order.order_number,
            table_number=order.table_number,
            total_amount=order.total,
            rating=rating,
            comments=comments,
            created_at=self._clock(),
        )
        self.db.add(feedback)
        self.db.commit()
        self.db.refresh(feedback)
        logger.info(f"Feedback for order {order.order_number}: {rating}/5")
        return feedback
