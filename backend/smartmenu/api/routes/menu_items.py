"""Menu management routes for restaurant owners."""

import logging
from typing import List, Optional

from fastapi import APIRouter, status

from smartmenu.core.errors import NotFound
from smartmenu.core.rbac import CanManageMenu
from smartmenu.db.session import DbSession
from smartmenu.models.restaurant import MenuItem
from smartmenu.schemas.common import MessageResponse
from smartmenu.schemas.menu_item import MenuItemCreate, MenuItemResponse, MenuItemUpdate

logger = logging.getLogger(__name__)

router = APIRouter()

# Columns that a null in a partial update must not clear
REQUIRED_FIELDS = {"name", "price", "available", "featured", "allergens"}


def _get_owned_item(db, owner_id: int, item_id: int) -> MenuItem:
    item = db.query(MenuItem).filter(MenuItem.id == item_id, MenuItem.owner_id == owner_id).first()
    if item is None:
        raise NotFound("Menu item not found")
    return item


@router.get("", response_model=List[MenuItemResponse])
def list_menu_items(identity: CanManageMenu, db: DbSession, category: Optional[str] = None):
    """All of the caller's menu items, optionally for one category."""
    query = db.query(MenuItem).filter(MenuItem.owner_id == identity.id)
    if category:
        query = query.filter(MenuItem.category == category)
    return query.order_by(MenuItem.category, MenuItem.name).all()


@router.get("/available", response_model=List[MenuItemResponse])
def list_available_menu_items(identity: CanManageMenu, db: DbSession):
    return db.query(MenuItem).filter(
        MenuItem.owner_id == identity.id,
        MenuItem.available == True,  # noqa: E712
    ).order_by(MenuItem.category, MenuItem.name).all()


@router.get("/{item_id}", response_model=MenuItemResponse)
def get_menu_item(item_id: int, identity: CanManageMenu, db: DbSession):
    return _get_owned_item(db, identity.id, item_id)


@router.post("", response_model=MenuItemResponse, status_code=status.HTTP_201_CREATED)
def create_menu_item(item_create: MenuItemCreate, identity: CanManageMenu, db: DbSession):
    item = MenuItem(owner_id=identity.id, **item_create.model_dump())
    db.add(item)
    db.commit()
    db.refresh(item)
    logger.info(f"Menu item created: {item.name} (ID: {item.id}) by user {identity.username}")
    return item


@router.put("/{item_id}", response_model=MenuItemResponse)
def update_menu_item(item_id: int, item_update: MenuItemUpdate, identity: CanManageMenu, db: DbSession):
    item = _get_owned_item(db, identity.id, item_id)
    for field, value in item_update.model_dump(exclude_unset=True).items():
        if value is None and field in REQUIRED_FIELDS:
            continue
        setattr(item, field, value)
    db.commit()
    db.refresh(item)
    return item


@router.patch("/{item_id}/toggle", response_model=MenuItemResponse)
def toggle_menu_item(item_id: int, identity: CanManageMenu, db: DbSession):
    """Flip availability, e.g. when the kitchen runs out."""
    item = _get_owned_item(db, identity.id, item_id)
    item.available = not item.available
    db.commit()
    db.refresh(item)
    logger.info(f"Menu item {item.id} availability set to {item.available}")
    return item


@router.delete("/{item_id}", response_model=MessageResponse)
def delete_menu_item(item_id: int, identity: CanManageMenu, db: DbSession):
    item = _get_owned_item(db, identity.id, item_id)
    db.delete(item)
    db.commit()
    logger.info(f"Menu item deleted: {item_id} by user {identity.username}")
    return MessageResponse(message="Menu item deleted successfully")
