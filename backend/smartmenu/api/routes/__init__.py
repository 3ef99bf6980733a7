"""API routes."""

from fastapi import APIRouter, Depends

from smartmenu.api.routes import auth, feedback, health, menu_items, orders, public, tables
from smartmenu.core.rbac import authenticate_request

# Every API request passes through the authentication gate first; it only
# attaches the caller's identity and leaves rejection to the endpoints.
api_router = APIRouter(dependencies=[Depends(authenticate_request)])

api_router.include_router(health.router, tags=["health"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(public.router, prefix="/public", tags=["public", "customer"])
api_router.include_router(menu_items.router, prefix="/menu-items", tags=["menu"])
api_router.include_router(tables.router, prefix="/tables", tags=["tables"])
api_router.include_router(orders.router, prefix="/orders", tags=["orders"])
api_router.include_router(feedback.router, prefix="/feedback", tags=["feedback"])
