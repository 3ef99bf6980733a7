"""Authentication routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from smartmenu.core.errors import NotFound
from smartmenu.core.rate_limit import limiter
from smartmenu.core.rbac import CurrentIdentity
from smartmenu.core.security import TokenIssuer, get_token_issuer
from smartmenu.db.session import DbSession
from smartmenu.schemas.auth import LoginRequest, LoginResponse, RegisterRequest, UserResponse
from smartmenu.schemas.common import MessageResponse
from smartmenu.services.auth_service import AuthService
from smartmenu.services.user_store import UserStore

router = APIRouter()

Issuer = Annotated[TokenIssuer, Depends(get_token_issuer)]


@router.post("/register", response_model=MessageResponse)
@limiter.limit("10/minute")
def register(request: Request, register_request: RegisterRequest, db: DbSession, issuer: Issuer):
    """Register a restaurant owner account."""
    AuthService(db, issuer).register(
        username=register_request.username,
        email=register_request.email,
        password=register_request.password,
        first_name=register_request.first_name,
        last_name=register_request.last_name,
        restaurant_name=register_request.restaurant_name,
        phone=register_request.phone,
    )
    return MessageResponse(message="User registered successfully!")


@router.post("/login", response_model=LoginResponse)
@limiter.limit("5/minute")
def login(request: Request, login_request: LoginRequest, db: DbSession, issuer: Issuer):
    """Authenticate by username and password and return a bearer token."""
    result = AuthService(db, issuer).login(login_request.username, login_request.password)
    return LoginResponse(
        token=result.token,
        id=result.user.id,
        username=result.user.username,
        email=result.user.email,
        role=result.user.role,
    )


@router.get("/me", response_model=UserResponse)
def get_current_user_info(identity: CurrentIdentity, db: DbSession):
    """Get current authenticated user info."""
    user = UserStore(db).get_by_id(identity.id)
    if user is None:
        raise NotFound("User not found")
    return user
